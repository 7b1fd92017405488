# SPDX-FileCopyrightText: 2014-2024 Quantum Technology Group and Chair of Software Engineering, RWTH Aachen University
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""Double-double arithmetic: a real number is stored as an unevaluated sum hi + lo of two floats.

This gives roughly 106 bits of precision which is enough to compare quantities like x - p/q with
p and q close to 2**53 where plain float arithmetic cancels catastrophically.

The error free transformations follow Dekker and Knuth.
"""

import typing
import numbers
import functools
import fractions

__all__ = ["DoubleDouble"]


# 2**27 + 1, splits a float into two halves with at most 26 significant bits each
_SPLITTER = 134217729.


def _split(a: float) -> typing.Tuple[float, float]:
    c = _SPLITTER * a
    big = c - a
    hi = c - big
    return hi, a - hi


def _two_sum(a: float, b: float) -> typing.Tuple[float, float]:
    """s + err == a + b exactly"""
    s = a + b
    bb = s - a
    err = (a - (s - bb)) + (b - bb)
    return s, err


def _quick_two_sum(a: float, b: float) -> typing.Tuple[float, float]:
    """Requires abs(a) >= abs(b)"""
    s = a + b
    return s, b - (s - a)


def _two_prod(a: float, b: float) -> typing.Tuple[float, float]:
    """p + err == a * b exactly (barring overflow)"""
    p = a * b
    a_hi, a_lo = _split(a)
    b_hi, b_lo = _split(b)
    err = ((a_hi * b_hi - p) + a_hi * b_lo + a_lo * b_hi) + a_lo * b_lo
    return p, err


def _with_other_as_double_double(fn):
    """Decorator that converts the other argument into a :class:`DoubleDouble`"""
    @functools.wraps(fn)
    def wrapper(self, other) -> 'DoubleDouble':
        try:
            converted = DoubleDouble.from_any(other)
        except TypeError:
            return NotImplemented
        return fn(self, converted)
    return wrapper


class DoubleDouble:
    """Normalized pair (hi, lo) with abs(lo) <= ulp(hi) / 2.

    Supports the arithmetic operators, abs, negation, comparisons and conversion to float. Mixed operations with int
    and float operands promote the operand first. Ints are split exactly as long as they fit into 106 bits.
    """
    __slots__ = ('_hi', '_lo')

    def __init__(self, hi: float = 0., lo: float = 0.):
        self._hi, self._lo = _quick_two_sum(*sorted((float(hi), float(lo)), key=abs, reverse=True))

    @property
    def hi(self) -> float:
        return self._hi

    @property
    def lo(self) -> float:
        return self._lo

    @classmethod
    def from_any(cls, value: typing.Union['DoubleDouble', numbers.Real]) -> 'DoubleDouble':
        if type(value) is cls:
            return value
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise TypeError(f'Could not create DoubleDouble from {value!r} of type {type(value)}')
        if isinstance(value, numbers.Integral):
            value = int(value)
            hi = float(value)
            return cls(hi, float(value - int(hi)))
        return cls(float(value))

    def as_integer_ratio(self) -> typing.Tuple[int, int]:
        """Exact value as a pair of integers."""
        exact = fractions.Fraction(self._hi) + fractions.Fraction(self._lo)
        return exact.numerator, exact.denominator

    def __float__(self) -> float:
        return self._hi + self._lo

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._hi!r}, {self._lo!r})'

    def __hash__(self):
        if self._lo == 0:
            # consistent with float equality
            return hash(self._hi)
        return hash((self._hi, self._lo))

    def __neg__(self) -> 'DoubleDouble':
        return DoubleDouble(-self._hi, -self._lo)

    def __pos__(self) -> 'DoubleDouble':
        return self

    def __abs__(self) -> 'DoubleDouble':
        if self._hi < 0 or (self._hi == 0 and self._lo < 0):
            return -self
        return self

    @_with_other_as_double_double
    def __add__(self, other: 'DoubleDouble') -> 'DoubleDouble':
        s, e = _two_sum(self._hi, other._hi)
        t, f = _two_sum(self._lo, other._lo)
        s, e = _quick_two_sum(s, e + t)
        return DoubleDouble(*_quick_two_sum(s, e + f))

    @_with_other_as_double_double
    def __radd__(self, other: 'DoubleDouble') -> 'DoubleDouble':
        return other + self

    @_with_other_as_double_double
    def __sub__(self, other: 'DoubleDouble') -> 'DoubleDouble':
        return self + (-other)

    @_with_other_as_double_double
    def __rsub__(self, other: 'DoubleDouble') -> 'DoubleDouble':
        return other + (-self)

    @_with_other_as_double_double
    def __mul__(self, other: 'DoubleDouble') -> 'DoubleDouble':
        p, e = _two_prod(self._hi, other._hi)
        e += self._hi * other._lo + self._lo * other._hi
        return DoubleDouble(*_quick_two_sum(p, e))

    @_with_other_as_double_double
    def __rmul__(self, other: 'DoubleDouble') -> 'DoubleDouble':
        return other * self

    @_with_other_as_double_double
    def __truediv__(self, other: 'DoubleDouble') -> 'DoubleDouble':
        if other._hi == 0:
            raise ZeroDivisionError('DoubleDouble division by zero')
        # long division: the first quotient digit is corrected by the remainder
        q1 = self._hi / other._hi
        remainder = self - other * q1
        q2 = remainder._hi / other._hi
        return DoubleDouble(*_quick_two_sum(q1, q2))

    @_with_other_as_double_double
    def __rtruediv__(self, other: 'DoubleDouble') -> 'DoubleDouble':
        return other / self

    def _compare_key(self) -> typing.Tuple[float, float]:
        return self._hi, self._lo

    @_with_other_as_double_double
    def __eq__(self, other: 'DoubleDouble') -> bool:
        return self._compare_key() == other._compare_key()

    @_with_other_as_double_double
    def __lt__(self, other: 'DoubleDouble') -> bool:
        return self._compare_key() < other._compare_key()

    @_with_other_as_double_double
    def __le__(self, other: 'DoubleDouble') -> bool:
        return self._compare_key() <= other._compare_key()

    @_with_other_as_double_double
    def __gt__(self, other: 'DoubleDouble') -> bool:
        return self._compare_key() > other._compare_key()

    @_with_other_as_double_double
    def __ge__(self, other: 'DoubleDouble') -> bool:
        return self._compare_key() >= other._compare_key()
