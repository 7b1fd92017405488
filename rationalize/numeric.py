# SPDX-FileCopyrightText: 2014-2024 Quantum Technology Group and Chair of Software Engineering, RWTH Aachen University
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""Best rational approximation of floating point numbers.

The continued fraction of a float is expanded with exact integer arithmetic: every finite float is a dyadic rational,
so the value and the tolerance are scaled to integers over a common power of two. The residuals |q*x - p| follow the
euclidean remainder recurrence and the scaled tolerances tol*q follow the convergent recurrence, hence the stopping
criterion is decided exactly.
"""

from typing import Tuple, Type, Optional
from numbers import Rational, Real
from math import gcd, copysign, isnan, isinf
import enum
import logging

import gmpy2

from rationalize.utils import MAX_SAFE_INTEGER
from rationalize.utils.ulp import eps, modf
from rationalize.utils.double_double import DoubleDouble

__all__ = ["rationalize", "approximate_double", "residual", "SemiconvergentCase",
           "InvalidTypeException", "InvalidValueException", "InvalidToleranceException", "IntegerOverflowException"]


logger = logging.getLogger(__name__)


def lcm(a: int, b: int):
    """least common multiple"""
    return a * b // gcd(a, b)


def _checked_safe_int(n: int) -> int:
    """Return n if its magnitude is representable by a float without rounding. Raises IntegerOverflowException
    otherwise."""
    if -MAX_SAFE_INTEGER <= n <= MAX_SAFE_INTEGER:
        return n
    logger.debug("Aborting rational approximation: %d exceeds the safe integer range", n)
    raise IntegerOverflowException(n)


class SemiconvergentCase(enum.Enum):
    """How the smallest admissible semiconvergent index k is computed after the expansion stopped.

    The candidates are (k * p_1 + p_2) / (k * q_1 + q_2) for 1 <= k <= a where p_1 / q_1 is the last convergent that
    misses the tolerance and p_2 / q_2 its predecessor.
    """
    CONVERGENT = 'convergent'
    """a == 1: there is nothing between the two convergents"""

    INTEGER_PART = 'integer_part'
    """q_1 == 0: the expansion stopped before the first step, the candidates are the integers k / 1"""

    RECIPROCAL = 'reciprocal'
    """q_2 == 0: the expansion stopped after one step, the candidates are (k * a_0 + 1) / k"""

    GENERAL = 'general'

    @classmethod
    def classify(cls, a: int, q_1: int, q_2: int) -> 'SemiconvergentCase':
        if a == 1:
            return cls.CONVERGENT
        if q_1 == 0:
            return cls.INTEGER_PART
        if q_2 == 0:
            return cls.RECIPROCAL
        return cls.GENERAL


def _smallest_semiconvergent(case: SemiconvergentCase, a: int,
                             den: int, x_num: int, tol_num: int,
                             e: int, e_1: int, t_1: int, q_2: int) -> int:
    """Smallest k in [1, a] whose semiconvergent is within the tolerance. All quantities are numerators over den.

    Args:
        case: Which formula to use
        a: Partial quotient of the first convergent within the tolerance
        den: Common denominator
        x_num: Value to approximate
        tol_num: Tolerance
        e: Residual of the first convergent within the tolerance
        e_1: Residual of the last convergent outside the tolerance
        t_1: Scaled tolerance of the last convergent outside the tolerance
        q_2: Denominator of the convergent before that

    Returns:
        k
    """
    if case is SemiconvergentCase.CONVERGENT:
        return 1

    if case is SemiconvergentCase.INTEGER_PART:
        # smallest integer k with x - k <= tol
        k_num = x_num - tol_num
        k = (k_num + den - 1) // den  # ceiling division

    elif case is SemiconvergentCase.RECIPROCAL:
        # the predecessor is 1 / 0 with residual 1 (den in scaled units) and no tolerance contribution:
        # k * (r_0 + tol) >= 1
        k_den = e_1 + t_1
        k = (den + k_den - 1) // k_den  # ceiling division
        # a = floor(1 / r_0) is the upper bound reached with tol == 0
        assert a == den // e_1

    else:
        # residual e_2 - k * e_1 has to be covered by tolerance t_2 + k * t_1
        e_2 = a * e_1 + e
        t_2 = tol_num * q_2
        k_num = e_2 - t_2
        k_den = e_1 + t_1
        k = (k_num + k_den - 1) // k_den  # ceiling division

    assert 1 <= k <= a
    return k


def _rationalize_finite(x: float, tol: float) -> Tuple[int, int]:
    """Best approximation of the finite non integral x with 0 <= tol < x.

    Returns:
        (numerator, denominator) as ints
    """
    a, r = modf(x)

    # scale value, remainder and tolerance to numerators over a common (power of two) denominator
    r_num, r_den = r.as_integer_ratio()
    tol_num, tol_den = tol.as_integer_ratio()
    den = lcm(r_den, tol_den)
    r_num = r_num * (den // r_den)
    tol_num = tol_num * (den // tol_den)
    x_num = a * den + r_num

    p_2, p_1 = 0, 1
    q_2, q_1 = 1, 0

    # residuals |q*x - p| of the last convergent and the pending one
    e_1, e = den, r_num
    # tolerance tol*q of the last convergent and the pending one
    t_1, t = 0, tol_num

    steps = 0
    while e > t:
        p_2, p_1 = p_1, _checked_safe_int(a * p_1 + p_2)
        q_2, q_1 = q_1, _checked_safe_int(a * q_1 + q_2)

        a, e_1, e = e_1 // e, e, e_1 % e
        t_1, t = t, a * t + t_1
        steps += 1

    case = SemiconvergentCase.classify(a, q_1, q_2)
    k = _smallest_semiconvergent(case, a, den=den, x_num=x_num, tol_num=tol_num,
                                 e=e, e_1=e_1, t_1=t_1, q_2=q_2)
    logger.debug("Continued fraction of %r stopped after %d steps, semiconvergent case %s with k=%d of %d",
                 x, steps, case.name, k, a)

    p = _checked_safe_int(k * p_1 + p_2)
    q = _checked_safe_int(k * q_1 + q_2)
    return p, q


def rationalize(x: Real, tol: Optional[Real] = None) -> Tuple[float, float]:
    """Represent the float x as a rational number p / q with abs(x - p / q) <= tol and the smallest possible q.

    Numerator and denominator are returned as integral floats whose magnitude does not exceed
    :data:`rationalize.utils.MAX_SAFE_INTEGER`. Floats keep the sign of zero and encode infinity:

    >>> rationalize(0.25, 0)
    (1.0, 4.0)
    >>> rationalize(float('-inf'))
    (-1.0, 0.0)
    >>> rationalize(-0.)
    (-0.0, 1.0)

    Args:
        x: Number to approximate
        tol: Absolute tolerance. Defaults to half an ulp of x i.e. :func:`rationalize.utils.ulp.eps`.

    Raises:
        InvalidTypeException: If x or tol is not a real number
        InvalidValueException: If x is NaN
        InvalidToleranceException: If tol is NaN or negative
        IntegerOverflowException: If numerator or denominator exceed the safe integer range. Use a larger tolerance.

    Returns:
        (numerator, denominator)
    """
    x = _as_float(x)
    if isnan(x):
        raise InvalidValueException(x)

    if tol is not None:
        tol = _as_float(tol)
        if not tol >= 0:
            raise InvalidToleranceException(tol)

    if isinf(x):
        # not a rational number but 1/0 == inf lets it travel through IEEE float division
        return copysign(1., x), 0.

    if x.is_integer():
        # x itself keeps the sign of zero
        _checked_safe_int(int(x))
        return x, 1.

    if tol is None:
        tol = eps(x)

    if abs(x) <= tol:
        return copysign(0., x), 1.

    p, q = _rationalize_finite(abs(x), tol)
    return copysign(float(p), x), float(q)


def approximate_double(x: Real, abs_err: Optional[Real] = None,
                       fraction_type: Type[Rational] = gmpy2.mpq) -> Rational:
    """Return the fraction with the smallest denominator in [x - abs_err, x + abs_err].

    gmpy2 is at least an order of magnitude faster than fractions.Fraction which is why it is the default.

    Raises:
        InvalidValueException: If x is infinite. See :func:`rationalize` for the other exceptions.
    """
    p, q = rationalize(x, abs_err)
    if q == 0:
        raise InvalidValueException(x)
    return fraction_type(int(p), int(q))


def residual(x: Real, p: Real, q: Real) -> DoubleDouble:
    """abs(x - p / q) in double-double precision."""
    return abs(DoubleDouble.from_any(x) - DoubleDouble.from_any(p) / DoubleDouble.from_any(q))


def _as_float(value) -> float:
    if isinstance(value, float):
        # also unwraps numpy.float64
        return float(value)
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidTypeException(value)
    try:
        return float(value)
    except OverflowError as err:
        raise IntegerOverflowException(value) from err


class InvalidTypeException(TypeError):
    """Indicates that an argument is not a real number."""

    def __init__(self, value) -> None:
        super().__init__(value)

    @property
    def value(self):
        return self.args[0]

    def __str__(self) -> str:
        return "Expected a real number but received {0!r} of type {1}.".format(self.value, type(self.value).__name__)


class InvalidValueException(ValueError):
    """Indicates that the value cannot be approximated by a rational number."""

    def __init__(self, value: float) -> None:
        super().__init__(value)

    @property
    def value(self) -> float:
        return self.args[0]

    def __str__(self) -> str:
        return "{0!r} has no rational representation.".format(self.value)


class InvalidToleranceException(ValueError):
    """Indicates a negative or NaN tolerance."""

    def __init__(self, tolerance: float) -> None:
        super().__init__(tolerance)

    @property
    def tolerance(self) -> float:
        return self.args[0]

    def __str__(self) -> str:
        return "Tolerance must be a non-negative number (received {0!r}).".format(self.tolerance)


class IntegerOverflowException(OverflowError, ValueError):
    """Indicates that a numerator or denominator does not fit into the float mantissa. The requested tolerance is not
    achievable."""

    def __init__(self, value) -> None:
        super().__init__(value)

    @property
    def value(self):
        return self.args[0]

    def __str__(self) -> str:
        return "{0} is not a safe integer".format(self.value)
