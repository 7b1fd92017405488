# SPDX-FileCopyrightText: 2014-2024 Quantum Technology Group and Chair of Software Engineering, RWTH Aachen University
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""Bit level helpers for IEEE 754 binary64 values: units in the last place and the integer/fraction split."""

from typing import Tuple
import math

import numpy

__all__ = ["float_to_bits", "bits_to_float", "ulp", "eps", "modf",
           "MANTISSA_BITS", "EXPONENT_MASK", "SIGN_MASK"]


_FINFO = numpy.finfo(numpy.float64)

MANTISSA_BITS = int(_FINFO.nmant)
EXPONENT_MASK = ((1 << int(_FINFO.nexp)) - 1) << MANTISSA_BITS
SIGN_MASK = 1 << (MANTISSA_BITS + int(_FINFO.nexp))

_SMALLEST_SUBNORMAL = math.ldexp(1., int(_FINFO.minexp) - MANTISSA_BITS)


def float_to_bits(x: float) -> int:
    """Reinterpret the binary64 representation of x as an unsigned 64 bit integer."""
    return int(numpy.array([x], dtype=numpy.float64).view(numpy.uint64)[0])


def bits_to_float(bits: int) -> float:
    """Inverse of :func:`float_to_bits`.

    Raises:
        ValueError: if bits does not fit into 64 unsigned bits
    """
    if not 0 <= bits <= 2 * SIGN_MASK - 1:
        raise ValueError('Not a 64 bit pattern', bits)
    return float(numpy.array([bits], dtype=numpy.uint64).view(numpy.float64)[0])


def ulp(x: float) -> float:
    """Unit in the last place of x, i.e. the distance from abs(x) to the next larger float.

    Non-finite values map to abs(x) (inf stays inf, nan stays nan).
    """
    if not math.isfinite(x):
        return abs(x)

    exponent_bits = float_to_bits(x) & EXPONENT_MASK
    if exponent_bits == 0:
        # zero and subnormals share the spacing of the smallest normal binade
        return _SMALLEST_SUBNORMAL

    # mantissa bits masked out: the power of two of x's binade
    binade = bits_to_float(exponent_bits)
    return math.ldexp(binade, -MANTISSA_BITS)


def eps(x: float) -> float:
    """Half a unit in the last place of x. This is the default tolerance of :func:`rationalize.rationalize`.

    In the two lowest binades half an ulp is not representable and the result rounds to zero.
    """
    return ulp(x) / 2


def modf(x: float) -> Tuple[int, float]:
    """Split a finite x into (floor(x), x - floor(x)). The fractional part is exact and lies in [0, 1)."""
    integer = math.floor(x)
    return integer, x - integer
