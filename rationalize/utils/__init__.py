# SPDX-FileCopyrightText: 2014-2024 Quantum Technology Group and Chair of Software Engineering, RWTH Aachen University
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""This package contains floating point helpers: safe integer checks, ulp computations and double-double numbers."""

import numbers

import numpy

__all__ = ["MAX_SAFE_INTEGER", "MIN_SAFE_INTEGER", "is_safe_integer"]


#: Largest integer n such that n and n + 1 are both exactly representable as float64
MAX_SAFE_INTEGER = 2 ** (int(numpy.finfo(numpy.float64).nmant) + 1) - 1
MIN_SAFE_INTEGER = -MAX_SAFE_INTEGER


def is_safe_integer(x: numbers.Real) -> bool:
    """True if x is integral and lies within [MIN_SAFE_INTEGER, MAX_SAFE_INTEGER].

    >>> assert is_safe_integer(2.0 ** 53 - 1)
    >>> assert not is_safe_integer(2 ** 53)
    >>> assert not is_safe_integer(0.5)
    """
    if isinstance(x, numbers.Integral):
        return MIN_SAFE_INTEGER <= int(x) <= MAX_SAFE_INTEGER
    try:
        return float(x).is_integer() and abs(x) <= MAX_SAFE_INTEGER
    except OverflowError:
        return False
