import unittest
from fractions import Fraction

import numpy as np

from rationalize.utils import MAX_SAFE_INTEGER, MIN_SAFE_INTEGER, is_safe_integer


class SafeIntegerTest(unittest.TestCase):
    def test_bounds(self):
        self.assertEqual(2 ** 53 - 1, MAX_SAFE_INTEGER)
        self.assertEqual(-MAX_SAFE_INTEGER, MIN_SAFE_INTEGER)
        self.assertEqual(MAX_SAFE_INTEGER, int(float(MAX_SAFE_INTEGER)))

    def test_ints(self):
        self.assertTrue(is_safe_integer(0))
        self.assertTrue(is_safe_integer(MAX_SAFE_INTEGER))
        self.assertTrue(is_safe_integer(MIN_SAFE_INTEGER))
        self.assertTrue(is_safe_integer(np.int64(-12)))
        self.assertFalse(is_safe_integer(MAX_SAFE_INTEGER + 1))
        self.assertFalse(is_safe_integer(MIN_SAFE_INTEGER - 1))
        self.assertFalse(is_safe_integer(10 ** 400))

    def test_floats(self):
        self.assertTrue(is_safe_integer(-0.))
        self.assertTrue(is_safe_integer(2. ** 53 - 1))
        self.assertFalse(is_safe_integer(2. ** 53))
        self.assertFalse(is_safe_integer(0.5))
        self.assertFalse(is_safe_integer(float('inf')))
        self.assertFalse(is_safe_integer(float('nan')))

    def test_fractions(self):
        self.assertTrue(is_safe_integer(Fraction(4, 2)))
        self.assertFalse(is_safe_integer(Fraction(1, 3)))
        self.assertFalse(is_safe_integer(Fraction(10 ** 400, 3)))
