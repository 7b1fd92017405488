import unittest
import math
import random

import numpy as np

from rationalize.utils.ulp import float_to_bits, bits_to_float, ulp, eps, modf, SIGN_MASK, EXPONENT_MASK


class BitReinterpretationTest(unittest.TestCase):
    def test_known_patterns(self):
        self.assertEqual(0x3FF0000000000000, float_to_bits(1.))
        self.assertEqual(0xC000000000000000, float_to_bits(-2.))
        self.assertEqual(0, float_to_bits(0.))
        self.assertEqual(SIGN_MASK, float_to_bits(-0.))
        self.assertEqual(EXPONENT_MASK, float_to_bits(float('inf')))
        self.assertEqual(1, float_to_bits(5e-324))

    def test_round_trip(self):
        rng = random.Random(5)
        for _ in range(1000):
            bits = rng.getrandbits(64)
            x = bits_to_float(bits)
            if math.isnan(x):
                continue
            self.assertEqual(bits, float_to_bits(x))

        self.assertEqual(-1., math.copysign(1., bits_to_float(SIGN_MASK)))

    def test_invalid_bits(self):
        with self.assertRaises(ValueError):
            bits_to_float(-1)
        with self.assertRaises(ValueError):
            bits_to_float(2 ** 64)


class UlpTest(unittest.TestCase):
    def test_known_values(self):
        self.assertEqual(2. ** -52, ulp(1.))
        self.assertEqual(2. ** -52, ulp(-1.))
        self.assertEqual(2. ** -52, ulp(1.9999999999999998))
        self.assertEqual(2. ** -51, ulp(2.))
        self.assertEqual(1., ulp(2. ** 52))
        self.assertEqual(5e-324, ulp(0.))
        self.assertEqual(5e-324, ulp(-0.))
        self.assertEqual(5e-324, ulp(1e-310))
        self.assertEqual(float('inf'), ulp(float('-inf')))
        self.assertTrue(math.isnan(ulp(float('nan'))))

    def test_against_spacing(self):
        rng = random.Random(17)
        for _ in range(1000):
            x = math.ldexp(rng.uniform(-1, 1), rng.randint(-1000, 1000))
            self.assertEqual(float(np.spacing(abs(x))), ulp(x), msg=repr(x))

    def test_eps(self):
        self.assertEqual(2. ** -53, eps(1.))
        self.assertEqual(2. ** -53, eps(1.5))
        self.assertEqual(2. ** -53, eps(-1.5))
        self.assertEqual(.5, eps(2. ** 52))
        self.assertEqual(2. ** -1074, eps(2. ** -1021))
        # half of the smallest subnormal is not representable
        self.assertEqual(0., eps(2. ** -1022))
        self.assertEqual(0., eps(0.))


class ModfTest(unittest.TestCase):
    def test_modf(self):
        self.assertEqual((2, .5), modf(2.5))
        self.assertEqual((-2, .75), modf(-1.25))
        self.assertEqual((3, 0.), modf(3.))
        self.assertEqual((0, .1), modf(.1))
        self.assertIsInstance(modf(2.5)[0], int)

    def test_exact(self):
        rng = random.Random(3)
        for _ in range(1000):
            x = rng.uniform(-1e6, 1e6)
            integer, fraction = modf(x)
            self.assertEqual(x, integer + fraction)
            self.assertLessEqual(0., fraction)
            self.assertLess(fraction, 1.)
