"""
Tests for Laurent polynomial arithmetic.
"""

import unittest

from khoHo2.polynomial import Poly

t = Poly.var("t")
q = Poly.var("q")


class TestArithmetic(unittest.TestCase):
    """Tests for ring operations."""

    def test_add_and_cancel(self):
        self.assertEqual((q + t) - t, q)
        self.assertTrue((q - q).is_zero())
        self.assertEqual(q + 1, 1 + q)

    def test_multiply(self):
        product = (q + q ** -1) * (q - q ** -1)
        self.assertEqual(product, q ** 2 - q ** -2)
        self.assertEqual(3 * q, Poly.monomial(3, q=1))

    def test_powers(self):
        self.assertEqual((1 + q) ** 2, 1 + 2 * q + q ** 2)
        self.assertEqual((t * q ** 2) ** -2, Poly.monomial(1, t=-2, q=-4))
        with self.assertRaises(ValueError):
            (1 + q) ** -1
        with self.assertRaises(ValueError):
            (2 * q).inverse()

    def test_inspection(self):
        poly = 2 * t ** -1 * q ** 3 + q - 5
        self.assertEqual(poly.coefficient(t=-1, q=3), 2)
        self.assertEqual(poly.coefficient(), -5)
        self.assertEqual(poly.degree("q"), 3)
        self.assertEqual(poly.min_degree("t"), -1)
        self.assertEqual(poly.variables(), ["q", "t"])
        self.assertFalse(poly.has_nonnegative_coefficients())
        self.assertEqual(len(poly.terms()), 3)

    def test_equality_and_hash(self):
        self.assertEqual(Poly.const(0), 0)
        self.assertEqual(hash(q + t), hash(t + q))
        self.assertFalse(Poly())

    def test_format(self):
        self.assertEqual(str(q ** -1 + q), "q^-1 + q")
        self.assertEqual(str(Poly()), "0")
        self.assertEqual(str(1 - 2 * q), "1 - 2*q")

    def test_format_order(self):
        """Terms print by t degree, then q degree, then the remaining variables."""
        T = Poly.var("T")
        trefoil = t ** 3 * q ** 9 + T * t ** 3 * q ** 7 + t ** 2 * q ** 5 + q ** 3 + q
        self.assertEqual(str(trefoil), "q + q^3 + q^5*t^2 + T*q^7*t^3 + q^9*t^3")
        self.assertEqual(str(Poly.var("T3") * t * q + T * t * q), "T*q*t + T3*q*t")
        self.assertEqual(str(t - q ** 2), "-q^2 + t")


class TestSubstitution(unittest.TestCase):
    """Tests for substitution and shifting."""

    def test_substitute(self):
        poly = t ** 2 * q ** 5 + t ** 3 * q ** 9
        value = Poly.monomial(-1, q=-4)
        self.assertTrue(poly.substitute(t=value).is_zero())
        self.assertEqual((t * q ** 5).substitute(t=value), -(q ** 1))
        self.assertEqual((t * q).substitute(q=1), t)

    def test_substitute_polynomial(self):
        self.assertEqual((t ** 2).substitute(t=1 + q), 1 + 2 * q + q ** 2)

    def test_shift(self):
        self.assertEqual((1 + q).shift(t=1, q=2), t * q ** 2 + t * q ** 3)


class TestDivision(unittest.TestCase):
    """Tests for long division."""

    def test_exact(self):
        divisor = 1 + t * q ** 4
        quotient = t ** 2 * q ** 5 - t ** -2 * q ** -5
        result, remainder = (quotient * divisor).divide(divisor, "t")
        self.assertEqual(result, quotient)
        self.assertTrue(remainder.is_zero())

    def test_negative_degrees(self):
        numerator = t ** -2 * q ** -5 + t ** -1 * q ** -1 + t * q + t ** 2 * q ** 5
        quotient, remainder = numerator.divide(1 + t * q ** 4, "t")
        self.assertTrue(remainder.is_zero())
        self.assertEqual(quotient, t ** -2 * q ** -5 + t * q)

    def test_remainder(self):
        quotient, remainder = (q ** 3 + 1).divide(1 + q ** 2, "q")
        self.assertEqual(quotient * (1 + q ** 2) + remainder, q ** 3 + 1)
        self.assertFalse(remainder.is_zero())

    def test_zero_divisor(self):
        with self.assertRaises(ZeroDivisionError):
            q.divide(Poly(), "q")


if __name__ == '__main__':
    unittest.main()
