"""
Tests for the structural checks on Khovanov polynomials.
"""

import unittest

from khoHo2.catalog import get_diagram
from khoHo2.conjecture import (ConjectureResult, ConjectureViolation, check_conjecture1,
                               check_torsion_conjecture, homological_width)
from khoHo2.polynomial import Poly
from khoHo2.store import KhovanovStore

t = Poly.var("t")
q = Poly.var("q")
T = Poly.var("T")
ONE = Poly.const(1)

TREFOIL = q + q ** 3 + t ** 2 * q ** 5 + t ** 3 * q ** 9
FIGURE_EIGHT = t ** -2 * q ** -5 + t ** -1 * q ** -1 + q ** -1 + q + t * q + t ** 2 * q ** 5


class TestConjecture1(unittest.TestCase):
    """Tests for the extended Lee / Bar-Natan conjecture."""

    def test_trefoil(self):
        result = check_conjecture1(TREFOIL, ONE)
        self.assertIsInstance(result, ConjectureResult)
        self.assertTrue(result)
        self.assertEqual(result.s, 2)
        self.assertEqual(result.kh_prime, t ** 2 * q ** 5)
        self.assertTrue(result.thin)

    def test_figure_eight(self):
        result = check_conjecture1(FIGURE_EIGHT, ONE)
        self.assertEqual(result.s, 0)
        self.assertEqual(result.kh_prime, t ** -2 * q ** -5 + t * q)
        self.assertTrue(result.thin)

    def test_hopf_link(self):
        kh = 1 + q ** 2 + t ** 2 * q ** 4 + t ** 2 * q ** 6
        result = check_conjecture1(kh, 1 + t ** 2 * q ** 4)
        self.assertEqual(result.s, 1)
        self.assertTrue(result.kh_prime.is_zero())

    def test_thick(self):
        """Kh' spread over two diagonals is not thin."""
        kh = q + q ** 3 + (1 + t * q ** 4) * (t ** 2 * q ** 5 + t ** 2 * q ** 7)
        result = check_conjecture1(kh, ONE)
        self.assertEqual(result.s, 2)
        self.assertFalse(result.thin)

    def test_zero(self):
        result = check_conjecture1(Poly(), ONE)
        self.assertIsInstance(result, ConjectureViolation)
        self.assertFalse(result)

    def test_not_divisible(self):
        result = check_conjecture1(q, ONE)
        self.assertFalse(result)
        self.assertIn("divide", result.reason)

    def test_negative_coefficients(self):
        kh = q + q ** 3 - t ** 2 * q ** 5 - t ** 3 * q ** 9
        result = check_conjecture1(kh, ONE)
        self.assertFalse(result)
        self.assertIn("negative", result.reason)

    def test_not_a_power(self):
        result = check_conjecture1(2 * (q + q ** 3), ONE)
        self.assertFalse(result)
        self.assertIn("power of q", str(result))


class TestTorsionConjecture(unittest.TestCase):
    """Tests for the Z/2 torsion check."""

    def test_trefoil(self):
        self.assertIs(check_torsion_conjecture(T * t ** 3 * q ** 7, t ** 2 * q ** 5), True)

    def test_no_torsion(self):
        self.assertIs(check_torsion_conjecture(Poly(), Poly()), True)

    def test_odd_order(self):
        result = check_torsion_conjecture(Poly.var("T3") * t * q, Poly())
        self.assertFalse(result)
        self.assertIn("T3", result.reason)

    def test_multiple_summands(self):
        """2*T is fine; T^2 is not a torsion polynomial."""
        self.assertIs(check_torsion_conjecture(2 * T * t * q ** 2, 2 * ONE), True)
        self.assertFalse(check_torsion_conjecture(T ** 2 * t * q ** 2, ONE))

    def test_misplaced(self):
        result = check_torsion_conjecture(T * t ** 3 * q ** 9, t ** 2 * q ** 5)
        self.assertFalse(result)
        self.assertIn("differs", result.reason)


class TestStoreChecks(unittest.TestCase):
    """Both checks run through the store."""

    def test_knots_and_links(self):
        expected = {"3_1": 2, "3_1_mirror": -2, "4_1": 0, "5_1": -4, "hopf_positive": 1}
        store = KhovanovStore()
        for name, s in expected.items():
            slot = store.initialize_diagram(get_diagram(name), name)
            result = store.check_conjecture(slot)
            self.assertTrue(result, f"{name}: {result}")
            self.assertEqual(result.s, s, name)

    def test_cinquefoil_prime(self):
        store = KhovanovStore()
        slot = store.initialize_diagram(get_diagram("5_1"))
        self.assertEqual(store.check_conjecture(slot).kh_prime,
                         t ** -3 * q ** -11 + t ** -5 * q ** -15)

    def test_torus_knot(self):
        """T(3,4) satisfies the first conjecture but its torsion is misplaced."""
        store = KhovanovStore()
        slot = store.initialize_diagram(get_diagram("8_19"), "8_19")
        rational, torsion = store.compute_polynomial(slot, "standard", split=True)
        self.assertEqual(homological_width(rational), 2)
        self.assertEqual(homological_width(rational, as_range=True), [3, 7])

        first = check_conjecture1(rational, store.linking_factor(slot))
        self.assertTrue(first)
        self.assertEqual(first.s, 6)
        self.assertFalse(first.thin)
        self.assertEqual(first.kh_prime, t ** 2 * q ** 9 + t ** 4 * q ** 11 + t ** 4 * q ** 13)

        result = store.check_conjecture(slot)
        self.assertIsInstance(result, ConjectureViolation)
        self.assertFalse(result)
        self.assertIn("differs", result.reason)
        self.assertEqual(torsion, T * t ** 3 * q ** 11)


class TestWidth(unittest.TestCase):
    """Tests for homological width."""

    def test_thin_knots(self):
        self.assertEqual(homological_width(TREFOIL), 1)
        self.assertEqual(homological_width(FIGURE_EIGHT), 1)
        self.assertEqual(homological_width(FIGURE_EIGHT, as_range=True), [-1, 1])
        self.assertEqual(homological_width(TREFOIL, as_range=True), [1, 3])

    def test_single_diagonal(self):
        self.assertEqual(homological_width(q ** 2 + t ** 2 * q ** 6), 0)

    def test_zero(self):
        self.assertEqual(homological_width(Poly()), 0)
        self.assertEqual(homological_width(Poly(), as_range=True), [0, 0])


if __name__ == '__main__':
    unittest.main()
