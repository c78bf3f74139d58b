"""
End-to-end tests for Khovanov homology.

These tests verify:
1. Known polynomials of small knots and links in every theory
2. Torsion placement
3. Euler characteristic against the Jones polynomial
4. The unified theory against its even and odd specializations
"""

import unittest

from khoHo2.catalog import available, get_diagram
from khoHo2.config import HomologyType, KhovanovConfig
from khoHo2.invariants import compute_jones_polynomial, unnormalized_jones
from khoHo2.knot import Diagram
from khoHo2.polynomial import Poly
from khoHo2.store import KhovanovStore

t = Poly.var("t")
q = Poly.var("q")
T = Poly.var("T")

DIAGRAMS = ["unknot", "unlink2", "3_1", "3_1_mirror", "4_1", "5_1", "8_19",
            "hopf_positive", "hopf_negative", "L4a1",
            "unknot_kink", "unknot_twist", "unlink2_twist"]


def homology(name, homology_type="standard", split=True):
    store = KhovanovStore(KhovanovConfig(capacity=1))
    slot = store.initialize_diagram(get_diagram(name), name)
    return store.compute_polynomial(slot, homology_type, split=split)


class TestStandardHomology(unittest.TestCase):
    """Unreduced even homology of small diagrams."""

    def test_unknot(self):
        rational, torsion = homology("unknot")
        self.assertEqual(rational, q + q ** -1)
        self.assertTrue(torsion.is_zero())

    def test_unlink(self):
        rational, _ = homology("unlink2")
        self.assertEqual(rational, (q + q ** -1) ** 2)

    def test_right_trefoil(self):
        rational, torsion = homology("3_1")
        self.assertEqual(rational, q + q ** 3 + t ** 2 * q ** 5 + t ** 3 * q ** 9)
        self.assertEqual(torsion, T * t ** 3 * q ** 7)

    def test_left_trefoil(self):
        rational, torsion = homology("left_trefoil")
        self.assertEqual(rational, q ** -1 + q ** -3 + t ** -2 * q ** -5 + t ** -3 * q ** -9)
        self.assertEqual(torsion, T * t ** -2 * q ** -7)

    def test_figure_eight(self):
        rational, torsion = homology("4_1")
        expected = (t ** -2 * q ** -5 + t ** -1 * q ** -1 + q ** -1 + q
                    + t * q + t ** 2 * q ** 5)
        self.assertEqual(rational, expected)
        self.assertEqual(torsion, T * (t ** -1 * q ** -3 + t ** 2 * q ** 3))

    def test_cinquefoil(self):
        rational, torsion = homology("5_1")
        expected = (q ** -3 + q ** -5 + t ** -2 * q ** -7 + t ** -3 * q ** -11
                    + t ** -4 * q ** -11 + t ** -5 * q ** -15)
        self.assertEqual(rational, expected)
        self.assertEqual(torsion, T * (t ** -2 * q ** -9 + t ** -4 * q ** -13))

    def test_hopf_links(self):
        rational, torsion = homology("hopf_positive")
        self.assertEqual(rational, 1 + q ** 2 + t ** 2 * q ** 4 + t ** 2 * q ** 6)
        self.assertTrue(torsion.is_zero())

        rational, _ = homology("hopf_negative")
        self.assertEqual(rational, 1 + q ** -2 + t ** -2 * q ** -4 + t ** -2 * q ** -6)

    def test_torus_knot(self):
        rational, torsion = homology("torus_3_4")
        expected = (q ** 5 + q ** 7 + t ** 2 * q ** 9 + t ** 3 * q ** 13 + t ** 4 * q ** 11
                    + t ** 4 * q ** 13 + t ** 5 * q ** 15 + t ** 5 * q ** 17)
        self.assertEqual(rational, expected)
        self.assertEqual(torsion, T * t ** 3 * q ** 11)

    def test_combined_polynomial(self):
        combined = homology("3_1", split=False)
        rational, torsion = homology("3_1")
        self.assertEqual(combined, rational + torsion)

    def test_vector_form(self):
        store = KhovanovStore()
        slot = store.initialize_diagram(get_diagram("3_1"))
        rational, torsion = store.compute_polynomial(slot, split=True, as_vector=True)
        self.assertEqual(len(rational), 4)
        self.assertEqual(torsion, [T * t ** 3 * q ** 7])
        self.assertTrue(all(term.is_monomial() for term in rational))


class TestReducedHomology(unittest.TestCase):
    """Reduced even and odd homology."""

    def test_unknot(self):
        for htype in ("reduced", "reducedOdd"):
            rational, torsion = homology("unknot", htype)
            self.assertEqual(rational, Poly.const(1))
            self.assertTrue(torsion.is_zero())

    def test_trefoil(self):
        expected = q ** 2 + t ** 2 * q ** 6 + t ** 3 * q ** 8
        for htype in ("reduced", "reducedOdd"):
            rational, torsion = homology("3_1", htype)
            self.assertEqual(rational, expected, htype)
            self.assertTrue(torsion.is_zero(), htype)

    def test_figure_eight(self):
        """Alternating knots have the same reduced even and odd homology."""
        expected = t ** -2 * q ** -4 + t ** -1 * q ** -2 + 1 + t * q ** 2 + t ** 2 * q ** 4
        for htype in ("reduced", "reducedOdd"):
            rational, torsion = homology("4_1", htype)
            self.assertEqual(rational, expected, htype)
            self.assertTrue(torsion.is_zero(), htype)

    def test_hopf(self):
        rational, _ = homology("hopf_positive", "reduced")
        self.assertEqual(rational, q + t ** 2 * q ** 5)

    def test_torus_knot(self):
        """T(3,4) is not quasi-alternating: even and odd reduced homology differ."""
        rational, torsion = homology("8_19", "reduced")
        self.assertEqual(rational, q ** 6 + t ** 2 * q ** 10 + t ** 3 * q ** 12
                         + t ** 4 * q ** 12 + t ** 5 * q ** 16)
        self.assertTrue(torsion.is_zero())

        rational, torsion = homology("8_19", "reducedOdd")
        self.assertEqual(rational, q ** 6 + t ** 2 * q ** 10 + t ** 5 * q ** 16)
        self.assertEqual(torsion, T * t ** 4 * q ** 12 + Poly.var("T3") * t ** 5 * q ** 14)

    def test_reduced_from_unreduced(self):
        """At t = -1 unreduced homology is (q + 1/q) times reduced homology."""
        for name in ("3_1", "4_1", "5_1"):
            standard, _ = homology(name)
            reduced, _ = homology(name, "reduced")
            self.assertEqual(standard.substitute(t=-1),
                             ((q + q ** -1) * reduced).substitute(t=-1), name)


class TestUnifiedHomology(unittest.TestCase):
    """The unified theory over Z[pi]/(pi^2 - 1)."""

    def test_unknot(self):
        rational, _ = homology("unknot", "unified")
        self.assertEqual(rational, Poly.const(2))

    def test_sum_of_specializations(self):
        for name in ("3_1", "4_1", "5_1", "8_19", "hopf_positive"):
            unified, _ = homology(name, "unified")
            even, _ = homology(name, "reduced")
            odd, _ = homology(name, "reducedOdd")
            self.assertEqual(unified, even + odd, name)

    def test_quasi_alternating(self):
        for name in ("3_1", "4_1"):
            unified, _ = homology(name, "unified")
            reduced, _ = homology(name, "reduced")
            self.assertEqual(unified, 2 * reduced, name)


class TestKinkedDiagrams(unittest.TestCase):
    """Diagrams with Reidemeister I and II moves give the homology of unlinks."""

    def test_kinked_unknots(self):
        for name in ("unknot_kink", "unknot_twist"):
            expected = {
                "standard": q + q ** -1,
                "reduced": Poly.const(1),
                "reducedOdd": Poly.const(1),
                "unified": Poly.const(2),
            }
            for htype, value in expected.items():
                rational, torsion = homology(name, htype)
                self.assertEqual(rational, value, f"{name} {htype}")
                self.assertTrue(torsion.is_zero(), f"{name} {htype}")

    def test_braid_unlink(self):
        """The closure of s1 s1^-1 has the homology of the two-component unlink."""
        expected = {
            "standard": 2 + q ** -2 + q ** 2,
            "reduced": q + q ** -1,
            "reducedOdd": q + q ** -1,
            "unified": 2 * (q + q ** -1),
        }
        for htype, value in expected.items():
            rational, torsion = homology("unlink2_twist", htype)
            self.assertEqual(rational, value, htype)
            self.assertTrue(torsion.is_zero(), htype)
        rational, _ = homology("unlink2")
        self.assertEqual(rational, 2 + q ** -2 + q ** 2)


class TestEulerCharacteristic(unittest.TestCase):
    """The graded Euler characteristic is the unnormalized Jones polynomial."""

    def test_every_theory(self):
        for name in DIAGRAMS:
            diagram = get_diagram(name)
            store = KhovanovStore()
            slot = store.initialize_diagram(diagram, name)
            for htype in HomologyType:
                chi = store.compute_betti(slot, htype).euler_characteristic()
                expected = unnormalized_jones(diagram, reduced=htype.is_reduced)
                if htype is HomologyType.UNIFIED:
                    expected = 2 * expected
                self.assertEqual(chi, expected, f"{name} {htype.value}")

    def test_jones(self):
        """Right trefoil: q^2 + q^6 - q^8."""
        self.assertEqual(compute_jones_polynomial(get_diagram("3_1")),
                         q ** 2 + q ** 6 - q ** 8)
        self.assertEqual(compute_jones_polynomial(Diagram.unknot()), Poly.const(1))

    def test_catalog_complete(self):
        self.assertEqual(sorted(DIAGRAMS), sorted(available()))


if __name__ == '__main__':
    unittest.main()
