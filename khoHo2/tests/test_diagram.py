"""
Tests for the diagram model and its supporting pieces.

These tests verify:
1. PD code validation and crossing signs
2. Link components and linking numbers
3. Cycle decompositions of resolutions
4. Generator packing
5. Configuration parsing
"""

import unittest

from khoHo2.catalog import available, get_diagram
from khoHo2.config import HomologyType, KhovanovConfig
from khoHo2.cycles import decompose
from khoHo2.errors import CapacityExceededError, InvalidReferenceError
from khoHo2.invariants import (compute_linking_number, compute_writhe, linking_factor,
                               linking_matrix)
from khoHo2.knot import CrossingSign, Diagram, crossing_sign
from khoHo2.packing import UNUSED, GeneratorCodec
from khoHo2.polynomial import Poly

TREFOIL = [(1, 5, 2, 4), (3, 1, 4, 6), (5, 3, 6, 2)]


class TestDiagram(unittest.TestCase):
    """Tests for PD code diagrams."""

    def test_trefoil_signs(self):
        """Right trefoil has three positive crossings."""
        diagram = Diagram.from_pd_code(TREFOIL)
        self.assertEqual(diagram.crossing_number(), 3)
        self.assertEqual(diagram.num_edges, 6)
        self.assertEqual(diagram.signs(), [1, 1, 1])
        self.assertEqual(diagram.writhe(), 3)

    def test_mirror_signs(self):
        diagram = get_diagram("left_trefoil")
        self.assertEqual(diagram.writhe(), -3)
        self.assertEqual(diagram.num_negative(), 3)

    def test_figure_eight_writhe(self):
        diagram = get_diagram("4_1")
        self.assertEqual(compute_writhe(diagram), 0)
        self.assertEqual(diagram.num_positive(), 2)
        self.assertEqual(diagram.num_negative(), 2)

    def test_crossing_sign_rule(self):
        """Overstrand running l -> j with j = l + 1 is positive, wrap-around included."""
        self.assertEqual(crossing_sign((1, 5, 2, 4)), CrossingSign.POSITIVE)
        self.assertEqual(crossing_sign((3, 1, 4, 6)), CrossingSign.POSITIVE)
        self.assertEqual(crossing_sign((1, 4, 2, 5)), CrossingSign.NEGATIVE)
        self.assertEqual(crossing_sign((3, 6, 4, 1)), CrossingSign.NEGATIVE)

    def test_explicit_signs(self):
        diagram = Diagram.from_pd_code([(1, 3, 2, 4), (3, 1, 4, 2)], signs=[1, 1])
        self.assertEqual(diagram.writhe(), 2)
        with self.assertRaises(ValueError):
            Diagram.from_pd_code([(1, 3, 2, 4), (3, 1, 4, 2)], signs=[1])

    def test_invalid_codes(self):
        """Malformed PD codes are rejected."""
        with self.assertRaises(ValueError):
            Diagram.from_pd_code([(1, 2, 3)])
        with self.assertRaises(ValueError):
            Diagram.from_pd_code([(1, 5, 2, 4), (3, 1, 4, 6), (5, 3, 6, 7)])
        with self.assertRaises(ValueError):
            Diagram.from_pd_code([(1, 1, 2, 2), (1, 3, 4, 3)])
        with self.assertRaises(ValueError):
            Diagram([])

    def test_unknot(self):
        unknot = Diagram.unknot()
        self.assertTrue(unknot.is_trivial())
        self.assertEqual(unknot.num_components(), 1)
        self.assertEqual(Diagram.unknot(components=3).num_components(), 3)

    def test_round_trip(self):
        diagram = Diagram.from_pd_code(TREFOIL)
        self.assertEqual(diagram.to_pd_code(), [list(c) for c in TREFOIL])
        self.assertEqual(Diagram.from_pd_code(diagram.to_pd_code(), diagram.signs()), diagram)

    def test_braid_closures(self):
        trefoil = Diagram.from_braid_word([1, 1, 1], 2)
        self.assertEqual(trefoil.to_pd_code(), [[4, 2, 5, 1], [2, 6, 3, 5], [6, 4, 1, 3]])
        self.assertEqual(trefoil.writhe(), 3)
        self.assertEqual(Diagram.from_braid_word([1, 2] * 4, 3), get_diagram("8_19"))
        self.assertEqual(Diagram.from_braid_word([1, -1], 2), get_diagram("unlink2_twist"))
        self.assertEqual(Diagram.from_braid_word([1], 2), get_diagram("unknot_kink"))

    def test_braid_free_strands(self):
        kink = Diagram.from_braid_word([1], 3)
        self.assertEqual(kink.trivial_components, 1)
        self.assertEqual(kink.num_components(), 2)
        self.assertEqual(Diagram.from_braid_word([], 3), Diagram.unknot(components=3))
        with self.assertRaises(ValueError):
            Diagram.from_braid_word([3], 3)
        with self.assertRaises(ValueError):
            Diagram.from_braid_word([0, 1], 2)

    def test_components(self):
        self.assertEqual(get_diagram("3_1").num_components(), 1)
        hopf = get_diagram("hopf")
        self.assertEqual(hopf.edge_components(), [[1, 2], [3, 4]])
        self.assertEqual(get_diagram("L4a1").num_components(), 2)

    def test_catalog(self):
        for name in available():
            self.assertIsInstance(get_diagram(name), Diagram)
        with self.assertRaises(KeyError):
            get_diagram("10_161")


class TestLinking(unittest.TestCase):
    """Tests for linking numbers and the linking factor."""

    def test_hopf_links(self):
        self.assertEqual(compute_linking_number(get_diagram("hopf_positive"), 0, 1), 1)
        self.assertEqual(compute_linking_number(get_diagram("hopf_negative"), 0, 1), -1)

    def test_torus_link(self):
        self.assertEqual(linking_matrix(get_diagram("L4a1")), [[0, -2], [-2, 0]])

    def test_factor(self):
        """Knots have factor 1; links sum over subsets containing component 0."""
        self.assertEqual(linking_factor(get_diagram("3_1")), Poly.const(1))
        self.assertEqual(linking_factor(Diagram.unknot()), Poly.const(1))
        expected = Poly.const(1) + Poly.monomial(1, t=2, q=4)
        self.assertEqual(linking_factor(get_diagram("hopf_positive")), expected)
        expected = Poly.const(1) + Poly.monomial(1, t=-4, q=-8)
        self.assertEqual(linking_factor(get_diagram("L4a1")), expected)

    def test_split_unlink(self):
        self.assertEqual(linking_factor(Diagram.unknot(components=2)), Poly.const(2))


class TestCycles(unittest.TestCase):
    """Tests for cycle decompositions."""

    def test_trefoil_extremes(self):
        diagram = Diagram.from_pd_code(TREFOIL)
        zero = decompose(diagram, 0)
        self.assertEqual(zero.count, 2)
        self.assertEqual(zero.edges, [[1, 3, 5], [2, 4, 6]])
        self.assertEqual(zero.cycle_of[1], 0)
        self.assertEqual(zero.cycle_of[6], 1)

        full = decompose(diagram, 0b111)
        self.assertEqual(full.count, 3)
        self.assertEqual(full.edges, [[1, 4], [2, 5], [3, 6]])

    def test_single_flip_merges(self):
        diagram = Diagram.from_pd_code(TREFOIL)
        for vertex in (0b001, 0b010, 0b100):
            self.assertEqual(decompose(diagram, vertex).count, 1)

    def test_marked_cycle(self):
        """Cycle 0 always contains edge 1."""
        diagram = get_diagram("4_1")
        for vertex in range(16):
            cycles = decompose(diagram, vertex)
            self.assertEqual(cycles.cycle_of[1], 0)
            self.assertEqual(cycles.first_edge(0), 1)

    def test_trivial_components(self):
        diagram = Diagram.from_pd_code(TREFOIL, trivial_components=2)
        cycles = decompose(diagram, 0)
        self.assertEqual(cycles.count, 4)
        self.assertEqual(cycles.edge_cycles, 2)
        self.assertTrue(cycles.is_trivial(3))
        self.assertFalse(cycles.is_trivial(1))


class TestPacking(unittest.TestCase):
    """Tests for packed generator codes."""

    def test_round_trip(self):
        codec = GeneratorCodec(1 << 10, 20)
        for j_index in (0, 7, 19):
            for local in (0, 1, 1023):
                code = codec.pack(j_index, local)
                self.assertEqual(codec.unpack(code), (j_index, local))

    def test_overflow(self):
        codec = GeneratorCodec(4, 2)
        with self.assertRaises(CapacityExceededError):
            codec.pack(1, 4)

    def test_wide_codes(self):
        """Codes past 64 bits fall back to Python integers."""
        codec = GeneratorCodec(1 << 62, 8)
        self.assertIs(codec.dtype, object)
        code = codec.pack(7, (1 << 62) - 1)
        self.assertEqual(codec.unpack(code), (7, (1 << 62) - 1))

    def test_arrays(self):
        codec = GeneratorCodec(16, 4)
        codes = codec.new_array(4)
        self.assertTrue((codes == UNUSED).all())
        codes[1] = codec.pack(2, 5)
        self.assertEqual(int((codes != UNUSED).sum()), 1)
        self.assertEqual(codec.unpack(codes[1]), (2, 5))


class TestConfig(unittest.TestCase):
    """Tests for configuration parsing."""

    def test_parse(self):
        self.assertIs(HomologyType.parse("standard"), HomologyType.STANDARD)
        self.assertIs(HomologyType.parse("reducedOdd"), HomologyType.REDUCED_ODD)
        self.assertIs(HomologyType.parse("odd"), HomologyType.REDUCED_ODD)
        self.assertIs(HomologyType.parse("UNIFIED"), HomologyType.UNIFIED)
        self.assertIs(HomologyType.parse(1), HomologyType.REDUCED)

    def test_parse_errors(self):
        with self.assertRaises(InvalidReferenceError):
            HomologyType.parse("sl3")
        with self.assertRaises(InvalidReferenceError):
            HomologyType.parse(9)

    def test_properties(self):
        self.assertFalse(HomologyType.STANDARD.is_reduced)
        self.assertTrue(HomologyType.UNIFIED.is_reduced)
        self.assertTrue(HomologyType.REDUCED_ODD.needs_signs)
        self.assertFalse(HomologyType.REDUCED.needs_signs)

    def test_config(self):
        config = KhovanovConfig(homology_type="reduced")
        self.assertIs(config.homology_type, HomologyType.REDUCED)
        other = config.with_options(verbose=2)
        self.assertEqual(other.verbose, 2)
        self.assertEqual(config.verbose, 0)
        with self.assertRaises(ValueError):
            KhovanovConfig(capacity=0)


if __name__ == '__main__':
    unittest.main()
