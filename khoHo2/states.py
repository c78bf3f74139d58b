"""
State enumeration for the Khovanov complex.

For every vertex of the resolution cube {0,1}^V the enumerator computes the
cycle decomposition and lists the enhanced states: one generator for every
way of labelling the cycles plus (1) or minus (x). In the reduced theories
the marked cycle 0 is always labelled minus, so only odd label masks occur.

Gradings of a state on vertex v with r one-bits, c cycles and m minus
cycles, for a diagram with n+ positive and n- negative crossings:

    i = r - n-                       (equivalently (writhe - sigma) / 2)
    j = (c - 2m) + r + n+ - 2n-      (+1 in the reduced theories)

Local indices are handed out in a fixed order (vertex ascending, label mask
ascending) so every pass over the cube sees the same numbering. The same
pass counts exactly how many nonzero matrix entries every differential will
have, so the builder can allocate its buffers once.
"""

from dataclasses import dataclass
from typing import Iterator, List, Set, Tuple

import numpy as np

from .config import HomologyType, KhovanovConfig
from .cycles import CycleDecomposition, decompose
from .errors import CapacityExceededError, InvalidReferenceError
from .knot import Diagram
from .packing import GeneratorCodec, UNUSED


def popcount(x: int) -> int:
    return bin(x).count("1")


class BinomialTable:
    """Pascal's triangle, grown on demand."""

    def __init__(self, size: int = 16):
        self._rows: List[List[int]] = [[1]]
        self._grow(size)

    def _grow(self, n: int) -> None:
        while len(self._rows) <= n:
            prev = self._rows[-1]
            self._rows.append([1] + [prev[k - 1] + prev[k] for k in range(1, len(prev))] + [1])

    def __call__(self, n: int, k: int) -> int:
        if n < 0 or k < 0 or k > n:
            return 0
        self._grow(n)
        return self._rows[n][k]


@dataclass
class VertexStates:
    """
    Enhanced states living on one cube vertex.

    Attributes:
        vertex: Cube vertex
        weight: Number of 1-resolutions
        cycles: Cycle decomposition of the resolution
        codes: Packed code per label mask (UNUSED for masks not in the theory)
    """
    vertex: int
    weight: int
    cycles: CycleDecomposition
    codes: np.ndarray

    @property
    def num_cycles(self) -> int:
        return self.cycles.count

    def masks(self) -> Iterator[int]:
        """Label masks that carry a generator, ascending."""
        for mask in range(len(self.codes)):
            if self.codes[mask] != UNUSED:
                yield mask


@dataclass
class StateList:
    """
    All enhanced states of a diagram for one homology type.

    Attributes:
        homology_type: Theory the states were enumerated for
        num_crossings: V
        i_low, i_high: Primary grading range (-n-, n+)
        j_low, j_high: Secondary grading range actually occupied
        codec: Packing of (j_index, local_index)
        vertices: VertexStates indexed by cube vertex
        ranks: Generator counts, shape (num_j, num_i)
        entry_counts: Nonzero entries of d: C^{i,j} -> C^{i+1,j}, same shape
    """
    homology_type: HomologyType
    num_crossings: int
    i_low: int
    i_high: int
    j_low: int
    j_high: int
    codec: GeneratorCodec
    vertices: List[VertexStates]
    ranks: np.ndarray
    entry_counts: np.ndarray

    @property
    def num_i(self) -> int:
        return self.i_high - self.i_low + 1

    @property
    def num_j(self) -> int:
        return (self.j_high - self.j_low) // 2 + 1

    @property
    def j_parity(self) -> int:
        return self.j_low % 2

    def i_index(self, i: int) -> int:
        if not self.i_low <= i <= self.i_high:
            raise InvalidReferenceError(f"Primary grading {i} outside [{self.i_low}, {self.i_high}]")
        return i - self.i_low

    def j_index(self, j: int) -> int:
        if not self.j_low <= j <= self.j_high or (j - self.j_low) % 2:
            raise InvalidReferenceError(f"Secondary grading {j} not in the complex")
        return (j - self.j_low) // 2

    def j_value(self, j_index: int) -> int:
        return self.j_low + 2 * j_index

    def rank(self, i: int, j: int) -> int:
        return int(self.ranks[self.j_index(j), self.i_index(i)])

    def total_generators(self) -> int:
        return int(self.ranks.sum())

    def vertices_of_weight(self, weight: int) -> Iterator[VertexStates]:
        for states in self.vertices:
            if states.weight == weight:
                yield states

    def decode(self, code: int) -> Tuple[int, int]:
        """Return (j, local_index) of a packed code."""
        j_index, local = self.codec.unpack(code)
        return self.j_value(j_index), local


class StateEnumerator:
    """
    Enumerates enhanced states and sizes the differential matrices.
    """

    def __init__(self, config: KhovanovConfig):
        self.config = config
        self.binomial = BinomialTable()

    def enumerate(self, diagram: Diagram, homology_type: HomologyType) -> StateList:
        """
        Enumerate all enhanced states of diagram.

        Raises:
            CapacityExceededError: too many crossings, secondary gradings or
                generators in one bigraded piece
        """
        n_cross = diagram.crossing_number()
        if n_cross > self.config.max_crossings:
            raise CapacityExceededError(
                f"Diagram has {n_cross} crossings, limit is {self.config.max_crossings}",
                limit=self.config.max_crossings, requested=n_cross)

        reduced = homology_type.is_reduced
        n_plus, n_minus = diagram.num_positive(), diagram.num_negative()
        shift = n_plus - 2 * n_minus + (1 if reduced else 0)
        n_vertices = 1 << n_cross

        self.config.report(1, f"Enumerating {n_vertices} resolutions ({homology_type.value})")
        decompositions = [decompose(diagram, v) for v in range(n_vertices)]

        j_low, j_high = None, None
        for cycles in decompositions:
            c, r = cycles.count, popcount(cycles.vertex)
            top = c - 2 + r + shift if reduced else c + r + shift
            bottom = -c + r + shift
            j_low = bottom if j_low is None else min(j_low, bottom)
            j_high = top if j_high is None else max(j_high, top)

        num_j = (j_high - j_low) // 2 + 1
        if num_j > self.config.max_gradings:
            raise CapacityExceededError(
                f"Secondary grading range has {num_j} values, limit is {self.config.max_gradings}",
                limit=self.config.max_gradings, requested=num_j)

        codec = GeneratorCodec(self.config.max_generators, num_j)
        ranks = np.zeros((num_j, n_cross + 1), dtype=np.int64)
        entry_counts = np.zeros((num_j, n_cross + 1), dtype=np.int64)
        vertices: List[VertexStates] = []

        start, step = (1, 2) if reduced else (0, 1)
        for cycles in decompositions:
            v, c = cycles.vertex, cycles.count
            r = popcount(v)
            codes = codec.new_array(1 << c)
            for mask in range(start, 1 << c, step):
                j = c - 2 * popcount(mask) + r + shift
                j_index = (j - j_low) // 2
                local = int(ranks[j_index, r])
                codes[mask] = codec.pack(j_index, local)
                ranks[j_index, r] = local + 1
            vertices.append(VertexStates(vertex=v, weight=r, cycles=cycles, codes=codes))
            self._count_entries(diagram, cycles, r, shift, j_low, reduced, entry_counts)

        self.config.report(1, f"Enumerated {int(ranks.sum())} generators in {num_j} gradings")
        return StateList(
            homology_type=homology_type,
            num_crossings=n_cross,
            i_low=-n_minus,
            i_high=n_plus,
            j_low=j_low,
            j_high=j_high,
            codec=codec,
            vertices=vertices,
            ranks=ranks,
            entry_counts=entry_counts,
        )

    def _count_states(self, c: int, m: int, minus: Set[int], plus: Set[int]) -> int:
        """Number of label masks on c cycles with m minus labels and the given fixed labels."""
        if minus & plus:
            return 0
        return self.binomial(c - len(minus) - len(plus), m - len(minus))

    def _count_entries(self, diagram: Diagram, cycles: CycleDecomposition, r: int,
                       shift: int, j_low: int, reduced: bool,
                       entry_counts: np.ndarray) -> None:
        """
        Add the nonzero entries contributed by edges leaving this vertex.

        Merging cycles p and q kills exactly the states where both are minus;
        splitting cycle r gives two terms for a plus label and one for minus.
        """
        c = cycles.count
        marked: Set[int] = {0} if reduced else set()
        for idx, crossing in enumerate(diagram.crossings):
            if (cycles.vertex >> idx) & 1:
                continue
            p = cycles.cycle_of[crossing.arcs[0]]
            q = cycles.cycle_of[crossing.arcs[2]]
            for m in range(c + 1):
                if p != q:
                    n = (self._count_states(c, m, marked, set())
                         - self._count_states(c, m, marked | {p, q}, set()))
                else:
                    n = (2 * self._count_states(c, m, marked, {p})
                         + self._count_states(c, m, marked | {p}, set()))
                if n:
                    j = c - 2 * m + r + shift
                    entry_counts[(j - j_low) // 2, r] += n
