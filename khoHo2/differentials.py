"""
Differential matrices of the Khovanov complex.

The differential d: C^i -> C^{i+1} is the signed sum, over all cube edges
v -> v + e_k leaving vertices of weight i - i_low, of the edge maps on the
cycle algebra. A state is a monomial in its minus cycles, listed in
increasing cycle order. Per edge:

- merge of cycles p, q into r: every cycle is carried to its target cycle
  and the monomial is put back in increasing order; it vanishes when both
  p and q are minus.
- split of cycle r into T (containing the crossing's first edge) and H:
  the monomial is lifted by sending r to T and then multiplied on the left
  by (a_T + kappa * a_H).

The theories differ only in how a reordering and kappa are weighted:

    standard / reduced:  kappa = +1, reordering sign +1
    reducedOdd:          kappa = -1, reordering sign (-1)^inversions
    unified:             kappa = +pi, reordering factor pi^inversions

Every matrix splits into blocks by the secondary grading j, which the
differential preserves. Blocks are parallel numpy buffers sized with the
exact entry count found by the state enumerator.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from .config import HomologyType, KhovanovConfig
from .cycles import CycleDecomposition
from .errors import CapacityExceededError, InternalConsistencyError, InvalidReferenceError
from .knot import Crossing, Diagram
from .packing import UNUSED
from .signs import SignAssignment, standard_sign
from .sparse import SparseMatrix
from .states import StateList

# (target mask, inversion parity, head term)
Term = Tuple[int, int, int]


def _inversions(sequence: List[int]) -> int:
    count = 0
    for idx, x in enumerate(sequence):
        for y in sequence[idx + 1:]:
            if x > y:
                count += 1
    return count


def _minus_cycles(mask: int) -> List[int]:
    cycles = []
    index = 0
    while mask:
        if mask & 1:
            cycles.append(index)
        mask >>= 1
        index += 1
    return cycles


class EdgeMap:
    """
    The map on enhanced states induced by one cube edge.

    Attributes:
        crossing: Crossing changed from 0 to 1
        source: Cycles at the start vertex
        target: Cycles at the end vertex
        is_merge: True if two cycles merge, False if one splits
    """

    def __init__(self, crossing: Crossing, source: CycleDecomposition,
                 target: CycleDecomposition):
        self.crossing = crossing
        self.source = source
        self.target = target

        first, second = crossing.arcs[0], crossing.arcs[2]
        self.is_merge = source.cycle_of[first] != source.cycle_of[second]
        expected = source.count - 1 if self.is_merge else source.count + 1
        if target.count != expected:
            raise InternalConsistencyError(
                f"Crossing {crossing.id} changes {source.count} cycles into {target.count}")

        shift = target.edge_cycles - source.edge_cycles
        self.target_of = [
            target.cycle_of[source.first_edge(s)] if s < source.edge_cycles else s + shift
            for s in range(source.count)
        ]
        if self.is_merge:
            self.merged = (source.cycle_of[first], source.cycle_of[second])
        else:
            self.split = source.cycle_of[first]
            self.tail = target.cycle_of[crossing.arcs[0]]
            self.head = target.cycle_of[crossing.arcs[1]]

    def image(self, mask: int) -> List[Term]:
        """Terms of the image of the state with the given minus mask."""
        minus = _minus_cycles(mask)
        if self.is_merge:
            p, q = self.merged
            if mask >> p & 1 and mask >> q & 1:
                return []
            carried = [self.target_of[s] for s in minus]
            target_mask = 0
            for c in carried:
                target_mask |= 1 << c
            return [(target_mask, _inversions(carried) & 1, 0)]

        lifted = [self.tail if s == self.split else self.target_of[s] for s in minus]
        base_mask = 0
        for c in lifted:
            base_mask |= 1 << c
        base_inv = _inversions(lifted)
        terms = []
        for cycle, is_head in ((self.tail, 0), (self.head, 1)):
            if base_mask >> cycle & 1:
                continue
            moved = sum(1 for c in lifted if c < cycle)
            terms.append((base_mask | 1 << cycle, (base_inv + moved) & 1, is_head))
        return terms


def weigh_term(homology_type: HomologyType, parity: int, is_head: int) -> Tuple[int, int]:
    """Return (sign, pi flag) of an edge-map term for the given theory."""
    if homology_type is HomologyType.REDUCED_ODD:
        return (-1 if (parity + is_head) & 1 else 1), 0
    if homology_type is HomologyType.UNIFIED:
        return 1, (parity + is_head) & 1
    return 1, 0


@dataclass
class DifferentialBlock:
    """
    Entries of d: C^{i,j} -> C^{i+1,j}.

    Attributes:
        i, j: Bigrading of the source
        num_rows: Rank of the target C^{i+1,j}
        num_cols: Rank of the source C^{i,j}
        sources, targets: Local generator indices per entry
        values: Entry signs (+1 / -1)
        pi_flags: 1 where the entry carries a factor pi (unified theory)
        filled: Number of entries written so far
    """
    i: int
    j: int
    num_rows: int
    num_cols: int
    sources: np.ndarray
    targets: np.ndarray
    values: np.ndarray
    pi_flags: np.ndarray
    filled: int = 0

    @classmethod
    def allocate(cls, i: int, j: int, num_rows: int, num_cols: int,
                 capacity: int) -> 'DifferentialBlock':
        return cls(
            i=i, j=j, num_rows=num_rows, num_cols=num_cols,
            sources=np.zeros(capacity, dtype=np.int64),
            targets=np.zeros(capacity, dtype=np.int64),
            values=np.zeros(capacity, dtype=np.int8),
            pi_flags=np.zeros(capacity, dtype=np.int8),
        )

    @property
    def capacity(self) -> int:
        return len(self.values)

    def append(self, source: int, target: int, value: int, pi_flag: int) -> None:
        if self.filled >= self.capacity:
            raise InternalConsistencyError(
                f"Differential block ({self.i}, {self.j}) overflows its {self.capacity} entries")
        n = self.filled
        self.sources[n] = source
        self.targets[n] = target
        self.values[n] = value
        self.pi_flags[n] = pi_flag
        self.filled = n + 1

    def integer_entries(self, doubled: bool = False) -> List[Tuple[int, int, int]]:
        """
        Entries as (row, column, value) over the integers.

        With doubled, every generator g stands for the Z-basis pair
        (g, pi*g) at indices (2g, 2g + 1), and pi acts by swapping them.
        """
        entries = []
        for n in range(self.filled):
            s, t, c = int(self.sources[n]), int(self.targets[n]), int(self.values[n])
            if not doubled:
                entries.append((t, s, c))
            elif self.pi_flags[n]:
                entries.append((2 * t + 1, 2 * s, c))
                entries.append((2 * t, 2 * s + 1, c))
            else:
                entries.append((2 * t, 2 * s, c))
                entries.append((2 * t + 1, 2 * s + 1, c))
        return entries

    def to_sparse(self, doubled: bool = False) -> SparseMatrix:
        scale = 2 if doubled else 1
        return SparseMatrix.from_entries(scale * self.num_rows, scale * self.num_cols,
                                         self.integer_entries(doubled))


@dataclass
class DifferentialSet:
    """All differential blocks of one diagram, keyed by (i, j)."""
    blocks: Dict[Tuple[int, int], DifferentialBlock] = field(default_factory=dict)

    def get(self, i: int, j: int) -> Optional[DifferentialBlock]:
        return self.blocks.get((i, j))

    def total_entries(self) -> int:
        return sum(block.filled for block in self.blocks.values())

    def __len__(self) -> int:
        return len(self.blocks)


class DifferentialBuilder:
    """
    Builds the differential blocks from a state list.

    Args:
        diagram: The diagram
        states: Enumerated states for the homology type
        signs: Edge sign table (required for reducedOdd and unified)
        config: Configuration (verbosity)
    """

    def __init__(self, diagram: Diagram, states: StateList,
                 signs: Optional[SignAssignment] = None,
                 config: Optional[KhovanovConfig] = None):
        self.diagram = diagram
        self.states = states
        self.homology_type = states.homology_type
        if self.homology_type.needs_signs and signs is None:
            raise ValueError(f"{self.homology_type.value} homology needs a sign assignment")
        self.signs = signs
        self.config = config or KhovanovConfig()

    def edge_coefficient(self, vertex: int, k: int) -> Tuple[int, int]:
        """(sign, pi flag) of the cube edge leaving vertex along crossing k."""
        s = standard_sign(vertex, k)
        if self.homology_type is HomologyType.REDUCED_ODD:
            return self.signs.sign(vertex, k), 0
        if self.homology_type is HomologyType.UNIFIED:
            return s, int(self.signs.sign(vertex, k) != s)
        return s, 0

    def build(self, i: int) -> Dict[int, DifferentialBlock]:
        """
        Build every block of d: C^i -> C^{i+1}.

        Args:
            i: Primary grading of the source, i_low <= i < i_high

        Returns:
            Dict mapping secondary grading j to its block
        """
        states = self.states
        if not states.i_low <= i < states.i_high:
            raise InvalidReferenceError(
                f"No differential leaves grading {i}; range is [{states.i_low}, {states.i_high})")
        r = i - states.i_low
        codec = states.codec
        total = int(states.entry_counts[:, r].sum())
        if total > self.config.max_entries:
            raise CapacityExceededError(
                f"d^{i} needs {total} entries, limit is {self.config.max_entries}",
                limit=self.config.max_entries, requested=total)

        blocks: Dict[int, DifferentialBlock] = {}
        for j_index in range(states.num_j):
            capacity = int(states.entry_counts[j_index, r])
            num_cols = int(states.ranks[j_index, r])
            num_rows = int(states.ranks[j_index, r + 1])
            if capacity or (num_cols and num_rows):
                blocks[j_index] = DifferentialBlock.allocate(
                    i, states.j_value(j_index), num_rows, num_cols, capacity)

        for vertex_states in states.vertices_of_weight(r):
            v = vertex_states.vertex
            for k, crossing in enumerate(self.diagram.crossings):
                if v >> k & 1:
                    continue
                target_states = states.vertices[v | 1 << k]
                edge = EdgeMap(crossing, vertex_states.cycles, target_states.cycles)
                edge_sign, edge_flag = self.edge_coefficient(v, k)
                for mask in vertex_states.masks():
                    j_index, source = codec.unpack(vertex_states.codes[mask])
                    for target_mask, parity, is_head in edge.image(mask):
                        code = target_states.codes[target_mask]
                        if code == UNUSED:
                            raise InternalConsistencyError(
                                f"Edge map at vertex {v}, crossing {k + 1} leaves the complex")
                        t_index, target = codec.unpack(code)
                        if t_index != j_index:
                            raise InternalConsistencyError(
                                f"Edge map at vertex {v}, crossing {k + 1} changes the grading")
                        if j_index not in blocks:
                            raise InternalConsistencyError(
                                f"No entries were reserved for d^{i} in grading index {j_index}")
                        sign, flag = weigh_term(self.homology_type, parity, is_head)
                        blocks[j_index].append(source, target, edge_sign * sign, edge_flag ^ flag)

        for block in blocks.values():
            if block.filled != block.capacity:
                raise InternalConsistencyError(
                    f"Differential block ({block.i}, {block.j}) has {block.filled} entries, "
                    f"expected {block.capacity}")

        self.config.report(2, f"d^{i}: {sum(b.filled for b in blocks.values())} entries "
                              f"in {len(blocks)} blocks")
        return {block.j: block for block in blocks.values()}

    def build_all(self) -> DifferentialSet:
        """Build the differentials of every primary grading."""
        result = DifferentialSet()
        for i in range(self.states.i_low, self.states.i_high):
            for j, block in self.build(i).items():
                result.blocks[(i, j)] = block
        self.config.report(1, f"Built {len(result)} differential blocks, "
                              f"{result.total_entries()} entries")
        return result
