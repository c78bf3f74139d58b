"""
Knot and link diagram representation for khoHo2.

Diagrams are given by planar diagram (PD) codes. Every crossing lists the
four incident edges counter-clockwise, starting from the incoming
understrand, so the understrand always runs from arcs[0] to arcs[2].
Edges are numbered 1..E along the orientation of each component.

Split unknotted components carry no crossings and are recorded only as a
count (trivial_components); they enter the chain complex as extra cycles in
every resolution.
"""

from dataclasses import dataclass
from typing import List, Optional, Dict, Tuple, Sequence
from enum import Enum


class CrossingSign(Enum):
    """
    Sign of a crossing determined by the right-hand rule.
    POSITIVE: Overstrand crosses left-to-right relative to understrand direction
    NEGATIVE: Overstrand crosses right-to-left relative to understrand direction
    """
    POSITIVE = 1
    NEGATIVE = -1


@dataclass(frozen=True)
class Crossing:
    """
    A crossing in the diagram.

    Using standard PD convention:
    - arcs[0]: incoming understrand (i)
    - arcs[1]: next edge counter-clockwise (j)
    - arcs[2]: outgoing understrand (k)
    - arcs[3]: last edge (l)

    The 0-smoothing joins (i, j) and (k, l); the 1-smoothing joins (i, l)
    and (j, k). The arrow used by the odd theory starts on the arc that
    contains arcs[0].

    Attributes:
        id: Crossing number, 1..V
        arcs: Tuple of 4 edge labels in counter-clockwise order
        sign: CrossingSign of the crossing
    """
    id: int
    arcs: Tuple[int, int, int, int]
    sign: CrossingSign

    @property
    def first_edge(self) -> int:
        """Edge at which the odd-theory arrow starts."""
        return self.arcs[0]

    def smoothing(self, resolution: int) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        """Return the two edge pairs joined by the 0- or 1-smoothing."""
        i, j, k, l = self.arcs
        if resolution == 0:
            return (i, j), (k, l)
        return (i, l), (j, k)

    def get_over_arcs(self) -> Tuple[int, int]:
        return (self.arcs[1], self.arcs[3])

    def get_under_arcs(self) -> Tuple[int, int]:
        return (self.arcs[0], self.arcs[2])


def crossing_sign(arcs: Sequence[int]) -> CrossingSign:
    """
    Determine a crossing sign from PD labels.

    The overstrand runs from l to j when j == l + 1 (or when the labels wrap
    around the end of a component, l > j + 1); that is a positive crossing.
    This reading needs consecutive edge labels along each component; for
    components with one or two edges the sign must be given explicitly.
    """
    i, j, k, l = arcs
    if j - l == 1 or l - j > 1:
        return CrossingSign.POSITIVE
    return CrossingSign.NEGATIVE


class Diagram:
    """
    An oriented knot or link diagram.

    Provides:
    - Validation of PD codes
    - Crossing signs, writhe and positive/negative crossing counts
    - Component decomposition (for linking numbers)
    """

    def __init__(self, crossings: List[Crossing], trivial_components: int = 0):
        self.crossings: List[Crossing] = list(crossings)
        self.trivial_components = trivial_components
        self.num_edges = 2 * len(self.crossings)
        self._validate()

    @classmethod
    def from_pd_code(cls, pd_code: Sequence[Sequence[int]],
                     signs: Optional[Sequence[int]] = None,
                     trivial_components: int = 0) -> 'Diagram':
        """
        Create a diagram from a PD code.

        Args:
            pd_code: One [i, j, k, l] entry per crossing
            signs: Optional explicit crossing signs (+1 / -1), one per crossing
            trivial_components: Number of extra split unknotted components

        Returns:
            Diagram with crossings numbered 1..V in the given order
        """
        if signs is not None and len(signs) != len(pd_code):
            raise ValueError(f"Expected {len(pd_code)} signs, got {len(signs)}")
        crossings = []
        for idx, entry in enumerate(pd_code):
            if len(entry) != 4:
                raise ValueError(f"Invalid PD code entry: {entry}")
            arcs = tuple(int(a) for a in entry)
            if signs is None:
                sign = crossing_sign(arcs)
            else:
                sign = CrossingSign(int(signs[idx]))
            crossings.append(Crossing(id=idx + 1, arcs=arcs, sign=sign))
        return cls(crossings, trivial_components=trivial_components)

    @classmethod
    def unknot(cls, components: int = 1) -> 'Diagram':
        """The crossingless diagram of an unlink with the given components."""
        return cls([], trivial_components=components)

    @classmethod
    def from_braid_word(cls, braid_word: Sequence[int], num_strands: int) -> 'Diagram':
        """
        Create the diagram of a braid closure.

        Args:
            braid_word: Signed generators read bottom to top (e.g., [1, -2, 1])
                       Positive i means strand i crosses over strand i+1
                       Negative i means strand i crosses under strand i+1
            num_strands: Number of strands in the braid

        Returns:
            Diagram whose edges are numbered along each closed component.
            Strands that never cross become trivial components.
        """
        word = [int(gen) for gen in braid_word]
        for gen in word:
            if gen == 0 or abs(gen) >= num_strands:
                raise ValueError(f"Generator {gen} invalid for {num_strands} strands")
        if not word:
            return cls.unknot(components=num_strands)

        # visits[k] = {side: (incoming edge, outgoing edge)} for crossing k
        visits: List[Dict[str, Tuple[int, int]]] = [{} for _ in word]
        started = [False] * num_strands
        next_edge = 1
        trivial = 0
        for start in range(num_strands):
            if started[start]:
                continue
            passes: List[Tuple[int, str]] = []
            position = start
            while True:
                started[position] = True
                for k, gen in enumerate(word):
                    left = abs(gen) - 1
                    if position == left:
                        passes.append((k, "left"))
                        position = left + 1
                    elif position == left + 1:
                        passes.append((k, "right"))
                        position = left
                if position == start:
                    break
            if not passes:
                trivial += 1
                continue
            for idx, (k, side) in enumerate(passes):
                outgoing = next_edge + (idx + 1) % len(passes)
                visits[k][side] = (next_edge + idx, outgoing)
            next_edge += len(passes)

        pd_code = []
        signs = []
        for k, gen in enumerate(word):
            left_in, left_out = visits[k]["left"]
            right_in, right_out = visits[k]["right"]
            if gen > 0:
                pd_code.append((right_in, left_out, right_out, left_in))
                signs.append(CrossingSign.POSITIVE.value)
            else:
                pd_code.append((left_in, right_in, left_out, right_out))
                signs.append(CrossingSign.NEGATIVE.value)
        return cls.from_pd_code(pd_code, signs=signs, trivial_components=trivial)

    def _validate(self) -> None:
        if self.trivial_components < 0:
            raise ValueError("trivial_components must be non-negative")
        if not self.crossings and self.trivial_components == 0:
            raise ValueError("Diagram has no components")
        counts: Dict[int, int] = {}
        for crossing in self.crossings:
            for arc in crossing.arcs:
                counts[arc] = counts.get(arc, 0) + 1
        expected = set(range(1, self.num_edges + 1))
        if set(counts) != expected:
            raise ValueError(
                f"Edge labels must be 1..{self.num_edges}, got {sorted(counts)}")
        bad = [arc for arc, n in counts.items() if n != 2]
        if bad:
            raise ValueError(f"Edges {sorted(bad)} do not appear exactly twice")

    def crossing_number(self) -> int:
        """Return the number of crossings."""
        return len(self.crossings)

    def writhe(self) -> int:
        """
        Compute the writhe (sum of crossing signs).
        """
        return sum(c.sign.value for c in self.crossings)

    def num_positive(self) -> int:
        return sum(1 for c in self.crossings if c.sign == CrossingSign.POSITIVE)

    def num_negative(self) -> int:
        return sum(1 for c in self.crossings if c.sign == CrossingSign.NEGATIVE)

    def edge_components(self) -> List[List[int]]:
        """
        Group edges into link components.

        An edge continues through a crossing along the understrand
        (arcs[0] <-> arcs[2]) and along the overstrand (arcs[1] <-> arcs[3]).
        Components are ordered by their smallest edge.
        """
        parent = list(range(self.num_edges + 1))

        def find(x: int) -> int:
            while parent[x] != x:
                parent[x] = parent[parent[x]]
                x = parent[x]
            return x

        for crossing in self.crossings:
            for a, b in (crossing.get_under_arcs(), crossing.get_over_arcs()):
                ra, rb = find(a), find(b)
                if ra != rb:
                    parent[max(ra, rb)] = min(ra, rb)

        groups: Dict[int, List[int]] = {}
        for edge in range(1, self.num_edges + 1):
            groups.setdefault(find(edge), []).append(edge)
        return [groups[root] for root in sorted(groups)]

    def num_components(self) -> int:
        """Number of link components, trivial ones included."""
        return len(self.edge_components()) + self.trivial_components

    def component_of_edges(self) -> Dict[int, int]:
        """Map every edge to the index of its component."""
        mapping = {}
        for idx, edges in enumerate(self.edge_components()):
            for edge in edges:
                mapping[edge] = idx
        return mapping

    def to_pd_code(self) -> List[List[int]]:
        """Convert diagram to PD code."""
        return [list(c.arcs) for c in self.crossings]

    def signs(self) -> List[int]:
        return [c.sign.value for c in self.crossings]

    def is_trivial(self) -> bool:
        """True for a crossingless diagram."""
        return self.crossing_number() == 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, Diagram):
            return NotImplemented
        return (self.crossings == other.crossings
                and self.trivial_components == other.trivial_components)

    def __repr__(self) -> str:
        return (f"Diagram(crossings={self.crossing_number()}, edges={self.num_edges}, "
                f"writhe={self.writhe()}, trivial={self.trivial_components})")
