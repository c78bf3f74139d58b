"""
Cycle decomposition of a resolved diagram.

Resolving every crossing of a diagram according to a cube vertex turns it
into a disjoint union of cycles. Each smoothing fuses two pairs of edge
endpoints; cycles are the classes of the resulting union-find structure.
"""

from dataclasses import dataclass
from typing import List

from .knot import Diagram


@dataclass
class CycleDecomposition:
    """
    Cycles of one resolution.

    Cycles made of edges are numbered by their smallest edge, so cycle 0
    always contains edge 1 and is the marked cycle of the reduced theories.
    Trivial split components follow as cycles with no edges.

    Attributes:
        vertex: Cube vertex (bit k-1 = resolution of crossing k)
        count: Total number of cycles, trivial ones included
        edge_cycles: Number of cycles that contain edges
        cycle_of: cycle_of[e] is the cycle containing edge e (index 0 unused)
        edges: Sorted edge list of every edge cycle
    """
    vertex: int
    count: int
    edge_cycles: int
    cycle_of: List[int]
    edges: List[List[int]]

    def first_edge(self, cycle: int) -> int:
        return self.edges[cycle][0]

    def is_trivial(self, cycle: int) -> bool:
        return cycle >= self.edge_cycles


def decompose(diagram: Diagram, vertex: int) -> CycleDecomposition:
    """
    Compute the cycles of the resolution of diagram at vertex.

    Args:
        diagram: The diagram
        vertex: Bit vector of resolutions, bit k-1 for crossing k

    Returns:
        CycleDecomposition of that resolution
    """
    n_edges = diagram.num_edges
    parent = list(range(n_edges + 1))

    def find(x: int) -> int:
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = parent[x]
        return x

    def fuse(a: int, b: int) -> None:
        ra, rb = find(a), find(b)
        if ra != rb:
            if ra < rb:
                parent[rb] = ra
            else:
                parent[ra] = rb

    for idx, crossing in enumerate(diagram.crossings):
        first, second = crossing.smoothing((vertex >> idx) & 1)
        fuse(*first)
        fuse(*second)

    cycle_of = [-1] * (n_edges + 1)
    root_to_cycle = {}
    edges: List[List[int]] = []
    for edge in range(1, n_edges + 1):
        root = find(edge)
        if root not in root_to_cycle:
            root_to_cycle[root] = len(edges)
            edges.append([])
        cycle = root_to_cycle[root]
        cycle_of[edge] = cycle
        edges[cycle].append(edge)

    edge_cycles = len(edges)
    return CycleDecomposition(
        vertex=vertex,
        count=edge_cycles + diagram.trivial_components,
        edge_cycles=edge_cycles,
        cycle_of=cycle_of,
        edges=edges,
    )
