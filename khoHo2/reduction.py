"""
Algebraic reduction of the Khovanov complex.

The complex splits into independent subcomplexes, one per secondary
grading j. Each is reduced in two steps:

1. Gaussian elimination: whenever d^i has a unit entry d[t, s] = u, the
   generators s (in C^i) and t (in C^{i+1}) span an acyclic piece that is
   cancelled. The rest of d^i becomes d - col_s * u * row_t; row s of
   d^{i-1} and column t of d^{i+1} are dropped. Pivots are chosen per
   column as the unit entry with the shortest row, which keeps fill-in low.
2. Smith normal form of what is left, exactly over the integers.

From the Smith diagonals:

    rank H^{i,j}    = reduced_rank[i, j] - rank d^{i,j} - rank d^{i-1,j}
    torsion H^{i+1,j} = invariant factors > 1 of d^{i,j}
"""

from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

from .config import HomologyType, KhovanovConfig
from .differentials import DifferentialSet
from .errors import InternalConsistencyError
from .polynomial import Poly
from .smith import smith_normal_form
from .sparse import SparseMatrix
from .states import StateList

Bigrading = Tuple[int, int]


@dataclass
class ReducedComplex:
    """
    Result of reducing every subcomplex.

    Attributes:
        i_low, i_high: Primary grading range
        j_values: Secondary gradings of the complex
        original_ranks: Chain group ranks before reduction
        reduced_ranks: Chain group ranks after Gaussian elimination
        cancelled: Pairs cancelled through d^{i,j}
        diagonals: Smith diagonal of the reduced d^{i,j}
        ranks: Rank of the reduced d^{i,j}
        differential_ranks: Rank of the original d^{i,j}, i.e. cancelled
            pairs plus the rank of the reduced matrix
        torsion: Invariant factors > 1 of d^{i,j}
    """
    i_low: int
    i_high: int
    j_values: List[int]
    original_ranks: Dict[Bigrading, int] = field(default_factory=dict)
    reduced_ranks: Dict[Bigrading, int] = field(default_factory=dict)
    cancelled: Dict[Bigrading, int] = field(default_factory=dict)
    diagonals: Dict[Bigrading, List[int]] = field(default_factory=dict)
    ranks: Dict[Bigrading, int] = field(default_factory=dict)
    differential_ranks: Dict[Bigrading, int] = field(default_factory=dict)
    torsion: Dict[Bigrading, List[int]] = field(default_factory=dict)

    def total_cancelled(self) -> int:
        return sum(self.cancelled.values())


@dataclass
class BettiTable:
    """Ranks of the free part of homology, keyed by (i, j); zeros omitted."""
    i_low: int
    i_high: int
    j_values: List[int]
    ranks: Dict[Bigrading, int] = field(default_factory=dict)

    def rank(self, i: int, j: int) -> int:
        return self.ranks.get((i, j), 0)

    def items(self) -> List[Tuple[Bigrading, int]]:
        return sorted(self.ranks.items())

    def total(self) -> int:
        return sum(self.ranks.values())

    def euler_characteristic(self) -> Poly:
        """Graded Euler characteristic: sum of (-1)^i rank q^j."""
        result = Poly()
        for (i, j), rank in self.ranks.items():
            result = result + Poly.monomial(rank if i % 2 == 0 else -rank, q=j)
        return result


def torsion_symbol(order: int) -> str:
    """Variable name used for a cyclic summand Z/order."""
    return "T" if order == 2 else f"T{order}"


@dataclass
class TorsionTable:
    """
    Torsion of homology.

    Attributes:
        groups: groups[(i, j)][order] = number of Z/order summands
        orders: Every order that occurs
    """
    groups: Dict[Bigrading, Dict[int, int]] = field(default_factory=dict)
    orders: Set[int] = field(default_factory=set)

    def count(self, i: int, j: int, order: int) -> int:
        return self.groups.get((i, j), {}).get(order, 0)

    def polynomial(self, i: int, j: int) -> Poly:
        """Torsion of H^{i,j} as a sum of symbols, e.g. 2*T + T3."""
        result = Poly()
        for order, count in self.groups.get((i, j), {}).items():
            result = result + Poly.monomial(count, **{torsion_symbol(order): 1})
        return result

    def items(self) -> List[Tuple[Bigrading, Dict[int, int]]]:
        return sorted(self.groups.items())

    def is_empty(self) -> bool:
        return not self.groups


def _cancel(matrices: List[SparseMatrix], r: int, t: int, s: int) -> None:
    d = matrices[r]
    u = d.get(t, s)
    column = dict(d.col(s))
    row = dict(d.row(t))
    for t2, a in column.items():
        if t2 == t:
            continue
        for s2, b in row.items():
            if s2 != s:
                d.add(t2, s2, -a * u * b)
    d.remove_row(t)
    d.remove_col(s)
    if r + 1 < len(matrices):
        matrices[r + 1].remove_col(t)
    if r > 0:
        matrices[r - 1].remove_row(s)


def _eliminate(matrices: List[SparseMatrix], r: int) -> int:
    """Cancel unit entries of matrices[r] until none are left."""
    d = matrices[r]
    count = 0
    changed = True
    while changed:
        changed = False
        for s in sorted(d.cols):
            column = d.cols.get(s)
            if not column:
                continue
            best, best_length = None, 0
            for t, value in column.items():
                if value == 1 or value == -1:
                    length = len(d.rows[t])
                    if best is None or length < best_length:
                        best, best_length = t, length
            if best is None:
                continue
            _cancel(matrices, r, best, s)
            count += 1
            changed = True
    return count


def check_square_zero(matrices: List[SparseMatrix], i_low: int, j: int) -> None:
    """Raise InternalConsistencyError unless every composite d^{i+1} d^i vanishes."""
    for r in range(len(matrices) - 1):
        if not matrices[r + 1].multiply(matrices[r]).is_zero():
            raise InternalConsistencyError(f"d^{i_low + r + 1} d^{i_low + r} != 0 in grading j={j}")


def reduce_complex(states: StateList, differentials: DifferentialSet,
                   config: KhovanovConfig) -> ReducedComplex:
    """
    Reduce every subcomplex of fixed secondary grading.

    In the unified theory each generator is doubled into the Z-basis
    (g, pi*g), so all ranks refer to the underlying abelian groups.
    """
    doubled = states.homology_type is HomologyType.UNIFIED
    scale = 2 if doubled else 1
    n_cross = states.num_crossings
    j_values = [states.j_value(idx) for idx in range(states.num_j)]
    result = ReducedComplex(i_low=states.i_low, i_high=states.i_high, j_values=j_values)

    for j_index, j in enumerate(j_values):
        sizes = [scale * int(states.ranks[j_index, r]) for r in range(n_cross + 1)]
        if not any(sizes):
            continue
        matrices = []
        for r in range(n_cross):
            block = differentials.get(states.i_low + r, j)
            if block is None:
                matrices.append(SparseMatrix(sizes[r + 1], sizes[r]))
            else:
                matrices.append(block.to_sparse(doubled))

        if config.debug:
            check_square_zero(matrices, states.i_low, j)

        cancelled = [_eliminate(matrices, r) for r in range(n_cross)]
        if config.debug:
            check_square_zero(matrices, states.i_low, j)
        for r in range(n_cross + 1):
            i = states.i_low + r
            result.original_ranks[(i, j)] = sizes[r]
            before = cancelled[r - 1] if r > 0 else 0
            here = cancelled[r] if r < n_cross else 0
            result.reduced_ranks[(i, j)] = sizes[r] - here - before
            if r < n_cross:
                result.cancelled[(i, j)] = here
                d = matrices[r]
                diagonal = smith_normal_form(d.to_dense()) if d.nnz() else []
                result.diagonals[(i, j)] = diagonal
                result.ranks[(i, j)] = sum(1 for x in diagonal if x)
                result.differential_ranks[(i, j)] = here + result.ranks[(i, j)]
                result.torsion[(i, j)] = [x for x in diagonal if x > 1]

        config.report(2, f"j={j}: sizes {sizes}, cancelled {cancelled}")

    config.report(1, f"Reduction cancelled {result.total_cancelled()} pairs")
    return result


def compute_betti(reduced: ReducedComplex) -> BettiTable:
    """
    Betti numbers of homology from a reduced complex.

    Checks the result against the original chain ranks: the ranks of the
    original differentials are recovered one grading at a time and must
    match the recorded differential_ranks, and the one leaving the top
    grading must be zero.
    """
    table = BettiTable(i_low=reduced.i_low, i_high=reduced.i_high,
                       j_values=list(reduced.j_values))
    for j in reduced.j_values:
        previous = 0
        for i in range(reduced.i_low, reduced.i_high + 1):
            size = reduced.reduced_ranks.get((i, j), 0)
            rank = size - reduced.ranks.get((i, j), 0) - reduced.ranks.get((i - 1, j), 0)
            if rank < 0:
                raise InternalConsistencyError(f"Negative homology rank at ({i}, {j})")
            if rank:
                table.ranks[(i, j)] = rank
            previous = reduced.original_ranks.get((i, j), 0) - rank - previous
            if i < reduced.i_high and previous != reduced.differential_ranks.get((i, j), 0):
                raise InternalConsistencyError(
                    f"wrong complex ranks at ({i}, {j}): {previous} != "
                    f"{reduced.differential_ranks.get((i, j), 0)}")
        if previous != 0:
            raise InternalConsistencyError(f"wrong complex ranks in grading j={j}")
    return table


def compute_torsion(reduced: ReducedComplex) -> TorsionTable:
    """Torsion of homology: factors of d^{i,j} belong to H^{i+1,j}."""
    table = TorsionTable()
    for (i, j), factors in sorted(reduced.torsion.items()):
        for order in factors:
            group = table.groups.setdefault((i + 1, j), {})
            group[order] = group.get(order, 0) + 1
            table.orders.add(order)
    return table
