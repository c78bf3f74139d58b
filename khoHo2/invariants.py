"""
Classical invariants used alongside Khovanov homology.

- Writhe: Sum of crossing signs (O(n))
- Linking numbers: For links (O(n))
- Linking factor: The polynomial F(L) in the extended Lee / Bar-Natan
  conjecture
- Jones polynomial: State sum over the resolution cube (O(2^n)); it is
  the graded Euler characteristic of Khovanov homology and so gives an
  independent check of computed Betti numbers
"""

from itertools import combinations
from typing import Dict, List, Tuple

from .cycles import decompose
from .knot import Diagram
from .polynomial import Poly


def compute_writhe(diagram: Diagram) -> int:
    """
    Compute the writhe of a diagram.

    The writhe is the sum of crossing signs:
    - Positive crossing: +1
    - Negative crossing: -1

    Note: The writhe is NOT a knot invariant (depends on diagram).
    """
    return sum(c.sign.value for c in diagram.crossings)


def _crossing_components(diagram: Diagram) -> List[Tuple[int, int, int]]:
    """(under component, over component, sign) for every crossing."""
    component_of = diagram.component_of_edges()
    return [(component_of[c.arcs[0]], component_of[c.arcs[1]], c.sign.value)
            for c in diagram.crossings]


def compute_linking_number(diagram: Diagram, component1: int, component2: int) -> int:
    """
    Compute the linking number between two components of a link.

    The linking number is half the sum of signed crossings between
    the two components.

    Args:
        diagram: The link diagram
        component1: Index of first component
        component2: Index of second component

    Returns:
        The linking number (an integer)
    """
    if component1 == component2:
        return 0
    total = 0
    for under, over, sign in _crossing_components(diagram):
        if {under, over} == {component1, component2}:
            total += sign
    return total // 2


def linking_matrix(diagram: Diagram) -> List[List[int]]:
    """Symmetric matrix of pairwise linking numbers (zero diagonal)."""
    n = diagram.num_components()
    doubled = [[0] * n for _ in range(n)]
    for under, over, sign in _crossing_components(diagram):
        if under != over:
            doubled[under][over] += sign
            doubled[over][under] += sign
    return [[value // 2 for value in row] for row in doubled]


def linking_factor(diagram: Diagram) -> Poly:
    """
    Linking factor of the extended Lee / Bar-Natan conjecture.

    Sum over component subsets E containing component 0 of
    (t q^2)^(2 lk(E, complement of E)). Equals 1 for knots.
    """
    matrix = linking_matrix(diagram)
    n = len(matrix)
    tq2 = Poly.monomial(1, t=1, q=2)
    factor = Poly()
    others = list(range(1, n))
    for size in range(len(others) + 1):
        for chosen in combinations(others, size):
            subset = {0, *chosen}
            lk = sum(matrix[a][b] for a in subset for b in range(n) if b not in subset)
            factor = factor + tq2 ** (2 * lk)
    return factor


def unnormalized_jones(diagram: Diagram, reduced: bool = False) -> Poly:
    """
    Unnormalized Jones polynomial by state sum.

    (-1)^n- * sum over vertices v of (-1)^r q^(r + n+ - 2n-) (q + 1/q)^c(v),
    with c(v) - 1 in place of c(v) for the reduced version. This is the
    graded Euler characteristic of the standard (or reduced) complex.
    """
    n_plus, n_minus = diagram.num_positive(), diagram.num_negative()
    circle = Poly.var("q") + Poly.monomial(1, q=-1)
    powers: Dict[int, Poly] = {}
    total = Poly()
    for vertex in range(1 << diagram.crossing_number()):
        r = bin(vertex).count("1")
        c = decompose(diagram, vertex).count - (1 if reduced else 0)
        if c not in powers:
            powers[c] = circle ** c
        sign = -1 if (r + n_minus) % 2 else 1
        total = total + powers[c].shift(q=r + n_plus - 2 * n_minus) * sign
    return total


def compute_jones_polynomial(diagram: Diagram) -> Poly:
    """
    Compute the Jones polynomial in the variable q.

    Normalized so the unknot has polynomial 1; the classical variable is
    recovered by q = -t^(1/2).
    """
    return unnormalized_jones(diagram, reduced=True)
