"""
Khovanov polynomials from Betti and torsion tables.

    rational:  sum over (i, j) of rank H^{i,j} * t^i q^j
    torsion:   sum over (i, j) of torsion_poly(i, j) * t^i q^j

where torsion_poly(i, j) writes Z/2 as T and Z/n as Tn.
"""

from typing import List, Tuple, Union

from .polynomial import Poly
from .reduction import BettiTable, TorsionTable


def rational_polynomial(betti: BettiTable) -> Poly:
    """Poincare polynomial of rational Khovanov homology."""
    result = Poly()
    for (i, j), rank in betti.items():
        result = result + Poly.monomial(rank, t=i, q=j)
    return result


def rational_vector(betti: BettiTable) -> List[Poly]:
    """The rational polynomial as a list of monomials, ordered by (i, j)."""
    return [Poly.monomial(rank, t=i, q=j) for (i, j), rank in betti.items()]


def torsion_polynomial(torsion: TorsionTable) -> Poly:
    result = Poly()
    for (i, j), _ in torsion.items():
        result = result + torsion.polynomial(i, j).shift(t=i, q=j)
    return result


def torsion_vector(torsion: TorsionTable) -> List[Poly]:
    return [torsion.polynomial(i, j).shift(t=i, q=j) for (i, j), _ in torsion.items()]


def khovanov_polynomial(betti: BettiTable, torsion: TorsionTable, split: bool = False,
                        as_vector: bool = False) -> Union[Poly, List[Poly], Tuple]:
    """
    Combine the rational and torsion parts.

    Args:
        betti: Betti table
        torsion: Torsion table
        split: Return the (rational, torsion) pair instead of their sum
        as_vector: Return lists of monomials instead of polynomials

    Returns:
        A Poly, a list of monomials, or a pair of either
    """
    if as_vector:
        rational, tors = rational_vector(betti), torsion_vector(torsion)
        return (rational, tors) if split else rational + tors
    rational, tors = rational_polynomial(betti), torsion_polynomial(torsion)
    return (rational, tors) if split else rational + tors
