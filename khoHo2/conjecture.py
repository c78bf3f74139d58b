"""
Structural checks on Khovanov polynomials.

check_conjecture1 tests the extended Lee / Bar-Natan conjecture for
unreduced rational Khovanov homology of a link L:

    Kh(L) = q^(s-1) (1 + q^2) F(L) + (1 + t q^4) Kh'(L)

where F is the linking factor, a sum over component subsets E containing
the first component of (t q^2)^(2 lk(E, L - E)), s is an integer (even for
knots) and Kh' has nonnegative coefficients. For thin links q^(1-s) Kh' only
depends on t q^2.

check_torsion_conjecture tests that all torsion is Z/2 and that its
Poincare polynomial is t q^2 Kh'.

A failed check returns a ConjectureViolation (falsy) carrying the reason;
nothing is raised.
"""

from dataclasses import dataclass
from typing import List, Optional, Union

from .polynomial import Poly

_T = Poly.var("t")
_Q = Poly.var("q")
_ONE = Poly.const(1)


@dataclass
class ConjectureViolation:
    """A failed structural check."""
    reason: str

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"ConjectureViolation({self.reason})"


@dataclass
class ConjectureResult:
    """
    A successful check of the extended conjecture.

    Attributes:
        s: The integer s with Kh = q^(s-1)(1+q^2)F + (1+tq^4)Kh'
        kh_prime: The remaining polynomial Kh'
        thin: Whether q^(1-s) Kh' depends on t q^2 only
    """
    s: int
    kh_prime: Poly
    thin: bool

    def __bool__(self) -> bool:
        return True


def check_conjecture1(kh: Poly, factor: Poly) -> Union[ConjectureResult, ConjectureViolation]:
    """
    Check the extended Lee / Bar-Natan conjecture.

    Args:
        kh: Unreduced rational Khovanov polynomial in t and q
        factor: Linking factor of the link (1 for knots)

    Returns:
        ConjectureResult on success, ConjectureViolation otherwise
    """
    if kh.is_zero():
        return ConjectureViolation("Khovanov polynomial is zero")
    t_value = Poly.monomial(-1, q=-4)
    evaluated = kh.substitute(t=t_value)
    denominator = (_ONE + _Q ** 2) * factor.substitute(t=t_value)
    if denominator.is_zero():
        return ConjectureViolation("Linking factor vanishes at t = -q^-4")

    quotient, remainder = evaluated.divide(denominator, "q")
    if not remainder.is_zero():
        return ConjectureViolation(f"(1+q^2) F does not divide Kh(-q^-4, q); remainder {remainder}")
    if not quotient.is_monomial() or quotient.variables() not in ([], ["q"]) \
            or quotient.coefficient(q=quotient.degree("q")) != 1:
        return ConjectureViolation(f"Kh(-q^-4, q) / ((1+q^2) F) = {quotient} is not a power of q")
    s = quotient.degree("q") + 1

    rest = kh - quotient * (_ONE + _Q ** 2) * factor
    kh_prime, remainder = rest.divide(_ONE + _T * _Q ** 4, "t")
    if not remainder.is_zero():
        return ConjectureViolation(f"1 + t q^4 does not divide the remainder {rest}")
    if not kh_prime.has_nonnegative_coefficients():
        return ConjectureViolation(f"Kh' = {kh_prime} has negative coefficients")

    normalized = kh_prime.shift(q=1 - s)
    collapsed = normalized.substitute(q=1).substitute(t=_T * _Q ** 2)
    return ConjectureResult(s=s, kh_prime=kh_prime, thin=normalized == collapsed)


def check_torsion_conjecture(torsion: Poly, kh_prime: Poly) -> Union[bool, ConjectureViolation]:
    """
    Check that all torsion is Z/2 with Poincare polynomial t q^2 Kh'.

    Args:
        torsion: Torsion polynomial (T for Z/2, Tn for Z/n)
        kh_prime: Kh' from a successful check_conjecture1
    """
    others = [v for v in torsion.variables() if v.startswith("T") and v != "T"]
    if others:
        return ConjectureViolation(f"Torsion of order other than 2: {', '.join(others)}")
    if torsion.degree("T") > 1:
        return ConjectureViolation("Torsion polynomial is not linear in T")
    t_part = torsion.substitute(T=1)
    expected = kh_prime * _T * _Q ** 2
    if t_part != expected:
        return ConjectureViolation(f"Torsion {t_part} differs from t q^2 Kh' = {expected}")
    return True


def homological_width(poly: Poly, as_range: bool = False) -> Union[int, List[int]]:
    """
    Spread of the diagonals delta = j - 2i occupied by poly.

    Args:
        poly: Polynomial in t and q
        as_range: Return [delta_min, delta_max] instead of the width

    Returns:
        (delta_max - delta_min) / 2, so a thin knot has width 1; 0 (or
        [0, 0]) for the zero polynomial
    """
    deltas: Optional[List[int]] = None
    for exps, _ in poly.terms():
        delta = exps.get("q", 0) - 2 * exps.get("t", 0)
        deltas = [delta, delta] if deltas is None else [min(deltas[0], delta), max(deltas[1], delta)]
    if deltas is None:
        return [0, 0] if as_range else 0
    return deltas if as_range else (deltas[1] - deltas[0]) // 2
