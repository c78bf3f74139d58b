"""
Sparse Laurent polynomials with exact integer coefficients.

A Poly maps monomials to Python integers. A monomial is a tuple of
(variable, exponent) pairs sorted by variable name with nonzero exponents,
so the constant monomial is the empty tuple. Exponents may be negative.

Supported operations: addition, multiplication, integer powers (negative
powers only for monomials with a unit coefficient), substitution of
variables by polynomials, and division by a polynomial whose leading
coefficient in the chosen variable is a monomial.
"""

from typing import Dict, Iterator, List, Optional, Tuple, Union

Monomial = Tuple[Tuple[str, int], ...]


def _make_monomial(exponents: Dict[str, int]) -> Monomial:
    return tuple(sorted((v, e) for v, e in exponents.items() if e != 0))


def _display_key(term: Tuple[Monomial, int]) -> Tuple[int, int, Monomial]:
    """Order terms by t degree, then q degree, then monomial."""
    exponents = dict(term[0])
    return exponents.get("t", 0), exponents.get("q", 0), term[0]


def _mul_monomials(a: Monomial, b: Monomial) -> Monomial:
    exps = dict(a)
    for var, e in b:
        exps[var] = exps.get(var, 0) + e
    return _make_monomial(exps)


class Poly:
    """
    Sparse multivariate Laurent polynomial over the integers.

    Examples:
        >>> t, q = Poly.var('t'), Poly.var('q')
        >>> (q + q**-1) * q
        1 + q^2
    """

    __slots__ = ('_terms',)

    def __init__(self, terms: Optional[Dict[Monomial, int]] = None):
        self._terms: Dict[Monomial, int] = {}
        if terms:
            for mono, coeff in terms.items():
                if coeff:
                    self._terms[mono] = int(coeff)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def var(cls, name: str) -> 'Poly':
        return cls({((name, 1),): 1})

    @classmethod
    def const(cls, value: int) -> 'Poly':
        return cls({(): value})

    @classmethod
    def monomial(cls, coeff: int = 1, **exponents: int) -> 'Poly':
        """Create coeff * prod(var^exp), e.g. Poly.monomial(2, t=1, q=-3)."""
        return cls({_make_monomial(exponents): coeff})

    @classmethod
    def _coerce(cls, other) -> 'Poly':
        if isinstance(other, Poly):
            return other
        if isinstance(other, int):
            return cls.const(other)
        raise TypeError(f"Cannot convert {type(other).__name__} to Poly")

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def terms(self) -> List[Tuple[Dict[str, int], int]]:
        """Terms as (exponent dict, coefficient), in a stable order."""
        return [(dict(mono), coeff) for mono, coeff in sorted(self._terms.items())]

    def items(self) -> Iterator[Tuple[Monomial, int]]:
        return iter(self._terms.items())

    def coefficient(self, **exponents: int) -> int:
        return self._terms.get(_make_monomial(exponents), 0)

    def variables(self) -> List[str]:
        names = set()
        for mono in self._terms:
            names.update(v for v, _ in mono)
        return sorted(names)

    def degree(self, var: str) -> int:
        """Highest exponent of var (0 for the zero polynomial)."""
        if not self._terms:
            return 0
        return max(dict(m).get(var, 0) for m in self._terms)

    def min_degree(self, var: str) -> int:
        """Lowest exponent of var (0 for the zero polynomial)."""
        if not self._terms:
            return 0
        return min(dict(m).get(var, 0) for m in self._terms)

    def is_zero(self) -> bool:
        return not self._terms

    def is_monomial(self) -> bool:
        return len(self._terms) == 1

    def has_nonnegative_coefficients(self) -> bool:
        return all(c > 0 for c in self._terms.values())

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other) -> 'Poly':
        other = self._coerce(other)
        result = dict(self._terms)
        for mono, coeff in other._terms.items():
            result[mono] = result.get(mono, 0) + coeff
        return Poly(result)

    __radd__ = __add__

    def __neg__(self) -> 'Poly':
        return Poly({m: -c for m, c in self._terms.items()})

    def __sub__(self, other) -> 'Poly':
        return self + (-self._coerce(other))

    def __rsub__(self, other) -> 'Poly':
        return self._coerce(other) - self

    def __mul__(self, other) -> 'Poly':
        if isinstance(other, int):
            return Poly({m: c * other for m, c in self._terms.items()})
        other = self._coerce(other)
        result: Dict[Monomial, int] = {}
        for m1, c1 in self._terms.items():
            for m2, c2 in other._terms.items():
                mono = _mul_monomials(m1, m2)
                result[mono] = result.get(mono, 0) + c1 * c2
        return Poly(result)

    __rmul__ = __mul__

    def __pow__(self, exponent: int) -> 'Poly':
        if exponent < 0:
            return self.inverse() ** (-exponent)
        result = Poly.const(1)
        base = self
        while exponent:
            if exponent & 1:
                result = result * base
            base = base * base
            exponent >>= 1
        return result

    def inverse(self) -> 'Poly':
        """Inverse of a monomial with coefficient +1 or -1."""
        if not self.is_monomial():
            raise ValueError(f"{self} is not invertible")
        (mono, coeff), = self._terms.items()
        if coeff not in (1, -1):
            raise ValueError(f"{self} is not invertible over the integers")
        return Poly({tuple((v, -e) for v, e in mono): coeff})

    def __eq__(self, other) -> bool:
        if isinstance(other, int):
            other = Poly.const(other)
        if not isinstance(other, Poly):
            return NotImplemented
        return self._terms == other._terms

    def __hash__(self):
        return hash(frozenset(self._terms.items()))

    def __bool__(self) -> bool:
        return bool(self._terms)

    # ------------------------------------------------------------------
    # Substitution and division
    # ------------------------------------------------------------------

    def substitute(self, **values: Union['Poly', int]) -> 'Poly':
        """
        Substitute variables by polynomials or integers.

        Negative exponents require the substituted value to be invertible
        (a monomial with coefficient +1 or -1).
        """
        values = {k: self._coerce(v) for k, v in values.items()}
        result = Poly()
        cache: Dict[Tuple[str, int], Poly] = {}
        for mono, coeff in self._terms.items():
            term = Poly.const(coeff)
            rest = {}
            for var, e in mono:
                if var in values:
                    key = (var, e)
                    if key not in cache:
                        cache[key] = values[var] ** e
                    term = term * cache[key]
                else:
                    rest[var] = e
            if rest:
                term = term * Poly({_make_monomial(rest): 1})
            result = result + term
        return result

    def shift(self, **exponents: int) -> 'Poly':
        """Multiply by the monomial prod(var^exp)."""
        mono = _make_monomial(exponents)
        return Poly({_mul_monomials(m, mono): c for m, c in self._terms.items()})

    def _leading(self, var: str) -> Tuple[int, 'Poly']:
        top = self.degree(var)
        coeff = {}
        for mono, c in self._terms.items():
            exps = dict(mono)
            if exps.get(var, 0) == top:
                exps.pop(var, None)
                coeff[_make_monomial(exps)] = c
        return top, Poly(coeff)

    def divide(self, divisor: 'Poly', var: str) -> Tuple['Poly', 'Poly']:
        """
        Long division in var, from the top degree down.

        The leading coefficient of divisor in var must be a single term.
        Returns (quotient, remainder) with self == quotient * divisor +
        remainder. Division stops once a further quotient term would fall
        below the lowest degree any exact quotient could have, or when the
        current leading coefficient is not divisible by the divisor's one.
        """
        divisor = self._coerce(divisor)
        if divisor.is_zero():
            raise ZeroDivisionError("division by zero polynomial")
        d_top, d_lead = divisor._leading(var)
        if not d_lead.is_monomial():
            raise ValueError(f"Leading coefficient {d_lead} of divisor is not a monomial")
        (d_mono, d_coeff), = d_lead._terms.items()
        d_low = divisor.min_degree(var)
        quotient = Poly()
        remainder = self
        floor = self.min_degree(var) - d_low
        while not remainder.is_zero():
            r_top, r_lead = remainder._leading(var)
            q_deg = r_top - d_top
            if q_deg < floor:
                break
            q_terms = {}
            for mono, coeff in r_lead._terms.items():
                if coeff % d_coeff:
                    return quotient, remainder
                q_terms[_mul_monomials(mono, tuple((v, -e) for v, e in d_mono))] = coeff // d_coeff
            step = Poly(q_terms).shift(**{var: q_deg})
            quotient = quotient + step
            remainder = remainder - step * divisor
        return quotient, remainder

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    @staticmethod
    def _format_monomial(mono: Monomial) -> str:
        parts = []
        for var, e in mono:
            parts.append(var if e == 1 else f"{var}^{e}")
        return "*".join(parts)

    def __str__(self) -> str:
        if not self._terms:
            return "0"
        pieces = []
        for mono, coeff in sorted(self._terms.items(), key=_display_key):
            body = self._format_monomial(mono)
            if not body:
                text = str(abs(coeff))
            elif abs(coeff) == 1:
                text = body
            else:
                text = f"{abs(coeff)}*{body}"
            sign = "-" if coeff < 0 else "+"
            pieces.append((sign, text))
        out = ("-" if pieces[0][0] == "-" else "") + pieces[0][1]
        for sign, text in pieces[1:]:
            out += f" {sign} {text}"
        return out

    def __repr__(self) -> str:
        return str(self)
