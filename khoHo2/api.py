"""
khoHo2 User-Friendly API

Module-level functions bound to a default KhovanovStore, for interactive
sessions.

QUICK START:
    from khoHo2 import initialize_diagram, compute_polynomial

    slot = initialize_diagram([(1, 5, 2, 4), (3, 1, 4, 6), (5, 3, 6, 2)], "3_1")
    print(compute_polynomial(slot))
    # q + q^3 + q^5*t^2 + T*q^7*t^3 + q^9*t^3

    print(compute_polynomial(slot, homology_type="reducedOdd"))
    # q^2 + q^6*t^2 + q^8*t^3

SUPPORTED THEORIES:
    - standard   (unreduced even Khovanov homology)
    - reduced    (reduced even)
    - reducedOdd (reduced odd, Ozsvath-Rasmussen-Szabo)
    - unified    (reduced, over Z[pi]/(pi^2 - 1))
"""

from typing import Dict, Optional, Sequence, Tuple, Union

from .config import KhovanovConfig
from .conjecture import (ConjectureResult, ConjectureViolation, check_conjecture1,
                         check_torsion_conjecture, homological_width)
from .differentials import DifferentialSet
from .knot import Diagram
from .polynomial import Poly
from .reduction import BettiTable, ReducedComplex, TorsionTable
from .states import StateList
from .store import DiagramRecord, KhovanovStore

_default_store: Optional[KhovanovStore] = None


def get_store() -> KhovanovStore:
    """Return the default store, creating it on first use."""
    global _default_store
    if _default_store is None:
        _default_store = KhovanovStore()
    return _default_store


def configure(**options) -> KhovanovStore:
    """
    Replace the default store by an empty one with the given options.

    Examples:
        >>> configure(homology_type="reduced", verbose=1)
    """
    global _default_store
    _default_store = KhovanovStore(KhovanovConfig(**options))
    return _default_store


def initialize_diagram(diagram: Union[Diagram, Sequence[Sequence[int]]],
                       name: Optional[str] = None, slot: Optional[int] = None) -> int:
    """
    Store a diagram in the default store.

    Args:
        diagram: A Diagram or a PD code
        name: Display name
        slot: Slot to (re)use; the first free slot if omitted

    Returns:
        The slot index
    """
    return get_store().initialize_diagram(diagram, name, slot)


def get_record(slot: int) -> DiagramRecord:
    return get_store().get_record(slot)


def compute_states(slot: int, homology_type=None) -> StateList:
    return get_store().compute_states(slot, homology_type)


def compute_differentials(slot: int, homology_type=None) -> DifferentialSet:
    return get_store().compute_differentials(slot, homology_type)


def compute_reduction(slot: int, homology_type=None) -> ReducedComplex:
    return get_store().compute_reduction(slot, homology_type)


def compute_betti(slot: int, homology_type=None) -> BettiTable:
    return get_store().compute_betti(slot, homology_type)


def compute_torsion(slot: int, homology_type=None) -> TorsionTable:
    return get_store().compute_torsion(slot, homology_type)


def compute_polynomial(slot: int, homology_type=None, split: bool = False,
                       as_vector: bool = False):
    """
    Khovanov polynomial of a stored diagram.

    Args:
        slot: Slot index
        homology_type: "standard", "reduced", "reducedOdd" or "unified"
        split: Return the (rational, torsion) pair
        as_vector: Return lists of monomials

    Returns:
        Poly, list of Poly, or a pair of either
    """
    return get_store().compute_polynomial(slot, homology_type, split=split, as_vector=as_vector)


def ranks(slot: int, homology_type=None) -> Dict[Tuple[int, int], int]:
    return get_store().ranks(slot, homology_type)


def torsion(slot: int, homology_type=None) -> Dict[Tuple[int, int], Dict[int, int]]:
    return get_store().torsion(slot, homology_type)


def linking_factor(slot: int) -> Poly:
    return get_store().linking_factor(slot)


def check_conjecture(slot: int) -> Union[ConjectureResult, ConjectureViolation]:
    """Check both conjectures on the standard homology of a stored diagram."""
    return get_store().check_conjecture(slot)


def render_table(slot: int, homology_type=None) -> str:
    return get_store().render_table(slot, homology_type)


def summary(slot: int, homology_type=None) -> str:
    return get_store().summary(slot, homology_type)


def erase_diagram(slot: int) -> None:
    get_store().erase_diagram(slot)


def erase_matrices(slot: int, homology_type=None) -> None:
    get_store().erase_matrices(slot, homology_type)


def erase_states(slot: int, homology_type=None) -> None:
    get_store().erase_states(slot, homology_type)


def khovanov(diagram: Union[Diagram, Sequence[Sequence[int]]], homology_type="standard",
             split: bool = False):
    """
    One-shot computation on a private store.

    Examples:
        >>> khovanov([(1, 5, 2, 4), (3, 1, 4, 6), (5, 3, 6, 2)], "reduced")
        q^2 + q^6*t^2 + q^8*t^3
    """
    store = KhovanovStore(KhovanovConfig(capacity=1))
    slot = store.initialize_diagram(diagram)
    return store.compute_polynomial(slot, homology_type, split=split)
