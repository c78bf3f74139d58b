"""
Diagram store and stage scheduler.

A KhovanovStore owns a fixed number of slots, each holding at most one
DiagramRecord. For every homology type a record tracks five stages:

    STATES -> DIFFERENTIALS -> REDUCTION -> BETTI
                                        -> TORSION

Each stage has a status (NOT_COMPUTED, COMPUTED, ERASED). Asking for a
stage runs only the stages that are not COMPUTED, in dependency order,
and commits each artefact after its stage succeeds, so an error never
leaves partial results behind and a retried call resumes where the failed
one stopped. A per-record reentrant lock makes check-then-compute atomic
when a store is shared between threads.
"""

import operator
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from . import invariants
from .config import HomologyType, KhovanovConfig
from .conjecture import check_conjecture1, check_torsion_conjecture
from .differentials import DifferentialBuilder, DifferentialSet
from .errors import CapacityExceededError, InvalidReferenceError
from .extractor import khovanov_polynomial
from .knot import Diagram
from .polynomial import Poly
from .reduction import (BettiTable, ReducedComplex, TorsionTable, compute_betti,
                        compute_torsion, reduce_complex)
from .signs import SignAssignment, compute_signs
from .states import StateEnumerator, StateList
from .visualizer import render_homology_table, render_summary


class Stage(Enum):
    """Computation stages of one (diagram, homology type) pair."""
    STATES = "states"
    DIFFERENTIALS = "differentials"
    REDUCTION = "reduction"
    BETTI = "betti"
    TORSION = "torsion"


class StageStatus(Enum):
    NOT_COMPUTED = 1
    COMPUTED = 2
    ERASED = 3


# The reduction reads chain ranks from the states as well as the matrices
DEPENDENCIES: Dict[Stage, Tuple[Stage, ...]] = {
    Stage.STATES: (),
    Stage.DIFFERENTIALS: (Stage.STATES,),
    Stage.REDUCTION: (Stage.STATES, Stage.DIFFERENTIALS),
    Stage.BETTI: (Stage.REDUCTION,),
    Stage.TORSION: (Stage.REDUCTION,),
}


def plan_stages(status: Dict[Stage, StageStatus], target: Stage) -> List[Stage]:
    """
    Stages to run, in order, so that target becomes COMPUTED.

    Only stages that are not COMPUTED are visited; a computed stage hides
    its own dependencies.
    """
    order: List[Stage] = []

    def visit(stage: Stage) -> None:
        if status[stage] is StageStatus.COMPUTED or stage in order:
            return
        for dependency in DEPENDENCIES[stage]:
            visit(dependency)
        order.append(stage)

    visit(target)
    return order


@dataclass
class TheoryData:
    """Stage statuses and artefacts of one homology type."""
    status: Dict[Stage, StageStatus] = field(
        default_factory=lambda: {stage: StageStatus.NOT_COMPUTED for stage in Stage})
    states: Optional[StateList] = None
    signs: Optional[SignAssignment] = None
    differentials: Optional[DifferentialSet] = None
    reduced: Optional[ReducedComplex] = None
    betti: Optional[BettiTable] = None
    torsion: Optional[TorsionTable] = None
    timings: Dict[Stage, float] = field(default_factory=dict)

    def is_computed(self, stage: Stage) -> bool:
        return self.status[stage] is StageStatus.COMPUTED

    @property
    def j_low(self) -> Optional[int]:
        return self.states.j_low if self.states else None

    @property
    def j_high(self) -> Optional[int]:
        return self.states.j_high if self.states else None

    @property
    def num_j(self) -> Optional[int]:
        return self.states.num_j if self.states else None

    @property
    def j_parity(self) -> Optional[int]:
        return self.states.j_parity if self.states else None


@dataclass
class DiagramRecord:
    """
    Everything known about the diagram in one slot.

    Attributes:
        slot: Slot index in the store
        diagram: The diagram
        name: Display name
        theories: Per homology type stage data
        lock: Serializes stage checks and commits
    """
    slot: int
    diagram: Diagram
    name: str
    theories: Dict[HomologyType, TheoryData] = field(
        default_factory=lambda: {htype: TheoryData() for htype in HomologyType})
    lock: Any = field(default_factory=threading.RLock, repr=False, compare=False)

    @property
    def i_low(self) -> int:
        return -self.diagram.num_negative()

    @property
    def i_high(self) -> int:
        return self.diagram.num_positive()

    @property
    def trivial_components(self) -> int:
        return self.diagram.trivial_components

    def theory(self, homology_type: HomologyType) -> TheoryData:
        return self.theories[homology_type]

    def status(self, homology_type: HomologyType, stage: Stage) -> StageStatus:
        return self.theories[homology_type].status[stage]


class KhovanovStore:
    """
    Fixed-capacity table of diagram records with memoized stages.

    Args:
        config: Options; the homology type is used when a call names none
    """

    def __init__(self, config: Optional[KhovanovConfig] = None):
        self.config = config or KhovanovConfig()
        self._slots: List[Optional[DiagramRecord]] = [None] * self.config.capacity
        self._lock = threading.Lock()
        self._runners: Dict[Stage, Callable[[DiagramRecord, HomologyType, TheoryData], None]] = {
            Stage.STATES: self._run_states,
            Stage.DIFFERENTIALS: self._run_differentials,
            Stage.REDUCTION: self._run_reduction,
            Stage.BETTI: self._run_betti,
            Stage.TORSION: self._run_torsion,
        }

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def occupied(self) -> List[int]:
        return [idx for idx, record in enumerate(self._slots) if record is not None]

    def __len__(self) -> int:
        return len(self.occupied())

    def _check_index(self, slot: int) -> int:
        """Return slot as a plain int; numpy integers are accepted."""
        try:
            index = operator.index(slot)
        except TypeError:
            raise InvalidReferenceError(f"Slot {slot!r} is not an integer") from None
        if not 0 <= index < len(self._slots):
            raise InvalidReferenceError(f"Slot {slot!r} outside 0..{len(self._slots) - 1}")
        return index

    def initialize_diagram(self, diagram: Union[Diagram, Sequence[Sequence[int]]],
                           name: Optional[str] = None, slot: Optional[int] = None) -> int:
        """
        Store a diagram and return its slot.

        Args:
            diagram: A Diagram or a PD code
            name: Display name (defaults to "diagram <slot>")
            slot: Slot to use; any previous contents are discarded

        Raises:
            InvalidReferenceError: slot out of range
            CapacityExceededError: no free slot left
        """
        if not isinstance(diagram, Diagram):
            diagram = Diagram.from_pd_code(diagram)
        with self._lock:
            if slot is None:
                free = [idx for idx, record in enumerate(self._slots) if record is None]
                if not free:
                    raise CapacityExceededError(
                        f"All {len(self._slots)} diagram slots are in use", limit=len(self._slots))
                slot = free[0]
            else:
                slot = self._check_index(slot)
            record = DiagramRecord(slot=slot, diagram=diagram,
                                   name=name if name is not None else f"diagram {slot}")
            self._slots[slot] = record
        self.config.report(1, f"Slot {slot}: {record.name}, {diagram!r}")
        return slot

    def get_record(self, slot: int) -> DiagramRecord:
        slot = self._check_index(slot)
        record = self._slots[slot]
        if record is None:
            raise InvalidReferenceError(f"Slot {slot} holds no diagram")
        return record

    def _resolve_type(self, homology_type) -> HomologyType:
        if homology_type is None:
            return self.config.homology_type
        return HomologyType.parse(homology_type)

    # ------------------------------------------------------------------
    # Scheduler
    # ------------------------------------------------------------------

    def ensure(self, slot: int, stage: Stage, homology_type=None) -> TheoryData:
        """Bring stage up to date for the slot and return the theory data."""
        record = self.get_record(slot)
        htype = self._resolve_type(homology_type)
        with record.lock:
            theory = record.theory(htype)
            for step in plan_stages(theory.status, stage):
                self.config.report(1, f"[{record.name}] {htype.value}: {step.name.lower()}")
                start = time.perf_counter()
                self._runners[step](record, htype, theory)
                theory.status[step] = StageStatus.COMPUTED
                theory.timings[step] = (time.perf_counter() - start) * 1000
            return theory

    def _run_states(self, record: DiagramRecord, htype: HomologyType, theory: TheoryData) -> None:
        states = StateEnumerator(self.config).enumerate(record.diagram, htype)
        signs = None
        if htype.needs_signs:
            cycles = [vertex_states.cycles for vertex_states in states.vertices]
            signs = compute_signs(record.diagram, cycles, verbose=self.config.verbose)
        theory.states, theory.signs = states, signs

    def _run_differentials(self, record: DiagramRecord, htype: HomologyType,
                           theory: TheoryData) -> None:
        builder = DifferentialBuilder(record.diagram, theory.states, theory.signs, self.config)
        theory.differentials = builder.build_all()

    def _run_reduction(self, record: DiagramRecord, htype: HomologyType,
                       theory: TheoryData) -> None:
        theory.reduced = reduce_complex(theory.states, theory.differentials, self.config)

    def _run_betti(self, record: DiagramRecord, htype: HomologyType, theory: TheoryData) -> None:
        theory.betti = compute_betti(theory.reduced)

    def _run_torsion(self, record: DiagramRecord, htype: HomologyType,
                     theory: TheoryData) -> None:
        theory.torsion = compute_torsion(theory.reduced)

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def compute_states(self, slot: int, homology_type=None) -> StateList:
        return self.ensure(slot, Stage.STATES, homology_type).states

    def compute_differentials(self, slot: int, homology_type=None) -> DifferentialSet:
        return self.ensure(slot, Stage.DIFFERENTIALS, homology_type).differentials

    def compute_reduction(self, slot: int, homology_type=None) -> ReducedComplex:
        return self.ensure(slot, Stage.REDUCTION, homology_type).reduced

    def compute_betti(self, slot: int, homology_type=None) -> BettiTable:
        return self.ensure(slot, Stage.BETTI, homology_type).betti

    def compute_torsion(self, slot: int, homology_type=None) -> TorsionTable:
        return self.ensure(slot, Stage.TORSION, homology_type).torsion

    def ranks(self, slot: int, homology_type=None) -> Dict[Tuple[int, int], int]:
        return dict(self.compute_betti(slot, homology_type).ranks)

    def torsion(self, slot: int, homology_type=None) -> Dict[Tuple[int, int], Dict[int, int]]:
        return {key: dict(group) for key, group in self.compute_torsion(slot, homology_type).items()}

    # ------------------------------------------------------------------
    # Erasure
    # ------------------------------------------------------------------

    def erase_diagram(self, slot: int) -> None:
        """Free a slot."""
        record = self.get_record(slot)
        with self._lock:
            self._slots[record.slot] = None

    def _erase(self, slot: int, homology_type, stage: Stage, attributes: Tuple[str, ...]) -> None:
        record = self.get_record(slot)
        types = list(HomologyType) if homology_type is None else [HomologyType.parse(homology_type)]
        with record.lock:
            for htype in types:
                theory = record.theory(htype)
                for name in attributes:
                    setattr(theory, name, None)
                if theory.status[stage] is StageStatus.COMPUTED:
                    theory.status[stage] = StageStatus.ERASED

    def erase_matrices(self, slot: int, homology_type=None) -> None:
        """Drop the differential matrices; computed homology is kept."""
        self._erase(slot, homology_type, Stage.DIFFERENTIALS, ("differentials",))

    def erase_states(self, slot: int, homology_type=None) -> None:
        """Drop the enhanced states and sign tables; computed homology is kept."""
        self._erase(slot, homology_type, Stage.STATES, ("states", "signs"))

    # ------------------------------------------------------------------
    # Invariants
    # ------------------------------------------------------------------

    def compute_polynomial(self, slot: int, homology_type=None, split: bool = False,
                           as_vector: bool = False):
        """
        Khovanov polynomial of the diagram in a slot.

        Args:
            slot: Slot index
            homology_type: Theory (defaults to the configured one)
            split: Return (rational, torsion) instead of their sum
            as_vector: Return lists of monomials instead of polynomials
        """
        betti = self.compute_betti(slot, homology_type)
        torsion = self.compute_torsion(slot, homology_type)
        return khovanov_polynomial(betti, torsion, split=split, as_vector=as_vector)

    def linking_factor(self, slot: int) -> Poly:
        return invariants.linking_factor(self.get_record(slot).diagram)

    def check_conjecture(self, slot: int):
        """
        Run both conjecture checks on the standard homology of a slot.

        Returns:
            ConjectureResult, or the first ConjectureViolation met
        """
        rational, torsion = self.compute_polynomial(slot, HomologyType.STANDARD, split=True)
        result = check_conjecture1(rational, self.linking_factor(slot))
        if not result:
            return result
        torsion_check = check_torsion_conjecture(torsion, result.kh_prime)
        if not torsion_check:
            return torsion_check
        return result

    def render_table(self, slot: int, homology_type=None) -> str:
        """Plain-text table of ranks and torsion."""
        record = self.get_record(slot)
        htype = self._resolve_type(homology_type)
        return render_homology_table(record.name, htype, self.compute_betti(slot, htype),
                                     self.compute_torsion(slot, htype))

    def summary(self, slot: int, homology_type=None) -> str:
        """One line with the total rank and the torsion orders of a slot."""
        record = self.get_record(slot)
        htype = self._resolve_type(homology_type)
        return render_summary(record.name, self.compute_betti(slot, htype),
                              self.compute_torsion(slot, htype))
