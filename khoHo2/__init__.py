"""
khoHo2: Khovanov homology of knot and link diagrams

Computes integral Khovanov homology from planar diagram codes by building
the bigraded chain complex of the resolution cube, reducing it exactly
and reading off Betti numbers, torsion and the Khovanov polynomial.

THEORIES:
- standard: unreduced even Khovanov homology
- reduced: reduced even Khovanov homology
- reducedOdd: reduced odd Khovanov homology
- unified: reduced homology over Z[pi]/(pi^2 - 1), specializing to even
  (pi = 1) and odd (pi = -1)

PIPELINE:
1. StateEnumerator - enhanced states, bigradings, exact entry counts
2. compute_signs - anticommutative edge signs (odd / unified)
3. DifferentialBuilder - sparse differentials per bigrading
4. reduce_complex - Gaussian elimination + Smith normal form
5. compute_betti / compute_torsion / khovanov_polynomial

Every stage is memoized per diagram slot and homology type in a
KhovanovStore.
"""

from .errors import (
    KhovanovError,
    InvalidReferenceError,
    CapacityExceededError,
    InternalConsistencyError,
)
from .config import HomologyType, KhovanovConfig
from .knot import Diagram, Crossing, CrossingSign, crossing_sign
from .polynomial import Poly
from .packing import GeneratorCodec
from .cycles import CycleDecomposition, decompose
from .states import StateEnumerator, StateList, VertexStates
from .signs import SignAssignment, compute_signs, check_anticommutativity, classify_face
from .differentials import DifferentialBuilder, DifferentialBlock, DifferentialSet
from .sparse import SparseMatrix
from .smith import smith_normal_form
from .reduction import (
    ReducedComplex,
    BettiTable,
    TorsionTable,
    reduce_complex,
)
from .extractor import khovanov_polynomial, rational_polynomial, torsion_polynomial
from .conjecture import (
    ConjectureResult,
    ConjectureViolation,
    check_conjecture1,
    check_torsion_conjecture,
    homological_width,
)
from .invariants import (
    compute_writhe,
    compute_linking_number,
    compute_jones_polynomial,
    linking_matrix,
    unnormalized_jones,
)
from .store import KhovanovStore, DiagramRecord, Stage, StageStatus
from .catalog import get_diagram
from .visualizer import HomologyTableRenderer, render_homology_table, render_summary
from .api import (
    configure,
    get_store,
    initialize_diagram,
    compute_states,
    compute_differentials,
    compute_reduction,
    compute_betti,
    compute_torsion,
    compute_polynomial,
    linking_factor,
    check_conjecture,
    render_table,
    summary,
    erase_diagram,
    erase_matrices,
    erase_states,
    khovanov,
)

__version__ = "1.0.0"
__all__ = [
    # Errors and configuration
    "KhovanovError",
    "InvalidReferenceError",
    "CapacityExceededError",
    "InternalConsistencyError",
    "HomologyType",
    "KhovanovConfig",
    # Core data structures
    "Diagram",
    "Crossing",
    "CrossingSign",
    "crossing_sign",
    "Poly",
    "GeneratorCodec",
    "CycleDecomposition",
    "decompose",
    # Pipeline
    "StateEnumerator",
    "StateList",
    "VertexStates",
    "SignAssignment",
    "compute_signs",
    "check_anticommutativity",
    "classify_face",
    "DifferentialBuilder",
    "DifferentialBlock",
    "DifferentialSet",
    "SparseMatrix",
    "smith_normal_form",
    "ReducedComplex",
    "BettiTable",
    "TorsionTable",
    "reduce_complex",
    # Invariants
    "khovanov_polynomial",
    "rational_polynomial",
    "torsion_polynomial",
    "ConjectureResult",
    "ConjectureViolation",
    "check_conjecture1",
    "check_torsion_conjecture",
    "homological_width",
    "compute_writhe",
    "compute_linking_number",
    "compute_jones_polynomial",
    "linking_matrix",
    "unnormalized_jones",
    # Store
    "KhovanovStore",
    "DiagramRecord",
    "Stage",
    "StageStatus",
    "get_diagram",
    # Visualization
    "HomologyTableRenderer",
    "render_homology_table",
    "render_summary",
    # User-friendly API
    "configure",
    "get_store",
    "initialize_diagram",
    "compute_states",
    "compute_differentials",
    "compute_reduction",
    "compute_betti",
    "compute_torsion",
    "compute_polynomial",
    "linking_factor",
    "check_conjecture",
    "render_table",
    "summary",
    "erase_diagram",
    "erase_matrices",
    "erase_states",
    "khovanov",
]
