"""
Configuration for khoHo2.

The homology type is the global selector: it decides which status tags of a
diagram record are consulted, whether the marked cycle is fixed, and which
sign convention the differential uses.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from .errors import InvalidReferenceError


class HomologyType(Enum):
    """
    Variants of Khovanov homology.

    STANDARD: unreduced even theory
    REDUCED: reduced even theory (marked cycle labelled x)
    REDUCED_ODD: reduced odd theory of Ozsvath-Rasmussen-Szabo
    UNIFIED: reduced theory over Z[pi]/(pi^2 - 1), pi = 1 even, pi = -1 odd
    """
    STANDARD = "standard"
    REDUCED = "reduced"
    REDUCED_ODD = "reducedOdd"
    UNIFIED = "unified"

    @property
    def is_reduced(self) -> bool:
        return self is not HomologyType.STANDARD

    @property
    def needs_signs(self) -> bool:
        """True when the differential needs the anticommutative sign cube."""
        return self in (HomologyType.REDUCED_ODD, HomologyType.UNIFIED)

    @classmethod
    def parse(cls, value: Union[str, 'HomologyType', int]) -> 'HomologyType':
        """
        Resolve a homology type from an enum member, a name or an index.

        Accepts the enum values ("standard", "reducedOdd", ...), member names
        in any case ("REDUCED_ODD") and the short alias "odd".
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
            raise InvalidReferenceError(f"Homology type index {value} out of range")
        if isinstance(value, str):
            key = value.strip().replace("-", "_").replace(" ", "_")
            for member in cls:
                if key == member.value or key.upper() == member.name:
                    return member
            aliases = {"odd": cls.REDUCED_ODD, "reduced_odd": cls.REDUCED_ODD,
                       "reducedodd": cls.REDUCED_ODD, "even": cls.STANDARD}
            if key.lower() in aliases:
                return aliases[key.lower()]
        raise InvalidReferenceError(f"Unknown homology type: {value!r}")


@dataclass
class KhovanovConfig:
    """
    Recognized options.

    Attributes:
        homology_type: Theory used when an operation does not name one
        verbose: Progress reporting level (0 = silent)
        debug: Check that every composed differential is exactly zero
        max_generators: Packing base; a bigraded piece may hold at most
                        max_generators - 1 generators
        max_gradings: Maximum number of secondary gradings of a diagram
        capacity: Number of diagram slots in a store
        max_crossings: Largest diagram accepted by the state enumerator
        max_entries: Most nonzero entries one differential d^i may hold
    """
    homology_type: HomologyType = HomologyType.STANDARD
    verbose: int = 0
    debug: bool = False
    max_generators: int = 1 << 24
    max_gradings: int = 512
    capacity: int = 100
    max_crossings: int = 24
    max_entries: int = 1 << 28

    def __post_init__(self):
        self.homology_type = HomologyType.parse(self.homology_type)
        if self.max_generators < 2:
            raise ValueError("max_generators must be at least 2")
        if self.capacity < 1:
            raise ValueError("capacity must be positive")

    def with_options(self, **changes) -> 'KhovanovConfig':
        """Return a copy with some options replaced."""
        return replace(self, **changes)

    def report(self, level: int, message: str) -> None:
        """Print a progress message if the verbosity level allows it."""
        if self.verbose >= level:
            print(message)
