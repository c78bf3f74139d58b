"""
A small table of standard diagrams.

PD codes follow the Knot Atlas conventions. Links whose components have
at most two edges carry explicit crossing signs.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from .knot import Diagram

# name -> (PD code, explicit signs or None)
CATALOG: Dict[str, Tuple[List[Tuple[int, int, int, int]], Optional[Sequence[int]]]] = {
    "3_1": ([(1, 5, 2, 4), (3, 1, 4, 6), (5, 3, 6, 2)], None),
    "3_1_mirror": ([(1, 4, 2, 5), (3, 6, 4, 1), (5, 2, 6, 3)], None),
    "4_1": ([(4, 2, 5, 1), (8, 6, 1, 5), (6, 3, 7, 4), (2, 7, 3, 8)], None),
    "5_1": ([(1, 6, 2, 7), (3, 8, 4, 9), (5, 10, 6, 1), (7, 2, 8, 3), (9, 4, 10, 5)], None),
    "hopf_positive": ([(1, 3, 2, 4), (3, 1, 4, 2)], (1, 1)),
    "hopf_negative": ([(4, 1, 3, 2), (2, 3, 1, 4)], (-1, -1)),
    "L4a1": ([(6, 1, 7, 2), (8, 3, 5, 4), (2, 5, 3, 6), (4, 7, 1, 8)], None),
    # closure of the braid (s1 s2)^4, the torus knot T(3,4)
    "8_19": ([(12, 2, 13, 1), (7, 3, 8, 2), (8, 14, 9, 13), (3, 15, 4, 14),
              (4, 10, 5, 9), (15, 11, 16, 10), (16, 6, 1, 5), (11, 7, 12, 6)], None),
    # unknot with one positive kink
    "unknot_kink": ([(2, 2, 1, 1)], (1,)),
    # unknot with a positive and a negative kink
    "unknot_twist": ([(2, 2, 3, 1), (4, 3, 1, 4)], None),
    # closure of s1 s1^-1, a two-component unlink
    "unlink2_twist": ([(3, 2, 4, 1), (4, 2, 3, 1)], (1, -1)),
}

ALIASES = {
    "trefoil": "3_1",
    "right_trefoil": "3_1",
    "left_trefoil": "3_1_mirror",
    "figure_eight": "4_1",
    "cinquefoil": "5_1",
    "hopf": "hopf_positive",
    "torus_2_4": "L4a1",
    "torus_3_4": "8_19",
}


def available() -> List[str]:
    """Names of all catalogued diagrams, the unknot and unlinks included."""
    return ["unknot", "unlink2"] + sorted(CATALOG)


def get_diagram(name: str) -> Diagram:
    """
    Look up a diagram by name.

    Raises:
        KeyError: if the name is unknown
    """
    key = ALIASES.get(name, name)
    if key == "unknot":
        return Diagram.unknot()
    if key == "unlink2":
        return Diagram.unknot(components=2)
    if key not in CATALOG:
        raise KeyError(f"Unknown diagram: {name}")
    pd_code, signs = CATALOG[key]
    return Diagram.from_pd_code(pd_code, signs=signs)
