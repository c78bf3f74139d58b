"""
Text tables for Khovanov homology.

Homology is drawn the usual way: one column per primary grading i, one
row per secondary grading j (highest first). A cell shows the rank of the
free part followed by the torsion summands, e.g. "1", "T", "1+2T3".
Empty bigradings show a dot.
"""

from typing import Dict, List, Optional, Tuple

from .config import HomologyType
from .reduction import BettiTable, TorsionTable, torsion_symbol


class HomologyTableRenderer:
    """
    Renders Betti and torsion tables as aligned plain text.
    """

    def __init__(self, empty: str = ".", min_width: int = 3):
        self.empty = empty
        self.min_width = min_width

    def cell(self, rank: int, torsion: Dict[int, int]) -> str:
        parts = []
        if rank:
            parts.append(str(rank))
        for order in sorted(torsion):
            count = torsion[order]
            symbol = torsion_symbol(order)
            parts.append(symbol if count == 1 else f"{count}{symbol}")
        return "+".join(parts) if parts else self.empty

    def render(self, name: str, homology_type: HomologyType, betti: BettiTable,
               torsion: Optional[TorsionTable] = None) -> str:
        """
        Build the table.

        Args:
            name: Display name of the diagram
            homology_type: Theory shown in the title
            betti: Ranks
            torsion: Torsion (optional)

        Returns:
            Multi-line string
        """
        torsion = torsion or TorsionTable()
        columns = list(range(betti.i_low, betti.i_high + 1))
        rows = sorted(set(betti.j_values) | {j for _, j in betti.ranks}
                      | {j for _, j in torsion.groups}, reverse=True)

        cells: Dict[Tuple[int, int], str] = {}
        for i in columns:
            for j in rows:
                cells[(i, j)] = self.cell(betti.rank(i, j), torsion.groups.get((i, j), {}))

        width = max([self.min_width] + [len(text) for text in cells.values()]
                    + [len(str(i)) for i in columns])
        label_width = max([3] + [len(str(j)) for j in rows])

        lines: List[str] = [f"{name} ({homology_type.value} Khovanov homology)"]
        header = "j\\i".rjust(label_width) + " |" + "".join(f" {i:>{width}}" for i in columns)
        lines.append(header)
        lines.append("-" * len(header))
        for j in rows:
            line = f"{j:>{label_width}} |" + "".join(f" {cells[(i, j)]:>{width}}" for i in columns)
            lines.append(line)
        return "\n".join(lines)


def render_homology_table(name: str, homology_type: HomologyType, betti: BettiTable,
                          torsion: Optional[TorsionTable] = None) -> str:
    """Convenience wrapper around HomologyTableRenderer."""
    return HomologyTableRenderer().render(name, homology_type, betti, torsion)


def render_summary(name: str, betti: BettiTable, torsion: TorsionTable) -> str:
    """One-line summary: total rank and torsion orders."""
    orders = ", ".join(f"Z/{order}" for order in sorted(torsion.orders)) or "none"
    return f"{name}: total rank {betti.total()}, torsion {orders}"
