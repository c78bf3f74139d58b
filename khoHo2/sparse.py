"""
Sparse integer matrices for the reduction engine.

Entries are kept twice, by row and by column, so that both a row and a
column can be walked and deleted in time proportional to their length.
Row and column indices are the local indices of the generators and are
never renumbered; deleting a row or column just removes it from the
active sets.
"""

from typing import Dict, Iterable, List, Set, Tuple


class SparseMatrix:
    """
    Integer matrix stored as dict-of-dicts, by row and by column.

    Attributes:
        rows: rows[t][s] = entry at row t, column s
        cols: cols[s][t] = the same entry
        active_rows: Row indices still present
        active_cols: Column indices still present
    """

    def __init__(self, num_rows: int, num_cols: int):
        self.rows: Dict[int, Dict[int, int]] = {}
        self.cols: Dict[int, Dict[int, int]] = {}
        self.active_rows: Set[int] = set(range(num_rows))
        self.active_cols: Set[int] = set(range(num_cols))

    @classmethod
    def from_entries(cls, num_rows: int, num_cols: int,
                     entries: Iterable[Tuple[int, int, int]]) -> 'SparseMatrix':
        """Build from (row, column, value) triples; repeated positions add up."""
        matrix = cls(num_rows, num_cols)
        for t, s, value in entries:
            matrix.add(int(t), int(s), int(value))
        return matrix

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self.active_rows), len(self.active_cols)

    def get(self, t: int, s: int) -> int:
        return self.rows.get(t, {}).get(s, 0)

    def set(self, t: int, s: int, value: int) -> None:
        if value:
            self.rows.setdefault(t, {})[s] = value
            self.cols.setdefault(s, {})[t] = value
        else:
            self._discard(t, s)

    def add(self, t: int, s: int, value: int) -> None:
        if value:
            self.set(t, s, self.get(t, s) + value)

    def _discard(self, t: int, s: int) -> None:
        row = self.rows.get(t)
        if row is not None and s in row:
            del row[s]
            if not row:
                del self.rows[t]
            col = self.cols[s]
            del col[t]
            if not col:
                del self.cols[s]

    def row(self, t: int) -> Dict[int, int]:
        return self.rows.get(t, {})

    def col(self, s: int) -> Dict[int, int]:
        return self.cols.get(s, {})

    def remove_row(self, t: int) -> None:
        for s in list(self.rows.get(t, {})):
            self._discard(t, s)
        self.active_rows.discard(t)

    def remove_col(self, s: int) -> None:
        for t in list(self.cols.get(s, {})):
            self._discard(t, s)
        self.active_cols.discard(s)

    def nnz(self) -> int:
        return sum(len(row) for row in self.rows.values())

    def is_zero(self) -> bool:
        return not self.rows

    def multiply(self, other: 'SparseMatrix') -> 'SparseMatrix':
        """Product self * other (other's rows are self's columns)."""
        result = SparseMatrix(0, 0)
        result.active_rows = set(self.active_rows)
        result.active_cols = set(other.active_cols)
        for k, col in self.cols.items():
            right = other.rows.get(k)
            if not right:
                continue
            for t, a in col.items():
                for s, b in right.items():
                    result.add(t, s, a * b)
        return result

    def to_dense(self) -> List[List[int]]:
        """Dense list-of-lists over the active rows and columns, in sorted order."""
        row_order = sorted(self.active_rows)
        col_order = sorted(self.active_cols)
        col_pos = {s: idx for idx, s in enumerate(col_order)}
        dense = []
        for t in row_order:
            line = [0] * len(col_order)
            for s, value in self.rows.get(t, {}).items():
                line[col_pos[s]] = value
            dense.append(line)
        return dense

    def __repr__(self) -> str:
        return f"SparseMatrix(shape={self.shape}, nnz={self.nnz()})"
