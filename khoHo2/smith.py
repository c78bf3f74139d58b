"""
Smith normal form over the integers.

Only the diagonal is needed: its nonzero entries give the rank of a
differential and the entries above 1 give the torsion orders of homology.
All arithmetic is on Python integers, so entries never overflow.
"""

from typing import List, Optional, Sequence, Tuple


def _smallest_entry(a: List[List[int]], t: int) -> Optional[Tuple[int, int]]:
    best = None
    best_abs = 0
    for i in range(t, len(a)):
        row = a[i]
        for j in range(t, len(row)):
            value = row[j]
            if value and (best is None or abs(value) < best_abs):
                best, best_abs = (i, j), abs(value)
                if best_abs == 1:
                    return best
    return best


def _smallest_in_cross(a: List[List[int]], t: int) -> Tuple[int, int]:
    """Smallest nonzero entry in row t or column t (from the pivot on)."""
    best, best_abs = (t, t), abs(a[t][t]) if a[t][t] else None
    for j in range(t + 1, len(a[t])):
        if a[t][j] and (best_abs is None or abs(a[t][j]) < best_abs):
            best, best_abs = (t, j), abs(a[t][j])
    for i in range(t + 1, len(a)):
        if a[i][t] and (best_abs is None or abs(a[i][t]) < best_abs):
            best, best_abs = (i, t), abs(a[i][t])
    return best


def smith_normal_form(matrix: Sequence[Sequence[int]]) -> List[int]:
    """
    Compute the Smith normal form diagonal of an integer matrix.

    Args:
        matrix: Dense m x n matrix as a sequence of rows

    Returns:
        List of length min(m, n) of nonnegative integers d_1 | d_2 | ...,
        nonzero entries first, then zeros
    """
    a = [[int(x) for x in row] for row in matrix]
    m = len(a)
    n = len(a[0]) if m else 0
    size = min(m, n)
    diagonal: List[int] = []

    for t in range(size):
        pivot = _smallest_entry(a, t)
        if pivot is None:
            break
        while True:
            pi, pj = pivot
            if pi != t:
                a[t], a[pi] = a[pi], a[t]
            if pj != t:
                for row in a:
                    row[t], row[pj] = row[pj], row[t]
            p = a[t][t]
            clean = True
            for i in range(t + 1, m):
                if a[i][t]:
                    factor = a[i][t] // p
                    if factor:
                        row_i, row_t = a[i], a[t]
                        for j in range(t, n):
                            row_i[j] -= factor * row_t[j]
                    if a[i][t]:
                        clean = False
            for j in range(t + 1, n):
                if a[t][j]:
                    factor = a[t][j] // p
                    if factor:
                        for i in range(t, m):
                            a[i][j] -= factor * a[i][t]
                    if a[t][j]:
                        clean = False
            if clean:
                # pivot must divide the rest of the matrix
                bad = None
                for i in range(t + 1, m):
                    for j in range(t + 1, n):
                        if a[i][j] % p:
                            bad = i
                            break
                    if bad is not None:
                        break
                if bad is None:
                    break
                row_b, row_t = a[bad], a[t]
                for j in range(t, n):
                    row_t[j] += row_b[j]
            pivot = _smallest_in_cross(a, t)
        diagonal.append(abs(a[t][t]))

    diagonal.extend([0] * (size - len(diagonal)))
    return diagonal

