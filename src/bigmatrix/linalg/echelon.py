from __future__ import annotations

from decimal import Decimal
from typing import Any

from bigmatrix.matrix import Matrix
from bigmatrix.scalar import ONE, ZERO, RealLike, is_zero
from bigmatrix.typing import ensure_matrix


def _pivot_row(rows: list[list[Decimal]], i: int, j: int) -> int:
    """Row at or below i with the largest |entry| in column j (first one on ties)."""
    i_max = i
    best = abs(rows[i][j])
    for h in range(i + 1, len(rows)):
        v = abs(rows[h][j])
        if v > best:
            best, i_max = v, h
    return i_max


def _ref_rows(A: Matrix, tol: RealLike) -> list[list[Decimal]]:
    """Gaussian elimination with partial pivoting on a working copy of A's rows."""
    rows = A.tolist()
    m, n = A.shape

    i = j = 0
    while i < m and j < n:
        p = _pivot_row(rows, i, j)
        if is_zero(rows[p][j], tol):
            # nothing left to eliminate in this column
            j += 1
            continue

        if p != i:
            rows[i], rows[p] = rows[p], rows[i]

        pivot_row = rows[i]
        pivot = pivot_row[j]
        for h in range(i + 1, m):
            row = rows[h]
            q = row[j] / pivot
            row[j] = ZERO
            if q.is_zero():
                continue
            for k in range(j + 1, n):
                row[k] = row[k] - q * pivot_row[k]

        i += 1
        j += 1
    return rows


def ref(A: Any, *, tol: RealLike = ZERO) -> Matrix:
    """
    Row-echelon form via Gaussian elimination with partial pivoting.

    Entries below each pivot are exact zeros; pivots are not normalized.
    An entry with |x| <= tol counts as zero when looking for a pivot.
    """
    A = ensure_matrix(A)
    return Matrix._wrap(_ref_rows(A, tol), A.cols)


def _rref_rows(A: Matrix, tol: RealLike) -> list[list[Decimal]]:
    rows = _ref_rows(A, tol)
    m, n = A.shape

    i = j = 0
    while i < m and j < n:
        pivot_row = rows[i]
        pivot = pivot_row[j]
        if is_zero(pivot, tol):
            j += 1
            continue

        pivot_row[j] = ONE
        for k in range(j + 1, n):
            pivot_row[k] = pivot_row[k] / pivot

        for h in range(i):
            row = rows[h]
            q = row[j]
            if q.is_zero():
                continue
            row[j] = ZERO
            for k in range(j + 1, n):
                row[k] = row[k] - q * pivot_row[k]

        i += 1
        j += 1
    return rows


def rref(A: Any, *, tol: RealLike = ZERO) -> Matrix:
    """
    Reduced row-echelon form.

    Starts from ref(A); every pivot is scaled to exactly 1 and the entries
    above it are eliminated.
    """
    A = ensure_matrix(A)
    return Matrix._wrap(_rref_rows(A, tol), A.cols)


def rank(A: Any, *, tol: RealLike = ZERO) -> int:
    """Number of non-zero rows of rref(A)."""
    A = ensure_matrix(A)
    return sum(1 for row in _rref_rows(A, tol) if any(not is_zero(x, tol) for x in row))
