from __future__ import annotations

import warnings
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Literal, Tuple

from bigmatrix.exceptions import DecompositionError, NotSquareError, NotSupportedError
from bigmatrix.linalg.echelon import _pivot_row
from bigmatrix.matrix import Matrix
from bigmatrix.scalar import ONE, ZERO, RealLike, is_zero
from bigmatrix.typing import ensure_matrix

DetMethod = Literal["lu", "lup"]

# max/min pivot magnitude above which lup warns
ILL_CONDITIONED_RATIO = Decimal("1e12")


def _require_square(A: Matrix, op: str) -> None:
    if not A.is_square:
        raise NotSquareError(f"{op} requires a square matrix. Got {A.shape}")


def lu(A: Any, *, tol: RealLike = ZERO) -> Tuple[Matrix, Matrix]:
    """
    Doolittle factorization A = L U without pivoting.

    L is unit lower triangular, U upper triangular. Since rows are never
    exchanged, a zero pivot U[i, i] (i < n - 1) raises DecompositionError
    even for some non-singular matrices; use lup() for those. A pivot with
    |x| <= tol counts as zero.
    """
    A = ensure_matrix(A)
    _require_square(A, "LU")

    n = A.rows
    a = A._rows
    L, U = Matrix.identity(n), Matrix(n, n)
    Lr, Ur = L._rows, U._rows

    for i in range(n):
        # row i of U
        for j in range(i, n):
            acc = a[i][j]
            for k in range(i):
                acc -= Lr[i][k] * Ur[k][j]
            Ur[i][j] = acc

        if i + 1 < n and is_zero(Ur[i][i], tol):
            raise DecompositionError(
                f"Zero pivot U[{i}, {i}] in LU without pivoting; reorder rows or use lup()"
            )

        # column i of L
        for j in range(i + 1, n):
            acc = a[j][i]
            for k in range(i):
                acc -= Lr[j][k] * Ur[k][i]
            Lr[j][i] = acc / Ur[i][i]

    return L, U


@dataclass(frozen=True)
class LUPResult:
    """
    Pivoted factorization P A = L U.

    perm[i] is the row of A that ends up in row i; sign is the parity of
    the row exchanges (+1 or -1).
    """

    L: Matrix
    U: Matrix
    perm: Tuple[int, ...]
    sign: int

    @property
    def P(self) -> Matrix:
        n = len(self.perm)
        P = Matrix(n, n)
        for i, p in enumerate(self.perm):
            P._rows[i][p] = ONE
        return P

    def det(self) -> Decimal:
        d = Decimal(self.sign)
        for i in range(self.U.rows):
            d *= self.U._rows[i][i]
        return d


def lup(A: Any, *, tol: RealLike = ZERO) -> LUPResult:
    """
    LU factorization with partial pivoting.

    Never fails on singular input: a column with no usable pivot (all
    |entries| <= tol) leaves a zero-ish pivot on U's diagonal.
    """
    A = ensure_matrix(A)
    _require_square(A, "LUP")

    n = A.rows
    rows = A.tolist()
    lower = [[ZERO] * n for _ in range(n)]
    perm = list(range(n))
    sign = 1

    for j in range(n):
        p = _pivot_row(rows, j, j)
        if p != j:
            rows[j], rows[p] = rows[p], rows[j]
            lower[j], lower[p] = lower[p], lower[j]
            perm[j], perm[p] = perm[p], perm[j]
            sign = -sign

        pivot_row = rows[j]
        pivot = pivot_row[j]
        if is_zero(pivot, tol):
            for h in range(j + 1, n):
                rows[h][j] = ZERO
            continue

        for h in range(j + 1, n):
            row = rows[h]
            q = row[j] / pivot
            lower[h][j] = q
            row[j] = ZERO
            if q.is_zero():
                continue
            for k in range(j + 1, n):
                row[k] = row[k] - q * pivot_row[k]

    for i in range(n):
        lower[i][i] = ONE

    pivots = [abs(rows[i][i]) for i in range(n) if not is_zero(rows[i][i], tol)]
    if pivots and max(pivots) / min(pivots) > ILL_CONDITIONED_RATIO:
        warnings.warn(
            f"Ill-conditioned matrix: pivot ratio max/min = {float(max(pivots) / min(pivots)):.2e}. "
            "Results may be inaccurate at the current decimal precision.",
            RuntimeWarning,
            stacklevel=2,
        )

    return LUPResult(
        L=Matrix._wrap(lower, n),
        U=Matrix._wrap(rows, n),
        perm=tuple(perm),
        sign=sign,
    )


def det(A: Any, *, method: DetMethod = "lu", tol: RealLike = ZERO) -> Decimal:
    """
    Determinant of a square matrix.

    method
    - lu  : product of U's diagonal from lu(A); raises DecompositionError
            when LU without pivoting hits a zero pivot
    - lup : signed product from lup(A); defined for every square matrix

    A pivot with |x| <= tol makes the determinant exactly zero.
    """
    A = ensure_matrix(A)
    _require_square(A, "det")

    if method == "lu":
        _, U = lu(A, tol=tol)
        sign = 1
    elif method == "lup":
        res = lup(A, tol=tol)
        U, sign = res.U, res.sign
    else:
        raise NotSupportedError(f"Unknown det method {method!r}. Use 'lu' or 'lup'.")

    d = Decimal(sign)
    for i in range(U.rows):
        if is_zero(U._rows[i][i], tol):
            return ZERO
        d *= U._rows[i][i]
    return d
