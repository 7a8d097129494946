from __future__ import annotations

from typing import Any

import numpy as np

from bigmatrix.exceptions import ShapeError, SingularMatrixError
from bigmatrix.linalg.lu import LUPResult, _require_square, lup
from bigmatrix.matrix import Matrix
from bigmatrix.scalar import ZERO, RealLike, is_zero
from bigmatrix.typing import as_matrix, ensure_matrix


def lup_solve(factors: LUPResult, B: Matrix) -> Matrix:
    """
    Solve A X = B given P A = L U, column by column.

    Forward substitution on L (unit diagonal), then back substitution on U.
    The caller guarantees U has no zero diagonal entry.
    """
    L, U, perm = factors.L._rows, factors.U._rows, factors.perm
    n = len(perm)
    if B.rows != n:
        raise ShapeError(f"Right-hand side must have {n} rows. Got {B.shape}")

    X = Matrix(n, B.cols)
    for c in range(B.cols):
        y = [B._rows[perm[i]][c] for i in range(n)]
        for i in range(n):
            acc = y[i]
            for k in range(i):
                acc -= L[i][k] * y[k]
            y[i] = acc

        for i in range(n - 1, -1, -1):
            acc = y[i]
            for k in range(i + 1, n):
                acc -= U[i][k] * X._rows[k][c]
            X._rows[i][c] = acc / U[i][i]
    return X


def _is_flat(B: Any) -> bool:
    """True for 1-D right-hand sides: flat sequences, 1-D arrays, tensors and Series."""
    if hasattr(B, "ndim"):
        return int(B.ndim) == 1
    if isinstance(B, (list, tuple)):
        return bool(B) and not isinstance(B[0], (list, tuple, np.ndarray))
    return False


def solve(A: Any, B: Any, *, tol: RealLike = ZERO) -> Matrix:
    """
    Solve A X = B for square A.

    B may have several columns. A 1-D right-hand side (list, ndarray or
    tensor) is treated as a column vector and the result is n x 1; a 2-D
    input must already have n rows.
    """
    A = ensure_matrix(A)
    _require_square(A, "solve")

    if isinstance(B, Matrix):
        Bm = B
    else:
        Bm = as_matrix(B)
        if _is_flat(B):
            Bm = Bm.T

    if Bm.rows != A.rows:
        raise ShapeError(f"Cannot solve {A.shape} system with right-hand side {Bm.shape}")

    factors = lup(A, tol=tol)
    for i in range(A.rows):
        if is_zero(factors.U._rows[i][i], tol):
            raise SingularMatrixError(f"Matrix is singular: zero pivot in column {i}")

    return lup_solve(factors, Bm)
