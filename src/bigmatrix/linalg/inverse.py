from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable, Literal

from bigmatrix.exceptions import NotSupportedError, SingularMatrixError
from bigmatrix.linalg.echelon import rref
from bigmatrix.linalg.lu import LUPResult, _require_square, lup
from bigmatrix.linalg.solve import lup_solve
from bigmatrix.matrix import Matrix, hstack
from bigmatrix.scalar import ONE, ZERO, RealLike, is_zero
from bigmatrix.typing import ensure_matrix

InvMethod = Literal["gauss_jordan", "lup"]

# fn(A, factors, *, tol) -> inverse of A; A is square and known to be non-singular
InverseFn = Callable[..., Matrix]

_REGISTRY: dict[str, InverseFn] = {}


def register_inverse_method(name: str, fn: InverseFn) -> None:
    key = str(name).strip().lower()
    if not key:
        raise ValueError("Inverse method name must be non-empty")
    _REGISTRY[key] = fn


def list_inverse_methods() -> list[str]:
    return sorted(_REGISTRY.keys())


def get_inverse_method(name: str) -> InverseFn:
    key = str(name).strip().lower()
    if key not in _REGISTRY:
        raise NotSupportedError(
            f"Unknown inverse method {name!r}. Available: {', '.join(list_inverse_methods())}"
        )
    return _REGISTRY[key]


def inv(A: Any, *, method: InvMethod = "gauss_jordan", tol: RealLike = ZERO) -> Matrix:
    """
    Inverse of a square matrix.

    The determinant is taken from the pivoted factorization, so matrices
    that need row exchanges are handled. A zero determinant (any pivot with
    |x| <= tol) raises SingularMatrixError.

    method
    - gauss_jordan : rref([A | I]) and read off the right block
    - lup          : solve A X = I with the LUP factors
    """
    A = ensure_matrix(A)
    _require_square(A, "inv")
    fn = get_inverse_method(method)

    factors = lup(A, tol=tol)
    d = factors.det()
    if d.is_zero() or any(is_zero(factors.U._rows[i][i], tol) for i in range(A.rows)):
        raise SingularMatrixError(f"Matrix is singular (det = {d}); no inverse exists")

    return fn(A, factors, tol=tol)


# -----------------------------------------------------------------------------
# Built-ins
# -----------------------------------------------------------------------------


def _is_identity_block(rows: list[list[Decimal]], n: int, tol: RealLike) -> bool:
    for i in range(n):
        for j in range(n):
            target = ONE if i == j else ZERO
            if not is_zero(rows[i][j] - target, tol):
                return False
    return True


def _gauss_jordan(A: Matrix, factors: LUPResult, *, tol: RealLike = ZERO) -> Matrix:
    n = A.rows
    R = rref(hstack(A, Matrix.identity(n)), tol=tol)
    if not _is_identity_block(R._rows, n, tol):
        raise SingularMatrixError("Left block of rref([A | I]) is not the identity; A is singular")
    return Matrix._wrap([row[n:] for row in R._rows], n)


def _lup_inverse(A: Matrix, factors: LUPResult, *, tol: RealLike = ZERO) -> Matrix:
    return lup_solve(factors, Matrix.identity(A.rows))


register_inverse_method("gauss_jordan", _gauss_jordan)
register_inverse_method("lup", _lup_inverse)
