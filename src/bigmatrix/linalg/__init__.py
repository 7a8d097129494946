"""
bigmatrix.linalg

Elimination, factorization and inversion on arbitrary-precision matrices.

Every routine accepts a Matrix or anything bigmatrix.typing.as_matrix can
coerce, never mutates its input, and takes an optional ``tol``: an entry
with |x| <= tol is treated as zero (tol=0 means exact comparison).
"""
from .echelon import rank, ref, rref
from .lu import DetMethod, LUPResult, det, lu, lup
from .solve import lup_solve, solve
from .inverse import (
    InvMethod,
    get_inverse_method,
    inv,
    list_inverse_methods,
    register_inverse_method,
)

__all__ = [
    "ref",
    "rref",
    "rank",
    "lu",
    "lup",
    "LUPResult",
    "DetMethod",
    "det",
    "solve",
    "lup_solve",
    "inv",
    "InvMethod",
    "register_inverse_method",
    "get_inverse_method",
    "list_inverse_methods",
]
