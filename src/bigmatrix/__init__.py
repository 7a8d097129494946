from bigmatrix.exceptions import (
    BigMatrixError,
    DecompositionError,
    NotSquareError,
    NotSupportedError,
    ParseError,
    ShapeError,
    SingularMatrixError,
)
from bigmatrix.linalg import LUPResult, det, inv, lu, lup, rank, ref, rref, solve
from bigmatrix.matrix import Matrix, approx_equals, equals, hstack
from bigmatrix.parsing import format_matrix, parse_matrix, to_literal
from bigmatrix.scalar import precision
from bigmatrix.typing import as_matrix
from bigmatrix.api import __version__

__all__ = [
    "__version__",
    "Matrix",
    "as_matrix",
    "parse_matrix",
    "format_matrix",
    "to_literal",
    "hstack",
    "equals",
    "approx_equals",
    "precision",
    "ref",
    "rref",
    "rank",
    "lu",
    "lup",
    "LUPResult",
    "det",
    "inv",
    "solve",
    "BigMatrixError",
    "ShapeError",
    "NotSquareError",
    "SingularMatrixError",
    "DecompositionError",
    "ParseError",
    "NotSupportedError",
]
