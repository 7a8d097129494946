from __future__ import annotations


class BigMatrixError(Exception):
    """Base exception for bigmatrix."""


class ShapeError(BigMatrixError, ValueError):
    """Invalid shape or dimension mismatch."""


class NotSquareError(ShapeError):
    """Operation requires a square matrix."""


class SingularMatrixError(BigMatrixError, ArithmeticError):
    """Matrix is singular and has no inverse."""


class DecompositionError(BigMatrixError, ArithmeticError):
    """Factorization hit a zero pivot it cannot step over."""


class ParseError(BigMatrixError, ValueError):
    """Malformed matrix literal."""


class NotSupportedError(BigMatrixError, NotImplementedError):
    """Feature is not supported."""
