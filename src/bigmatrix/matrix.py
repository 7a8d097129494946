# src/bigmatrix/matrix.py
from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Iterator, Optional, Sequence

from bigmatrix.exceptions import ParseError, ShapeError
from bigmatrix.scalar import ONE, TWO, ZERO, RealLike, is_regular, to_scalar

if TYPE_CHECKING:  # pragma: no cover
    import numpy as np
    import torch


class Matrix:
    """
    Dense rows x cols matrix of Decimal entries.

    The shape is fixed at construction. Each matrix owns its row lists;
    every operation that derives a matrix (copy, transpose, arithmetic,
    elimination, factorization) returns a new, independent object.
    """

    __slots__ = ("_rows", "_nrows", "_ncols")

    def __init__(self, rows: int = 0, cols: int = 0) -> None:
        rows, cols = int(rows), int(cols)
        if rows < 0 or cols < 0:
            raise ShapeError(f"Matrix dimensions must be non-negative. Got ({rows}, {cols})")
        self._nrows = rows
        self._ncols = cols
        self._rows: list[list[Decimal]] = [[ZERO] * cols for _ in range(rows)]

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def _wrap(cls, rows: list[list[Decimal]], ncols: int) -> "Matrix":
        """Adopt already-validated row lists without copying."""
        M = cls.__new__(cls)
        M._rows = rows
        M._nrows = len(rows)
        M._ncols = ncols
        return M

    @classmethod
    def zeros(cls, rows: int, cols: int) -> "Matrix":
        return cls(rows, cols)

    @classmethod
    def identity(cls, n: int) -> "Matrix":
        M = cls(n, n)
        for i in range(M._nrows):
            M._rows[i][i] = ONE
        return M

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[RealLike]]) -> "Matrix":
        """
        Build a matrix from a nested sequence of reals.

        Every row must have the same length. An empty sequence gives the
        0x0 matrix.
        """
        data = [[to_scalar(x) for x in row] for row in rows]
        ncols = len(data[0]) if data else 0
        for i, row in enumerate(data):
            if len(row) != ncols:
                raise ShapeError(f"Row {i} has {len(row)} entries, expected {ncols}")
        return cls._wrap(data, ncols)

    @classmethod
    def from_str(cls, s: str) -> Optional["Matrix"]:
        """Parse a literal such as ``"1, 2; 3, 4"``. Returns None if malformed."""
        from bigmatrix.parsing import parse_matrix

        try:
            return parse_matrix(s)
        except ParseError:
            return None

    # ------------------------------------------------------------------
    # Shape and element access
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self._nrows

    @property
    def cols(self) -> int:
        return self._ncols

    @property
    def shape(self) -> tuple[int, int]:
        return (self._nrows, self._ncols)

    @property
    def is_square(self) -> bool:
        return self._nrows == self._ncols

    def _check_index(self, i: int, j: int) -> None:
        if not (0 <= i < self._nrows and 0 <= j < self._ncols):
            raise IndexError(f"Index ({i}, {j}) out of range for shape {self.shape}")

    def get(self, i: int, j: int) -> Decimal:
        self._check_index(i, j)
        return self._rows[i][j]

    def set(self, i: int, j: int, value: RealLike) -> None:
        """Overwrite entry (i, j) in place."""
        self._check_index(i, j)
        self._rows[i][j] = to_scalar(value)

    def __getitem__(self, key: tuple[int, int]) -> Decimal:
        i, j = key
        return self.get(i, j)

    def __setitem__(self, key: tuple[int, int], value: RealLike) -> None:
        i, j = key
        self.set(i, j, value)

    def row(self, i: int) -> tuple[Decimal, ...]:
        if not 0 <= i < self._nrows:
            raise IndexError(f"Row {i} out of range for shape {self.shape}")
        return tuple(self._rows[i])

    def __iter__(self) -> Iterator[tuple[Decimal, ...]]:
        for r in self._rows:
            yield tuple(r)

    def tolist(self) -> list[list[Decimal]]:
        return [list(r) for r in self._rows]

    # ------------------------------------------------------------------
    # Structural operations
    # ------------------------------------------------------------------
    def copy(self) -> "Matrix":
        return Matrix._wrap([list(r) for r in self._rows], self._ncols)

    def transpose(self) -> "Matrix":
        cols = [[r[j] for r in self._rows] for j in range(self._ncols)]
        return Matrix._wrap(cols, self._nrows)

    @property
    def T(self) -> "Matrix":
        return self.transpose()

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------
    def _check_same_shape(self, other: "Matrix", op: str) -> None:
        if self.shape != other.shape:
            raise ShapeError(f"Cannot {op} matrices of shapes {self.shape} and {other.shape}")

    def add(self, other: "Matrix") -> "Matrix":
        self._check_same_shape(other, "add")
        out = [[a + b for a, b in zip(ra, rb)] for ra, rb in zip(self._rows, other._rows)]
        return Matrix._wrap(out, self._ncols)

    def sub(self, other: "Matrix") -> "Matrix":
        self._check_same_shape(other, "subtract")
        out = [[a - b for a, b in zip(ra, rb)] for ra, rb in zip(self._rows, other._rows)]
        return Matrix._wrap(out, self._ncols)

    def mul(self, other: "Matrix") -> "Matrix":
        """Matrix product self @ other."""
        if self._ncols != other._nrows:
            raise ShapeError(f"Cannot multiply {self.shape} by {other.shape}: inner dimensions differ")

        n, p = self._ncols, other._ncols
        B = other._rows
        C = Matrix(self._nrows, p)
        for i, a_row in enumerate(self._rows):
            c_row = C._rows[i]
            for k in range(p):
                acc = ZERO
                for j in range(n):
                    acc += a_row[j] * B[j][k]
                c_row[k] = acc
        return C

    def scale(self, c: RealLike) -> "Matrix":
        s = to_scalar(c)
        return Matrix._wrap([[s * x for x in r] for r in self._rows], self._ncols)

    def __add__(self, other: Any) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Any) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.sub(other)

    def __matmul__(self, other: Any) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.mul(other)

    def __mul__(self, c: Any) -> "Matrix":
        if isinstance(c, Matrix):
            return NotImplemented
        return self.scale(c)

    __rmul__ = __mul__

    def __neg__(self) -> "Matrix":
        return Matrix._wrap([[-x for x in r] for r in self._rows], self._ncols)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return equals(self, other)

    __hash__ = None  # type: ignore[assignment]

    def approx_equals(self, other: "Matrix", eps: RealLike) -> bool:
        return approx_equals(self, other, eps)

    # ------------------------------------------------------------------
    # Interop and display
    # ------------------------------------------------------------------
    def to_torch(self, dtype: Optional["torch.dtype"] = None, device: Any = None) -> "torch.Tensor":
        """Export as a float tensor (float64 by default). Precision beyond the dtype is lost."""
        import torch

        dtype = torch.float64 if dtype is None else dtype
        t = torch.tensor([[float(x) for x in r] for r in self._rows], dtype=dtype, device=device)
        return t.reshape(self._nrows, self._ncols)

    def to_numpy(self, dtype: Any = float) -> "np.ndarray":
        """Export as an ndarray. ``dtype=object`` keeps the Decimal entries."""
        import numpy as np

        if dtype is object:
            out = np.empty((self._nrows, self._ncols), dtype=object)
            for i, r in enumerate(self._rows):
                for j, x in enumerate(r):
                    out[i, j] = x
            return out
        data = [[float(x) for x in r] for r in self._rows]
        return np.array(data, dtype=dtype).reshape(self._nrows, self._ncols)

    def __str__(self) -> str:
        from bigmatrix.parsing import format_matrix

        return format_matrix(self)

    def __repr__(self) -> str:
        from bigmatrix.parsing import to_literal

        return f"Matrix({to_literal(self)!r}, shape={self.shape})"


def hstack(A: Matrix, B: Matrix) -> Matrix:
    """Concatenate horizontally: [A | B]."""
    if A.rows != B.rows:
        raise ShapeError(f"Cannot concatenate {A.shape} and {B.shape}: row counts differ")
    out = [list(ra) + list(rb) for ra, rb in zip(A._rows, B._rows)]
    return Matrix._wrap(out, A.cols + B.cols)


def equals(A: Matrix, B: Matrix) -> bool:
    """Same shape and every entry exactly equal."""
    if A.shape != B.shape:
        return False
    for ra, rb in zip(A._rows, B._rows):
        for a, b in zip(ra, rb):
            if a != b:
                return False
    return True


def approx_equals(A: Matrix, B: Matrix, eps: RealLike) -> bool:
    """
    Same shape and every entry pair within eps.

    The relative error |a - b| / |(a + b) / 2| is used when both entries are
    non-zero and finite; otherwise (and when the mean vanishes) the absolute
    error |a - b| is used.
    """
    if A.shape != B.shape:
        return False

    tol = to_scalar(eps)
    for ra, rb in zip(A._rows, B._rows):
        for a, b in zip(ra, rb):
            if a == b:
                continue
            diff = abs(a - b)
            if is_regular(a) and is_regular(b):
                mean = abs((a + b) / TWO)
                if not mean.is_zero():
                    diff = diff / mean
            if not diff <= tol:
                return False
    return True
