# src/bigmatrix/typing.py
from __future__ import annotations

from typing import Any, Sequence, Union, TYPE_CHECKING

import numpy as np
import torch

from bigmatrix.exceptions import ShapeError
from bigmatrix.matrix import Matrix

if TYPE_CHECKING:  # pragma: no cover
    import pandas as pd


MatrixLike = Union[Matrix, torch.Tensor, np.ndarray, Sequence[Any], str]


def _is_pandas_df(x: Any) -> bool:
    try:
        import pandas as pd  # type: ignore
        return isinstance(x, pd.DataFrame)
    except Exception:
        return False


def _is_pandas_series(x: Any) -> bool:
    try:
        import pandas as pd  # type: ignore
        return isinstance(x, pd.Series)
    except Exception:
        return False


def _ndarray_rows(a: np.ndarray) -> list[list[Any]]:
    if a.ndim == 1:
        a = a.reshape(1, -1)
    if a.ndim != 2:
        raise ShapeError(f"Expected a 1D or 2D array. Got shape {tuple(a.shape)}")
    if a.dtype.kind == "c":
        raise TypeError("Complex matrices are not supported")
    # object arrays may already hold Decimals; .tolist() keeps them as-is
    return a.tolist()


def as_matrix(x: MatrixLike) -> Matrix:
    """
    Convert common matrix-likes to Matrix.

    Supports:
    - Matrix (returned as an independent copy)
    - torch.Tensor (1D -> single row, 2D)
    - numpy.ndarray, including object arrays of Decimals
    - pandas.DataFrame / pandas.Series (if pandas installed)
    - nested Python lists/tuples
    - literal strings such as "1, 2; 3, 4"
    """
    if isinstance(x, Matrix):
        return x.copy()

    if isinstance(x, str):
        from bigmatrix.parsing import parse_matrix

        return parse_matrix(x)

    if _is_pandas_df(x) or _is_pandas_series(x):
        x = x.to_numpy()  # type: ignore[attr-defined]

    if isinstance(x, torch.Tensor):
        if x.is_complex():
            raise TypeError("Complex matrices are not supported")
        # float64 keeps as many digits as the tensor can hold
        x = x.detach().cpu()
        if x.is_floating_point():
            x = x.to(dtype=torch.float64)
        x = x.numpy()

    if isinstance(x, np.ndarray):
        return Matrix.from_rows(_ndarray_rows(x))

    rows = list(x)
    if rows and not isinstance(rows[0], (list, tuple, np.ndarray)):
        rows = [rows]
    return Matrix.from_rows(rows)


def ensure_matrix(x: MatrixLike) -> Matrix:
    """Return x unchanged if it is already a Matrix, else coerce with as_matrix."""
    if isinstance(x, Matrix):
        return x
    return as_matrix(x)
