# src/bigmatrix/api.py
from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from bigmatrix.linalg import det, inv, lu, lup, rank, ref, rref, solve
from bigmatrix.matrix import Matrix, approx_equals, equals, hstack

__all__ = [
    "Matrix",
    "hstack",
    "equals",
    "approx_equals",
    "ref",
    "rref",
    "rank",
    "lu",
    "lup",
    "det",
    "inv",
    "solve",
    "__version__",
]

try:
    __version__ = version("bigmatrix")
except PackageNotFoundError:  # editable/local
    __version__ = "0.0.0"
