# src/bigmatrix/parsing.py
from __future__ import annotations

import re
from decimal import Decimal

from bigmatrix.exceptions import ParseError
from bigmatrix.matrix import Matrix

# signed decimal literal: 1, -2.5, +.5, 3., 1e-3
_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_rows(s: str, *, row_sep: str = ";", col_sep: str = ",") -> list[list[Decimal]]:
    """
    Split a MATLAB-style literal into rows of Decimals.

    Rows are separated by ``row_sep``, entries by ``col_sep``; whitespace
    around entries is ignored. Raises ParseError on empty input, ragged
    rows or entries that are not finite decimal numbers.
    """
    if not isinstance(s, str):
        raise ParseError(f"Expected a string literal, got {type(s).__name__}")
    if not s.strip():
        raise ParseError("Empty matrix literal")
    if not row_sep or not col_sep or row_sep == col_sep:
        raise ValueError("row_sep and col_sep must be distinct non-empty strings")

    out: list[list[Decimal]] = []
    ncols = None
    for i, line in enumerate(s.split(row_sep)):
        row = []
        for j, token in enumerate(line.split(col_sep)):
            token = token.strip()
            if not _NUMBER.fullmatch(token):
                raise ParseError(f"Cannot parse entry ({i}, {j}): {token!r}")
            row.append(Decimal(token))
        if ncols is None:
            ncols = len(row)
        elif len(row) != ncols:
            raise ParseError(f"Row {i} has {len(row)} entries, expected {ncols}")
        out.append(row)
    return out


def parse_matrix(s: str, *, row_sep: str = ";", col_sep: str = ",") -> Matrix:
    """Parse ``"1, 2; 3, 4"`` into a 2x2 Matrix. Raises ParseError if malformed."""
    rows = parse_rows(s, row_sep=row_sep, col_sep=col_sep)
    return Matrix._wrap(rows, len(rows[0]))


def format_matrix(A: Matrix, *, width: int = 7, digits: int = 3) -> str:
    """Fixed-width display, one line per row."""
    fmt = f" {int(width)}.{int(digits)}f"
    return "\n".join(" ".join(format(x, fmt) for x in row) for row in A)


def to_literal(A: Matrix, *, row_sep: str = ";", col_sep: str = ",") -> str:
    """Full-precision literal that parse_matrix turns back into an equal matrix."""
    return f"{row_sep} ".join(f"{col_sep} ".join(str(x) for x in row) for row in A)
