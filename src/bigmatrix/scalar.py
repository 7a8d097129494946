# src/bigmatrix/scalar.py
"""Arbitrary-precision scalars.

Every matrix entry is a ``decimal.Decimal``. Arithmetic follows the active
decimal context, so precision is controlled with :func:`precision` (or any
``decimal.localcontext`` block) rather than a global setting.
"""
from __future__ import annotations

import decimal
import numbers
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Any, Iterator, Union

Scalar = Decimal
RealLike = Union[Decimal, int, float, str, Fraction]

ZERO = Decimal(0)
ONE = Decimal(1)
TWO = Decimal(2)


def to_scalar(x: Any) -> Decimal:
    """
    Convert a real value to Decimal.

    Floats go through ``repr`` so ``0.1`` becomes ``Decimal('0.1')`` rather
    than its full binary expansion. NumPy scalars and 0-d tensors are
    unwrapped with ``.item()``.
    """
    if isinstance(x, Decimal):
        d = x
    elif isinstance(x, bool):
        d = Decimal(int(x))
    elif isinstance(x, int):
        d = Decimal(x)
    elif isinstance(x, float):
        d = Decimal(repr(float(x)))
    elif isinstance(x, Fraction):
        d = Decimal(x.numerator) / Decimal(x.denominator)
    elif isinstance(x, str):
        try:
            d = Decimal(x.strip())
        except InvalidOperation as e:
            raise ValueError(f"Cannot convert {x!r} to a scalar") from e
    elif hasattr(x, "item") and callable(x.item):
        return to_scalar(x.item())
    elif isinstance(x, numbers.Real):
        d = Decimal(repr(float(x)))
    else:
        raise TypeError(f"Expected a real number, got {type(x).__name__}")

    if d.is_nan():
        raise ValueError("NaN is not a valid matrix entry")
    return d


def is_zero(x: Decimal, tol: RealLike = ZERO) -> bool:
    """True if |x| <= tol. With tol == 0 this is exact comparison to zero."""
    t = to_scalar(tol)
    if t < 0:
        raise ValueError(f"tol must be non-negative. Got {tol}")
    if t.is_zero():
        return x.is_zero()
    return abs(x) <= t


def is_regular(x: Decimal) -> bool:
    """Non-zero and finite, i.e. usable as the denominator of a relative error."""
    return x.is_finite() and not x.is_zero()


@contextmanager
def precision(prec: int) -> Iterator[decimal.Context]:
    """Run a block with ``prec`` significant digits (thread-local)."""
    if int(prec) < 1:
        raise ValueError(f"precision must be >= 1. Got {prec}")
    with decimal.localcontext() as ctx:
        ctx.prec = int(prec)
        yield ctx
