import decimal
from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest
import torch

import bigmatrix.scalar
from bigmatrix import Matrix, rank
from bigmatrix.scalar import is_regular, is_zero, precision, to_scalar


def test_to_scalar_conversions():
    assert to_scalar(3) == Decimal(3)
    assert to_scalar(0.1) == Decimal("0.1")
    assert to_scalar("  -2.5 ") == Decimal("-2.5")
    assert to_scalar(Fraction(1, 8)) == Decimal("0.125")
    assert to_scalar(np.float64(0.75)) == Decimal("0.75")
    assert to_scalar(torch.tensor(4)) == Decimal(4)
    assert to_scalar(True) == 1

    with pytest.raises(ValueError):
        to_scalar("abc")
    with pytest.raises(ValueError):
        to_scalar(Decimal("NaN"))
    with pytest.raises(TypeError):
        to_scalar(object())


def test_zero_tests():
    assert is_zero(Decimal(0))
    assert is_zero(Decimal("-0"))
    assert not is_zero(Decimal("1e-30"))
    assert is_zero(Decimal("1e-30"), tol="1e-20")
    assert not is_zero(Decimal("-1e-10"), tol="1e-20")

    assert is_regular(Decimal("1e-30"))
    assert not is_regular(Decimal(0))
    assert not is_regular(Decimal("Infinity"))


def test_precision_context_is_scoped():
    before = decimal.getcontext().prec
    with precision(50):
        third = Decimal(1) / Decimal(3)
        assert len(third.as_tuple().digits) == 50
    assert decimal.getcontext().prec == before

    with pytest.raises(ValueError):
        with precision(0):
            pass


def test_negative_tolerance_rejected():
    with pytest.raises(ValueError):
        is_zero(Decimal(0), tol="-1e-9")
    with pytest.raises(ValueError):
        rank(Matrix(2, 2), tol=-1)


def test_module_docstring():
    assert bigmatrix.scalar.__doc__.startswith("Arbitrary-precision scalars")
