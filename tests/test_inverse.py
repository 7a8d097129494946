import numpy as np
import pytest
import torch

from bigmatrix import (
    Matrix,
    NotSquareError,
    NotSupportedError,
    ShapeError,
    SingularMatrixError,
    approx_equals,
    as_matrix,
    inv,
    solve,
)
from bigmatrix.linalg import get_inverse_method, list_inverse_methods, register_inverse_method
from bigmatrix.linalg import inverse as inverse_mod
from conftest import make_well_conditioned


@pytest.mark.parametrize("method", ["gauss_jordan", "lup"])
def test_inverse_exact(method):
    A = Matrix.from_rows([[4, 7], [2, 6]])
    A_inv = inv(A, method=method)
    assert A_inv == Matrix.from_rows([["0.6", "-0.7"], ["-0.2", "0.4"]])
    assert A @ A_inv == Matrix.identity(2)
    assert A_inv @ A == Matrix.identity(2)


@pytest.mark.parametrize("method", ["gauss_jordan", "lup"])
def test_inverse_needs_row_exchange(method):
    P = Matrix.from_rows([[0, 1], [1, 0]])
    assert inv(P, method=method) == P


@pytest.mark.parametrize(
    "A",
    [
        Matrix.from_rows([[1, 2], [0, 0]]),
        Matrix.from_rows([[1, 2], [2, 4]]),
        Matrix.from_rows([[0, 0, 0], [1, 2, 3], [4, 5, 6]]),
    ],
)
def test_singular_raises(A):
    with pytest.raises(SingularMatrixError):
        inv(A)
    with pytest.raises(SingularMatrixError):
        inv(A, method="lup")


def test_inverse_requires_square():
    with pytest.raises(NotSquareError):
        inv(Matrix(2, 3))


def test_inverse_of_empty_matrix():
    assert inv(Matrix(0, 0)).shape == (0, 0)


def test_inverse_matches_torch(torch_dtype):
    for n in (3, 5):
        t = make_well_conditioned(n, seed=n, dtype=torch_dtype)
        A = as_matrix(t)
        ref = torch.linalg.inv(t)

        for method in list_inverse_methods():
            A_inv = inv(A, method=method)
            assert torch.max(torch.abs(A_inv.to_torch() - ref)).item() < 1e-10
            assert approx_equals(A @ A_inv, Matrix.identity(n), "1e-20")


def test_methods_agree():
    A = Matrix.from_str("2, -1, 0; -1, 2, -1; 0, -1, 2")
    assert approx_equals(inv(A), inv(A, method="lup"), "1e-25")


def test_inverse_registry_lists_builtins():
    methods = list_inverse_methods()
    assert "gauss_jordan" in methods
    assert "lup" in methods
    assert callable(get_inverse_method(" LUP "))


def test_inverse_registry_unknown_raises():
    with pytest.raises(NotSupportedError):
        get_inverse_method("does_not_exist")
    with pytest.raises(NotSupportedError):
        inv(Matrix.identity(2), method="does_not_exist")
    with pytest.raises(ValueError):
        register_inverse_method("  ", lambda A, factors, tol: A)


def test_register_custom_inverse_method(monkeypatch):
    monkeypatch.setattr(inverse_mod, "_REGISTRY", dict(inverse_mod._REGISTRY))
    calls = []

    def transpose_inverse(A, factors, *, tol):
        # valid for orthogonal matrices only
        calls.append(factors.sign)
        return A.T

    register_inverse_method("Orthogonal", transpose_inverse)
    P = Matrix.from_rows([[0, 1, 0], [0, 0, 1], [1, 0, 0]])
    assert inv(P, method="orthogonal") == P.T
    assert len(calls) == 1


def test_solve_vector_and_matrix_rhs():
    A = Matrix.from_rows([[2, 1], [1, 3]])
    x = solve(A, [3, 5])
    assert x == Matrix.from_rows([["0.8"], ["1.4"]])

    B = Matrix.from_rows([[3, 1], [5, 0]])
    X = solve(A, B)
    assert X.shape == (2, 2)
    assert A @ X == B


def test_solve_matches_torch(torch_dtype):
    t = make_well_conditioned(4, seed=21, dtype=torch_dtype)
    b = torch.arange(1, 5, dtype=torch_dtype)
    x = solve(t, b)
    ref = torch.linalg.solve(t, b)
    assert torch.max(torch.abs(x.to_torch().squeeze(-1) - ref)).item() < 1e-10


def test_solve_errors():
    A = Matrix.from_rows([[2, 1], [1, 3]])
    with pytest.raises(ShapeError):
        solve(A, Matrix(3, 1))
    with pytest.raises(NotSquareError):
        solve(Matrix(2, 3), Matrix(2, 1))
    with pytest.raises(SingularMatrixError):
        solve(Matrix.from_rows([[1, 2], [2, 4]]), [1, 1])


# U[1, 1] ends up as a 1E-28 rounding residue of 1/3
_NEAR_SINGULAR = Matrix.from_rows([[3, 1, 0], [1, "0.3333333333333333333333333334", 0], [0, 0, 1]])


@pytest.mark.parametrize("method", ["gauss_jordan", "lup"])
def test_inverse_tolerance_flags_residue_pivot(method):
    with pytest.warns(RuntimeWarning):
        A_inv = inv(_NEAR_SINGULAR, method=method)
    assert A_inv.shape == (3, 3)

    with pytest.raises(SingularMatrixError):
        inv(_NEAR_SINGULAR, method=method, tol="1e-20")


def test_solve_tolerance_flags_residue_pivot():
    with pytest.warns(RuntimeWarning):
        x = solve(_NEAR_SINGULAR, [1, 1, 1])
    assert x.shape == (3, 1)

    with pytest.raises(SingularMatrixError):
        solve(_NEAR_SINGULAR, [1, 1, 1], tol="1e-20")


def test_solve_tolerance_keeps_regular_systems():
    A = Matrix.from_rows([[2, 1], [1, 3]])
    assert solve(A, [3, 5], tol="1e-20") == Matrix.from_rows([["0.8"], ["1.4"]])
    assert inv(A, tol="1e-20", method="lup") == inv(A)


def test_solve_only_transposes_one_dimensional_rhs():
    I3 = Matrix.identity(3)
    assert solve(I3, np.array([1, 2, 3])) == Matrix.from_rows([[1], [2], [3]])
    assert solve(I3, (1, 2, 3)).shape == (3, 1)

    with pytest.raises(ShapeError):
        solve(I3, np.array([[1, 2, 3]]))
    with pytest.raises(ShapeError):
        solve(I3, [[1, 2, 3]])
    with pytest.raises(ShapeError):
        solve(I3, torch.tensor([[1.0, 2.0, 3.0]]))
