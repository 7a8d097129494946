import torch
import pytest

from bigmatrix import Matrix


@pytest.fixture(scope="session")
def torch_dtype():
    # float64 references for cross-checking the decimal results.
    return torch.float64


def make_int_matrix(rows: int, cols: int, *, seed: int = 123, low: int = -5, high: int = 6) -> Matrix:
    """
    Deterministic integer matrix. Integer entries keep add/sub/mul exact, so
    algebraic identities can be checked with exact equality.
    """
    g = torch.Generator().manual_seed(seed)
    t = torch.randint(low, high, (rows, cols), generator=g)
    return Matrix.from_rows(t.tolist())


def make_well_conditioned(n: int, *, seed: int = 7, dtype=torch.float64) -> torch.Tensor:
    """Random n x n tensor shifted by n * I so it is safely invertible."""
    g = torch.Generator().manual_seed(seed)
    return torch.randn((n, n), generator=g, dtype=dtype) + n * torch.eye(n, dtype=dtype)


@pytest.fixture
def lu_scenario():
    return Matrix.from_str("1, 5, 8; 9, 55, 24; 4, 2, 0")
