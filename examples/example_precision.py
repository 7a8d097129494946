# Example 3: float64 vs. arbitrary precision on a Hilbert matrix
from fractions import Fraction

import torch

from bigmatrix import Matrix, approx_equals, inv, precision

n = 8

with precision(80):
    H = Matrix.from_rows([[Fraction(1, i + j + 1) for j in range(n)] for i in range(n)])
    H_inv = inv(H)
    ok = approx_equals(H @ H_inv, Matrix.identity(n), "1e-50")
    print("decimal, 80 digits: H @ inv(H) == I within 1e-50:", ok)

t = H.to_torch()
t_inv = torch.linalg.inv(t)
err = (t @ t_inv - torch.eye(n, dtype=t.dtype)).abs().max().item()
print(f"torch float64: max |H @ inv(H) - I| = {err:.2e}")
