# Example 2: inversion, and why the pivoted path matters
from bigmatrix import DecompositionError, Matrix, det, inv, rank, rref

P = Matrix.from_str("0, 1, 0; 0, 0, 1; 1, 0, 0")

try:
    det(P)
except DecompositionError as e:
    print("lu without pivoting fails:", e)
print("det via lup:", det(P, method="lup"))
print("inv(P) == P.T:", inv(P) == P.T)

A = Matrix.from_str("2, -1, 0; -1, 2, -1; 0, -1, 2")
A_inv = inv(A)
print("inv(A) =")
print(A_inv)
print("A @ inv(A) =")
print(A @ A_inv)

S = Matrix.from_str("1, 2, 3; 2, 4, 6; 1, 0, 1")
print("rref(S) =")
print(rref(S))
print("rank(S) =", rank(S))
