# Example 1: LU factorization and determinant of a sample matrix
from bigmatrix import Matrix, det, lu

A = Matrix.from_str("1, 5, 8; 9, 55, 24; 4, 2, 0")

L, U = lu(A)
print("A =")
print(A)
print("L =")
print(L)
print("U =")
print(U)
print("L @ U == A:", L @ U == A)
print("det(A) =", det(A))
