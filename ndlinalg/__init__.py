"""Linear algebra on NumPy arrays: LU and Bunch-Kaufman solvers, triangular and tridiagonal systems, and SVD."""

__version__ = "0.1.0"

__all__ = ["types", "solve", "solveh", "triangular", "tridiagonal", "svd"]