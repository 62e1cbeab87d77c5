# ndlinalg

Dense linear algebra on NumPy arrays, for real and complex matrices in single
and double precision. Other numeric inputs are converted to double precision.

The package provides:

- `ndlinalg.solve`: the LU factorization (`factorize`, which returns an
  `LUFactorized`). With it you can solve `A x = b`, `A^T x = b` and `A^H x = b`
  (`solve`, `solve_t`, `solve_h`). It also gives inverses (`inv`), determinants
  (`det`, and `sln_det` as a `(sign, ln|det|)` pair) and an estimate of the
  reciprocal condition number in the 1-norm (`rcond`).
- `ndlinalg.solveh`: Hermitian and real symmetric matrices, through the
  Bunch–Kaufman factorization (`factorizeh`, which returns a `BKFactorized`).
  It provides `solveh`, `invh`, `deth` and `sln_deth`. Only the upper triangle
  of the matrix is read.
- `ndlinalg.triangular`: `solve_triangular` for triangular systems with one
  right-hand side or several, and `into_triangular`, which returns a copy with
  the elements outside one triangle set to zero.
- `ndlinalg.tridiagonal`: the `Tridiagonal` matrix, held as its three diagonals.
  It supports `t[i, j]` indexing on the diagonals, the norms `opnorm_one`,
  `opnorm_inf` and `opnorm_fro`, and `factorize` with partial pivoting to
  `LUFactorizedTridiagonal`. It provides `solve`, `solve_t`, `solve_h`, `det`
  and `rcond`. The functions `extract_tridiagonal`, `factorize_tridiagonal`,
  `solve_tridiagonal`, `solve_t_tridiagonal`, `solve_h_tridiagonal`,
  `det_tridiagonal` and `rcond_tridiagonal` accept either a `Tridiagonal` or a
  square matrix. For a square matrix they use only its three diagonals.
- `ndlinalg.svd`: the singular value decomposition. `svd` is the standard
  form. `svddc` is the divide-and-conquer form, with `UVTFlag` controlling how
  many singular vectors it returns.
- `ndlinalg.types`: the enumerations `Transpose`, `UPLO`, `Diag` and `UVTFlag`,
  the error classes, and the helpers `as_matrix` and `ensure_square`.

## Installation

```
pip install ndlinalg
```

NumPy and SciPy are installed with it.

## Usage

General systems:

```python
import numpy as np
from ndlinalg.solve import solve, factorize, det, inv

a = np.array([[3.0, 2.0, -1.0], [2.0, -2.0, 4.0], [-2.0, 1.0, -2.0]])
b = np.array([1.0, -2.0, 0.0])
x = solve(a, b)            # array([ 1., -2., -2.])

lu = factorize(a)          # factorize once, reuse for many right-hand sides
x = lu.solve(b)
xt = lu.solve_t(b)         # solves A^T x = b
print(lu.det(), lu.rcond(), inv(a))
```

The `solve` functions of `ndlinalg.solve` and `ndlinalg.solveh` take a
one-dimensional right-hand side.

Hermitian or real symmetric matrices:

```python
from ndlinalg.solveh import factorizeh, solveh, deth

a = np.array([[3.0, 2.0, -1.0], [2.0, -2.0, 4.0], [-1.0, 4.0, 5.0]])
x = solveh(a, np.array([11.0, -12.0, 1.0]))   # array([ 1.,  3., -2.])
sign, ln_det = factorizeh(a).sln_deth()
```

Triangular systems:

```python
from ndlinalg.types import UPLO, Diag
from ndlinalg.triangular import into_triangular, solve_triangular

u = into_triangular(np.random.rand(3, 3) + np.eye(3), UPLO.UPPER)
x = solve_triangular(u, UPLO.UPPER, Diag.NON_UNIT, np.ones(3))
```

Tridiagonal systems accept a vector or a matrix of right-hand sides:

```python
from ndlinalg.tridiagonal import extract_tridiagonal, solve_tridiagonal

m = np.array([[10.0, -9.0, 0.0], [7.0, -12.0, 11.0], [0.0, 10.0, 3.0]])
t = extract_tridiagonal(m)
print(t.det())             # -1271.0
print(t[1, 0])             # 7.0
x = solve_tridiagonal(t, np.ones(3))
```

Singular value decomposition:

```python
from ndlinalg.svd import svd, svddc
from ndlinalg.types import UVTFlag

u, s, vt = svd(np.random.rand(4, 3), True, True)      # u: (4, 4), vt: (3, 3)
u, s, vt = svddc(np.random.rand(4, 3), UVTFlag.SOME)  # u: (4, 3), vt: (3, 3)
```

The singular values come back in descending order as real numbers. A factor
that was not requested is `None`.

## Errors

All errors derive from `ndlinalg.types.LinalgError`:

- `NotSquareError`: a matrix that has to be square is not.
- `NotStandardShapeError`: a tridiagonal matrix was requested from a matrix
  smaller than 2x2.
- `ComputationalFailureError`: a factorization met an exactly zero pivot, or
  an SVD did not converge. Solving or inverting a singular matrix raises this
  error.

`det`, `sln_det`, `deth` and `sln_deth` do not raise for a matrix whose
factorization fails in this way. The determinant is zero, and the `sln`
variants return `(0, -inf)`.

## What it does not do

The package is a library only and has no command-line tool. It does not
compute eigenvalues, QR or Cholesky factorizations, or least-squares
solutions.

## Tests

```
pip install "ndlinalg[test]"
pytest
```