"""Tridiagonal matrices: extraction, LU factorization, solving, determinant and conditioning."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .types import (
    ComputationalFailureError,
    LinalgError,
    NotStandardShapeError,
    Transpose,
    as_matrix,
    ensure_square,
)


def _magnitude(x) -> float:
    """The cheap modulus ``|re| + |im|`` used to choose pivots."""
    return abs(float(np.real(x))) + abs(float(np.imag(x)))


def _one_norm(m: np.ndarray) -> float:
    if m.size == 0:
        return 0.0
    return float(np.abs(m).sum(axis=0).max())


def _prepare_rhs(b, n: int, dtype) -> tuple[np.ndarray, bool]:
    rhs = np.asarray(b)
    if rhs.ndim not in (1, 2) or rhs.shape[0] != n:
        raise LinalgError(
            f"right-hand side of shape {rhs.shape} does not match a ({n}, {n}) matrix"
        )
    vector = rhs.ndim == 1
    x = rhs.reshape(n, -1).astype(np.result_type(dtype, rhs.dtype), copy=True)
    return x, vector


@dataclass(eq=False)
class Tridiagonal:
    """A tridiagonal matrix held as its three diagonals.

    ``dl`` is the sub-diagonal, ``d`` the diagonal and ``du`` the
    super-diagonal; ``dl`` and ``du`` are one element shorter than ``d``.
    """

    dl: np.ndarray
    d: np.ndarray
    du: np.ndarray

    def __post_init__(self) -> None:
        dl, d, du = (np.atleast_1d(np.asarray(v)) for v in (self.dl, self.d, self.du))
        dtype = np.result_type(dl.dtype, d.dtype, du.dtype)
        if not np.issubdtype(dtype, np.inexact):
            dtype = np.dtype(np.float64)
        n = d.shape[0]
        if n == 0 or dl.shape != (n - 1,) or du.shape != (n - 1,):
            raise LinalgError(
                f"diagonals of lengths {dl.shape[0]}, {n}, {du.shape[0]} do not form "
                "a tridiagonal matrix"
            )
        self.dl = dl.astype(dtype, copy=True)
        self.d = d.astype(dtype, copy=True)
        self.du = du.astype(dtype, copy=True)

    @property
    def n(self) -> int:
        """The order of the matrix."""
        return self.d.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self.d.dtype

    def _locate(self, index) -> tuple[np.ndarray, int]:
        i, j = (int(k) for k in index)
        n = self.n
        if not (0 <= i < n and 0 <= j < n):
            raise IndexError(f"index ({i}, {j}) out of range for a ({n}, {n}) matrix")
        if i == j:
            return self.d, i
        if i == j + 1:
            return self.dl, j
        if j == i + 1:
            return self.du, i
        raise IndexError(f"index ({i}, {j}) lies outside the three diagonals")

    def __getitem__(self, index):
        diagonal, k = self._locate(index)
        return diagonal[k]

    def __setitem__(self, index, value) -> None:
        diagonal, k = self._locate(index)
        diagonal[k] = value

    def _dense(self) -> np.ndarray:
        n = self.n
        m = np.zeros((n, n), dtype=self.dtype)
        m[np.arange(n), np.arange(n)] = self.d
        m[np.arange(1, n), np.arange(n - 1)] = self.dl
        m[np.arange(n - 1), np.arange(1, n)] = self.du
        return m

    def opnorm_one(self) -> float:
        """Return the 1-norm: the largest absolute column sum."""
        return _one_norm(self._dense())

    def opnorm_inf(self) -> float:
        """Return the infinity norm: the largest absolute row sum."""
        return float(np.abs(self._dense()).sum(axis=1).max())

    def opnorm_fro(self) -> float:
        """Return the Frobenius norm."""
        return float(
            np.sqrt(sum(float(np.sum(np.abs(v) ** 2)) for v in (self.dl, self.d, self.du)))
        )

    def factorize(self) -> LUFactorizedTridiagonal:
        """Compute the LU factorization ``A = P*L*U`` with partial pivoting.

        Raises ComputationalFailureError when ``U`` has an exactly zero pivot.
        """
        n = self.n
        dl = self.dl.copy()
        d = self.d.copy()
        du = self.du.copy()
        du2 = np.zeros(max(n - 2, 0), dtype=self.dtype)
        ipiv = np.arange(n)
        for i in range(n - 1):
            if _magnitude(d[i]) >= _magnitude(dl[i]):
                if d[i] != 0:
                    fact = dl[i] / d[i]
                    dl[i] = fact
                    d[i + 1] -= fact * du[i]
            else:
                fact = d[i] / dl[i]
                d[i] = dl[i]
                dl[i] = fact
                temp = du[i]
                du[i] = d[i + 1]
                d[i + 1] = temp - fact * d[i + 1]
                if i < n - 2:
                    du2[i] = du[i + 1]
                    du[i + 1] = -fact * du[i + 1]
                ipiv[i] = i + 1
        zeros = np.flatnonzero(d == 0)
        if zeros.size:
            raise ComputationalFailureError("gttrf", int(zeros[0]) + 1)
        return LUFactorizedTridiagonal(dl, d, du, du2, ipiv, self.opnorm_one())

    def solve(self, b) -> np.ndarray:
        """Solve ``A * x = b`` and return ``x``."""
        return self.factorize().solve(b)

    def solve_t(self, b) -> np.ndarray:
        """Solve ``A^T * x = b`` and return ``x``."""
        return self.factorize().solve_t(b)

    def solve_h(self, b) -> np.ndarray:
        """Solve ``A^H * x = b`` and return ``x``."""
        return self.factorize().solve_h(b)

    def det(self):
        """Return the determinant through the three-term recurrence.

        ``f_k = d_k f_{k-1} - dl_{k-1} du_{k-1} f_{k-2}`` with ``f_0 = 1``.
        """
        prev = self.dtype.type(1)
        cur = self.d[0]
        for d_k, dl_k, du_k in zip(self.d[1:], self.dl, self.du):
            prev, cur = cur, d_k * cur - dl_k * du_k * prev
        return self.dtype.type(cur)


@dataclass(eq=False)
class LUFactorizedTridiagonal:
    """The LU factorization of a tridiagonal matrix.

    ``dl`` holds the multipliers of ``L``; ``d``, ``du`` and ``du2`` the
    diagonal and the two super-diagonals of ``U``; ``ipiv`` the zero-based
    row interchanges and ``anorm`` the 1-norm of the original matrix.
    """

    dl: np.ndarray
    d: np.ndarray
    du: np.ndarray
    du2: np.ndarray
    ipiv: np.ndarray
    anorm: float = field(default=0.0)

    def _solve(self, b, trans: Transpose) -> np.ndarray:
        n = self.d.shape[0]
        x, vector = _prepare_rhs(b, n, self.d.dtype)
        if trans is Transpose.NO:
            self._apply_no_trans(x)
        else:
            conj = trans is Transpose.HERMITE
            self._apply_trans(x, conj)
        return x.reshape(n) if vector else x

    def _apply_no_trans(self, x: np.ndarray) -> None:
        n = self.d.shape[0]
        dl, d, du, du2 = self.dl, self.d, self.du, self.du2
        for i in range(n - 1):
            if self.ipiv[i] == i:
                x[i + 1] -= dl[i] * x[i]
            else:
                temp = x[i] - dl[i] * x[i + 1]
                x[i] = x[i + 1]
                x[i + 1] = temp
        x[n - 1] /= d[n - 1]
        if n > 1:
            x[n - 2] = (x[n - 2] - du[n - 2] * x[n - 1]) / d[n - 2]
        for i in range(n - 3, -1, -1):
            x[i] = (x[i] - du[i] * x[i + 1] - du2[i] * x[i + 2]) / d[i]

    def _apply_trans(self, x: np.ndarray, conj: bool) -> None:
        n = self.d.shape[0]
        dl, d, du, du2 = self.dl, self.d, self.du, self.du2
        if conj:
            dl, d, du, du2 = (np.conj(v) for v in (dl, d, du, du2))
        x[0] /= d[0]
        if n > 1:
            x[1] = (x[1] - du[0] * x[0]) / d[1]
        for i in range(2, n):
            x[i] = (x[i] - du[i - 1] * x[i - 1] - du2[i - 2] * x[i - 2]) / d[i]
        for i in range(n - 2, -1, -1):
            if self.ipiv[i] == i:
                x[i] -= dl[i] * x[i + 1]
            else:
                temp = x[i] - dl[i] * x[i + 1]
                x[i] = x[i + 1]
                x[i + 1] = temp

    def solve(self, b) -> np.ndarray:
        """Solve ``A * x = b`` and return ``x``."""
        return self._solve(b, Transpose.NO)

    def solve_t(self, b) -> np.ndarray:
        """Solve ``A^T * x = b`` and return ``x``."""
        return self._solve(b, Transpose.TRANSPOSE)

    def solve_h(self, b) -> np.ndarray:
        """Solve ``A^H * x = b`` and return ``x``."""
        return self._solve(b, Transpose.HERMITE)

    def rcond(self) -> float:
        """Return the reciprocal condition number in the 1-norm.

        Near 0 the matrix is badly conditioned, near 1 it is well conditioned.
        """
        n = self.d.shape[0]
        if self.anorm == 0.0:
            return 0.0
        inverse = self.solve(np.eye(n, dtype=self.d.dtype))
        ainvnorm = _one_norm(inverse)
        if ainvnorm == 0.0:
            return 0.0
        return 1.0 / (self.anorm * ainvnorm)


def extract_tridiagonal(a) -> Tridiagonal:
    """Return the three diagonals of the square matrix ``a``.

    Elements outside them are ignored. The matrix must be at least 2x2.
    """
    m = as_matrix(a)
    n = ensure_square(m)
    if n < 2:
        raise NotStandardShapeError("Tridiagonal", 1, 1)
    return Tridiagonal(
        dl=np.diagonal(m, offset=-1).copy(),
        d=np.diagonal(m).copy(),
        du=np.diagonal(m, offset=1).copy(),
    )


def _as_tridiagonal(a) -> Tridiagonal:
    return a if isinstance(a, Tridiagonal) else extract_tridiagonal(a)


def factorize_tridiagonal(a) -> LUFactorizedTridiagonal:
    """Compute the LU factorization of a Tridiagonal or of a matrix's three diagonals."""
    return _as_tridiagonal(a).factorize()


def solve_tridiagonal(a, b) -> np.ndarray:
    """Solve ``A * x = b`` with tridiagonal ``A``."""
    return factorize_tridiagonal(a).solve(b)


def solve_t_tridiagonal(a, b) -> np.ndarray:
    """Solve ``A^T * x = b`` with tridiagonal ``A``."""
    return factorize_tridiagonal(a).solve_t(b)


def solve_h_tridiagonal(a, b) -> np.ndarray:
    """Solve ``A^H * x = b`` with tridiagonal ``A``."""
    return factorize_tridiagonal(a).solve_h(b)


def det_tridiagonal(a):
    """Return the determinant of the tridiagonal part of ``a``."""
    return _as_tridiagonal(a).det()


def rcond_tridiagonal(a) -> float:
    """Return the reciprocal condition number of the tridiagonal part of ``a``."""
    if isinstance(a, LUFactorizedTridiagonal):
        return a.rcond()
    return factorize_tridiagonal(a).rcond()