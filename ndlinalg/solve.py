"""Solve general linear systems, invert matrices and compute determinants via LU."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy.linalg import get_lapack_funcs

from .types import (
    ComputationalFailureError,
    LinalgError,
    Transpose,
    as_matrix,
    ensure_square,
)


def _one_norm(m: np.ndarray) -> float:
    if m.size == 0:
        return 0.0
    return float(np.abs(m).sum(axis=0).max())


def _real_type(dtype: np.dtype):
    return np.finfo(dtype).dtype.type


@dataclass
class LUFactorized:
    """The LU factorization ``A = P*L*U`` of a matrix.

    ``a`` holds ``L`` and ``U`` together (the unit diagonal of ``L`` is not
    stored), ``ipiv`` the zero-based row interchanges and ``anorm`` the 1-norm
    of the original matrix.
    """

    a: np.ndarray
    ipiv: np.ndarray
    anorm: float

    def _solve(self, b, trans: Transpose) -> np.ndarray:
        n = ensure_square(self.a)
        rhs = np.asarray(b)
        if rhs.ndim != 1 or rhs.shape[0] != n:
            raise LinalgError(
                f"right-hand side of shape {rhs.shape} does not match a ({n}, {n}) matrix"
            )
        rhs = rhs.astype(np.result_type(self.a.dtype, rhs.dtype), copy=True)
        if n == 0:
            return rhs
        (getrs,) = get_lapack_funcs(("getrs",), (self.a, rhs))
        x, info = getrs(self.a, self.ipiv, rhs, trans=trans.value)
        if info < 0:
            raise LinalgError(f"invalid argument {-info} to getrs")
        return x

    def solve(self, b) -> np.ndarray:
        """Solve ``A * x = b`` and return ``x``."""
        return self._solve(b, Transpose.NO)

    def solve_t(self, b) -> np.ndarray:
        """Solve ``A^T * x = b`` and return ``x``."""
        return self._solve(b, Transpose.TRANSPOSE)

    def solve_h(self, b) -> np.ndarray:
        """Solve ``A^H * x = b`` and return ``x``."""
        return self._solve(b, Transpose.HERMITE)

    def inv(self) -> np.ndarray:
        """Return the inverse of the factorized matrix."""
        n = ensure_square(self.a)
        if n == 0:
            return self.a.copy()
        (getri,) = get_lapack_funcs(("getri",), (self.a,))
        inverse, info = getri(self.a, self.ipiv)
        if info > 0:
            raise ComputationalFailureError("getri", info)
        if info < 0:
            raise LinalgError(f"invalid argument {-info} to getri")
        return inverse

    def sln_det(self):
        """Return ``(sign, natural_log)`` of the determinant.

        For real matrices ``sign`` is 1 or -1, for complex ones a number of
        absolute value 1; ``natural_log`` is the log of the absolute value.
        """
        ensure_square(self.a)
        swaps = int(np.count_nonzero(self.ipiv != np.arange(len(self.ipiv))))
        diag = np.diagonal(self.a)
        abs_diag = np.abs(diag)
        sign = (-1 if swaps % 2 else 1) * np.prod(diag / abs_diag)
        ln_det = np.sum(np.log(abs_diag))
        return self.a.dtype.type(sign), _real_type(self.a.dtype)(ln_det)

    def det(self):
        """Return the determinant of the factorized matrix."""
        sign, ln_det = self.sln_det()
        return sign * np.exp(ln_det)

    def rcond(self) -> float:
        """Estimate the reciprocal condition number in the 1-norm."""
        n = ensure_square(self.a)
        if n == 0:
            return 1.0
        (gecon,) = get_lapack_funcs(("gecon",), (self.a,))
        value, info = gecon(self.a, self.anorm, norm="1")
        if info < 0:
            raise LinalgError(f"invalid argument {-info} to gecon")
        return float(value)


def factorize(a) -> LUFactorized:
    """Compute the LU factorization ``A = P*L*U`` of a copy of ``a``.

    Raises ComputationalFailureError when ``U`` has an exactly zero pivot.
    """
    m = as_matrix(a).copy()
    anorm = _one_norm(m)
    if min(m.shape) == 0:
        return LUFactorized(m, np.zeros(0, dtype=np.int32), anorm)
    (getrf,) = get_lapack_funcs(("getrf",), (m,))
    lu, piv, info = getrf(m, overwrite_a=True)
    if info < 0:
        raise LinalgError(f"invalid argument {-info} to getrf")
    if info > 0:
        raise ComputationalFailureError("getrf", info)
    return LUFactorized(lu, piv, anorm)


def solve(a, b) -> np.ndarray:
    """Solve ``A * x = b`` for ``x``."""
    return factorize(a).solve(b)


def solve_t(a, b) -> np.ndarray:
    """Solve ``A^T * x = b`` for ``x``."""
    return factorize(a).solve_t(b)


def solve_h(a, b) -> np.ndarray:
    """Solve ``A^H * x = b`` for ``x``."""
    return factorize(a).solve_h(b)


def inv(a) -> np.ndarray:
    """Return the inverse of ``a``."""
    return factorize(a).inv()


def sln_det(a):
    """Return ``(sign, natural_log)`` of the determinant of ``a``.

    A singular matrix gives ``(0, -inf)``.
    """
    m = as_matrix(a)
    ensure_square(m)
    try:
        fac = factorize(m)
    except ComputationalFailureError:
        return m.dtype.type(0), _real_type(m.dtype)(-np.inf)
    return fac.sln_det()


def det(a):
    """Return the determinant of ``a``."""
    sign, ln_det = sln_det(a)
    return sign * np.exp(ln_det)


def rcond(a) -> float:
    """Estimate the reciprocal condition number of ``a`` in the 1-norm."""
    return factorize(a).rcond()