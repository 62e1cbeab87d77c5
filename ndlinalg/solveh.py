"""Solve, invert and take determinants of Hermitian (or real symmetric) matrices.

Only the upper triangle of the input matrix is read. The factorization is the
Bunch-Kaufman decomposition ``A = P * U * D * U^H * P^T``.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy.linalg import get_lapack_funcs

from .types import ComputationalFailureError, LinalgError, as_matrix, ensure_square


def _real_type(dtype: np.dtype):
    return np.finfo(dtype).dtype.type


def _blocks(ipiv: np.ndarray) -> list[tuple[int, int, int]]:
    """Return ``(start, size, pivot)`` for each diagonal block, last block first.

    ``ipiv`` is the one-based, signed pivot vector of an upper factorization;
    ``pivot`` is the zero-based row that row ``start`` was interchanged with.
    """
    blocks = []
    k = len(ipiv) - 1
    while k >= 0:
        p = int(ipiv[k])
        if p > 0:
            blocks.append((k, 1, p - 1))
            k -= 1
        else:
            blocks.append((k - 1, 2, -p - 1))
            k -= 2
    return blocks


def _swap_rows(x: np.ndarray, i: int, j: int) -> None:
    if i != j:
        x[[i, j]] = x[[j, i]]


@dataclass
class BKFactorized:
    """The Bunch-Kaufman factorization of a Hermitian (or real symmetric) matrix.

    ``a`` holds the factors ``U`` and ``D`` in its upper triangle and ``ipiv``
    the one-based pivot indices as returned by LAPACK: a negative entry marks
    a 2x2 diagonal block.
    """

    a: np.ndarray
    ipiv: np.ndarray

    def _solve_matrix(self, rhs: np.ndarray) -> np.ndarray:
        ldu = self.a
        x = rhs.astype(np.result_type(ldu.dtype, rhs.dtype), copy=True)
        blocks = _blocks(self.ipiv)

        # x <- U^{-1} x, applying the last elementary factor first.
        for start, size, piv in blocks:
            _swap_rows(x, start, piv)
            v = ldu[:start, start:start + size]
            x[:start] -= v @ x[start:start + size]

        # x <- D^{-1} x.
        for start, size, _ in blocks:
            if size == 1:
                x[start] = x[start] / ldu[start, start].real
            else:
                off = ldu[start, start + 1]
                block = np.array(
                    [
                        [ldu[start, start].real, off],
                        [np.conj(off), ldu[start + 1, start + 1].real],
                    ],
                    dtype=x.dtype,
                )
                x[start:start + 2] = np.linalg.solve(block, x[start:start + 2])

        # x <- U^{-H} x, applying the first elementary factor first.
        for start, size, piv in reversed(blocks):
            v = ldu[:start, start:start + size]
            x[start:start + size] -= v.conj().T @ x[:start]
            _swap_rows(x, start, piv)
        return x

    def solveh(self, b) -> np.ndarray:
        """Solve ``A * x = b`` and return ``x``."""
        n = ensure_square(self.a)
        rhs = np.asarray(b)
        if rhs.ndim != 1 or rhs.shape[0] != n:
            raise LinalgError(
                f"right-hand side of shape {rhs.shape} does not match a ({n}, {n}) matrix"
            )
        return self._solve_matrix(rhs.reshape(n, 1)).reshape(n)

    def invh(self) -> np.ndarray:
        """Return the inverse of the factorized matrix, filled in full."""
        n = ensure_square(self.a)
        return self._solve_matrix(np.eye(n, dtype=self.a.dtype))

    def sln_deth(self):
        """Return ``(sign, natural_log)`` of the determinant.

        ``sign`` is 1, -1 or 0 and ``natural_log`` is the natural logarithm of
        the absolute value of the determinant.
        """
        real = _real_type(self.a.dtype)
        sign = 1.0
        ln_det = 0.0
        a = self.a
        k = 0
        n = len(self.ipiv)
        while k < n:
            if int(self.ipiv[k]) > 0:
                elem = float(a[k, k].real)
                sign *= float(np.sign(elem))
                ln_det += float(np.log(abs(elem))) if elem != 0 else -np.inf
                k += 1
            else:
                upper_diag = float(a[k, k].real)
                lower_diag = float(a[k + 1, k + 1].real)
                off = a[k, k + 1]
                block_det = upper_diag * lower_diag - float(abs(off)) ** 2
                sign *= float(np.sign(block_det))
                ln_det += float(np.log(abs(block_det))) if block_det != 0 else -np.inf
                k += 2
        return real(sign), real(ln_det)

    def deth(self):
        """Return the determinant of the factorized matrix."""
        sign, ln_det = self.sln_deth()
        return sign * np.exp(ln_det)


def factorizeh(a) -> BKFactorized:
    """Compute the Bunch-Kaufman factorization of a copy of ``a``.

    Raises ComputationalFailureError when ``D`` has an exactly zero block.
    """
    m = as_matrix(a).copy()
    n = ensure_square(m)
    if n == 0:
        return BKFactorized(m, np.zeros(0, dtype=np.int32))
    name = "hetrf" if np.iscomplexobj(m) else "sytrf"
    (trf,) = get_lapack_funcs((name,), (m,))
    ldu, ipiv, info = trf(m, lower=0)
    if info < 0:
        raise LinalgError(f"invalid argument {-info} to {name}")
    if info > 0:
        raise ComputationalFailureError(name, info)
    return BKFactorized(np.asarray(ldu), np.asarray(ipiv))


def solveh(a, b) -> np.ndarray:
    """Solve ``A * x = b`` for Hermitian (or real symmetric) ``A``."""
    return factorizeh(a).solveh(b)


def invh(a) -> np.ndarray:
    """Return the inverse of the Hermitian (or real symmetric) matrix ``a``."""
    return factorizeh(a).invh()


def sln_deth(a):
    """Return ``(sign, natural_log)`` of the determinant of ``a``.

    A singular matrix gives ``(0, -inf)``.
    """
    m = as_matrix(a)
    ensure_square(m)
    try:
        fac = factorizeh(m)
    except ComputationalFailureError:
        real = _real_type(m.dtype)
        return real(0), real(-np.inf)
    return fac.sln_deth()


def deth(a):
    """Return the determinant of the Hermitian (or real symmetric) matrix ``a``."""
    sign, ln_det = sln_deth(a)
    return sign * np.exp(ln_det)