"""Solve triangular systems and cut matrices down to a triangle."""

from __future__ import annotations

import numpy as np
from scipy.linalg import get_lapack_funcs

from .types import (
    UPLO,
    ComputationalFailureError,
    Diag,
    LinalgError,
    as_matrix,
    ensure_square,
)


def solve_triangular(a, uplo: UPLO, diag: Diag, b) -> np.ndarray:
    """Solve ``A * x = b`` where ``A`` is triangular as ``uplo`` says.

    ``b`` may be a vector or a matrix of right-hand sides. With ``Diag.UNIT``
    the diagonal of ``a`` is taken to be all ones. Raises
    ComputationalFailureError when a diagonal element is exactly zero.
    """
    m = as_matrix(a)
    n = ensure_square(m)
    rhs = np.asarray(b)
    if rhs.ndim not in (1, 2) or rhs.shape[0] != n:
        raise LinalgError(
            f"right-hand side of shape {rhs.shape} does not match a ({n}, {n}) matrix"
        )
    vector = rhs.ndim == 1
    dtype = np.result_type(m.dtype, rhs.dtype)
    rhs2 = rhs.reshape(n, -1).astype(dtype, copy=True) if n else rhs.reshape(0, -1).astype(dtype)
    if n == 0 or rhs2.shape[1] == 0:
        x = rhs2
    else:
        m = m.astype(dtype, copy=False)
        (trtrs,) = get_lapack_funcs(("trtrs",), (m, rhs2))
        x, info = trtrs(
            m,
            rhs2,
            lower=int(uplo is UPLO.LOWER),
            trans=0,
            unitdiag=int(diag is Diag.UNIT),
        )
        if info > 0:
            raise ComputationalFailureError("trtrs", info)
        if info < 0:
            raise LinalgError(f"invalid argument {-info} to trtrs")
    x = np.asarray(x)
    return x.reshape(n) if vector else x


def into_triangular(a, uplo: UPLO) -> np.ndarray:
    """Return a copy of ``a`` with the elements outside the ``uplo`` triangle zeroed."""
    m = np.asarray(a)
    if m.ndim != 2:
        raise LinalgError(f"expected a two-dimensional matrix, got {m.ndim} dimension(s)")
    return np.triu(m) if uplo is UPLO.UPPER else np.tril(m)