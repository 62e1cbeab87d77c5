"""Singular-value decomposition, by the QR iteration and by divide-and-conquer."""

from __future__ import annotations

import numpy as np
import scipy.linalg

from .types import ComputationalFailureError, LinalgError, UVTFlag, as_matrix


def _real_dtype(dtype: np.dtype) -> np.dtype:
    return np.finfo(dtype).dtype


def _decompose(m: np.ndarray, full: bool, vectors: bool, driver: str):
    """Run the LAPACK driver and map its failures to package errors."""
    try:
        result = scipy.linalg.svd(
            m,
            full_matrices=full,
            compute_uv=vectors,
            overwrite_a=True,
            lapack_driver=driver,
        )
    except np.linalg.LinAlgError as exc:
        raise ComputationalFailureError(driver, 1) from exc
    except ValueError as exc:
        raise LinalgError(str(exc)) from exc
    if vectors:
        u, s, vt = result
        return np.asarray(u), np.asarray(s), np.asarray(vt)
    return None, np.asarray(result), None


def svd(a, calc_u: bool, calc_vt: bool):
    """Return ``(u, s, vt)`` with ``a = u @ diag(s) @ vt``.

    For an ``(n, m)`` matrix ``u`` is ``(n, n)`` and ``vt`` is ``(m, m)``;
    either is ``None`` unless asked for. ``s`` holds the singular values in
    descending order as real numbers.
    """
    m = as_matrix(a).copy()
    n_rows, n_cols = m.shape
    want_vectors = bool(calc_u or calc_vt)
    if m.size == 0:
        u = np.eye(n_rows, dtype=m.dtype)
        s = np.zeros(0, dtype=_real_dtype(m.dtype))
        vt = np.eye(n_cols, dtype=m.dtype)
    else:
        u, s, vt = _decompose(m, full=True, vectors=want_vectors, driver="gesvd")
    return (u if calc_u else None), s, (vt if calc_vt else None)


def svddc(a, uvt_flag: UVTFlag):
    """Return ``(u, s, vt)`` computed by divide-and-conquer.

    For an ``(m, n)`` matrix and ``k = min(m, n)``: with ``UVTFlag.FULL`` ``u``
    is ``(m, m)`` and ``vt`` is ``(n, n)``; with ``UVTFlag.SOME`` ``u`` is
    ``(m, k)`` and ``vt`` is ``(k, n)``; with ``UVTFlag.NONE`` both are
    ``None``. ``s`` holds the singular values in descending order.
    """
    if not isinstance(uvt_flag, UVTFlag):
        raise LinalgError(f"expected a UVTFlag, got {uvt_flag!r}")
    m = as_matrix(a).copy()
    rows, cols = m.shape
    k = min(rows, cols)
    if uvt_flag is UVTFlag.NONE:
        if m.size == 0:
            return None, np.zeros(0, dtype=_real_dtype(m.dtype)), None
        _, s, _ = _decompose(m, full=False, vectors=False, driver="gesdd")
        return None, s, None
    full = uvt_flag is UVTFlag.FULL
    if m.size == 0:
        u_cols, vt_rows = (rows, cols) if full else (k, k)
        u = np.eye(rows, u_cols, dtype=m.dtype)
        vt = np.eye(vt_rows, cols, dtype=m.dtype)
        return u, np.zeros(0, dtype=_real_dtype(m.dtype)), vt
    return _decompose(m, full=full, vectors=True, driver="gesdd")