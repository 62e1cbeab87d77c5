"""Shared enumerations, errors and array helpers for the linear algebra routines."""

from __future__ import annotations

import enum

import numpy as np

_LAPACK_DTYPES = (
    np.dtype(np.float32),
    np.dtype(np.float64),
    np.dtype(np.complex64),
    np.dtype(np.complex128),
)


class Transpose(enum.Enum):
    """Which operator of a matrix ``A`` to apply: ``A``, ``A^T`` or ``A^H``."""

    NO = 0
    TRANSPOSE = 1
    HERMITE = 2


class UPLO(enum.Enum):
    """Which triangle of a matrix holds the data."""

    UPPER = "U"
    LOWER = "L"


class Diag(enum.Enum):
    """Whether a triangular matrix has an implicit unit diagonal."""

    UNIT = "U"
    NON_UNIT = "N"


class UVTFlag(enum.Enum):
    """How many singular vectors a divide-and-conquer SVD computes."""

    FULL = "A"
    SOME = "S"
    NONE = "N"


class LinalgError(Exception):
    """Base class of every error raised by this package."""


class NotSquareError(LinalgError):
    """The matrix is not square."""

    def __init__(self, rows: int, cols: int) -> None:
        super().__init__(f"Not square: rows({rows}) != cols({cols})")
        self.rows = rows
        self.cols = cols


class NotStandardShapeError(LinalgError):
    """The matrix has a shape the requested object cannot be built from."""

    def __init__(self, obj: str, rows: int, cols: int) -> None:
        super().__init__(f"{obj} cannot be made from a ({rows}, {cols}) matrix")
        self.obj = obj
        self.rows = rows
        self.cols = cols


class ComputationalFailureError(LinalgError):
    """A LAPACK routine reported that the computation could not complete."""

    def __init__(self, routine: str, info: int) -> None:
        super().__init__(f"LAPACK routine {routine} failed with info = {info}")
        self.routine = routine
        self.info = info


def as_matrix(a) -> np.ndarray:
    """Return ``a`` as a two-dimensional array of a LAPACK element type.

    Single and double precision real and complex arrays pass through unchanged;
    other numeric arrays are converted to double precision.
    """
    arr = np.asarray(a)
    if arr.ndim != 2:
        raise LinalgError(f"expected a two-dimensional matrix, got {arr.ndim} dimension(s)")
    if arr.dtype in _LAPACK_DTYPES:
        return arr
    if np.iscomplexobj(arr):
        return arr.astype(np.complex128)
    return arr.astype(np.float64)


def ensure_square(a) -> int:
    """Return the order of the square matrix ``a``; raise if it is not square."""
    arr = np.asarray(a)
    if arr.ndim != 2:
        raise LinalgError(f"expected a two-dimensional matrix, got {arr.ndim} dimension(s)")
    rows, cols = arr.shape
    if rows != cols:
        raise NotSquareError(rows, cols)
    return rows