import numpy as np
import pytest

from ndlinalg.solve import det, rcond, solve, solve_t
from ndlinalg.tridiagonal import (
    LUFactorizedTridiagonal,
    Tridiagonal,
    det_tridiagonal,
    extract_tridiagonal,
    factorize_tridiagonal,
    rcond_tridiagonal,
    solve_h_tridiagonal,
    solve_t_tridiagonal,
    solve_tridiagonal,
)
from ndlinalg.types import ComputationalFailureError, NotSquareError, NotStandardShapeError

A_REAL = np.array(
    [
        [3.0, 2.1, 0.0, 0.0, 0.0],
        [3.4, 2.3, -1.0, 0.0, 0.0],
        [0.0, 3.6, -5.0, 1.9, 0.0],
        [0.0, 0.0, 7.0, -0.9, 8.0],
        [0.0, 0.0, 0.0, -6.0, 7.1],
    ]
)

A_COMPLEX = np.array(
    [
        [-1.3 + 1.3j, 2.0 - 1.0j, 0, 0, 0],
        [1.0 - 2.0j, -1.3 + 1.3j, 2.0 + 1.0j, 0, 0],
        [0, 1.0 + 1.0j, -1.3 + 3.3j, -1.0 + 1.0j, 0],
        [0, 0, 2.0 - 3.0j, -0.3 + 4.3j, 1.0 - 1.0j],
        [0, 0, 0, 1.0 + 1.0j, -3.3 + 1.3j],
    ],
    dtype=np.complex128,
)


def _random_tridiagonal(n, seed):
    rng = np.random.default_rng(seed)
    a = rng.random((n, n))
    return np.triu(np.tril(a, 1), -1)


def test_extract_tridiagonal():
    a = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 9.0]])
    t = extract_tridiagonal(a)
    np.testing.assert_allclose(t.dl, [4.0, 8.0])
    np.testing.assert_allclose(t.d, [1.0, 5.0, 9.0])
    np.testing.assert_allclose(t.du, [2.0, 6.0])


def test_tridiagonal_index():
    a = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 9.0]])
    t1 = extract_tridiagonal(a)
    t2 = extract_tridiagonal(np.eye(3))
    t2[0, 1] = 2.0
    t2[1, 0] = 4.0
    t2[1, 1] += 4.0
    t2[1, 2] = 6.0
    t2[2, 1] = 8.0
    t2[2, 2] += 8.0
    np.testing.assert_array_equal(t1.dl, t2.dl)
    np.testing.assert_array_equal(t1.d, t2.d)
    np.testing.assert_array_equal(t1.du, t2.du)
    assert t1[2, 1] == 8.0


def test_index_outside_band_raises():
    t = extract_tridiagonal(np.eye(3))
    assert t[0, 1] == 0.0
    assert t[1, 1] == 1.0
    with pytest.raises(IndexError):
        t[0, 2]


def test_opnorm_tridiagonal():
    a = _random_tridiagonal(4, 1)
    t = extract_tridiagonal(a)
    assert t.opnorm_one() == pytest.approx(np.linalg.norm(a, 1), abs=1e-7)
    assert t.opnorm_inf() == pytest.approx(np.linalg.norm(a, np.inf), abs=1e-7)
    assert t.opnorm_fro() == pytest.approx(np.linalg.norm(a, "fro"), abs=1e-7)


def test_solve_tridiagonal_f64():
    b = np.array([[2.7, 6.6], [-0.5, 10.8], [2.6, -3.2], [0.6, -11.2], [2.7, 19.1]])
    x = np.array([[-4.0, 5.0], [7.0, -4.0], [3.0, -3.0], [-4.0, -2.0], [-3.0, 1.0]])
    y = solve_tridiagonal(A_REAL, b)
    np.testing.assert_allclose(y, x, atol=1e-7)


def test_solve_tridiagonal_c64():
    b = np.array(
        [
            [2.4 - 5.0j, 2.7 + 6.9j],
            [3.4 + 18.2j, -6.9 - 5.3j],
            [-14.7 + 9.7j, -6.0 - 0.6j],
            [31.9 - 7.7j, -3.9 + 9.3j],
            [-1.0 + 1.6j, -3.0 + 12.2j],
        ]
    )
    x = np.array(
        [
            [1.0 + 1.0j, 2.0 - 1.0j],
            [3.0 - 1.0j, 1.0 + 2.0j],
            [4.0 + 5.0j, -1.0 + 1.0j],
            [-1.0 - 2.0j, 2.0 + 1.0j],
            [1.0 - 1.0j, 2.0 - 2.0j],
        ]
    )
    y = solve_tridiagonal(A_COMPLEX, b)
    np.testing.assert_allclose(y, x, atol=1e-7)


def test_solve_tridiagonal_random():
    a = _random_tridiagonal(3, 2)
    x = np.random.default_rng(3).random(3)
    b = a @ x
    y1 = solve_tridiagonal(a, b)
    y2 = solve(a, b)
    assert y1.shape == (3,)
    np.testing.assert_allclose(y1, x, atol=1e-7)
    np.testing.assert_allclose(y1, y2, atol=1e-7)


def test_solve_tridiagonal_random_t():
    a = _random_tridiagonal(3, 4)
    x = np.random.default_rng(5).random(3)
    b = a.T @ x
    y1 = solve_t_tridiagonal(a, b)
    y2 = solve_t(a, b)
    np.testing.assert_allclose(y1, x, atol=1e-7)
    np.testing.assert_allclose(y1, y2, atol=1e-7)


def test_solve_h_tridiagonal_complex():
    x = np.array([1.0 + 2.0j, -1.0j, 3.0, 0.5 - 0.5j, 2.0 + 1.0j])
    b = A_COMPLEX.conj().T @ x
    np.testing.assert_allclose(solve_h_tridiagonal(A_COMPLEX, b), x, atol=1e-9)


def test_extract_tridiagonal_solve_random():
    a = _random_tridiagonal(3, 6)
    tridiag = extract_tridiagonal(a)
    x = np.random.default_rng(7).random(3)
    b = a @ x
    y1 = tridiag.solve(b)
    y2 = solve(a, b)
    np.testing.assert_allclose(y1, x, atol=1e-7)
    np.testing.assert_allclose(y1, y2, atol=1e-7)


def test_factorized_reused_for_many_rhs():
    f = factorize_tridiagonal(A_REAL)
    assert isinstance(f, LUFactorizedTridiagonal)
    rng = np.random.default_rng(8)
    for _ in range(3):
        x = rng.random(5)
        np.testing.assert_allclose(f.solve(A_REAL @ x), x, atol=1e-9)
        np.testing.assert_allclose(f.solve_t(A_REAL.T @ x), x, atol=1e-9)


def test_det_tridiagonal_f64():
    a = np.array([[10.0, -9.0, 0.0], [7.0, -12.0, 11.0], [0.0, 10.0, 3.0]])
    assert det_tridiagonal(a) == pytest.approx(-1271.0, abs=1e-7)
    assert det_tridiagonal(a) == pytest.approx(det(a), abs=1e-7)


def test_det_tridiagonal_random():
    a = _random_tridiagonal(3, 9)
    assert det_tridiagonal(a) == pytest.approx(det(a), abs=1e-7)


def test_tridiagonal_det_method():
    t = Tridiagonal(dl=[7.0, 10.0], d=[10.0, -12.0, 3.0], du=[-9.0, 11.0])
    assert t.det() == pytest.approx(-1271.0, abs=1e-7)


def test_rcond_tridiagonal_f64():
    assert 1.0 / rcond_tridiagonal(A_REAL) == pytest.approx(92.7, abs=0.1)
    assert rcond_tridiagonal(A_REAL) == pytest.approx(rcond(A_REAL), abs=1e-3)


def test_rcond_tridiagonal_c64():
    assert 1.0 / rcond_tridiagonal(A_COMPLEX) == pytest.approx(184.0, abs=1.0)
    assert rcond_tridiagonal(A_COMPLEX) == pytest.approx(rcond(A_COMPLEX), abs=1e-3)


@pytest.mark.parametrize("rows", [2, 3, 4, 5])
@pytest.mark.parametrize(
    "dtype, atol",
    [(np.float64, 1e-9), (np.float32, 1e-3), (np.complex128, 1e-9), (np.complex64, 1e-3)],
)
def test_rcond_tridiagonal_identity(rows, dtype, atol):
    a = np.eye(rows, dtype=dtype)
    assert rcond_tridiagonal(a) == pytest.approx(1.0, abs=atol)


def test_extract_requires_square():
    with pytest.raises(NotSquareError):
        extract_tridiagonal(np.zeros((2, 3)))


def test_extract_requires_at_least_two_rows():
    with pytest.raises(NotStandardShapeError):
        extract_tridiagonal(np.ones((1, 1)))


def test_singular_factorization_raises():
    with pytest.raises(ComputationalFailureError):
        factorize_tridiagonal(np.zeros((3, 3)))


def test_mismatched_diagonals_rejected():
    valid = Tridiagonal(dl=[1.0, 2.0], d=[1.0, 2.0, 3.0], du=[1.0, 2.0])
    np.testing.assert_array_equal(valid.d, [1.0, 2.0, 3.0])
    with pytest.raises(Exception, match="tridiagonal"):
        Tridiagonal(dl=[1.0], d=[1.0, 2.0, 3.0], du=[1.0, 2.0])