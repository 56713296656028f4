import numpy as np
import pytest

from dualdiff.config import localcontext
from dualdiff.linalg import LinAlgError, norm, solve


def test_solve():
    x = solve(((6.0, 10.0), (1.0, -1.0)), (33.0, -2.0))
    assert pytest.approx(x) == [0.8125, 2.8125]


def test_singular():
    with pytest.raises(LinAlgError):
        solve([[0.0, 0.0], [1.0, -1.0]], [1.0, 1.0])

    with pytest.raises(LinAlgError):
        solve([[1.0, 2.0], [2.0, 4.0]], [1.0, 1.0])


def test_rcond():
    a = [[1.0, 0.0], [0.0, 1e-10]]
    assert pytest.approx(solve(a, [1.0, 1.0])) == [1.0, 1e10]

    with pytest.raises(LinAlgError):
        solve(a, [1.0, 1.0], rcond=1e-5)

    with localcontext(rcond=1e-5):
        with pytest.raises(LinAlgError):
            solve(a, [1.0, 1.0])


def test_shape():
    with pytest.raises(LinAlgError):
        solve([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]], [1.0, 1.0])

    with pytest.raises(LinAlgError):
        solve(np.eye(2), [1.0, 1.0, 1.0])


def test_norm():
    assert norm((3.0, 4.0)) == 5.0
