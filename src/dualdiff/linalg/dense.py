from collections.abc import Sequence
from typing import Any

import numpy as np
import numpy.typing as npt

from dualdiff.config import getcontext


class LinAlgError(ValueError):
    """Error raised by :mod:`dualdiff.linalg` functions."""


def solve(
    a: npt.ArrayLike | Sequence[Sequence[Any]],
    b: npt.ArrayLike | Sequence[Any],
    rcond: float | None = None,
) -> npt.NDArray[np.float64]:
    """Solve a linear equation ``a @ x = b`` in double precision.

    Parameters
    ----------
    a : array_like, shape (n, n)
        Coefficient matrix.
    b : array_like, shape (n,)
        Right-hand side of the equation.
    rcond : float, optional
        `a` is regarded as singular if its reciprocal condition number is less than
        `rcond` (the default is ``getcontext().rcond``, or the machine epsilon if it
        is also ``None``).

    Returns
    -------
    ndarray, shape (n,)

    Raises
    ------
    LinAlgError
        If `a` is not square, its shape does not match `b`, or `a` is numerically
        singular.

    Notes
    -----
    The condition number is not tested if `a` has non-finite entries, so that NaN
    or infinity is propagated to the result instead of being reported as
    singularity.

    Examples
    --------
    >>> solve([[2.0, 0.0], [0.0, 4.0]], [1.0, 1.0])
    array([0.5 , 0.25])
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)

    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise LinAlgError("matrix must be square")

    if b.ndim != 1 or b.shape[0] != a.shape[0]:
        raise LinAlgError(f"shapes {a.shape} and {b.shape} are not aligned")

    if rcond is None:
        rcond = getcontext().rcond

    if rcond is None:
        rcond = float(np.finfo(a.dtype).eps)

    if np.all(np.isfinite(a)) and not 1 / np.linalg.cond(a) >= rcond:
        raise LinAlgError("numerically singular matrix")

    try:
        return np.linalg.solve(a, b)
    except np.linalg.LinAlgError as exc:
        raise LinAlgError(str(exc)) from exc


def norm(x: npt.ArrayLike | Sequence[Any]) -> float:
    """Return the Euclidean norm of a vector in double precision."""
    return float(np.linalg.norm(np.asarray(x, dtype=np.float64)))
