import dataclasses
import logging
from collections.abc import Callable, Sequence
from typing import Literal

import numpy as np

from dualdiff.autodiff.autodiff import jacobian
from dualdiff.config import getcontext
from dualdiff.linalg.dense import LinAlgError, norm
from dualdiff.linalg.dense import solve as dense_solve
from dualdiff.logger import dualdiff_logger
from dualdiff.typing import LinearSolver


class AbortSolving(Exception):
    """Raised by a callback function to abort solvers.

    Parameters
    ----------
    message : str, default="aborted"
    """

    message: str

    def __init__(self, message="aborted", *args, **kwargs):
        super().__init__(message, *args, **kwargs)
        self.message = message


class SingularJacobian(LinAlgError):
    """Raised when the Jacobian matrix cannot be inverted.

    Parameters
    ----------
    message : str, default="singular Jacobian matrix"
    x : tuple, optional
        Last valid iterate.

    Attributes
    ----------
    x : tuple | None
        Last valid iterate.
    """

    x: tuple | None

    def __init__(self, message="singular Jacobian matrix", x=None):
        super().__init__(message)
        self.x = x


@dataclasses.dataclass(frozen=True, slots=True)
class NewtonCallbackArg[T]:
    """Argument of callback functions passed to :func:`newton`.

    Attributes
    ----------
    nit : int
        Number of iterations completed so far.
    x : tuple, length n
        Current iterate.
    x_prev : tuple, length n
        Previous iterate.
    fun : tuple, length n
        Value of the function at `x_prev`.
    step : tuple, length n
        Newton step, i.e., ``x_prev - x``.
    """

    nit: int
    x: tuple[T, ...]
    x_prev: tuple[T, ...]
    fun: tuple[T, ...]
    step: tuple[T, ...]


@dataclasses.dataclass(frozen=True, slots=True)
class NewtonResult[T]:
    """Output of :func:`newton`.

    Attributes
    ----------
    status : Literal["ABORTED", "FAILURE", "SUCCESS"]
    x : tuple, length n
        Final iterate. If `status` is ``"FAILURE"``, this is the last iterate at
        which the Jacobian matrix could be inverted.
    fun : tuple, length n
        Value of the function at `x`.
    nit : int
        Number of iterations completed.
    message : str
        Report from the solver. Typically a reason for a failure.
    """

    status: Literal["ABORTED", "FAILURE", "SUCCESS"]
    x: tuple[T, ...]
    fun: tuple[T, ...]
    nit: int
    message: str


def newton_step[T](
    fun: Callable[[tuple], Sequence],
    x: Sequence[T],
    solve: LinearSolver | None = None,
) -> tuple[tuple[T, ...], tuple[T, ...], tuple[T, ...]]:
    """Perform one step of the Newton-Raphson method.

    Parameters
    ----------
    fun : Callable
        Function to find a root of. It is called with a tuple of length n and must
        return a sequence of length n.
    x : Sequence, length n
        Current iterate.
    solve : Callable, optional
        Linear solver called as ``solve(jac, fx)`` (the default is
        :func:`dualdiff.linalg.solve`).

    Returns
    -------
    r0 : tuple, length n
        Next iterate.
    r1 : tuple, length n
        Value of `fun` at `x`.
    r2 : tuple, length n
        Newton step, i.e., ``x - r0``.

    Raises
    ------
    LinAlgError
        If `solve` fails, e.g., the Jacobian matrix is singular.
    ValueError
        If the lengths of `x` and ``fun(x)`` differ, or `solve` returns a vector of
        another length.
    """
    if solve is None:
        solve = dense_solve

    x = tuple(x)
    jac = jacobian(fun, x)
    fx = tuple(fun(x))

    if len(fx) != len(x):
        raise ValueError(f"fun maps a vector of length {len(x)} to length {len(fx)}")

    step = tuple(solve(jac, fx))

    if len(step) != len(x):
        raise ValueError(f"solve returned a vector of length {len(step)} for {len(x)}")

    return tuple(a - b for a, b in zip(x, step)), fx, step


def newton[T](
    fun: Callable[[tuple], Sequence],
    x0: Sequence[T],
    max_iter: int | None = None,
    solve: LinearSolver | None = None,
    callback: Callable[[NewtonCallbackArg[T]], None] | None = None,
) -> NewtonResult[T]:
    r"""Find a root of the multivariate vector-valued function by the Newton-Raphson
    method.

    The Jacobian matrix of each step is computed by
    :func:`dualdiff.autodiff.jacobian`.

    Parameters
    ----------
    fun : Callable
        Function to find a root of. It is called with a tuple of length n and must
        return a sequence of length n.
    x0 : Sequence, length n
        Initial guess.
    max_iter : int, optional
        Number of iterations (the default is ``getcontext().max_iter``).
    solve : Callable, optional
        Linear solver called as ``solve(jac, fx)``. It must raise
        :class:`dualdiff.linalg.LinAlgError` or :class:`numpy.linalg.LinAlgError` if
        `jac` is singular (the default is :func:`dualdiff.linalg.solve`).
    callback : Callable[[NewtonCallbackArg], None], optional
        Callback function called at each step. You can abort the solver by raising
        :class:`AbortSolving`.

    Returns
    -------
    NewtonResult

    Warnings
    --------
    Exactly `max_iter` iterations are performed; neither the residual nor the step
    size is tested. Since the convergence is guaranteed only near a simple root,
    check ``r.fun`` before using ``r.x``. A diverged iterate, possibly containing NaN,
    is returned with the status ``"SUCCESS"``.

    `fun` must not contain conditional branches on the type of its argument (cf.
    :func:`dualdiff.autodiff.jacobian`).

    Examples
    --------
    >>> r = newton(lambda x: (x[0] ** 2 + x[1] ** 2 - 1, x[0] - x[1]), (3.0, 5.0))
    >>> r.status
    'SUCCESS'
    >>> print(format(r.x[0], ".6f"), format(r.x[1], ".6f"))
    0.707107 0.707107
    """
    if max_iter is None:
        max_iter = getcontext().max_iter

    if max_iter <= 0:
        raise ValueError("max_iter must be positive")

    x = tuple(x0)

    if len(x) == 0:
        raise ValueError("x0 must not be empty")

    for nit in range(max_iter):
        try:
            x1, fx, step = newton_step(fun, x, solve)
        except (LinAlgError, np.linalg.LinAlgError) as exc:
            dualdiff_logger.warning("newton: iteration %d failed: %s", nit + 1, exc)
            return NewtonResult("FAILURE", x, tuple(fun(x)), nit, str(exc))

        if dualdiff_logger.isEnabledFor(logging.DEBUG):
            dualdiff_logger.debug(
                "newton: iteration %d, |f(x)|=%g, x=%s", nit + 1, norm(fx), x1
            )

        if callback is not None:
            try:
                callback(NewtonCallbackArg(nit + 1, x1, x, fx, step))
            except AbortSolving as exc:
                fx1 = tuple(fun(x1))
                return NewtonResult("ABORTED", x1, fx1, nit + 1, exc.message)

        x = x1

    return NewtonResult("SUCCESS", x, tuple(fun(x)), max_iter, "success")


def newton_solve[T](
    fun: Callable[[tuple], Sequence],
    x0: Sequence[T],
    iterations: int | None = None,
    solve: LinearSolver | None = None,
) -> tuple[T, ...]:
    """Return the iterate obtained after a fixed number of Newton-Raphson steps.

    This is a shorthand for :func:`newton` that raises an exception on failure.

    Parameters
    ----------
    fun : Callable
        Function to find a root of.
    x0 : Sequence, length n
        Initial guess.
    iterations : int, optional
        Number of iterations (the default is ``getcontext().max_iter``).
    solve : Callable, optional
        Linear solver (cf. :func:`newton`).

    Returns
    -------
    tuple, length n

    Raises
    ------
    SingularJacobian
        If the Jacobian matrix is singular. The last valid iterate is stored in its
        `x` attribute.
    """
    r = newton(fun, x0, iterations, solve)

    if r.status == "FAILURE":
        raise SingularJacobian(r.message, r.x)

    return r.x
