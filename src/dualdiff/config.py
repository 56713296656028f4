"""
######################################
Configuration (:mod:`dualdiff.config`)
######################################

.. currentmodule:: dualdiff.config

This module provides the context holding default parameters of solvers. Each
thread (and each asynchronous task) sees its own current context.

.. autosummary::
    :toctree: generated/

    Context
    getcontext
    localcontext
    setcontext

"""

import contextlib
import contextvars
from typing import Self


class Context:
    """Create a new context.

    Parameters
    ----------
    max_iter : int, default=10
        Number of iterations performed by :func:`dualdiff.optimize.newton`.
    rcond : float | None, default=None
        Reciprocal condition number below which :func:`dualdiff.linalg.solve` regards
        a matrix as singular. If `rcond` is ``None``, the machine epsilon of the
        matrix is used.
    """

    __slots__ = ("_max_iter", "_rcond")
    _max_iter: int
    _rcond: float | None

    def __init__(self, max_iter: int = 10, rcond: float | None = None):
        if max_iter <= 0:
            raise ValueError("max_iter must be positive")

        if rcond is not None and rcond < 0:
            raise ValueError("rcond must be non-negative")

        self._max_iter = max_iter
        self._rcond = rcond

    @property
    def max_iter(self) -> int:
        return self._max_iter

    @property
    def rcond(self) -> float | None:
        return self._rcond

    def copy(self) -> Self:
        return self.__class__(self._max_iter, self._rcond)

    def __repr__(self) -> str:
        name = type(self).__name__
        return f"{name}(max_iter={self._max_iter!r}, rcond={self._rcond!r})"

    def __copy__(self) -> Self:
        return self.copy()


_var: contextvars.ContextVar[Context] = contextvars.ContextVar("dualdiff")


def getcontext() -> Context:
    """Return the current context for the active thread."""
    if context := _var.get(None):
        return context

    context = Context()
    _var.set(context)
    return context


def setcontext(ctx: Context) -> None:
    """Set the current context for the active thread to `ctx`."""
    if not isinstance(ctx, Context):
        raise TypeError

    _var.set(ctx)


@contextlib.contextmanager
def localcontext(
    ctx: Context | None = None,
    *,
    max_iter: int | None = None,
    rcond: float | None = None,
):
    """Return a context manager that will set the current context for the active thread
    to a copy of `ctx` on entry to the with-statement and restore the previous context
    when exiting the with-statement.

    Examples
    --------
    >>> with localcontext(max_iter=3) as ctx:
    ...     print(ctx.max_iter)
    3
    >>> getcontext().max_iter
    10
    """
    if ctx is None:
        ctx = getcontext()

    if max_iter is None:
        max_iter = ctx._max_iter

    if rcond is None:
        rcond = ctx._rcond

    ctx = Context(max_iter, rcond)
    token = _var.set(ctx)

    try:
        yield ctx
    finally:
        _var.reset(token)
