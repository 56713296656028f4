"""
###############################
Typing (:mod:`dualdiff.typing`)
###############################

.. currentmodule:: dualdiff.typing

This module provides type definitions commonly used between modules.

.. autoclass:: Scalar
    :show-inheritance:
    :no-members:

.. autoclass:: LinearSolver
    :show-inheritance:
    :no-members:

"""

from abc import abstractmethod
from collections.abc import Sequence
from typing import Any, Protocol, Self, runtime_checkable


class Scalar(Protocol):
    """Protocol that ensures scalar-like behavior.

    Objects implementing this protocol must have four arithmetic operations and
    integer power defined, and four arithmetic operations must be compatible with
    integers. Functions differentiated by :mod:`dualdiff.autodiff` must be written
    against this protocol only.
    """

    __slots__ = ()

    @abstractmethod
    def __add__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __sub__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __mul__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __truediv__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __pow__(self, rhs: int) -> Self: ...

    @abstractmethod
    def __radd__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __rsub__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __rmul__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __rtruediv__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __neg__(self) -> Self: ...

    @abstractmethod
    def __pos__(self) -> Self: ...


@runtime_checkable
class LinearSolver(Protocol):
    """Protocol of linear solvers injected into :func:`dualdiff.optimize.newton`.

    A linear solver is called as ``solve(a, b)``, where `a` is the Jacobian matrix
    given as a tuple of rows and `b` is the residual, and returns `x` such that
    :math:`ax=b`. It must raise :class:`dualdiff.linalg.LinAlgError` or
    :class:`numpy.linalg.LinAlgError` if `a` is singular.
    """

    def __call__(
        self, a: Sequence[Sequence[Any]], b: Sequence[Any], /
    ) -> Sequence[Any]: ...
