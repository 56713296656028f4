import numbers
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Final, Self, final

import numpy as np

from dualdiff.typing import Scalar


class DimensionMismatch(ValueError):
    """Raised when multivariate dual numbers with different numbers of
    infinitesimals are combined."""


class DivisionByZero(ZeroDivisionError):
    """Raised when dividing by a number whose real part is exactly zero."""


def _iszero(value) -> bool:
    while isinstance(value, DualBase):
        value = value.real

    return value == 0


class DualBase[T: Scalar](Scalar, ABC):
    r"""Abstract base class for dual numbers.

    Attributes
    ----------
    real : T
        Value channel.

    Warnings
    --------
    Users cannot define classes derived from this.

    See Also
    --------
    Dual, MultiDual

    Notes
    -----
    Dual numbers may be nested, i.e., `real` may itself be a dual number. The
    nesting depth is called the priority. In binary operations, the operand of
    lower priority is treated as a constant by the operand of higher priority. This
    is what makes ``deriv(deriv(f))`` return the second derivative of `f`.
    """

    __slots__ = ("real", "_priority")
    __IS_SEALED: Final = True
    real: T
    _priority: int

    def __init__(self, real: T):
        self.real = real
        self._priority = (real._priority + 1) if isinstance(real, DualBase) else 0

    @property
    def priority(self) -> int:
        return self._priority

    @property
    @abstractmethod
    def tangent(self) -> list[T]:
        """Derivative channel as a list of coefficients of the infinitesimals."""
        raise NotImplementedError

    @abstractmethod
    def _new(self, real: T, tangent: Iterable[T]) -> Self:
        raise NotImplementedError

    def _check(self, other: "DualBase") -> None:
        if type(self) is not type(other):
            raise TypeError(
                f"cannot combine {type(self).__name__} and {type(other).__name__}"
            )

        if len(self.tangent) != len(other.tangent):
            raise DimensionMismatch(
                f"dimensions differ: {len(self.tangent)} and {len(other.tangent)}"
            )

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        return other.real == self.real and other.tangent == self.tangent  # type: ignore

    def __add__(self, rhs: Self | T | int) -> Self:
        if isinstance(rhs, np.ndarray):
            return NotImplemented

        if not isinstance(rhs, DualBase) or self._priority > rhs._priority:
            return self._new(self.real + rhs, self.tangent)  # type: ignore

        if self._priority < rhs._priority:
            return NotImplemented

        self._check(rhs)
        tangent = (x + y for x, y in zip(self.tangent, rhs.tangent))
        return self._new(self.real + rhs.real, tangent)

    def __sub__(self, rhs: Self | T | int) -> Self:
        if isinstance(rhs, np.ndarray):
            return NotImplemented

        if not isinstance(rhs, DualBase) or self._priority > rhs._priority:
            return self._new(self.real - rhs, self.tangent)  # type: ignore

        if self._priority < rhs._priority:
            return NotImplemented

        self._check(rhs)
        tangent = (x - y for x, y in zip(self.tangent, rhs.tangent))
        return self._new(self.real - rhs.real, tangent)

    def __mul__(self, rhs: Self | T | int) -> Self:
        if isinstance(rhs, np.ndarray):
            return NotImplemented

        if not isinstance(rhs, DualBase) or self._priority > rhs._priority:
            return self._new(self.real * rhs, (x * rhs for x in self.tangent))  # type: ignore

        if self._priority < rhs._priority:
            return NotImplemented

        self._check(rhs)
        tangent = (
            x * rhs.real + self.real * y for x, y in zip(self.tangent, rhs.tangent)
        )
        return self._new(self.real * rhs.real, tangent)

    def __truediv__(self, rhs: Self | T | int) -> Self:
        if isinstance(rhs, np.ndarray):
            return NotImplemented

        if not isinstance(rhs, DualBase) or self._priority > rhs._priority:
            if _iszero(rhs):
                raise DivisionByZero("division by zero")

            return self._new(self.real / rhs, (x / rhs for x in self.tangent))  # type: ignore

        if self._priority < rhs._priority:
            return NotImplemented

        self._check(rhs)

        if _iszero(rhs.real):
            raise DivisionByZero("division by a dual number with zero real part")

        s = rhs.real**2
        tangent = (
            (x * rhs.real - self.real * y) / s
            for x, y in zip(self.tangent, rhs.tangent)
        )
        return self._new(self.real / rhs.real, tangent)

    def __pow__(self, rhs: int) -> Self:
        """Raise to an integer power by repeated squaring.

        The derivative channel is accumulated through :meth:`__mul__`, so that it
        follows from the product rule.
        """
        if not isinstance(rhs, numbers.Integral):
            return NotImplemented

        rhs = int(rhs)

        if rhs < 0:
            return 1 / self.__pow__(-rhs)

        if rhs == 0:
            ZERO = self.real * 0
            return self._new(ZERO + 1, (x * 0 for x in self.tangent))

        result: Self | None = None
        tmp = self

        while True:
            if rhs % 2 != 0:
                result = tmp if result is None else result * tmp

            rhs //= 2

            if rhs == 0:
                return result  # type: ignore

            tmp = tmp * tmp

    def __neg__(self) -> Self:
        return self._new(-self.real, (-x for x in self.tangent))

    def __pos__(self) -> Self:
        return self._new(+self.real, (+x for x in self.tangent))

    def __radd__(self, lhs: Self | T | int) -> Self:
        if not isinstance(lhs, DualBase) or self._priority > lhs._priority:
            return self._new(lhs + self.real, self.tangent)  # type: ignore

        if self._priority < lhs._priority:
            return NotImplemented

        return lhs.__add__(self)  # type: ignore

    def __rsub__(self, lhs: Self | T | int) -> Self:
        if not isinstance(lhs, DualBase) or self._priority > lhs._priority:
            return self._new(lhs - self.real, (-x for x in self.tangent))  # type: ignore

        if self._priority < lhs._priority:
            return NotImplemented

        return lhs.__sub__(self)  # type: ignore

    def __rmul__(self, lhs: Self | T | int) -> Self:
        if not isinstance(lhs, DualBase) or self._priority > lhs._priority:
            return self._new(lhs * self.real, (lhs * x for x in self.tangent))  # type: ignore

        if self._priority < lhs._priority:
            return NotImplemented

        return lhs.__mul__(self)  # type: ignore

    def __rtruediv__(self, lhs: Self | T | int) -> Self:
        if not isinstance(lhs, DualBase) or self._priority > lhs._priority:
            if _iszero(self.real):
                raise DivisionByZero("division by a dual number with zero real part")

            s = self.real**2
            tangent = (-lhs * x / s for x in self.tangent)  # type: ignore
            return self._new(lhs / self.real, tangent)  # type: ignore

        if self._priority < lhs._priority:
            return NotImplemented

        return lhs.__truediv__(self)  # type: ignore

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        if cls.__IS_SEALED:
            raise RuntimeError("subclassing is forbidden")


DualBase._DualBase__IS_SEALED = False  # type: ignore


@final
class Dual[T: Scalar](DualBase[T]):
    r"""Dual number with a single infinitesimal.

    Parameters
    ----------
    real : T
    imag : T

    Attributes
    ----------
    real : T
        Value channel.
    imag : T
        Derivative channel.

    Notes
    -----
    Instances of this class behave like elements of the ring
    :math:`T[\varepsilon]/(\varepsilon^2)`, i.e., ``Dual(a, b)`` represents
    :math:`a+b\varepsilon`.

    Examples
    --------
    >>> x = Dual(3.0, 1.0)
    >>> x**2 + 2
    Dual(real=11.0, imag=6.0)
    >>> 1 / x
    Dual(real=0.3333333333333333, imag=-0.1111111111111111)
    """

    __slots__ = ("imag",)
    imag: T

    def __init__(self, real: T, imag: T):
        super().__init__(real)
        self.imag = imag

    @classmethod
    def constant(cls, value: T) -> Self:
        """Return a dual number whose derivative channel is zero."""
        return cls(value, value * 0)

    @classmethod
    def variable(cls, value: T, seed: T | None = None) -> Self:
        """Return an independent variable.

        Parameters
        ----------
        value : T
        seed : T, optional
            Derivative channel (the default is one).
        """
        if seed is None:
            seed = value * 0 + 1

        return cls(value, seed)

    @property
    def tangent(self) -> list[T]:
        return [self.imag]

    def _new(self, real: T, tangent: Iterable[T]) -> Self:
        (imag,) = tangent
        return self.__class__(real, imag)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(real={self.real!r}, imag={self.imag!r})"

    def __str__(self) -> str:
        return f"{type(self).__name__}(real={self.real}, imag={self.imag})"


@final
class MultiDual[T: Scalar](DualBase[T]):
    r"""Dual number with several independent infinitesimals.

    Parameters
    ----------
    real : T
    imag : Iterable[T]

    Attributes
    ----------
    real : T
        Value channel.
    imag : list[T]
        Partial derivatives, one for each infinitesimal.

    Raises
    ------
    ValueError
        If `imag` is empty.

    Notes
    -----
    Instances of this class behave like elements of the ring

    .. math::

        T[\varepsilon_1,\varepsilon_2,\dotsc,\varepsilon_n]/
        (\varepsilon_i\varepsilon_j\mid i,j\in\{1,2,\dotsc,n\}),

    where :math:`n` is the length of `imag`. Binary operations raise
    :class:`DimensionMismatch` if the lengths differ.

    Examples
    --------
    >>> x, y = MultiDual.variable(1.0, 2.0)
    >>> x * x * y + x + y
    MultiDual(real=5.0, imag=[5.0, 2.0])
    """

    __slots__ = ("imag",)
    imag: list[T]

    def __init__(self, real: T, imag: Iterable[T]):
        super().__init__(real)
        self.imag = list(imag)

        if len(self.imag) == 0:
            raise ValueError("imag must not be empty")

    @classmethod
    def constant(cls, value: T, n: int) -> Self:
        """Return a multivariate dual number whose partial derivatives are zero."""
        ZERO = value * 0
        return cls(value, (ZERO,) * n)

    @classmethod
    def variable(cls, *args: T) -> tuple[Self, ...]:
        """Return independent variables seeded with the standard basis vectors."""
        if not args:
            raise ValueError("at least one argument is required")

        result: list[Self] = []

        for argnum, arg in enumerate(args):
            ZERO = arg * 0
            ONE = ZERO + 1
            imag = (ONE if i == argnum else ZERO for i in range(len(args)))
            result.append(cls(arg, imag))

        return tuple(result)

    @property
    def tangent(self) -> list[T]:
        return self.imag

    def __len__(self) -> int:
        return len(self.imag)

    def _new(self, real: T, tangent: Iterable[T]) -> Self:
        return self.__class__(real, tangent)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(real={self.real!r}, imag={self.imag!r})"

    def __str__(self) -> str:
        imag = (", ").join(str(x) for x in self.imag)
        return f"{type(self).__name__}(real={self.real}, imag=[{imag}])"


DualBase._DualBase__IS_SEALED = True  # type: ignore
