"""
#################################################
Mathematical functions (:mod:`dualdiff.function`)
#################################################

.. currentmodule:: dualdiff.function

This module provides elementary functions as primitives of
:mod:`dualdiff.autodiff`, i.e., each of them carries its analytic derivative and
accepts :class:`~dualdiff.autodiff.Dual` and :class:`~dualdiff.autodiff.MultiDual`
as well as floats, integers, and :mod:`mpmath` numbers.

Power, exponents, and logarithmic functions
===========================================

.. autosummary::
    :toctree: generated/

    exp
    log
    pow
    sqrt

Trigonometric functions
=======================

.. autosummary::
    :toctree: generated/

    cos
    sin
    tan

"""

import math
from typing import Any, overload

import mpmath
import mpmath.ctx_mp_python

from dualdiff.autodiff.autodiff import defderiv, primitive


@overload
def exp(x: float | int, /) -> float: ...


@overload
def exp(x: Any, /) -> Any: ...


@primitive
def exp(x, /):
    """Exponential.

    Examples
    --------
    >>> print(format(exp(2), ".6f"))
    7.389056
    """
    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.exp(x)

        case float() | int():
            return math.exp(x)

        case _:
            raise TypeError


@overload
def log(x: float | int, /) -> float: ...


@overload
def log(x: Any, /) -> Any: ...


@primitive
def log(x, /):
    """Natural logarithm.

    Examples
    --------
    >>> print(format(log(5), ".6f"))
    1.609438
    """
    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.log(x)

        case float() | int():
            return math.log(x)

        case _:
            raise TypeError


@overload
def pow(x: float | int, y: float | int, /) -> float: ...


@overload
def pow(x: Any, y: Any, /) -> Any: ...


@primitive
def pow(x, y, /):
    """`x` raised to the power `y`.

    Unlike ``x ** y``, the exponent need not be an integer and may depend on the
    differentiated variable.

    Examples
    --------
    >>> print(format(pow(3.25, 1.25), ".6f"))
    4.363693
    """
    mpnumeric = mpmath.ctx_mp_python.mpnumeric

    match x, y:
        case (mpnumeric(), _) | (_, mpnumeric()):
            return mpmath.power(x, y)

        case (float() | int(), float() | int()):
            return math.pow(x, y)

        case _:
            raise TypeError


@overload
def sqrt(x: float | int, /) -> float: ...


@overload
def sqrt(x: Any, /) -> Any: ...


@primitive
def sqrt(x, /):
    """Square root.

    Examples
    --------
    >>> print(format(sqrt(2.0), ".6f"))
    1.414214
    """
    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.sqrt(x)

        case float() | int():
            return math.sqrt(x)

        case _:
            raise TypeError


@overload
def cos(x: float | int, /) -> float: ...


@overload
def cos(x: Any, /) -> Any: ...


@primitive
def cos(x, /):
    """Cosine.

    Examples
    --------
    >>> print(format(cos(1.0), ".6f"))
    0.540302
    """
    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.cos(x)

        case float() | int():
            return math.cos(x)

        case _:
            raise TypeError


@overload
def sin(x: float | int, /) -> float: ...


@overload
def sin(x: Any, /) -> Any: ...


@primitive
def sin(x, /):
    """Sine.

    Examples
    --------
    >>> print(format(sin(1.0), ".6f"))
    0.841471
    """
    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.sin(x)

        case float() | int():
            return math.sin(x)

        case _:
            raise TypeError


@overload
def tan(x: float | int, /) -> float: ...


@overload
def tan(x: Any, /) -> Any: ...


@primitive
def tan(x, /):
    """Tangent.

    Examples
    --------
    >>> print(format(tan(1.0), ".6f"))
    1.557408
    """
    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.tan(x)

        case float() | int():
            return math.tan(x)

        case _:
            raise TypeError


defderiv(exp, exp)
defderiv(log, lambda x: 1 / x)
defderiv(pow, lambda x, y: y * pow(x, y - 1), argnum=0)
defderiv(pow, lambda x, y: log(x) * pow(x, y), argnum=1)
defderiv(sqrt, lambda x: 1 / (2 * sqrt(x)))
defderiv(cos, lambda x: -sin(x))
defderiv(sin, cos)
defderiv(tan, lambda x: 1 / cos(x) ** 2)
