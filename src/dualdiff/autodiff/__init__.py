"""
####################################################
Automatic differentiation (:mod:`dualdiff.autodiff`)
####################################################

.. currentmodule:: dualdiff.autodiff

This module provides forward-mode automatic differentiation.

Differential operators
----------------------

.. autosummary::
    :toctree: generated/

    derivative
    deriv
    gradient
    jacobian
    jvp

Number systems containing infinitesimals
----------------------------------------

.. autosummary::
    :toctree: generated/

    Dual
    MultiDual

Primitives
----------

.. autosummary::
    :toctree: generated/

    primitive
    defderiv

Miscellaneous
-------------

.. autosummary::
    :toctree: generated/

    DimensionMismatch
    DivisionByZero

"""

from .autodiff import defderiv, deriv, derivative, gradient, jacobian, jvp, primitive
from .dual import DimensionMismatch, DivisionByZero, Dual, MultiDual

__all__ = [
    "defderiv",
    "deriv",
    "derivative",
    "gradient",
    "jacobian",
    "jvp",
    "primitive",
    "DimensionMismatch",
    "DivisionByZero",
    "Dual",
    "MultiDual",
]
