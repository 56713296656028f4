"""
#######################################
Root finding (:mod:`dualdiff.optimize`)
#######################################

.. currentmodule:: dualdiff.optimize

This module provides the Newton-Raphson method for systems of nonlinear equations.

Root finding
============

.. autosummary::
    :toctree: generated/

    newton
    newton_solve
    newton_step

Miscellaneous
=============

.. autosummary::
    :toctree: generated/

    AbortSolving
    NewtonCallbackArg
    NewtonResult
    SingularJacobian

"""

from .newton import (
    AbortSolving,
    NewtonCallbackArg,
    NewtonResult,
    SingularJacobian,
    newton,
    newton_solve,
    newton_step,
)

__all__ = [
    "AbortSolving",
    "NewtonCallbackArg",
    "NewtonResult",
    "SingularJacobian",
    "newton",
    "newton_solve",
    "newton_step",
]
