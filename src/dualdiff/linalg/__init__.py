"""
#############################################
Dense linear algebra (:mod:`dualdiff.linalg`)
#############################################

.. currentmodule:: dualdiff.linalg

This module provides the dense linear solver used by default in
:func:`dualdiff.optimize.newton`. Any callable with the signature of :func:`solve`
may be injected instead.

.. autosummary::
    :toctree: generated/

    norm
    solve
    LinAlgError

"""

from .dense import LinAlgError, norm, solve

__all__ = ["LinAlgError", "norm", "solve"]
