from .autodiff import Dual, MultiDual, deriv, derivative, gradient, jacobian, jvp
from .function import cos, exp, log, pow, sin, sqrt, tan
from .optimize import newton, newton_solve

__all__ = [
    "Dual",
    "MultiDual",
    "deriv",
    "derivative",
    "gradient",
    "jacobian",
    "jvp",
    "cos",
    "exp",
    "log",
    "pow",
    "sin",
    "sqrt",
    "tan",
    "newton",
    "newton_solve",
]
