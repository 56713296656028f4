import functools
from collections.abc import Callable, Sequence
from typing import Any

from dualdiff.autodiff.dual import Dual, DualBase, MultiDual


def derivative[T](fun: Callable[[Any], Any], x: T) -> T:
    """Evaluate the derivative of the univariate scalar-valued function.

    Parameters
    ----------
    fun : Callable
        Differentiated function.
    x
        Point at which the derivative is evaluated.

    Returns
    -------
    The value of :math:`f'(x)`.

    Warnings
    --------
    `fun` must not contain conditional branches on the type of its argument, and may
    only call primitives (cf. :func:`primitive`) besides arithmetic operations.

    Examples
    --------
    >>> derivative(lambda x: x**2 + 2, 3.0)
    6.0
    >>> derivative(lambda x: 1 / x, 2.0)
    -0.25
    """
    var = Dual.variable(x)
    tmp: Any = fun(var)

    if not isinstance(tmp, Dual) or tmp.priority != var.priority:
        return x * 0

    return tmp.imag


def deriv[T](fun: Callable[[T], T]) -> Callable[[T], T]:
    """Return a function that evaluates the derivative of the univariate scalar-valued
    function.

    Parameters
    ----------
    fun : Callable
        Differentiated function.

    Returns
    -------
    Callable
        Derivative of `fun`.

    Warnings
    --------
    Nested dual numbers are ordered by their priority only, and variables of the
    same priority are not told apart. An inner derivative that closes over the
    outer variable therefore differentiates with respect to both of them:

    >>> derivative(lambda x: x * derivative(lambda y: x + y, 1.0), 1.0)
    2.0

    Here the inner derivative is one, so the exact result is ``1.0``.

    See Also
    --------
    derivative

    Examples
    --------
    Since the returned function is again generic, higher-order derivatives are
    obtained by composition.

    >>> from dualdiff import function as ddf
    >>> d2f = deriv(deriv(lambda x: x**3 + ddf.exp(x)))
    >>> print(format(d2f(0.0), ".6f"))
    1.000000
    """

    @functools.wraps(fun)
    def result(x):
        return derivative(fun, x)

    return result


def gradient[T](fun: Callable[[tuple], Any], x0: Sequence[T]) -> tuple[T, ...]:
    """Evaluate the gradient of the multivariate scalar-valued function.

    Parameters
    ----------
    fun : Callable
        Differentiated function. It is called with a tuple of length n.
    x0 : Sequence, length n
        Point at which the gradient is evaluated.

    Returns
    -------
    tuple, length n

    Warnings
    --------
    `fun` must not contain conditional branches on the type of its argument, and may
    only call primitives (cf. :func:`primitive`) besides arithmetic operations.

    Examples
    --------
    >>> gradient(lambda x: x[0] ** 2 * x[1] + x[0] * x[1], (1.0, 2.0))
    (6.0, 2.0)
    """
    var = MultiDual.variable(*x0)
    return _partials(fun(var), var[0])


def jacobian[T](
    fun: Callable[[tuple], Sequence], x0: Sequence[T]
) -> tuple[tuple[T, ...], ...]:
    """Evaluate the Jacobian matrix of the multivariate vector-valued function.

    All the columns are computed in a single evaluation of `fun`.

    Parameters
    ----------
    fun : Callable
        Differentiated function. It is called with a tuple of length n and must
        return a sequence of length m.
    x0 : Sequence, length n
        Point at which the Jacobian matrix is evaluated.

    Returns
    -------
    tuple[tuple, ...], shape (m, n)

    Warnings
    --------
    `fun` must not contain conditional branches on the type of its argument, and may
    only call primitives (cf. :func:`primitive`) besides arithmetic operations.

    Examples
    --------
    >>> jacobian(lambda x: (x[0] ** 2 + x[1] ** 2, x[0] - x[1]), (3.0, 5.0))
    ((6.0, 10.0), (1.0, -1.0))
    """
    var = MultiDual.variable(*x0)
    return tuple(_partials(y, var[0]) for y in fun(var))


def jvp[T](
    fun: Callable[[tuple], Sequence], x0: Sequence[T], v: Sequence[T]
) -> tuple[T, ...]:
    """Evaluate the Jacobian-vector product of the multivariate vector-valued function.

    Parameters
    ----------
    fun : Callable
        Differentiated function. It is called with a tuple of length n and must
        return a sequence of length m.
    x0 : Sequence, length n
        Point at which the Jacobian matrix is evaluated.
    v : Sequence, length n
        Direction.

    Returns
    -------
    tuple, length m
        The value of :math:`J(x_0)v`.

    Raises
    ------
    ValueError
        If `x0` and `v` have different lengths.

    Examples
    --------
    >>> jvp(lambda x: (x[0] * x[1], x[0] - x[1]), (3.0, 5.0), (1.0, 2.0))
    (11.0, -1.0)
    """
    if len(x0) == 0:
        raise ValueError("x0 must not be empty")

    if len(x0) != len(v):
        raise ValueError("x0 and v must have the same length")

    var = tuple(Dual.variable(x, s) for x, s in zip(x0, v))
    result = []

    for y in fun(var):
        if isinstance(y, Dual) and y.priority == var[0].priority:
            result.append(y.imag)
        else:
            result.append(x0[0] * 0)

    return tuple(result)


def _partials(value: Any, var: MultiDual) -> tuple:
    if isinstance(value, MultiDual) and value.priority == var.priority:
        return tuple(value.imag)

    ZERO = var.real * 0
    return (ZERO,) * len(var)


def defderiv[**P](
    fun: Callable[P, Any], deriv: Callable[P, Any], *, argnum: int = 0
) -> None:
    """Register the partial derivative of a primitive.

    Parameters
    ----------
    fun : Callable
        Primitive created by :func:`primitive`.
    deriv : Callable
        Partial derivative of `fun` with respect to the `argnum`-th argument. It is
        called with the same arguments as `fun`.
    argnum : int, default=0

    Raises
    ------
    ValueError
        If `fun` is not a primitive.
    """
    if not getattr(fun, "_dualdiff_is_primitive", False):
        raise ValueError(f"{fun!r} is not a primitive")

    fun.__dict__["_dualdiff_derivs"][argnum] = deriv


def primitive[T, **P](fun: Callable[P, T]) -> Callable[P, T]:
    """Turn a function into a primitive.

    A primitive is evaluated on the real parts of its dual arguments, and the
    derivative channel of the result is obtained by the chain rule from the partial
    derivatives registered by :func:`defderiv`.

    Parameters
    ----------
    fun : Callable
        Function taking scalars only.

    Returns
    -------
    Callable

    Examples
    --------
    >>> import math
    >>> @primitive
    ... def sinh(x):
    ...     return math.sinh(x)
    >>> defderiv(sinh, lambda x: math.cosh(x))
    >>> derivative(sinh, 0.0)
    1.0
    """
    derivs: dict[int, Callable] = {}

    @functools.wraps(fun)
    def wrapper(*args, **kwargs):
        if not any(isinstance(x, DualBase) for x in args):
            return fun(*args, **kwargs)

        max_priority = max(x.priority for x in args if isinstance(x, DualBase))
        args_real: list = []
        args_dual: list[tuple[int, DualBase]] = []

        for argnum, arg in enumerate(args):
            if not isinstance(arg, DualBase) or arg.priority < max_priority:
                args_real.append(arg)
                continue

            args_real.append(arg.real)
            args_dual.append((argnum, arg))

        for argnum, arg in args_dual:
            if argnum not in derivs:
                raise TypeError(
                    f"{fun.__name__} has no derivative w.r.t. argument {argnum}"
                )

        head = args_dual[0][1]

        for _, arg in args_dual[1:]:
            head._check(arg)

        tmp = derivs[args_dual[0][0]](*args_real, **kwargs)
        tangent = [tmp * x for x in head.tangent]

        for argnum, arg in args_dual[1:]:
            tmp = derivs[argnum](*args_real, **kwargs)

            for i in range(len(tangent)):
                tangent[i] += tmp * arg.tangent[i]

        return head._new(wrapper(*args_real, **kwargs), tangent)

    wrapper.__dict__["_dualdiff_is_primitive"] = True
    wrapper.__dict__["_dualdiff_derivs"] = derivs
    return wrapper  # type: ignore
