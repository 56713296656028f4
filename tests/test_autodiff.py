import math
import random

import pytest

from dualdiff import function as ddf
from dualdiff.autodiff import autodiff


def test_deriv():
    deriv1 = autodiff.deriv(lambda x: (x + ddf.sin(x**2)) / x)
    deriv2 = autodiff.deriv(deriv1)
    assert pytest.approx(deriv1(1.4), 1e-5) == -1.23095
    assert pytest.approx(deriv2(1.4), 1e-5) == -3.96476


def test_derivative_square():
    for x in (-3.5, -1.0, 0.0, 0.25, 2.0, 10.0):
        assert autodiff.derivative(lambda t: t**2 + 2, x) == 2 * x


def test_derivative_reciprocal():
    for x in (-3.5, -1.0, 0.25, 2.0, 10.0):
        assert pytest.approx(autodiff.derivative(lambda t: 1 / t, x)) == -1 / x**2


def test_derivative_product_rule():
    def f(t):
        return ddf.sin(t) + t**3

    def g(t):
        return ddf.exp(t) / (1 + t**2)

    df = autodiff.deriv(f)
    dg = autodiff.deriv(g)

    for x in (-1.5, 0.3, 2.0):
        expected = df(x) * g(x) + f(x) * dg(x)
        assert pytest.approx(autodiff.derivative(lambda t: f(t) * g(t), x)) == expected


def test_derivative_constant():
    assert autodiff.derivative(lambda _: 3.0, 2.0) == 0.0


def test_derivative_sqrt_by_iteration():
    def babylonian(x):
        a = x

        for _ in range(8):
            a = 0.5 * (a + x / a)

        return a

    assert pytest.approx(autodiff.derivative(babylonian, 2.0)) == 0.5 / math.sqrt(2)


@pytest.mark.parametrize(
    "fun",
    [
        lambda t: (t**3 - 2 * t) / (1 + t**2),
        lambda t: ddf.exp(ddf.sin(t)) * ddf.sqrt(t**2 + 1),
        lambda t: ddf.log(2 + ddf.cos(t)) - ddf.tan(t / 3),
        lambda t: ddf.pow(t**2 + 1, 1.5),
        lambda t: 1 / (t**4 + 3) + t * ddf.exp(-t),
    ],
)
def test_derivative_finite_difference(fun):
    rng = random.Random(0)
    h = 1e-5

    for _ in range(10):
        x = rng.uniform(-2, 2)
        fd = (fun(x + h) - fun(x - h)) / (2 * h)
        assert pytest.approx(fd, rel=1e-6, abs=1e-8) == autodiff.derivative(fun, x)


def test_second_derivative():
    d2f = autodiff.deriv(autodiff.deriv(lambda x: x**3 + ddf.exp(x)))
    assert pytest.approx(d2f(1.0)) == 6 + math.e


def test_gradient():
    grad = autodiff.gradient(lambda x: ddf.pow(x[0], x[1]), (4.5, -2.2))
    assert pytest.approx(grad, 1e-5) == (-0.0178707, 0.0549797)

    grad = autodiff.gradient(lambda x: ddf.exp(x[1] / x[0]) + 2, (1.2, 3.5))
    assert pytest.approx(grad, 1e-5) == (-44.9157, 15.3997)


def test_jacobian():
    matrix = autodiff.jacobian(lambda x: (x[0] ** 2 + x[1] ** 2, x[0] - x[1]), (3, 5))
    assert [list(row) for row in matrix] == [[6, 10], [1, -1]]

    matrix = autodiff.jacobian(
        lambda x: (ddf.sin(x[0] * x[1]), x[0] ** 2 - ddf.cos(x[1])), (2, 3)
    )
    assert pytest.approx(matrix[0], 1e-5) == (2.88051, 1.92034)
    assert pytest.approx(matrix[1], 1e-5) == (4.00000, 0.14112)


def test_jacobian_single_evaluation():
    calls = []

    def fun(x):
        calls.append(x)
        return (x[0] * x[1], x[1] - x[2], x[0] ** 2)

    matrix = autodiff.jacobian(fun, (1.0, 2.0, 3.0))
    assert matrix == ((2.0, 1.0, 0.0), (0.0, 1.0, -1.0), (2.0, 0.0, 0.0))
    assert len(calls) == 1


def test_jacobian_constant_output():
    matrix = autodiff.jacobian(lambda x: (x[0] * x[1], 1.0), (2.0, 3.0))
    assert matrix == ((3.0, 2.0), (0.0, 0.0))


def test_jvp():
    def fun(x):
        return (x[0] * ddf.sin(x[1]), x[0] ** 2 * x[2], ddf.exp(x[2] - x[1]))

    x0 = (0.5, 1.2, -0.3)
    v = (1.0, -2.0, 0.5)
    matrix = autodiff.jacobian(fun, x0)
    expected = tuple(sum(a * b for a, b in zip(row, v)) for row in matrix)
    assert pytest.approx(autodiff.jvp(fun, x0, v)) == expected


def test_jvp_length_mismatch():
    with pytest.raises(ValueError):
        autodiff.jvp(lambda x: x, (1.0, 2.0), (1.0,))


def test_primitive():
    @autodiff.primitive
    def sinh(x):
        return math.sinh(x)

    autodiff.defderiv(sinh, lambda x: math.cosh(x))
    assert sinh(0.5) == math.sinh(0.5)
    assert pytest.approx(autodiff.derivative(sinh, 0.5)) == math.cosh(0.5)
    grad = autodiff.gradient(lambda x: sinh(x[0] * x[1]), (1.0, 2.0))
    assert pytest.approx(grad) == (2 * math.cosh(2.0), math.cosh(2.0))


def test_primitive_without_derivative():
    @autodiff.primitive
    def cube(x):
        return x * x * x

    with pytest.raises(TypeError):
        autodiff.derivative(cube, 1.0)


def test_defderiv_rejects_plain_function():
    with pytest.raises(ValueError):
        autodiff.defderiv(math.sinh, math.cosh)


def test_top_level_exports():
    import dualdiff

    for name in ("deriv", "derivative", "gradient", "jacobian", "jvp"):
        assert getattr(dualdiff, name) is getattr(autodiff, name)
