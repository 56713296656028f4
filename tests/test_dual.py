import pytest

from dualdiff.autodiff.dual import (
    DimensionMismatch,
    DivisionByZero,
    Dual,
    DualBase,
    MultiDual,
)


def test_arithmetic():
    f = Dual(3, 4)
    g = Dual(5, 6)
    assert f + g == Dual(8, 10)
    assert f - g == Dual(-2, -2)
    assert f * g == Dual(15, 38)
    assert f * (g + g) == Dual(30, 76)
    assert pytest.approx((f / g).real) == 0.6
    assert pytest.approx((f / g).imag) == 0.08
    assert -f == Dual(-3, -4)


def test_arithmetic_with_scalars():
    a = Dual(3.0, 4.0)
    assert 2 + a == Dual(5.0, 4.0)
    assert a - 1 == Dual(2.0, 4.0)
    assert 1 - a == Dual(-2.0, -4.0)
    assert 2 * a == Dual(6.0, 8.0)
    assert a / 2 == Dual(1.5, 2.0)
    assert 6 / a == Dual(2.0, -6.0 * 4.0 / 9.0)


def test_operands_are_not_mutated():
    a = Dual(3.0, 4.0)
    b = a + 1
    assert a == Dual(3.0, 4.0)
    assert b is not a


def test_pow():
    x = Dual(2.0, 1.0)

    for e in range(9):
        y = x**e
        assert y.real == 2.0**e
        assert y.imag == e * 2.0 ** (e - 1)

    assert x**-2 == Dual(0.25, -0.25)


def test_pow_rejects_non_integer():
    with pytest.raises(TypeError):
        Dual(2.0, 1.0) ** 0.5


def test_division_by_zero():
    with pytest.raises(DivisionByZero):
        Dual(1.0, 1.0) / Dual(0.0, 1.0)

    with pytest.raises(DivisionByZero):
        1 / Dual(0.0, 1.0)

    with pytest.raises(ZeroDivisionError):
        Dual(1.0, 1.0) / 0


def test_multidual_division_by_zero():
    x, y = MultiDual.variable(0.0, 2.0)

    with pytest.raises(DivisionByZero):
        y / x

    with pytest.raises(DivisionByZero):
        1 / x


def test_multidual_pow():
    x, y = MultiDual.variable(2.0, 3.0)
    assert x**0 == MultiDual(1.0, [0.0, 0.0])
    assert x**-2 == MultiDual(0.25, [-0.25, 0.0])
    z = y**-1
    assert pytest.approx(z.real) == 1 / 3
    assert pytest.approx(z.imag) == [0.0, -1 / 9]


def test_multidual():
    x, y = MultiDual.variable(1.0, 2.0)
    z = x * x * y + x + y
    assert z.real == 5.0
    assert z.imag == [5.0, 2.0]


def test_multidual_operations():
    x, y = MultiDual.variable(3.0, 5.0)
    assert (x - y).imag == [1.0, -1.0]
    assert (x / y).imag == pytest.approx([0.2, -0.12])
    assert (y**3).imag == [0.0, 75.0]
    assert MultiDual.constant(2.0, 3) + x.real == MultiDual(5.0, [0.0, 0.0, 0.0])


def test_dimension_mismatch():
    a = MultiDual(1.0, [1.0, 0.0])
    b = MultiDual(2.0, [1.0, 0.0, 0.0])

    with pytest.raises(DimensionMismatch):
        a + b

    with pytest.raises(DimensionMismatch):
        a * b

    with pytest.raises(DimensionMismatch):
        a - b

    with pytest.raises(DimensionMismatch):
        b / a


def test_mixed_types():
    with pytest.raises(TypeError):
        Dual(1.0, 1.0) + MultiDual(1.0, [1.0])


def test_empty_multidual():
    with pytest.raises(ValueError):
        MultiDual(1.0, [])


def test_priority():
    x = Dual.variable(2.0)
    y = Dual.variable(x)
    assert x.priority == 0
    assert y.priority == 1
    z = y * x
    assert z.priority == 1
    assert z.imag == x


def test_subclassing_is_forbidden():
    with pytest.raises(RuntimeError):

        class _Dual(DualBase):
            pass
