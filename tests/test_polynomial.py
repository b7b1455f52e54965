"""Tests for polynomial evaluation and derivation."""

import cmath

import pytest

from newton_fractal.core.complex_number import ComplexNumber
from newton_fractal.core.polynomial import Polynomial, to_complex_number


@pytest.fixture
def cubic():
    """x^3 + 1"""
    return Polynomial.from_values([1, 0, 0, 1])


class TestConstruction:
    def test_from_mixed_values(self):
        polynomial = Polynomial.from_values([1, 2.5, 3 - 1j, [0, 4], ComplexNumber(5, 6)])
        assert polynomial.coefficients == (
            ComplexNumber(1, 0),
            ComplexNumber(2.5, 0),
            ComplexNumber(3, -1),
            ComplexNumber(0, 4),
            ComplexNumber(5, 6),
        )

    def test_invalid_coefficient(self):
        with pytest.raises(ValueError):
            to_complex_number("one")
        with pytest.raises(ValueError):
            to_complex_number([1, 2, 3])

    def test_degree(self, cubic):
        assert cubic.degree == 3
        assert len(cubic) == 4
        assert Polynomial().degree == -1


class TestEvaluate:
    def test_at_zero_is_constant_term(self):
        polynomial = Polynomial.from_values([2 - 3j, 7, 1j, -4])
        assert polynomial.evaluate(ComplexNumber.ZERO) == ComplexNumber(2, -3)

    def test_real_overload(self, cubic):
        assert cubic.evaluate(2.0) == ComplexNumber(9, 0)
        assert cubic.evaluate(2) == cubic.evaluate(ComplexNumber(2, 0))

    def test_at_imaginary_unit(self, cubic):
        value = cubic.evaluate(ComplexNumber(0, 1))
        assert value.real == pytest.approx(1.0)
        assert value.imaginary == pytest.approx(-1.0)

    def test_matches_builtin_complex(self):
        values = [1 + 2j, -0.5j, 3, 0.25 - 1j, 2]
        polynomial = Polynomial.from_values(values)
        z = 0.7 - 1.3j
        expected = sum(c * z ** i for i, c in enumerate(values))
        result = polynomial.evaluate(ComplexNumber.from_complex(z))
        assert result.real == pytest.approx(expected.real)
        assert result.imaginary == pytest.approx(expected.imag)

    def test_cube_roots_of_minus_one(self, cubic):
        for k in range(3):
            root = cmath.exp(1j * cmath.pi * (2 * k + 1) / 3)
            value = cubic.evaluate(ComplexNumber.from_complex(root))
            assert value.absolute_value() < 1e-12

    def test_empty_polynomial_is_zero(self):
        assert Polynomial().evaluate(ComplexNumber(3, 4)) == ComplexNumber.ZERO

    def test_callable(self, cubic):
        assert cubic(ComplexNumber(1, 0)) == ComplexNumber(2, 0)


class TestDerive:
    def test_cubic_derivative(self, cubic):
        assert cubic.derive() == Polynomial.from_values([0, 0, 3])

    def test_coefficients_are_scaled_by_power(self):
        values = [5, 1 + 1j, -2, 0.5j, 4]
        derivative = Polynomial.from_values(values).derive()
        assert derivative.degree == 3
        for i, coefficient in enumerate(derivative.coefficients):
            expected = (i + 1) * values[i + 1]
            assert coefficient.to_complex() == pytest.approx(expected)

    def test_constant_derives_to_empty(self):
        assert len(Polynomial.from_values([7]).derive()) == 0
        assert len(Polynomial().derive()) == 0

    def test_derive_does_not_modify_original(self, cubic):
        cubic.derive()
        assert cubic == Polynomial.from_values([1, 0, 0, 1])


class TestFormatting:
    def test_cubic(self, cubic):
        assert str(cubic) == "(1 + 0i) + (0 + 0i)x + (0 + 0i)xx + (1 + 0i)xxx"

    def test_cubic_derivative(self, cubic):
        assert str(cubic.derive()) == "(0 + 0i) + (0 + 0i)x + (3 + 0i)xx"

    def test_empty(self):
        assert str(Polynomial()) == ""
