"""Tests for the ComplexNumber value type."""

import dataclasses
import math
import warnings

import pytest

from newton_fractal.core.complex_number import ComplexNumber


SAMPLES = [
    (ComplexNumber(1.0, 2.0), ComplexNumber(3.0, 4.0)),
    (ComplexNumber(-0.5, 0.25), ComplexNumber(2.0, -7.5)),
    (ComplexNumber(1e-3, -1e3), ComplexNumber(-3.25, 0.125)),
]


class TestArithmetic:
    def test_add_is_componentwise(self):
        assert ComplexNumber(1, 2).add(ComplexNumber(3, -5)) == ComplexNumber(4, -3)

    def test_subtract_is_componentwise(self):
        assert ComplexNumber(1, 2).subtract(ComplexNumber(3, -5)) == ComplexNumber(-2, 7)

    def test_multiply(self):
        assert ComplexNumber(1, 2).multiply(ComplexNumber(3, 4)) == ComplexNumber(-5, 10)

    @pytest.mark.parametrize("a,b", SAMPLES)
    def test_add_and_multiply_commute(self, a, b):
        assert a.add(b) == b.add(a)
        assert a.multiply(b) == b.multiply(a)

    @pytest.mark.parametrize("a,b", SAMPLES)
    def test_divide_inverts_multiply(self, a, b):
        result = a.multiply(b).divide(b)
        assert result.real == pytest.approx(a.real, rel=1e-12, abs=1e-12)
        assert result.imaginary == pytest.approx(a.imaginary, rel=1e-12, abs=1e-12)

    def test_divide_by_zero_yields_nan(self):
        result = ComplexNumber(1, 1).divide(ComplexNumber.ZERO)
        assert math.isnan(result.real)
        assert math.isnan(result.imaginary)

    def test_divide_overflow_yields_infinity_without_warning(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = ComplexNumber(1e300, 0).divide(ComplexNumber(1e-150, 0))
        assert result.real == math.inf
        assert result.imaginary == 0

    def test_operators_match_named_methods(self):
        a, b = SAMPLES[1]
        assert a + b == a.add(b)
        assert a - b == a.subtract(b)
        assert a * b == a.multiply(b)
        assert a / b == a.divide(b)
        assert abs(a) == a.absolute_value()

    def test_operations_do_not_mutate_operands(self):
        a = ComplexNumber(1, 2)
        b = ComplexNumber(3, 4)
        a.multiply(b)
        a.divide(b)
        assert a == ComplexNumber(1, 2)
        assert b == ComplexNumber(3, 4)


class TestProperties:
    def test_absolute_value(self):
        assert ComplexNumber(3, 4).absolute_value() == 5.0

    def test_angle_first_quadrant(self):
        assert ComplexNumber(1, 1).angle() == pytest.approx(math.pi / 4)

    def test_angle_is_single_quadrant(self):
        # atan(im/re) cannot tell (-1, -1) from (1, 1)
        assert ComplexNumber(-1, -1).angle() == pytest.approx(math.pi / 4)

    def test_angle_on_imaginary_axis(self):
        assert ComplexNumber(0, 2).angle() == pytest.approx(math.pi / 2)

    def test_conjugate(self):
        assert ComplexNumber(1, 2).conjugate() == ComplexNumber(1, -2)

    def test_zero_sentinel(self):
        assert ComplexNumber.ZERO == ComplexNumber(0, 0)
        assert ComplexNumber() == ComplexNumber.ZERO

    def test_is_immutable(self):
        number = ComplexNumber(1, 2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            number.real = 5

    def test_builtin_conversion(self):
        number = ComplexNumber.from_complex(2 - 3j)
        assert number == ComplexNumber(2, -3)
        assert number.to_complex() == 2 - 3j


class TestFormatting:
    def test_integral_parts(self):
        assert str(ComplexNumber(1, 0)) == "(1 + 0i)"

    def test_fractional_and_negative_parts(self):
        assert str(ComplexNumber(0.5, -2)) == "(0.5 + -2i)"

    def test_large_integral_parts_use_exponent(self):
        assert str(ComplexNumber(1e20, 0)) == "(1e+20 + 0i)"
        assert str(ComplexNumber(-1e16, 3)) == "(-1e+16 + 3i)"
