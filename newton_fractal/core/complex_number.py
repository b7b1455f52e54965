"""
Complex number value type used by the Newton iteration core.

Arithmetic follows IEEE-754 double semantics throughout: dividing by an exact
zero yields infinite or NaN components instead of raising, so a degenerate
pixel never aborts a render.
"""

from dataclasses import dataclass
from typing import Union
import logging

import numpy as np

logger = logging.getLogger(__name__)


def _format_part(value: float) -> str:
    """Format a component the way it is printed in polynomial dumps."""
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def _ieee_divide(numerator: float, denominator: float) -> float:
    """Divide two floats without raising on a zero denominator."""
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        return float(np.float64(numerator) / np.float64(denominator))


@dataclass(frozen=True)
class ComplexNumber:
    """Immutable complex number with a real and an imaginary part."""

    real: float = 0.0
    imaginary: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'real', float(self.real))
        object.__setattr__(self, 'imaginary', float(self.imaginary))

    @classmethod
    def from_complex(cls, value: Union[complex, float, int]) -> 'ComplexNumber':
        """Create from a builtin python number."""
        value = complex(value)
        return cls(value.real, value.imag)

    def to_complex(self) -> complex:
        """Convert to a builtin complex."""
        return complex(self.real, self.imaginary)

    def add(self, other: 'ComplexNumber') -> 'ComplexNumber':
        return ComplexNumber(self.real + other.real, self.imaginary + other.imaginary)

    def subtract(self, other: 'ComplexNumber') -> 'ComplexNumber':
        return ComplexNumber(self.real - other.real, self.imaginary - other.imaginary)

    def multiply(self, other: 'ComplexNumber') -> 'ComplexNumber':
        return ComplexNumber(
            self.real * other.real - self.imaginary * other.imaginary,
            self.real * other.imaginary + self.imaginary * other.real,
        )

    def conjugate(self) -> 'ComplexNumber':
        return ComplexNumber(self.real, -self.imaginary)

    def divide(self, other: 'ComplexNumber') -> 'ComplexNumber':
        """
        Divide by another complex number.

        Computed as ``self * conjugate(other)`` scaled by ``1 / |other|^2``.
        A zero divisor produces infinite/NaN components.
        """
        dividend = self.multiply(other.conjugate())
        divisor = other.real * other.real + other.imaginary * other.imaginary
        return ComplexNumber(
            _ieee_divide(dividend.real, divisor),
            _ieee_divide(dividend.imaginary, divisor),
        )

    def absolute_value(self) -> float:
        """Euclidean norm."""
        return float(np.sqrt(self.real * self.real + self.imaginary * self.imaginary))

    def angle(self) -> float:
        """
        Angle in radians as ``atan(im / re)``.

        Single-quadrant only; informational and not used by the iteration.
        """
        return float(np.arctan(_ieee_divide(self.imaginary, self.real)))

    def __add__(self, other: 'ComplexNumber') -> 'ComplexNumber':
        return self.add(other)

    def __sub__(self, other: 'ComplexNumber') -> 'ComplexNumber':
        return self.subtract(other)

    def __mul__(self, other: 'ComplexNumber') -> 'ComplexNumber':
        return self.multiply(other)

    def __truediv__(self, other: 'ComplexNumber') -> 'ComplexNumber':
        return self.divide(other)

    def __abs__(self) -> float:
        return self.absolute_value()

    def __str__(self) -> str:
        return f"({_format_part(self.real)} + {_format_part(self.imaginary)}i)"


ComplexNumber.ZERO = ComplexNumber(0.0, 0.0)
