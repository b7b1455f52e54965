"""
Newton fractal definitions and parameter management.

A Newton fractal is fully described by the polynomial whose roots it
searches. This module keeps the polynomial as configurable parameters and
provides a few named presets.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union
import logging

from .math_functions import ComplexPlane, IterationResult, NewtonIterator
from .polynomial import CoefficientLike, Polynomial, coefficient_to_json

logger = logging.getLogger(__name__)

# x^3 + 1, lowest power first
DEFAULT_COEFFICIENTS = [1, 0, 0, 1]


@dataclass
class NewtonParameters:
    """Parameters for Newton fractal generation."""

    coefficients: List[CoefficientLike] = field(default_factory=lambda: list(DEFAULT_COEFFICIENTS))
    description: str = ""

    def validate(self) -> None:
        """Validate parameter values."""
        if not self.coefficients:
            raise ValueError("coefficients must not be empty")
        polynomial = Polynomial.from_values(self.coefficients)
        if polynomial.degree < 1:
            raise ValueError("polynomial must be at least of degree 1")

    def to_dict(self) -> Dict[str, Any]:
        """Convert parameters to a JSON-friendly dictionary."""
        return {
            'coefficients': [coefficient_to_json(c) for c in self.coefficients],
            'description': self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NewtonParameters':
        """Create parameters from dictionary, copying the coefficient list."""
        data = dict(data)
        if 'coefficients' in data:
            data['coefficients'] = list(data['coefficients'])
        return cls(**data)


class NewtonFractal:
    """Newton fractal of a polynomial."""

    name = "Newton"

    def __init__(self, parameters: Optional[NewtonParameters] = None):
        """
        Initialize Newton fractal.

        Args:
            parameters: Polynomial parameters (x^3 + 1 when omitted)
        """
        if parameters is None:
            parameters = NewtonParameters()
        parameters.validate()
        self.parameters = parameters
        self.polynomial = Polynomial.from_values(parameters.coefficients)
        self.derivative = self.polynomial.derive()

    @classmethod
    def from_coefficients(cls, coefficients: List[CoefficientLike]) -> 'NewtonFractal':
        return cls(NewtonParameters(coefficients=list(coefficients)))

    def create_iterator(self, **kwargs) -> NewtonIterator:
        """Create an iterator bound to this fractal's polynomial."""
        return NewtonIterator(self.polynomial, self.derivative, **kwargs)

    def compute_point(self, plane: ComplexPlane, iterator: NewtonIterator,
                      row: int, column: int) -> IterationResult:
        """Iterate the starting point of a single pixel."""
        return iterator.iterate(plane.pixel_to_complex(row, column))

    def get_recommended_bounds(self) -> Tuple[float, float, float, float]:
        """Get recommended viewing bounds (xmin, xmax, ymin, ymax)."""
        return (-2.0, 2.0, -2.0, 2.0)

    def get_description(self) -> str:
        if self.parameters.description:
            return self.parameters.description
        return f"Newton fractal of p(x) = {self.polynomial}"


POLYNOMIAL_PRESETS: Dict[str, NewtonParameters] = {
    'cubic': NewtonParameters([1, 0, 0, 1], "x^3 + 1"),
    'cubic_unity': NewtonParameters([-1, 0, 0, 1], "x^3 - 1"),
    'quartic': NewtonParameters([-1, 0, 0, 0, 1], "x^4 - 1"),
    'quintic': NewtonParameters([-1, 0, 0, 0, 0, 1], "x^5 - 1"),
    'sextic': NewtonParameters([-1, 0, 0, 1, 0, 0, 1], "x^6 + x^3 - 1"),
}


def create_fractal(preset: Union[str, None] = None,
                   coefficients: Optional[List[CoefficientLike]] = None) -> NewtonFractal:
    """
    Create a Newton fractal from a preset name or explicit coefficients.

    Explicit coefficients take precedence over the preset.
    """
    if coefficients is not None:
        return NewtonFractal.from_coefficients(coefficients)
    if preset is None:
        return NewtonFractal()

    parameters = POLYNOMIAL_PRESETS.get(preset.lower())
    if parameters is None:
        available = ', '.join(POLYNOMIAL_PRESETS.keys())
        raise ValueError(f"Unknown polynomial preset '{preset}'. Available: {available}")
    return NewtonFractal(NewtonParameters.from_dict(parameters.to_dict()))
