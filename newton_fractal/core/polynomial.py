"""
Polynomials with complex coefficients.

Coefficients are stored lowest power first: index ``i`` holds the coefficient
of ``x^i``.
"""

from typing import Iterable, Iterator, List, Sequence, Tuple, Union
import logging

from .complex_number import ComplexNumber

logger = logging.getLogger(__name__)

CoefficientLike = Union[ComplexNumber, complex, float, int, Sequence[float]]


def to_complex_number(value: CoefficientLike) -> ComplexNumber:
    """
    Convert a coefficient given in any supported form.

    Accepts ComplexNumber instances, python numbers and ``[re, im]`` pairs.
    """
    if isinstance(value, ComplexNumber):
        return value
    if isinstance(value, (int, float, complex)):
        return ComplexNumber.from_complex(value)
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return ComplexNumber(value[0], value[1])
    raise ValueError(f"Invalid coefficient: {value!r}")


class Polynomial:
    """Polynomial defined by an ordered sequence of complex coefficients."""

    def __init__(self, coefficients: Iterable[ComplexNumber] = ()):
        self._coefficients: Tuple[ComplexNumber, ...] = tuple(coefficients)

    @classmethod
    def from_values(cls, values: Iterable[CoefficientLike]) -> 'Polynomial':
        """Build a polynomial from numbers, complex numbers or ``[re, im]`` pairs."""
        return cls(to_complex_number(value) for value in values)

    @property
    def coefficients(self) -> Tuple[ComplexNumber, ...]:
        return self._coefficients

    @property
    def degree(self) -> int:
        """Highest power present; -1 for the empty polynomial."""
        return len(self._coefficients) - 1

    def __len__(self) -> int:
        return len(self._coefficients)

    def __iter__(self) -> Iterator[ComplexNumber]:
        return iter(self._coefficients)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self._coefficients == other._coefficients

    def __hash__(self) -> int:
        return hash(self._coefficients)

    def evaluate(self, point: Union[ComplexNumber, float, int]) -> ComplexNumber:
        """
        Evaluate the polynomial at a point.

        Args:
            point: Complex point, or a real number treated as ``point + 0i``

        Returns:
            Polynomial value at ``point``
        """
        if not isinstance(point, ComplexNumber):
            point = ComplexNumber(point, 0.0)

        value = ComplexNumber.ZERO
        power = None
        for index, coefficient in enumerate(self._coefficients):
            if index == 0:
                term = coefficient
            else:
                # point^index, built by repeated multiplication
                power = point if power is None else power.multiply(point)
                term = coefficient.multiply(power)
            value = value.add(term)
        return value

    def derive(self) -> 'Polynomial':
        """Return the derivative as a new polynomial."""
        return Polynomial(
            self._coefficients[index].multiply(ComplexNumber(index, 0.0))
            for index in range(1, len(self._coefficients))
        )

    def __call__(self, point: Union[ComplexNumber, float, int]) -> ComplexNumber:
        return self.evaluate(point)

    def __str__(self) -> str:
        return " + ".join(
            f"{coefficient}{'x' * index}"
            for index, coefficient in enumerate(self._coefficients)
        )

    def __repr__(self) -> str:
        return f"Polynomial({list(self._coefficients)!r})"


def coefficient_to_json(value: CoefficientLike) -> Union[float, List[float]]:
    """Convert a coefficient to a number or an ``[re, im]`` pair."""
    if isinstance(value, ComplexNumber):
        return [value.real, value.imaginary]
    if isinstance(value, complex):
        return [value.real, value.imag]
    if isinstance(value, tuple):
        return list(value)
    return value
