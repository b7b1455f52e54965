"""
Core mathematical functions for Newton fractal iteration.

This module provides the pixel-to-plane coordinate mapping and the
Newton–Raphson iteration used to find which root a point converges to.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union
import logging

from .complex_number import ComplexNumber
from .polynomial import Polynomial

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 30
ITERATION_TOLERANCE = 0.5
MIN_COORDINATE_THRESHOLD = 0.0001


class ComplexPlane:
    """Represents a complex plane region with coordinate mapping utilities."""

    def __init__(self, xmin: float, xmax: float, ymin: float, ymax: float,
                 width: int, height: int,
                 min_coordinate: float = MIN_COORDINATE_THRESHOLD):
        """
        Initialize complex plane bounds and resolution.

        Args:
            xmin, xmax: Real axis bounds
            ymin, ymax: Imaginary axis bounds
            width, height: Image resolution in pixels
            min_coordinate: Replacement for coordinates that land exactly on an axis
        """
        if xmin >= xmax or ymin >= ymax:
            raise ValueError("Invalid bounds: min values must be less than max values")
        if width <= 0 or height <= 0:
            raise ValueError("Width and height must be positive")

        self.xmin = xmin
        self.xmax = xmax
        self.ymin = ymin
        self.ymax = ymax
        self.width = width
        self.height = height
        self.min_coordinate = min_coordinate

        self.x_increment = (xmax - xmin) / width
        self.y_increment = (ymax - ymin) / height

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return (self.xmin, self.xmax, self.ymin, self.ymax)

    def pixel_to_complex(self, row: int, column: int) -> ComplexNumber:
        """
        Convert a pixel position to its starting point in the plane.

        Exact zero components are replaced by ``min_coordinate`` so the
        iteration never starts on an axis.
        """
        x = self.xmin + column * self.x_increment
        y = self.ymin + row * self.y_increment

        if x == 0:
            x = self.min_coordinate
        if y == 0:
            y = self.min_coordinate
        return ComplexNumber(x, y)


@dataclass(frozen=True)
class IterationResult:
    """Outcome of iterating a single starting point."""

    point: ComplexNumber
    iterations: int


class NewtonIterator:
    """Newton–Raphson iteration against a fixed polynomial."""

    def __init__(self, polynomial: Polynomial, derivative: Optional[Polynomial] = None,
                 max_iterations: int = MAX_ITERATIONS,
                 tolerance: float = ITERATION_TOLERANCE,
                 retry_large_steps: bool = True,
                 step_limit: Optional[int] = None):
        """
        Initialize Newton iterator.

        Args:
            polynomial: Polynomial whose roots are searched
            derivative: Its derivative (computed when omitted)
            max_iterations: Number of small steps performed per point
            tolerance: Step size at or above which a step is retried
            retry_large_steps: When False, every step consumes the budget
            step_limit: Hard cap on total steps per point (None for no cap)
        """
        if max_iterations <= 0:
            raise ValueError("max_iterations must be positive")
        if tolerance <= 0:
            raise ValueError("tolerance must be positive")
        if step_limit is not None and step_limit < 1:
            raise ValueError("step_limit must be at least 1")

        self.polynomial = polynomial
        self.derivative = derivative if derivative is not None else polynomial.derive()
        self.max_iterations = max_iterations
        self.tolerance = tolerance
        self.retry_large_steps = retry_large_steps
        self.step_limit = step_limit

    def step(self, point: ComplexNumber) -> Tuple[ComplexNumber, ComplexNumber]:
        """Perform one Newton step, returning (new point, delta)."""
        delta = self.polynomial.evaluate(point).divide(self.derivative.evaluate(point))
        return point.subtract(delta), delta

    def iterate(self, start: Union[ComplexNumber, complex]) -> IterationResult:
        """
        Iterate from a starting point.

        The loop never stops early on convergence. It performs steps until
        ``max_iterations`` of them were smaller than ``tolerance``; larger
        steps still move the point and are included in the returned count.

        Args:
            start: Starting point in the complex plane

        Returns:
            IterationResult with the final point and total number of steps
        """
        if not isinstance(start, ComplexNumber):
            start = ComplexNumber.from_complex(start)

        point = start
        iterations = 0
        slot = 0
        while slot < self.max_iterations:
            point, delta = self.step(point)
            iterations += 1
            # NaN compares false here, so a broken point still consumes a slot
            if not (self.retry_large_steps and delta.absolute_value() >= self.tolerance):
                slot += 1
            if self.step_limit is not None and iterations >= self.step_limit:
                logger.debug(f"Step limit {self.step_limit} reached starting from {start}")
                break

        return IterationResult(point, iterations)
