"""
Registry of polynomial roots discovered while rendering.

The position of a root in the registry is its color identity, so roots are
only ever appended and never reordered during a render.
"""

from typing import Iterator, List, Tuple
import logging

from .complex_number import ComplexNumber

logger = logging.getLogger(__name__)

ROOT_EQUALITY_TOLERANCE = 0.01


class RootRegistry:
    """Ordered, append-only list of known roots with approximate matching."""

    def __init__(self, tolerance: float = ROOT_EQUALITY_TOLERANCE,
                 legacy_indexing: bool = True):
        """
        Initialize an empty registry.

        Args:
            tolerance: Maximum distance at which a point matches a known root
            legacy_indexing: Keep the historical classification indices (last
                matching root wins, newly appended roots are reported one past
                their position). When False, the first match wins and new
                roots report their zero-based position.
        """
        if tolerance <= 0:
            raise ValueError("tolerance must be positive")

        self.tolerance = tolerance
        self.legacy_indexing = legacy_indexing
        self.max_root_index = 0
        self._roots: List[ComplexNumber] = []

    @property
    def roots(self) -> Tuple[ComplexNumber, ...]:
        return tuple(self._roots)

    def __len__(self) -> int:
        return len(self._roots)

    def __iter__(self) -> Iterator[ComplexNumber]:
        return iter(self._roots)

    def clear(self) -> None:
        self._roots.clear()
        self.max_root_index = 0

    def find(self, point: ComplexNumber) -> int:
        """Return the index of the matching root, or -1 when none matches."""
        match = -1
        for index, root in enumerate(self._roots):
            if point.subtract(root).absolute_value() <= self.tolerance:
                match = index
                if not self.legacy_indexing:
                    break
        return match

    def classify(self, point: ComplexNumber) -> Tuple[int, bool]:
        """
        Classify a converged point.

        Args:
            point: Result of a Newton iteration

        Returns:
            Tuple of (root index, whether the registry grew)
        """
        match = self.find(point)
        if match >= 0:
            return match, False

        self._roots.append(point)
        if self.legacy_indexing:
            # Reported index is one past the appended position. Palette
            # assignment depends on it, so it must stay as is.
            index = len(self._roots)
        else:
            index = len(self._roots) - 1
        self.max_root_index = index + 1

        logger.debug(f"New root #{len(self._roots)} discovered: {point}")
        return index, True
