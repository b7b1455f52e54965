"""
Main API classes for Newton fractal generation.

This module provides the high-level interface: the render configuration and
the renderer that walks the pixel grid, runs the Newton iteration for every
pixel, classifies the converged point and colors the image.
"""

import numpy as np
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from dataclasses import dataclass, field, fields
from pathlib import Path
import logging
import time

from . import __version__
from .core.complex_number import ComplexNumber
from .core.fractal_types import DEFAULT_COEFFICIENTS, NewtonFractal
from .core.math_functions import (
    ITERATION_TOLERANCE,
    MAX_ITERATIONS,
    MIN_COORDINATE_THRESHOLD,
    ComplexPlane,
)
from .core.polynomial import CoefficientLike, coefficient_to_json
from .core.roots import ROOT_EQUALITY_TOLERANCE, RootRegistry
from .rendering.coloring import colorize, get_palette
from .rendering.image_output import ImageExporter, RenderMetadata

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


@dataclass
class RenderConfig:
    """Configuration for Newton fractal rendering."""

    # Image parameters
    width: int = 800
    height: int = 600
    bounds: Tuple[float, float, float, float] = (-2.0, 2.0, -1.5, 1.5)  # xmin, xmax, ymin, ymax

    # Polynomial, lowest power first
    coefficients: List[CoefficientLike] = field(default_factory=lambda: list(DEFAULT_COEFFICIENTS))

    # Iteration parameters
    max_iterations: int = MAX_ITERATIONS
    iteration_tolerance: float = ITERATION_TOLERANCE
    root_tolerance: float = ROOT_EQUALITY_TOLERANCE
    min_coordinate: float = MIN_COORDINATE_THRESHOLD
    retry_large_steps: bool = True
    step_limit: Optional[int] = None

    # Coloring
    palette: str = 'default'
    legacy_indexing: bool = True

    # Output
    save_metadata: bool = True

    def validate(self):
        """Validate configuration parameters."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Width and height must be positive")

        if len(self.bounds) != 4:
            raise ValueError("bounds must be (xmin, xmax, ymin, ymax)")

        xmin, xmax, ymin, ymax = self.bounds
        if xmin >= xmax or ymin >= ymax:
            raise ValueError("Invalid bounds: min values must be less than max")

        if not self.coefficients:
            raise ValueError("coefficients must not be empty")

        if self.max_iterations <= 0:
            raise ValueError("max_iterations must be positive")

        if self.iteration_tolerance <= 0 or self.root_tolerance <= 0:
            raise ValueError("tolerances must be positive")

        if self.step_limit is not None and self.step_limit < 1:
            raise ValueError("step_limit must be at least 1")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-friendly dictionary."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data['bounds'] = list(self.bounds)
        data['coefficients'] = [coefficient_to_json(c) for c in self.coefficients]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RenderConfig':
        """Create configuration from dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        data = dict(data)
        if 'bounds' in data:
            data['bounds'] = tuple(data['bounds'])
        if 'coefficients' in data:
            data['coefficients'] = list(data['coefficients'])
        return cls(**data)


@dataclass
class RenderResult:
    """Output of a render."""

    image: np.ndarray  # (height, width, 3) uint8
    root_indices: np.ndarray  # (height, width)
    iterations: np.ndarray  # (height, width)
    roots: Tuple[ComplexNumber, ...]
    max_root_index: int
    polynomial: str
    derivative: str
    render_time: float = 0.0
    output_path: Optional[Path] = None

    def to_metadata(self, config: RenderConfig) -> RenderMetadata:
        return RenderMetadata(
            polynomial=self.polynomial,
            derivative=self.derivative,
            bounds=tuple(config.bounds),
            resolution=(config.width, config.height),
            max_iterations=config.max_iterations,
            color_palette=config.palette,
            roots=[[root.real, root.imaginary] for root in self.roots],
            max_root_index=self.max_root_index,
            render_time_seconds=self.render_time,
            software_version=__version__,
        )


class FractalRenderer:
    """Main Newton fractal rendering engine."""

    def __init__(self, config: Optional[RenderConfig] = None):
        """
        Initialize fractal renderer.

        Args:
            config: Rendering configuration (uses defaults if None)
        """
        self.config = config or RenderConfig()
        self.config.validate()
        self.palette = get_palette(self.config.palette)
        self._image_exporter = None

        logger.info(f"FractalRenderer initialized: {self.config.width}x{self.config.height}, "
                    f"palette={self.palette.name}")

    @property
    def image_exporter(self) -> ImageExporter:
        if self._image_exporter is None:
            self._image_exporter = ImageExporter()
        return self._image_exporter

    def create_plane(self) -> ComplexPlane:
        xmin, xmax, ymin, ymax = self.config.bounds
        return ComplexPlane(xmin, xmax, ymin, ymax,
                            self.config.width, self.config.height,
                            min_coordinate=self.config.min_coordinate)

    def render(self, fractal: Optional[NewtonFractal] = None,
               output_path: Optional[Union[str, Path]] = None,
               progress_callback: Optional[ProgressCallback] = None) -> RenderResult:
        """
        Render a Newton fractal.

        Args:
            fractal: Fractal to render (built from config coefficients if None)
            output_path: Save the image here when given
            progress_callback: Called with the completed fraction after every row

        Returns:
            RenderResult with the image, per-pixel data and discovered roots
        """
        config = self.config
        if fractal is None:
            fractal = NewtonFractal.from_coefficients(config.coefficients)

        logger.info(f"Polynomial: {fractal.polynomial}")
        logger.info(f"Derivative: {fractal.derivative}")

        plane = self.create_plane()
        iterator = fractal.create_iterator(
            max_iterations=config.max_iterations,
            tolerance=config.iteration_tolerance,
            retry_large_steps=config.retry_large_steps,
            step_limit=config.step_limit,
        )
        registry = RootRegistry(config.root_tolerance, config.legacy_indexing)

        width, height = config.width, config.height
        # Pixel buffer is addressed [x, y], i.e. [column, row]
        pixels = np.zeros((width, height, 3), dtype=np.uint8)
        root_indices = np.zeros((height, width), dtype=np.int64)
        iterations = np.zeros((height, width), dtype=np.int64)

        start_time = time.time()
        for i in range(height):
            for j in range(width):
                result = fractal.compute_point(plane, iterator, i, j)
                root_index, _ = registry.classify(result.point)

                pixels[j, i] = colorize(self.palette, root_index, result.iterations).to_tuple()
                root_indices[i, j] = root_index
                iterations[i, j] = result.iterations

            logger.debug(f"Row {i + 1}/{height} done, {len(registry)} roots known")
            if progress_callback:
                progress_callback((i + 1) / height)

        render_time = time.time() - start_time
        logger.info(f"Rendered {width}x{height} in {render_time:.2f}s, "
                    f"{len(registry)} roots found (max root index {registry.max_root_index})")

        result = RenderResult(
            image=np.ascontiguousarray(pixels.transpose(1, 0, 2)),
            root_indices=root_indices,
            iterations=iterations,
            roots=registry.roots,
            max_root_index=registry.max_root_index,
            polynomial=str(fractal.polynomial),
            derivative=str(fractal.derivative),
            render_time=render_time,
        )

        if output_path is not None:
            metadata = result.to_metadata(config) if config.save_metadata else None
            result.output_path = self.image_exporter.save_image(result.image, output_path, metadata)

        return result
