"""
Newton fractal generation library.

This library renders Newton fractals: every pixel is mapped to a point of the
complex plane, Newton-Raphson iteration finds the polynomial root the point
converges to, and the pixel is colored by root identity and iteration count.

Key Features:
- Pure-Python complex arithmetic with IEEE float semantics
- Polynomials given as plain coefficient lists, with symbolic derivative
- Root discovery during rendering with stable color identities
- Built-in and matplotlib-derived root palettes
- PNG/JPEG/BMP export with embedded render metadata

Example usage:
    >>> from newton_fractal import FractalRenderer, RenderConfig
    >>> renderer = FractalRenderer(RenderConfig(width=320, height=240))
    >>> result = renderer.render(output_path="out.png")
"""

__version__ = "1.0.0"
__author__ = "Newton Fractal Team"

from newton_fractal.core.complex_number import ComplexNumber
from newton_fractal.core.polynomial import Polynomial
from newton_fractal.core.roots import RootRegistry
from newton_fractal.core.math_functions import ComplexPlane, NewtonIterator, IterationResult
from newton_fractal.core.fractal_types import NewtonFractal, NewtonParameters, POLYNOMIAL_PRESETS
from newton_fractal.rendering.coloring import ColorRGB, Palette, colorize, get_palette
from newton_fractal.rendering.image_output import ImageExporter, RenderMetadata

# Main API classes
from newton_fractal.api import FractalRenderer, RenderConfig, RenderResult

__all__ = [
    "FractalRenderer",
    "RenderConfig",
    "RenderResult",
    "ComplexNumber",
    "Polynomial",
    "RootRegistry",
    "ComplexPlane",
    "NewtonIterator",
    "IterationResult",
    "NewtonFractal",
    "NewtonParameters",
    "POLYNOMIAL_PRESETS",
    "ColorRGB",
    "Palette",
    "colorize",
    "get_palette",
    "ImageExporter",
    "RenderMetadata",
]
