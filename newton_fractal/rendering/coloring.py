"""
Root-based coloring and palette management for Newton fractals.

Each pixel takes the palette color of the root it converged to, darkened in
proportion to the number of Newton steps that were needed.
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple, Union
import logging

try:
    import matplotlib
    MATPLOTLIB_AVAILABLE = True
except ImportError:
    MATPLOTLIB_AVAILABLE = False
    logging.getLogger(__name__).debug("matplotlib not available - colormap palettes disabled")

logger = logging.getLogger(__name__)

DARKEN_PER_ITERATION = 2


def _clamp_channel(value: int) -> int:
    return min(max(0, value), 255)


@dataclass(frozen=True)
class ColorRGB:
    """8-bit RGB color representation."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        """Validate RGB values."""
        for component in (self.r, self.g, self.b):
            if not 0 <= component <= 255:
                raise ValueError("RGB components must be between 0 and 255")

    @classmethod
    def from_hex(cls, value: str) -> 'ColorRGB':
        """Create color from a '#rrggbb' string."""
        value = value.lstrip('#')
        if len(value) != 6:
            raise ValueError(f"Invalid hex color: #{value}")
        return cls(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))

    def to_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def darken(self, amount: int) -> 'ColorRGB':
        """Subtract ``amount`` from every channel, clamped to 0-255."""
        return ColorRGB(
            _clamp_channel(self.r - amount),
            _clamp_channel(self.g - amount),
            _clamp_channel(self.b - amount),
        )


class Palette:
    """Fixed, ordered set of root colors."""

    def __init__(self, colors: Sequence[Union[ColorRGB, Tuple[int, int, int], str]],
                 name: str = "Custom"):
        """
        Initialize color palette.

        Args:
            colors: Colors as ColorRGB, (r, g, b) tuples or '#rrggbb' strings
            name: Human-readable name for the palette
        """
        parsed = []
        for color in colors:
            if isinstance(color, ColorRGB):
                parsed.append(color)
            elif isinstance(color, str):
                parsed.append(ColorRGB.from_hex(color))
            elif isinstance(color, (tuple, list)) and len(color) == 3:
                parsed.append(ColorRGB(*color))
            else:
                raise ValueError(f"Invalid color format: {color}")

        if not parsed:
            raise ValueError("Palette must contain at least 1 color")

        self.name = name
        self._colors: Tuple[ColorRGB, ...] = tuple(parsed)

    @property
    def colors(self) -> Tuple[ColorRGB, ...]:
        return self._colors

    def __len__(self) -> int:
        return len(self._colors)

    def __getitem__(self, index: int) -> ColorRGB:
        """Get color at ``index`` modulo the palette length."""
        return self._colors[index % len(self._colors)]

    @classmethod
    def from_matplotlib(cls, cmap_name: str, n_samples: int = 10) -> 'Palette':
        """Create palette by sampling a matplotlib colormap."""
        if not MATPLOTLIB_AVAILABLE:
            raise RuntimeError("matplotlib required for colormap import")
        if n_samples < 1:
            raise ValueError("n_samples must be positive")

        cmap = matplotlib.colormaps[cmap_name]
        colors = []
        for k in range(n_samples):
            position = k / (n_samples - 1) if n_samples > 1 else 0.0
            rgba = cmap(position)
            colors.append(ColorRGB(*(int(round(c * 255)) for c in rgba[:3])))
        return cls(colors, name=f"From_{cmap_name}")


def colorize(palette: Palette, root_index: int, iterations: int) -> ColorRGB:
    """
    Color for a pixel.

    Args:
        palette: Root palette
        root_index: Classification index of the converged root
        iterations: Number of Newton steps taken

    Returns:
        Palette color of the root, darkened by ``2 * iterations`` per channel
    """
    return palette[root_index].darken(iterations * DARKEN_PER_ITERATION)


# Named colors with the RGB values of the classic web/.NET color table
ROOT_COLORS = [
    ColorRGB(255, 0, 0),      # Red
    ColorRGB(0, 0, 255),      # Blue
    ColorRGB(0, 128, 0),      # Green
    ColorRGB(255, 255, 0),    # Yellow
    ColorRGB(255, 165, 0),    # Orange
    ColorRGB(255, 0, 255),    # Fuchsia
    ColorRGB(255, 215, 0),    # Gold
    ColorRGB(0, 255, 255),    # Cyan
    ColorRGB(255, 0, 255),    # Magenta
]


def _create_builtin_palettes() -> Dict[str, Palette]:
    palettes = {
        'default': Palette(ROOT_COLORS, name="Default"),
        'pastel': Palette(['#ffb3ba', '#bae1ff', '#baffc9', '#ffffba',
                           '#ffdfba', '#e0bbff'], name="Pastel"),
        'grayscale': Palette([(255, 255, 255), (170, 170, 170), (85, 85, 85)],
                             name="Grayscale"),
    }

    if MATPLOTLIB_AVAILABLE:
        for name in ('tab10', 'Set2'):
            try:
                palettes[name.lower()] = Palette.from_matplotlib(name, 8)
            except (KeyError, ValueError) as e:
                logger.warning(f"Could not load matplotlib palette {name}: {e}")

    return palettes


BUILTIN_PALETTES = _create_builtin_palettes()


def get_palette(name: str) -> Palette:
    """Get a built-in color palette by name."""
    palette = BUILTIN_PALETTES.get(name.lower())
    if palette is None:
        available = ', '.join(BUILTIN_PALETTES.keys())
        raise ValueError(f"Unknown color palette '{name}'. Available: {available}")
    return palette


def list_palettes() -> List[str]:
    """Get list of available color palettes."""
    return list(BUILTIN_PALETTES.keys())
