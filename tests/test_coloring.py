"""Tests for root palettes and pixel colorization."""

import pytest

from newton_fractal.rendering.coloring import (
    ROOT_COLORS,
    ColorRGB,
    Palette,
    colorize,
    get_palette,
    list_palettes,
)


@pytest.fixture
def palette():
    return get_palette('default')


class TestColorize:
    def test_no_iterations_keeps_base_color(self, palette):
        assert colorize(palette, 0, 0) == ColorRGB(255, 0, 0)

    def test_darkens_two_per_iteration(self, palette):
        assert colorize(palette, 1, 30) == ColorRGB(0, 0, 195)

    def test_index_wraps_around_palette(self, palette):
        assert len(palette) == 9
        assert colorize(palette, 9, 0) == colorize(palette, 0, 0)
        assert colorize(palette, 10, 5) == colorize(palette, 1, 5)

    def test_channels_clamp_at_zero(self, palette):
        assert colorize(palette, 3, 200) == ColorRGB(0, 0, 0)

    def test_default_palette_order(self, palette):
        assert palette.colors == tuple(ROOT_COLORS)
        assert palette[2] == ColorRGB(0, 128, 0)


class TestColorRGB:
    def test_out_of_range(self):
        with pytest.raises(ValueError):
            ColorRGB(256, 0, 0)
        with pytest.raises(ValueError):
            ColorRGB(0, -1, 0)

    def test_from_hex(self):
        assert ColorRGB.from_hex('#ff8000') == ColorRGB(255, 128, 0)
        with pytest.raises(ValueError):
            ColorRGB.from_hex('#fff')

    def test_darken_clamps(self):
        assert ColorRGB(10, 100, 255).darken(50) == ColorRGB(0, 50, 205)


class TestPalette:
    def test_mixed_color_formats(self):
        palette = Palette([ColorRGB(1, 2, 3), (4, 5, 6), '#070809'], name="Mixed")
        assert palette.colors == (ColorRGB(1, 2, 3), ColorRGB(4, 5, 6), ColorRGB(7, 8, 9))
        assert palette.name == "Mixed"

    def test_empty_palette(self):
        with pytest.raises(ValueError):
            Palette([])

    def test_invalid_color(self):
        with pytest.raises(ValueError):
            Palette([(1, 2)])

    def test_get_palette_is_case_insensitive(self):
        assert get_palette('DEFAULT') is get_palette('default')

    def test_unknown_palette(self):
        with pytest.raises(ValueError, match="Available"):
            get_palette('nope')

    def test_builtin_palettes_listed(self):
        names = list_palettes()
        assert {'default', 'pastel', 'grayscale'} <= set(names)

    def test_from_matplotlib(self):
        pytest.importorskip("matplotlib")
        palette = Palette.from_matplotlib('viridis', 4)
        assert len(palette) == 4
        assert palette.name == "From_viridis"
