"""Test suite for newton_fractal."""
