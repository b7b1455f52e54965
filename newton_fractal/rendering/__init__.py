"""Coloring and image export."""
