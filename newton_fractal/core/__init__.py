"""Numeric core: complex numbers, polynomials, root registry and Newton iteration."""
