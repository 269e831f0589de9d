"""Vibe Commerce: produkty, koszyk i checkout."""

__version__ = "1.0.0"
