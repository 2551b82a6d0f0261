"""Trace a moving square driven by a tiny command language."""

__version__ = "0.1.0"
