"""Dab blending, colour sampling, paint-like colour mixing and colour-space helpers for raster brushes."""

__version__ = "0.1.0"

__all__ = ["blendmodes", "colors", "fastlog", "fasttrig", "ppm", "sampling"]