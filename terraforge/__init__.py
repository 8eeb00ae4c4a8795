"""Procedural terrain height maps, erosion, smoothing, landscape layout and river planning."""

__version__ = "0.1.0"