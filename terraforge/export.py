"""Writing generated maps to PNG images."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image


def _checked(values, width: int, height: int, channels: int = 1) -> np.ndarray:
    array = np.asarray(values)
    expected = width * height * channels
    if width <= 0 or height <= 0:
        raise ValueError(f"image size must be positive, got {width}x{height}")
    if array.size != expected:
        raise ValueError(f"map holds {array.size} values, expected {expected}")
    return array


def _save(image: Image.Image, path) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    image.save(target, format="PNG")
    return target


def export_grayscale(values, width: int, height: int, path) -> Path:
    """Save 16-bit values as a grayscale PNG."""
    array = _checked(values, width, height)
    grid = np.clip(array.ravel(), 0, 65535).astype(np.uint16).reshape(height, width)
    return _save(Image.fromarray(grid), path)


def export_weights(values, width: int, height: int, path) -> Path:
    """Save 8-bit weights as a grayscale PNG."""
    array = _checked(values, width, height)
    grid = np.clip(array.ravel(), 0, 255).astype(np.uint8).reshape(height, width)
    return _save(Image.fromarray(grid), path)


def export_colors(colors, width: int, height: int, path) -> Path:
    """Save RGB triples, one per pixel, as a colour PNG."""
    array = _checked(colors, width, height, channels=3)
    grid = np.clip(array.reshape(-1, 3), 0, 255).astype(np.uint8).reshape(height, width, 3)
    return _save(Image.fromarray(grid), path)