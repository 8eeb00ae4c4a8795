"""Height map smoothing: slope limiting, Gaussian blur and median filtering."""

from __future__ import annotations

import math

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .heightmap import HEIGHT_MAP_MAX, HeightScale
from .preset import MapPreset


def _grid(height_map, width: int, height: int) -> np.ndarray:
    values = np.asarray(height_map).ravel()
    if values.size != width * height:
        raise ValueError(f"height map holds {values.size} values, expected {width * height}")
    return values.astype(np.uint16).reshape(height, width)


def gaussian_blur(height_map, width: int, height: int, radius: int) -> np.ndarray:
    """Separable Gaussian blur with clamped edges; returns uint16 values."""
    grid = _grid(height_map, width, height)
    if radius < 0:
        raise ValueError(f"blur radius must not be negative, got {radius}")
    if radius == 0:
        return grid.ravel().copy()
    offsets = np.arange(-radius, radius + 1, dtype=np.float64)
    kernel = np.exp(-(offsets * offsets) / (2.0 * radius * radius))
    kernel /= kernel.sum()

    values = grid.astype(np.float64)
    padded = np.pad(values, ((0, 0), (radius, radius)), mode="edge")
    horizontal = sum(w * padded[:, k:k + width] for k, w in enumerate(kernel))
    padded = np.pad(horizontal, ((radius, radius), (0, 0)), mode="edge")
    vertical = sum(w * padded[k:k + height, :] for k, w in enumerate(kernel))

    rounded = np.clip(np.floor(vertical + 0.5), 0, HEIGHT_MAP_MAX)
    return rounded.astype(np.uint16).ravel()


def spike_smooth(preset: MapPreset, height_map, scale: HeightScale) -> np.ndarray:
    """Flatten patches whose slope exceeds the preset's maximum angle."""
    width, height = preset.map_resolution
    grid = _grid(height_map, width, height).copy()
    if not preset.smooth_by_slope:
        return grid.ravel()

    kernel_radius = int(preset.gaussian_blur_radius / 2.0)
    kernel_size = 2 * kernel_radius + 1
    max_slope = math.tan(math.radians(preset.max_slope_angle))
    step = int(max(kernel_radius / 2.0, 1))
    landscape_scale = preset.landscape_scale * 100.0
    length = kernel_size * landscape_scale
    low = preset.min_height + scale.z_offset
    high = preset.max_height + scale.z_offset
    ky, kx = np.mgrid[-kernel_radius:kernel_radius + 1, -kernel_radius:kernel_radius + 1]
    kx = kx * landscape_scale
    ky = ky * landscape_scale
    r = kernel_radius

    for _ in range(preset.smoothing_iteration):
        original = grid.copy()
        world = np.asarray(scale.to_world(original), dtype=np.float64)
        smoothed = 0
        for y in range(r, height - r, step):
            for x in range(r, width - r, step):
                tl = world[y - r, x - r]
                tr = world[y - r, x + r]
                bl = world[y + r, x - r]
                br = world[y + r, x + r]
                slope_x = ((br - bl) / length + (tr - tl) / length) / 2.0
                slope_y = ((br - tr) / length + (bl - tl) / length) / 2.0
                slope = math.sqrt(slope_x * slope_x + slope_y * slope_y)
                if slope <= max_slope:
                    continue
                smoothed += 1
                average = (tl + tr + br + bl) / 4.0
                factor = max_slope / slope
                window = world[y - r:y + r + 1, x - r:x + r + 1]
                current = slope_x * kx + slope_y * ky + average
                corrected = slope_x * factor * kx + slope_y * factor * ky + average
                new_world = np.clip(window + (corrected - current), low, high)
                new_values = np.asarray(scale.to_height_map(new_world), dtype=np.float64)
                old_values = np.asarray(scale.to_height_map(window), dtype=np.float64)
                mixed = old_values + preset.smoothing_strength * (new_values - old_values)
                grid[y - r:y + r + 1, x - r:x + r + 1] = np.trunc(mixed).astype(np.uint16)
        if smoothed == 0:
            break
    return grid.ravel()


def median_smooth(height_map, width: int, height: int, radius: int) -> np.ndarray:
    """Replace each interior pixel by the median of its square neighbourhood."""
    grid = _grid(height_map, width, height)
    result = grid.copy()
    if radius <= 0 or width <= 2 * radius or height <= 2 * radius:
        return result.ravel()
    size = 2 * radius + 1
    windows = sliding_window_view(grid, (size, size))
    flat = windows.reshape(windows.shape[0], windows.shape[1], -1)
    middle = flat.shape[-1] // 2
    medians = np.partition(flat, middle, axis=-1)[..., middle]
    result[radius:height - radius, radius:width - radius] = medians
    return result.ravel()


def smooth_height_map(preset: MapPreset, height_map, scale: HeightScale) -> np.ndarray:
    """Apply every smoothing pass the preset enables, in order."""
    width, height = preset.map_resolution
    if not preset.smooth_height:
        return _grid(height_map, width, height).ravel().copy()
    values = spike_smooth(preset, height_map, scale)
    values = gaussian_blur(values, width, height, preset.gaussian_blur_radius)
    if preset.smooth_by_medium_height:
        values = median_smooth(values, width, height, preset.median_smooth_radius)
    return values