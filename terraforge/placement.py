"""Placing the generated landscape in the world and sampling points on it."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .heightmap import HEIGHT_MAP_MID
from .landscape import LandscapeSetting
from .preset import MapPreset

_UNITS_PER_METRE = 100.0


@dataclass(frozen=True)
class Transform:
    """World location and per-axis scale of a landscape actor."""

    location: tuple[float, float, float]
    scale: tuple[float, float, float]


def _centre_offset(preset: MapPreset) -> tuple[float, float]:
    factor = _UNITS_PER_METRE * preset.landscape_scale
    return (-preset.width / 2.0) * factor, (-preset.height / 2.0) * factor


def landscape_transform(preset: MapPreset, z_offset: float, z_scale: float) -> Transform:
    """Transform that centres the landscape on the world origin."""
    offset_x, offset_y = _centre_offset(preset)
    horizontal = _UNITS_PER_METRE * preset.landscape_scale
    return Transform(
        location=(offset_x, offset_y, float(z_offset)),
        scale=(horizontal, horizontal, float(z_scale)),
    )


def landscape_point_world_position(preset: MapPreset, height_map, point, origin, extent,
                                   z_scale: float) -> tuple[float, float, float]:
    """World position of map pixel ``point`` on a landscape of the given bounds.

    The height comes from the height map value scaled by ``z_scale``.
    """
    values = np.asarray(height_map).ravel()
    if values.size < preset.total_pixels:
        raise ValueError(
            f"height map holds {values.size} values, expected {preset.total_pixels}")
    x, y = (int(v) for v in point)
    if not (0 <= x < preset.width and 0 <= y < preset.height):
        raise IndexError(f"point ({x}, {y}) outside {preset.width}x{preset.height} map")
    origin_x, origin_y, _origin_z = (float(v) for v in origin)
    extent_x, extent_y = float(extent[0]), float(extent[1])
    offset_x, offset_y = _centre_offset(preset)

    world_x = origin_x + 2.0 * (x / float(preset.width)) * extent_x + offset_x
    world_y = origin_y + 2.0 * (y / float(preset.height)) * extent_y + offset_y
    value = float(values[y * preset.width + x])
    world_z = (value - HEIGHT_MAP_MID) / 128.0 * z_scale
    return world_x, world_y, world_z


def needs_new_landscape(previous: LandscapeSetting | None, current: LandscapeSetting,
                        existing_resolution, preset: MapPreset) -> bool:
    """Whether the landscape has to be rebuilt rather than updated in place.

    ``existing_resolution`` is the vertex count per side of the landscape already
    present, or None when there is none.
    """
    if previous is None:
        previous = LandscapeSetting()
    if current.differs_from(previous):
        return True
    if existing_resolution is None:
        return True
    existing_x, existing_y = (int(v) for v in existing_resolution)
    return existing_x * existing_y != preset.width * preset.height