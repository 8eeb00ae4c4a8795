"""Hydraulic erosion by simulated water droplets."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .heightmap import HeightScale
from .noise import RandomStream
from .preset import MapPreset

_KINDA_SMALL_NUMBER = 1.0e-4


@dataclass(frozen=True)
class ErosionBrush:
    """Per-cell neighbourhoods and normalised weights used to spread erosion."""

    width: int
    height: int
    radius: int
    _offsets_x: np.ndarray = field(repr=False, compare=False)
    _offsets_y: np.ndarray = field(repr=False, compare=False)
    _weights: np.ndarray = field(repr=False, compare=False)
    _cache: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def build(cls, width: int, height: int, radius: int) -> "ErosionBrush":
        """Prepare a brush of ``radius`` for a ``width`` by ``height`` map."""
        if width <= 0 or height <= 0:
            raise ValueError(f"map size must be positive, got {width}x{height}")
        if radius < 1:
            raise ValueError(f"erosion radius must be at least 1, got {radius}")
        oy, ox = np.mgrid[-radius:radius + 1, -radius:radius + 1]
        ox = ox.ravel()
        oy = oy.ravel()
        dist = np.sqrt((ox * ox + oy * oy).astype(np.float64))
        keep = dist <= radius
        return cls(
            width=width,
            height=height,
            radius=radius,
            _offsets_x=ox[keep],
            _offsets_y=oy[keep],
            _weights=1.0 - dist[keep] / radius,
        )

    def __len__(self) -> int:
        return self.width * self.height

    def cell(self, index: int) -> tuple[np.ndarray, np.ndarray]:
        """Map indices touched by a droplet at ``index`` and their weights (summing to 1)."""
        total = self.width * self.height
        if not 0 <= index < total:
            raise IndexError(f"cell index {index} outside 0..{total - 1}")
        cached = self._cache.get(index)
        if cached is not None:
            return cached
        center_x = index % self.width
        center_y = index // self.height
        xs = center_x + self._offsets_x
        ys = center_y + self._offsets_y
        valid = (xs >= 0) & (xs < self.width) & (ys >= 0) & (ys < self.height)
        indices = np.clip(ys[valid] * self.width + xs[valid], 0, total - 1).astype(np.int64)
        weights = self._weights[valid].copy()
        weight_sum = weights.sum()
        if weight_sum > 0:
            weights /= weight_sum
        self._cache[index] = (indices, weights)
        return indices, weights


def height_and_gradient(height_map, width: int, landscape_scale: float,
                        pos_x: float, pos_y: float) -> tuple[float, tuple[float, float]]:
    """Bilinear height at a fractional position and the local gradient."""
    heights = np.asarray(height_map, dtype=np.float64).ravel()
    coord_x = int(pos_x)
    coord_y = int(pos_y)
    x = pos_x - coord_x
    y = pos_y - coord_y

    index_00 = coord_y * width + coord_x
    index_10 = index_00 + 1
    index_01 = index_00 + width
    index_11 = index_01 + 1

    h00 = float(heights[index_00])
    h10 = float(heights[index_10])
    h01 = float(heights[index_01])
    h11 = float(heights[index_11])

    grad_x = ((h10 - h00) * (1 - y) + (h11 - h01)) / landscape_scale
    grad_y = ((h01 - h00) * (1 - x) + (h11 - h10)) / landscape_scale
    value = h00 * (1 - x) * (1 - y) + h10 * x * (1 - y) + h01 * (1 - x) * y + h11 * x * y
    return value, (grad_x, grad_y)


def erode(preset: MapPreset, height_map, scale: HeightScale, stream: RandomStream,
          brush: ErosionBrush | None = None) -> np.ndarray:
    """Return an eroded copy of a uint16 height map."""
    original = np.asarray(height_map).astype(np.uint16).ravel()
    if preset.num_erosion_iterations <= 0 or not preset.erosion:
        return original.copy()

    width, height = preset.map_resolution
    total = width * height
    if original.size != total:
        raise ValueError(f"height map holds {original.size} values, expected {total}")
    if (brush is None or brush.radius != preset.erosion_radius
            or (brush.width, brush.height) != (width, height)):
        brush = ErosionBrush.build(width, height, preset.erosion_radius)

    world = np.array(scale.to_world(original), dtype=np.float64)
    sea_level_height = preset.sea_level_height
    landscape_scale = preset.landscape_scale * 100.0
    inertia = preset.droplet_inertia

    for _ in range(preset.num_erosion_iterations):
        pos_x = stream.rand_range(1.0, width - 2.0)
        pos_y = stream.rand_range(1.0, height - 2.0)
        dir_x = dir_y = 0.0
        speed = preset.initial_speed
        water = preset.initial_water_volume
        sediment = 0.0

        for _lifetime in range(preset.max_droplet_lifetime):
            node_x = int(pos_x)
            node_y = int(pos_y)
            if node_x < 0 or node_x >= width - 1 or node_y < 0 or node_y >= height - 1:
                break
            droplet_index = node_y * width + node_x

            current_height, (grad_x, grad_y) = height_and_gradient(
                world, width, landscape_scale, pos_x, pos_y)
            dir_x = dir_x * inertia - grad_x * (1 - inertia)
            dir_y = dir_y * inertia - grad_y * (1 - inertia)
            length = (dir_x * dir_x + dir_y * dir_y) ** 0.5
            if length > _KINDA_SMALL_NUMBER:
                dir_x /= length
                dir_y /= length

            pos_x += dir_x
            pos_y += dir_y
            if pos_x <= 0 or pos_x >= width - 1 or pos_y <= 0 or pos_y >= height - 1:
                break

            new_height, _ = height_and_gradient(world, width, landscape_scale, pos_x, pos_y)
            if new_height <= sea_level_height:
                break
            difference = new_height - current_height
            capacity = max(-difference * speed * water * preset.sediment_capacity_factor,
                           preset.min_sediment_capacity)

            indices, weights = brush.cell(droplet_index)
            if sediment > capacity or difference > 0:
                if difference > 0:
                    deposit = min(sediment, difference)
                else:
                    deposit = (sediment - capacity) * preset.deposit_speed
                sediment -= deposit
                world[indices] += deposit * weights
            else:
                amount = min(capacity - sediment, -difference) * preset.erode_speed
                world[indices] -= amount * weights
                sediment += amount

            speed = max(0.0, speed * speed - difference * preset.gravity) ** 0.5
            water *= 1.0 - preset.evaporate_speed

    sea_value = scale.to_height_map(sea_level_height)
    eroded = np.asarray(scale.to_height_map(world), dtype=np.uint16)
    # Deposits never lift terrain above its original height.
    result = np.minimum(eroded, original)
    # Land that started above the sea is not carved below it.
    result = np.where(original >= sea_value, np.maximum(result, sea_value), result)
    return result.astype(np.uint16)