"""Height map scale conversions and noise-driven terrain height generation."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .noise import RandomStream, lerp, perlin_noise_2d, smooth_step
from .preset import MapPreset

HEIGHT_MAP_MAX = 65535
HEIGHT_MAP_MID = 32768.0


def _as_result(value):
    result = np.asarray(value, dtype=np.float64)
    return float(result) if result.ndim == 0 else result


@dataclass(frozen=True)
class HeightScale:
    """Mapping between 16-bit height map values and world heights."""

    z_scale: float
    z_offset: float

    @classmethod
    def from_preset(cls, preset: MapPreset) -> "HeightScale":
        z_scale = (preset.max_height - preset.min_height) * 0.001953125
        abs_max = abs(preset.max_height)
        abs_min = abs(preset.min_height)
        abs_offset = abs(abs_max - abs_min) / 2.0
        z_offset = -abs_offset if abs_max < abs_min else abs_offset
        return cls(z_scale=z_scale, z_offset=z_offset)

    def to_world(self, value):
        """World height of a height map value (scalar or array)."""
        v = np.asarray(value, dtype=np.float64)
        return _as_result((v - HEIGHT_MAP_MID) * self.z_scale / 128.0 + self.z_offset)

    def to_height_map(self, height):
        """Height map value of a world height, truncated and kept in 0..65535."""
        h = np.asarray(height, dtype=np.float64)
        raw = (h - self.z_offset) * 128.0 / self.z_scale + HEIGHT_MAP_MID
        values = np.clip(np.trunc(raw), 0, HEIGHT_MAP_MAX).astype(np.uint16)
        return int(values) if values.ndim == 0 else values


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def fix_to_nearest_valid_resolution(width: int, height: int) -> tuple[int, int]:
    """Snap each side to the nearest size of the form 2**n + 1."""

    def fix(value: int) -> int:
        if value < 2:
            raise ValueError(f"resolution must be at least 2, got {value}")
        return 2 ** _round_half_up(math.log2(value - 1)) + 1

    return fix(width), fix(height)


@dataclass(frozen=True)
class TerrainNoise:
    """Noise offsets and scale that turn pixel coordinates into terrain heights."""

    noise_scale: float
    plain_height: float
    plain_offset: tuple[float, float]
    mountain_offset: tuple[float, float]
    blend_offset: tuple[float, float]
    detail_offset: tuple[float, float]
    island_offset: tuple[float, float]

    @classmethod
    def from_preset(cls, preset: MapPreset, stream: RandomStream) -> "TerrainNoise":
        noise_scale = 1.0
        if preset.apply_scale_to_noise and preset.landscape_scale > 0.0:
            # Logarithmic growth keeps large landscapes from getting too coarse.
            noise_scale = math.log(preset.landscape_scale, 25.0) + 1.0

        spread = preset.standard_noise_offset * noise_scale

        def offset() -> tuple[float, float]:
            x = stream.frand_range(-spread, spread)
            y = stream.frand_range(-spread, spread)
            return (x, y)

        plain = offset()
        mountain = offset()
        blend = offset()
        detail = offset()
        island = offset()
        plain_height = preset.sea_level * 1.005 if preset.contain_water else 0.0
        return cls(
            noise_scale=noise_scale,
            plain_height=plain_height,
            plain_offset=plain,
            mountain_offset=mountain,
            blend_offset=blend,
            detail_offset=detail,
            island_offset=island,
        )

    def height_at(self, preset: MapPreset, x, y):
        """Terrain height in 0..1 at pixel coordinates (scalars or arrays)."""
        xs = np.asarray(x, dtype=np.float64)
        ys = np.asarray(y, dtype=np.float64)
        scale = self.noise_scale

        continent = preset.continent_noise_scale * scale
        mountain = perlin_noise_2d(
            xs * continent + self.mountain_offset[0],
            ys * continent + self.mountain_offset[1],
        )
        mountain = np.clip(np.asarray(mountain) * 2.0, -1.0, 1.0)

        if preset.octaves > 0:
            amplitude = 1.0
            frequency = 1.0
            detail = 0.0
            max_amplitude = 0.0
            terrain = preset.terrain_noise_scale * scale
            for _ in range(preset.octaves):
                value = perlin_noise_2d(
                    xs * terrain * frequency + self.detail_offset[0],
                    ys * terrain * frequency + self.detail_offset[1],
                )
                detail = detail + np.asarray(value) * amplitude
                max_amplitude += amplitude
                amplitude *= preset.persistence
                frequency *= preset.lacunarity
            mountain = np.clip(mountain + detail / max_amplitude * 0.3, -1.0, 1.0)

        blend = np.asarray(perlin_noise_2d(
            xs * continent + self.blend_offset[0],
            ys * continent + self.blend_offset[1],
        )) * 0.5 + 0.5
        factor = preset.redistribution_factor
        if factor > 1.0:
            inside = (blend > 0.0) & (blend < 1.0)
            safe = np.clip(blend, 0.0, 1.0)
            pow_x = np.power(safe, factor)
            pow_rest = np.power(1.0 - safe, factor)
            blend = np.where(inside, pow_x / (pow_x + pow_rest), blend)
        blend = smooth_step(0.0, 1.0, blend)

        mountain = mountain * 0.5 + 0.5
        height = np.clip(lerp(self.plain_height, mountain, blend), 0.0, 1.0)

        if preset.is_island:
            nx = xs / preset.width * 2.0 - 1.0
            ny = ys / preset.height * 2.0 - 1.0
            distance = np.sqrt(nx * nx + ny * ny)
            island_scale = preset.island_shape_noise_scale * scale
            coast = np.asarray(perlin_noise_2d(
                xs * island_scale + self.island_offset[0],
                ys * island_scale + self.island_offset[1],
            ))
            distorted = distance + coast * preset.island_shape_noise_strength
            mask = np.clip((1.0 - distorted) * 3.0, 0.0, 1.0)
            mask = np.power(mask, preset.island_falloff_exponent)
            mask = np.clip(smooth_step(0.0, 1.0, mask), 0.0, 1.0)
            height = np.clip(height * mask, 0.0, 1.0)

        return _as_result(height)


def generate_height_map(preset: MapPreset, noise: TerrainNoise) -> np.ndarray:
    """Row-major uint16 height map of ``width * height`` values."""
    ys, xs = np.mgrid[0:preset.height, 0:preset.width]
    heights = np.asarray(noise.height_at(preset, xs, ys), dtype=np.float64)
    values = np.clip(np.floor(heights * HEIGHT_MAP_MAX + 0.5), 0, HEIGHT_MAP_MAX)
    return values.astype(np.uint16).ravel()


def max_min_height(preset: MapPreset, height_map, scale: HeightScale) -> tuple[float, float]:
    """Highest and lowest world height of the map, bounded by the preset's limits."""
    total = preset.total_pixels
    values = np.asarray(height_map)
    if values.size < total:
        raise ValueError(f"height map holds {values.size} values, expected {total}")
    world = np.asarray(scale.to_world(values.ravel()[:total]))
    highest = max(float(preset.min_height), float(world.max()))
    lowest = min(float(preset.max_height), float(world.min()))
    return highest, lowest