"""Width, depth and flow speed along a river, shaped by optional curves."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field

from .preset import MapPreset

_SMALL_NUMBER = 1.0e-8


@dataclass(frozen=True)
class FloatCurve:
    """A piecewise-linear curve through ``(time, value)`` keys, flat beyond its ends."""

    keys: tuple[tuple[float, float], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        ordered = tuple(sorted((float(t), float(v)) for t, v in self.keys))
        object.__setattr__(self, "keys", ordered)

    def value_at(self, t: float) -> float:
        """Curve value at ``t``; 0 for a curve without keys."""
        if not self.keys:
            return 0.0
        times = [key[0] for key in self.keys]
        if t <= times[0]:
            return self.keys[0][1]
        if t >= times[-1]:
            return self.keys[-1][1]
        upper = bisect_right(times, t)
        t0, v0 = self.keys[upper - 1]
        t1, v1 = self.keys[upper]
        if t1 == t0:
            return v1
        alpha = (t - t0) / (t1 - t0)
        return v0 + alpha * (v1 - v0)

    def value_range(self) -> tuple[float, float]:
        """Smallest and largest key value; ``(0, 0)`` for a curve without keys."""
        if not self.keys:
            return 0.0, 0.0
        values = [key[1] for key in self.keys]
        return min(values), max(values)


@dataclass(frozen=True)
class RiverPointProfile:
    """Shape of the river at one spline point."""

    width: float
    depth: float
    velocity: float


def _multiplier(curve: FloatCurve | None, distance: float) -> float:
    if curve is None:
        return distance
    low, high = curve.value_range()
    span = high - low
    if abs(span) <= _SMALL_NUMBER:
        return 1.0
    return (curve.value_at(distance) - low) / span


def river_profile(preset: MapPreset, num_points: int,
                  width_curve: FloatCurve | None = None,
                  depth_curve: FloatCurve | None = None,
                  velocity_curve: FloatCurve | None = None) -> list[RiverPointProfile]:
    """Profile for each of ``num_points`` spline points from source to mouth.

    Without a curve a quantity grows linearly along the river; a curve is
    normalised to its own value range first. Fewer than two points give no profile.
    """
    if num_points < 2:
        return []
    profile = []
    for index in range(num_points):
        distance = index / (num_points - 1)
        width = ((preset.river_width_base_value * _multiplier(width_curve, distance))
                 + preset.river_width_min) * preset.landscape_scale
        depth = (preset.river_depth_base_value * _multiplier(depth_curve, distance)
                 + preset.river_depth_min)
        velocity = (preset.river_velocity_base_value * _multiplier(velocity_curve, distance)
                    + preset.river_velocity_min)
        profile.append(RiverPointProfile(width=width, depth=depth, velocity=velocity))
    return profile