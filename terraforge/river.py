"""Planning river courses from high ground down to the sea."""

from __future__ import annotations

import heapq

import numpy as np

from .heightmap import HEIGHT_MAP_MAX, HeightScale
from .noise import RandomStream
from .path_geometry import simplify_path_rdp
from .preset import MapPreset

_SEED_STRIDE = 9973
_SEA_MARGIN = 5.0


class RiverPlanner:
    """Finds river sources and traces each river to the sea over a height map."""

    def __init__(self, preset: MapPreset, height_map, origin, extent):
        values = np.asarray(height_map).ravel()
        if values.size < preset.total_pixels:
            raise ValueError(
                f"height map holds {values.size} values, expected {preset.total_pixels}")
        self.preset = preset
        self.origin = tuple(float(v) for v in origin)
        self.extent = tuple(float(v) for v in extent)
        if len(self.origin) < 2 or len(self.extent) < 2:
            raise ValueError("origin and extent need at least x and y components")
        self._values = values[:preset.total_pixels].astype(np.float64)
        scale = HeightScale.from_preset(preset)
        self._world_z = np.asarray(scale.to_world(self._values), dtype=np.float64).ravel()
        self.sea_height = (preset.min_height + preset.height_range * preset.sea_level
                           - _SEA_MARGIN)
        ratio = min(max(preset.river_source_elevation_ratio, 0.0), 1.0)
        threshold = self.sea_height + (preset.max_height - self.sea_height) * ratio
        self._source_threshold = min(max(int(threshold), 0), HEIGHT_MAP_MAX)
        self._start_points: list[tuple[int, int]] | None = None

    def _checked(self, point) -> tuple[int, int]:
        x, y = (int(v) for v in point)
        if not (0 <= x < self.preset.width and 0 <= y < self.preset.height):
            raise IndexError(
                f"point ({x}, {y}) outside {self.preset.width}x{self.preset.height} map")
        return x, y

    def world_position(self, point) -> tuple[float, float, float]:
        """World position of map pixel ``point`` on the landscape surface."""
        x, y = self._checked(point)
        width, height = self.preset.map_resolution
        span_x = float(width - 1) if width > 1 else 1.0
        span_y = float(height - 1) if height > 1 else 1.0
        world_x = self.origin[0] + 2.0 * (x / span_x) * self.extent[0]
        world_y = self.origin[1] + 2.0 * (y / span_y) * self.extent[1]
        return world_x, world_y, float(self._world_z[y * width + x])

    def start_points(self) -> list[tuple[int, int]]:
        """Pixels high enough to be a river source, in row order."""
        if self._start_points is None:
            width = self.preset.width
            hits = np.flatnonzero(self._world_z >= self._source_threshold)
            self._start_points = [(int(i % width), int(i // width)) for i in hits]
        return list(self._start_points)

    def random_start_point(self, river_index: int) -> tuple[int, int]:
        """Reproducible source for river number ``river_index``."""
        stream = RandomStream(self.preset.river_seed + river_index * _SEED_STRIDE)
        candidates = self.start_points()
        if candidates:
            return candidates[stream.rand_int_range(0, len(candidates) - 1)]
        return self.preset.width // 2, self.preset.height - 1

    def trace_river(self, start) -> list[tuple[float, float, float]] | None:
        """World positions from ``start`` to the first pixel below the sea, or None."""
        start = self._checked(start)
        width, height = self.preset.map_resolution
        cost = {start: 0.0}
        came_from = {start: start}
        frontier = [(0.0, 0, start)]
        counter = 1
        goal = None

        while frontier:
            _priority, _order, current = heapq.heappop(frontier)
            cx, cy = current
            if self._world_z[cy * width + cx] < self.sea_height:
                goal = current
                break
            for dx in (-1, 0, 1):
                for dy in (-1, 0, 1):
                    if dx == 0 and dy == 0:
                        continue
                    nx, ny = cx + dx, cy + dy
                    if not (0 <= nx < width and 0 <= ny < height):
                        continue
                    neighbour = (nx, ny)
                    new_cost = cost[current] + 1.0
                    if neighbour not in cost or new_cost < cost[neighbour]:
                        cost[neighbour] = new_cost
                        heuristic = self._values[ny * width + nx] - self.sea_height
                        heapq.heappush(frontier, (new_cost + heuristic, counter, neighbour))
                        counter += 1
                        came_from[neighbour] = current

        if goal is None:
            return None
        path = []
        node = goal
        while node != start:
            path.append(self.world_position(node))
            node = came_from[node]
        path.append(self.world_position(start))
        path.reverse()
        return path

    def plan_rivers(self) -> list[list[tuple[float, ...]]]:
        """Simplified world-space paths of every river the preset asks for."""
        if not self.preset.generate_river:
            return []
        rivers = []
        for index in range(self.preset.river_count):
            path = self.trace_river(self.random_start_point(index))
            if path is not None:
                rivers.append(simplify_path_rdp(path, self.preset.river_spline_simplify_epsilon))
        return rivers


def river_height_mask(base, blended, min_diff: int) -> np.ndarray:
    """65535 where the water layer moved the terrain by more than ``min_diff``, else 0."""
    base_values = np.asarray(base, dtype=np.int64).ravel()
    blended_values = np.asarray(blended, dtype=np.int64).ravel()
    if base_values.size != blended_values.size:
        raise ValueError(
            f"height maps differ in size: {base_values.size} and {blended_values.size}")
    changed = np.abs(base_values - blended_values) > int(min_diff)
    return np.where(changed, HEIGHT_MAP_MAX, 0).astype(np.uint16)