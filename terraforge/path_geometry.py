"""Point-to-segment distance and polyline simplification."""

from __future__ import annotations

import numpy as np


def _vector(point) -> np.ndarray:
    return np.asarray(point, dtype=np.float64).ravel()


def point_segment_distance(point, start, end) -> float:
    """Shortest distance from ``point`` to the segment from ``start`` to ``end``."""
    p = _vector(point)
    a = _vector(start)
    b = _vector(end)
    if not p.shape == a.shape == b.shape:
        raise ValueError("point and segment ends must have the same dimension")
    segment = b - a
    length_sq = float(segment @ segment)
    if length_sq == 0.0:
        closest = a
    else:
        t = float((p - a) @ segment) / length_sq
        closest = a + min(max(t, 0.0), 1.0) * segment
    return float(np.linalg.norm(p - closest))


def simplify_path_rdp(points, epsilon: float) -> list[tuple[float, ...]]:
    """Ramer-Douglas-Peucker simplification keeping both ends of the path."""
    if epsilon < 0:
        raise ValueError(f"epsilon must not be negative, got {epsilon}")
    path = [tuple(float(c) for c in p) for p in points]
    if len(path) < 3:
        return path

    keep = {0, len(path) - 1}
    pending = [(0, len(path) - 1)]
    while pending:
        first, last = pending.pop()
        if last - first < 2:
            continue
        farthest = first
        max_distance = 0.0
        for index in range(first + 1, last):
            distance = point_segment_distance(path[index], path[first], path[last])
            if distance > max_distance:
                farthest = index
                max_distance = distance
        if max_distance > epsilon:
            keep.add(farthest)
            pending.append((first, farthest))
            pending.append((farthest, last))
    return [path[index] for index in sorted(keep)]