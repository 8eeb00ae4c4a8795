"""Deterministic random numbers and gradient noise used by the map generators."""

from __future__ import annotations

import random

import numpy as np

_MULTIPLIER = 196314165
_INCREMENT = 907633515
_MASK32 = 0xFFFFFFFF
_MANTISSA_SCALE = float(1 << 23)


class RandomStream:
    """A small linear congruential generator with reproducible sequences."""

    def __init__(self, seed):
        self.initial_seed = int(seed)
        self._state = int(seed) & _MASK32

    def _mutate(self) -> None:
        self._state = (self._state * _MULTIPLIER + _INCREMENT) & _MASK32

    def fraction(self) -> float:
        """Return the next value in the half-open range [0, 1)."""
        self._mutate()
        return (self._state >> 9) / _MANTISSA_SCALE

    def frand_range(self, low: float, high: float) -> float:
        """Return a float between ``low`` and ``high``."""
        return low + (high - low) * self.fraction()

    def rand_range(self, low: float, high: float) -> float:
        """Return a float between ``low`` and ``high`` (alias of frand_range)."""
        return self.frand_range(low, high)

    def rand_int_range(self, low: int, high: int) -> int:
        """Return an integer between ``low`` and ``high``, both inclusive."""
        span = high - low + 1
        if span <= 0:
            return low
        return low + min(int(self.fraction() * span), span - 1)


def _build_permutation() -> np.ndarray:
    table = list(range(256))
    random.Random(0x5EED).shuffle(table)
    return np.array(table + table, dtype=np.int64)


_PERMUTATION = _build_permutation()


def _fade(t):
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _grad(hash_value, x, y):
    h = hash_value & 7
    u = np.where(h < 4, x, y)
    v = np.where(h < 4, y, x)
    return np.where(h & 1, -u, u) + np.where(h & 2, -2.0 * v, 2.0 * v)


def _as_result(value):
    result = np.asarray(value, dtype=np.float64)
    return float(result) if result.ndim == 0 else result


def lerp(a, b, t):
    """Linear interpolation between ``a`` and ``b``; works on scalars and arrays."""
    return a + t * (b - a)


def perlin_noise_2d(x, y):
    """Two-dimensional gradient noise; zero on every integer lattice point."""
    xa = np.asarray(x, dtype=np.float64)
    ya = np.asarray(y, dtype=np.float64)
    x_floor = np.floor(xa)
    y_floor = np.floor(ya)
    xi = x_floor.astype(np.int64) & 255
    yi = y_floor.astype(np.int64) & 255
    fx = xa - x_floor
    fy = ya - y_floor

    perm = _PERMUTATION
    aa = perm[xi] + yi
    ab = aa + 1
    ba = perm[xi + 1] + yi
    bb = ba + 1

    u = _fade(fx)
    v = _fade(fy)
    result = lerp(
        lerp(_grad(perm[aa], fx, fy), _grad(perm[ba], fx - 1.0, fy), u),
        lerp(_grad(perm[ab], fx, fy - 1.0), _grad(perm[bb], fx - 1.0, fy - 1.0), u),
        v,
    )
    return _as_result(result)


def smooth_step(low, high, value):
    """Hermite step: 0 below ``low``, 1 at or above ``high``, smooth between."""
    v = np.asarray(value, dtype=np.float64)
    if high == low:
        return _as_result(np.where(v < low, 0.0, 1.0))
    f = np.clip((v - low) / (high - low), 0.0, 1.0)
    return _as_result(f * f * (3.0 - 2.0 * f))