import numpy as np
import pytest

from terraforge.heightmap import HeightScale
from terraforge.preset import MapPreset
from terraforge.smoothing import gaussian_blur, median_smooth, smooth_height_map, spike_smooth


def _ramp_preset(**overrides):
    values = dict(
        map_resolution=(9, 9),
        min_height=-1000.0,
        max_height=1000.0,
        smooth_by_slope=True,
        max_slope_angle=10.0,
        gaussian_blur_radius=4,
        smoothing_iteration=2,
        smoothing_strength=0.5,
    )
    values.update(overrides)
    return MapPreset(**values)


def _ramp():
    ys, xs = np.mgrid[0:9, 0:9]
    return (xs * 5000).astype(np.uint16).ravel()


def test_gaussian_blur_keeps_constant_map():
    values = np.full(30, 12345, dtype=np.uint16)
    result = gaussian_blur(values, 6, 5, 2)
    assert np.array_equal(result, values)


def test_gaussian_blur_stays_within_original_range():
    rng = np.random.default_rng(4)
    values = rng.integers(1000, 50000, size=64).astype(np.uint16)
    result = gaussian_blur(values, 8, 8, 2)
    assert result.min() >= values.min()
    assert result.max() <= values.max()
    assert np.ptp(result.astype(int)) < np.ptp(values.astype(int))


def test_gaussian_blur_radius_zero_is_identity():
    values = np.arange(12, dtype=np.uint16)
    assert np.array_equal(gaussian_blur(values, 4, 3, 0), values)


def test_gaussian_blur_rejects_wrong_size():
    with pytest.raises(ValueError):
        gaussian_blur(np.zeros(5, dtype=np.uint16), 2, 2, 1)


def test_median_smooth_removes_single_spike():
    values = np.full(25, 1000, dtype=np.uint16)
    values[12] = 60000
    result = median_smooth(values, 5, 5, 1)
    assert result[12] == 1000


def test_median_smooth_leaves_border_untouched():
    rng = np.random.default_rng(9)
    values = rng.integers(0, 65535, size=36).astype(np.uint16)
    result = median_smooth(values, 6, 6, 1).reshape(6, 6)
    grid = values.reshape(6, 6)
    assert np.array_equal(result[0], grid[0])
    assert np.array_equal(result[-1], grid[-1])
    assert np.array_equal(result[:, 0], grid[:, 0])
    assert np.array_equal(result[:, -1], grid[:, -1])


def test_median_smooth_is_window_median():
    rng = np.random.default_rng(2)
    values = rng.integers(0, 65535, size=25).astype(np.uint16)
    result = median_smooth(values, 5, 5, 1)
    window = values.reshape(5, 5)[1:4, 1:4].ravel()
    assert result[2 * 5 + 2] == int(np.median(window))


def test_spike_smooth_disabled_returns_copy():
    preset = _ramp_preset(smooth_by_slope=False)
    values = _ramp()
    result = spike_smooth(preset, values, HeightScale.from_preset(preset))
    assert np.array_equal(result, values)


def test_spike_smooth_flattens_steep_ramp():
    preset = _ramp_preset()
    values = _ramp()
    result = spike_smooth(preset, values, HeightScale.from_preset(preset))
    assert not np.array_equal(result, values)
    assert result.max() <= values.max()
    assert result.min() >= values.min()


def test_spike_smooth_keeps_flat_map():
    preset = _ramp_preset()
    values = np.full(81, 30000, dtype=np.uint16)
    result = spike_smooth(preset, values, HeightScale.from_preset(preset))
    assert np.array_equal(result, values)


def test_smooth_height_map_disabled_is_identity():
    preset = _ramp_preset(smooth_height=False)
    values = _ramp()
    result = smooth_height_map(preset, values, HeightScale.from_preset(preset))
    assert np.array_equal(result, values)


def test_smooth_height_map_keeps_constant_map():
    preset = _ramp_preset(smooth_by_medium_height=True)
    values = np.full(81, 20000, dtype=np.uint16)
    result = smooth_height_map(preset, values, HeightScale.from_preset(preset))
    assert np.array_equal(result, values)