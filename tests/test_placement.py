import pytest

from terraforge.landscape import LandscapeSetting
from terraforge.placement import (
    Transform,
    landscape_point_world_position,
    landscape_transform,
    needs_new_landscape,
)
from terraforge.preset import MapPreset


def _preset(**kwargs):
    kwargs.setdefault("map_resolution", (64, 32))
    return MapPreset(**kwargs)


def test_transform_scale_uses_landscape_scale_and_z_scale():
    transform = landscape_transform(_preset(landscape_scale=1.0), 5.0, 3.0)
    assert isinstance(transform, Transform)
    assert transform.scale == (100.0, 100.0, 3.0)
    assert transform.location[2] == 5.0


def test_transform_centres_landscape():
    preset = _preset(landscape_scale=2.0)
    transform = landscape_transform(preset, 0.0, 1.0)
    x, y, _ = transform.location
    sx, sy, _ = transform.scale
    assert x + preset.width * sx / 2.0 == pytest.approx(0.0)
    assert y + preset.height * sy / 2.0 == pytest.approx(0.0)


def test_transform_offset_grows_with_scale():
    small = landscape_transform(_preset(landscape_scale=1.0), 0.0, 1.0)
    large = landscape_transform(_preset(landscape_scale=2.0), 0.0, 1.0)
    assert large.location[0] == pytest.approx(2.0 * small.location[0])


def test_corner_point_matches_transform_location():
    preset = _preset()
    heights = [32768] * preset.total_pixels
    position = landscape_point_world_position(
        preset, heights, (0, 0), (0.0, 0.0, 0.0), (1000.0, 1000.0, 0.0), 2.0)
    transform = landscape_transform(preset, 0.0, 2.0)
    assert position[0] == pytest.approx(transform.location[0])
    assert position[1] == pytest.approx(transform.location[1])
    assert position[2] == pytest.approx(0.0)


def test_height_follows_height_map_value():
    preset = _preset()
    heights = [32768] * preset.total_pixels
    index = 3 * preset.width + 7
    heights[index] = 32768 + 128
    position = landscape_point_world_position(
        preset, heights, (7, 3), (0.0, 0.0, 0.0), (500.0, 500.0, 0.0), 4.0)
    assert position[2] == pytest.approx(4.0)


def test_origin_shifts_position():
    preset = _preset()
    heights = [40000] * preset.total_pixels
    base = landscape_point_world_position(
        preset, heights, (5, 5), (0.0, 0.0, 0.0), (800.0, 800.0, 0.0), 1.0)
    moved = landscape_point_world_position(
        preset, heights, (5, 5), (10.0, -20.0, 99.0), (800.0, 800.0, 0.0), 1.0)
    assert moved[0] - base[0] == pytest.approx(10.0)
    assert moved[1] - base[1] == pytest.approx(-20.0)
    assert moved[2] == pytest.approx(base[2])


def test_point_outside_map_raises():
    preset = _preset()
    heights = [0] * preset.total_pixels
    with pytest.raises(IndexError):
        landscape_point_world_position(
            preset, heights, (preset.width, 0), (0, 0, 0), (1, 1, 0), 1.0)


def test_short_height_map_raises():
    preset = _preset()
    with pytest.raises(ValueError):
        landscape_point_world_position(preset, [0, 1, 2], (0, 0), (0, 0, 0), (1, 1, 0), 1.0)


def _setting(preset):
    return LandscapeSetting.from_preset(preset)


def test_unchanged_setting_and_resolution_keeps_landscape():
    preset = _preset(map_resolution=(64, 64))
    setting = _setting(preset)
    assert needs_new_landscape(setting, setting, (64, 64), preset) is False


def test_changed_setting_requires_new_landscape():
    preset = _preset(map_resolution=(127, 127))
    other = _preset(map_resolution=(253, 253))
    assert needs_new_landscape(_setting(other), _setting(preset), (127, 127), preset) is True


def test_missing_landscape_requires_new_one():
    preset = _preset(map_resolution=(64, 64))
    setting = _setting(preset)
    assert needs_new_landscape(setting, setting, None, preset) is True


def test_no_previous_setting_requires_new_landscape():
    preset = _preset(map_resolution=(64, 64))
    assert needs_new_landscape(None, _setting(preset), (64, 64), preset) is True


def test_resolution_mismatch_requires_new_landscape():
    preset = _preset(map_resolution=(64, 64))
    setting = _setting(preset)
    assert needs_new_landscape(setting, setting, (64, 63), preset) is True


def test_only_total_vertex_count_is_compared():
    preset = _preset(map_resolution=(64, 32))
    setting = _setting(preset)
    assert needs_new_landscape(setting, setting, (32, 64), preset) is False