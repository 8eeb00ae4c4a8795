import logging

import pytest

from terraforge.landscape import LandscapeSetting
from terraforge.preset import MapPreset


def test_recommended_resolution_keeps_size():
    preset = MapPreset(map_resolution=(505, 253))
    setting = LandscapeSetting.from_preset(preset)
    assert setting.size_x == 505
    assert setting.size_y == 253
    assert setting.is_recommended(preset)


def test_layout_invariants():
    preset = MapPreset(map_resolution=(700, 300), landscape_quads_per_section=31,
                       landscape_sections_per_component=2)
    setting = LandscapeSetting.from_preset(preset)
    assert setting.quads_per_component == 62
    assert setting.size_x == setting.component_count_x * setting.quads_per_component + 1
    assert setting.size_y == setting.component_count_y * setting.quads_per_component + 1
    assert setting.size_x <= preset.width
    assert setting.size_y <= preset.height


def test_unrecommended_resolution_logs_warning(caplog):
    preset = MapPreset(map_resolution=(500, 500))
    with caplog.at_level(logging.WARNING):
        setting = LandscapeSetting.from_preset(preset)
    assert not setting.is_recommended(preset)
    assert "LandscapeSize is not a recommended value." in caplog.text


def test_settings_from_same_preset_do_not_differ():
    preset = MapPreset()
    first = LandscapeSetting.from_preset(preset)
    second = LandscapeSetting.from_preset(preset)
    assert first.differs_from(second) is False


def test_changed_grid_size_differs():
    first = LandscapeSetting.from_preset(MapPreset(world_partition_grid_size=2))
    second = LandscapeSetting.from_preset(MapPreset(world_partition_grid_size=4))
    assert first.differs_from(second) is True


def test_changed_resolution_differs():
    first = LandscapeSetting.from_preset(MapPreset(map_resolution=(505, 505)))
    second = LandscapeSetting.from_preset(MapPreset(map_resolution=(1009, 1009)))
    assert second.differs_from(first) is True


def test_default_setting_differs_from_generated():
    generated = LandscapeSetting.from_preset(MapPreset())
    assert generated.differs_from(LandscapeSetting()) is True


def test_static_lighting_lod_small_map_is_zero():
    setting = LandscapeSetting.from_preset(MapPreset())
    assert setting.static_lighting_lod == 0


def test_static_lighting_lod_grows_with_size():
    sizes = [505, 2017, 4033, 8065]
    lods = [LandscapeSetting.from_preset(MapPreset(map_resolution=(s, s))).static_lighting_lod
            for s in sizes]
    assert lods == sorted(lods)
    assert lods[-1] > lods[0]


def test_zero_quads_rejected():
    with pytest.raises(ValueError):
        LandscapeSetting.from_preset(MapPreset(landscape_quads_per_section=0))