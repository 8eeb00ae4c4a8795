import pytest

from terraforge.preset import BiomeSettings, MapPreset


def test_width_and_height_come_from_resolution():
    preset = MapPreset(map_resolution=(8, 4))
    assert preset.width == 8
    assert preset.height == 4


def test_resolution_sequence_becomes_tuple():
    preset = MapPreset(map_resolution=[8, 4])
    assert preset.map_resolution == (8, 4)


def test_total_pixels():
    assert MapPreset(map_resolution=(4, 3)).total_pixels == 12


def test_height_range():
    preset = MapPreset(min_height=0.0, max_height=1000.0)
    assert preset.height_range == 1000.0


def test_sea_level_height_without_water_is_floor():
    preset = MapPreset(min_height=-300.0, max_height=700.0, contain_water=False, sea_level=0.6)
    assert preset.sea_level_height == -300.0


def test_sea_level_height_with_water():
    preset = MapPreset(min_height=0.0, max_height=1000.0, contain_water=True, sea_level=0.25)
    assert preset.sea_level_height == pytest.approx(250.0)


@pytest.mark.parametrize("resolution", [(0, 5), (5, -1)])
def test_invalid_resolution_raises(resolution):
    with pytest.raises(ValueError):
        MapPreset(map_resolution=resolution)


def test_inverted_height_bounds_raise():
    with pytest.raises(ValueError):
        MapPreset(min_height=100.0, max_height=100.0)


def test_default_biome_lists_are_independent():
    first = MapPreset()
    second = MapPreset()
    first.biomes.append(BiomeSettings(name="Swamp"))
    assert len(second.biomes) == len(first.biomes) - 1