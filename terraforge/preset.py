"""Parameters describing a generated map and its biomes."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(kw_only=True)
class BiomeSettings:
    """A biome: its climate centre, colour, share of the map and mountain ratio."""

    name: str
    color: tuple[int, int, int] = (255, 255, 255)
    temperature: float = 20.0
    humidity: float = 0.5
    weight: float = 1.0
    mountain_ratio: float = 0.0


def _default_biomes() -> list[BiomeSettings]:
    return [
        BiomeSettings(name="Plains", color=(96, 160, 64), temperature=18.0, humidity=0.5,
                      weight=1.0, mountain_ratio=0.2),
        BiomeSettings(name="Desert", color=(220, 200, 120), temperature=35.0, humidity=0.1,
                      weight=1.0, mountain_ratio=0.1),
        BiomeSettings(name="Tundra", color=(230, 235, 240), temperature=-10.0, humidity=0.4,
                      weight=1.0, mountain_ratio=0.8),
    ]


def _default_water_biome() -> BiomeSettings:
    return BiomeSettings(name="Water", color=(30, 70, 200), temperature=15.0, humidity=1.0)


@dataclass(kw_only=True)
class MapPreset:
    """Every tunable used to build height, climate and biome maps."""

    map_resolution: tuple[int, int] = (505, 505)
    seed: int = 1337
    landscape_scale: float = 1.0
    apply_scale_to_noise: bool = True
    standard_noise_offset: float = 10000.0

    min_height: float = -10000.0
    max_height: float = 20000.0
    contain_water: bool = True
    sea_level: float = 0.4

    continent_noise_scale: float = 0.002
    terrain_noise_scale: float = 0.01
    octaves: int = 6
    persistence: float = 0.5
    lacunarity: float = 2.0
    redistribution_factor: float = 2.0

    is_island: bool = False
    island_shape_noise_scale: float = 0.01
    island_shape_noise_strength: float = 0.3
    island_falloff_exponent: float = 1.0

    erosion: bool = False
    num_erosion_iterations: int = 50000
    erosion_radius: int = 3
    initial_speed: float = 1.0
    initial_water_volume: float = 1.0
    max_droplet_lifetime: int = 30
    droplet_inertia: float = 0.05
    sediment_capacity_factor: float = 4.0
    min_sediment_capacity: float = 0.01
    deposit_speed: float = 0.3
    erode_speed: float = 0.3
    gravity: float = 4.0
    evaporate_speed: float = 0.01

    smooth_height: bool = True
    smooth_by_slope: bool = False
    max_slope_angle: float = 45.0
    smoothing_iteration: int = 3
    smoothing_strength: float = 0.5
    gaussian_blur_radius: int = 2
    smooth_by_medium_height: bool = False
    median_smooth_radius: int = 1

    min_temp: float = -20.0
    max_temp: float = 40.0
    temperature_noise_scale: float = 0.002
    temp_drop_per_1000_units: float = 6.5
    moisture_falloff_rate: float = 0.01
    temperature_influence_on_humidity: float = 0.5

    biomes: list[BiomeSettings] = field(default_factory=_default_biomes)
    water_biome: BiomeSettings = field(default_factory=_default_water_biome)
    water_blend_radius: int = 2
    biome_blend_radius: int = 5

    modify_terrain_by_biome: bool = False
    biome_height_blend_radius: int = 10
    plain_smooth_factor: float = 1.0
    biome_noise_scale: float = 0.01
    biome_noise_amplitude: float = 0.5

    export_map_textures: bool = False

    world_partition_grid_size: int = 2
    world_partition_region_size: int = 16
    landscape_quads_per_section: int = 63
    landscape_sections_per_component: int = 1

    generate_river: bool = False
    river_seed: int = 0
    river_count: int = 1
    river_source_elevation_ratio: float = 0.5
    river_spline_simplify_epsilon: float = 100.0
    river_width_base_value: float = 1000.0
    river_width_min: float = 200.0
    river_depth_base_value: float = 500.0
    river_depth_min: float = 100.0
    river_velocity_base_value: float = 50.0
    river_velocity_min: float = 10.0

    def __post_init__(self) -> None:
        width, height = (int(v) for v in self.map_resolution)
        if width <= 0 or height <= 0:
            raise ValueError(f"map resolution must be positive, got {width}x{height}")
        self.map_resolution = (width, height)
        if self.max_height <= self.min_height:
            raise ValueError("max_height must be greater than min_height")

    @property
    def width(self) -> int:
        return self.map_resolution[0]

    @property
    def height(self) -> int:
        return self.map_resolution[1]

    @property
    def height_range(self) -> float:
        """Distance between the lowest and highest allowed world height."""
        return self.max_height - self.min_height

    @property
    def sea_level_height(self) -> float:
        """World height of the water surface, or the floor when there is no water."""
        if self.contain_water:
            return self.min_height + self.sea_level * self.height_range
        return self.min_height

    @property
    def total_pixels(self) -> int:
        return self.width * self.height