# terraforge

terraforge is a library for building terrain for game levels from a single
preset. It produces 16-bit height maps from layered noise, erodes and smooths
them, works out how a landscape built from them is laid out and placed in the
world, and plans river courses from high ground down to the sea.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `terraforge.preset`: `MapPreset` holds every tunable: resolution, seed,
  height limits, sea level, noise, erosion, smoothing, landscape and river
  settings. `BiomeSettings` describes a biome. `MapPreset.sea_level_height`
  gives the world height of the water surface, or the floor when the preset
  has no water.
- `terraforge.noise`: `RandomStream`, a seeded generator with reproducible
  sequences (`fraction`, `frand_range`, `rand_range`, `rand_int_range`), and
  `perlin_noise_2d`, `smooth_step` and `lerp`, which accept scalars or numpy
  arrays.
- `terraforge.heightmap`: `HeightScale` converts between 16-bit height map
  values and world heights. `TerrainNoise` blends mountain and plain noise with
  an optional island mask; `generate_height_map` fills a row-major `uint16`
  map with it. `fix_to_nearest_valid_resolution` snaps each side to a size of
  the form 2**n + 1, and `max_min_height` reports the highest and lowest world
  height of a map.
- `terraforge.erosion`: `erode` runs droplet-based hydraulic erosion and
  returns a new map. Deposits never raise terrain above its original height,
  and land that began above the sea is not carved below it. `ErosionBrush`
  holds the weighted neighbourhoods the droplets use.
- `terraforge.smoothing`: `spike_smooth` limits slopes to the preset's maximum
  angle, `gaussian_blur` and `median_smooth` filter a map, and
  `smooth_height_map` applies the passes the preset enables, in that order.
- `terraforge.export`: `export_grayscale` (16-bit), `export_weights` (8-bit)
  and `export_colors` (RGB) write maps as PNG files, creating the directory if
  needed.
- `terraforge.landscape`: `LandscapeSetting.from_preset` computes component
  counts and sizes, logs a warning when the resolution does not fit a whole
  number of components, and offers `static_lighting_lod`, `differs_from` and
  `is_recommended`.
- `terraforge.placement`: `landscape_transform` centres the landscape on the
  world origin, `landscape_point_world_position` gives the world position of a
  map pixel, and `needs_new_landscape` decides whether a landscape must be
  rebuilt rather than updated in place.
- `terraforge.path_geometry`: `point_segment_distance` and
  `simplify_path_rdp` (Ramer–Douglas–Peucker) for 2D or 3D polylines.
- `terraforge.river`: `RiverPlanner` finds source pixels above a threshold,
  picks a reproducible source per river, traces each river with a best-first
  search to the first pixel below the sea, and `plan_rivers` returns the
  simplified world-space paths (empty unless the preset's `generate_river` is
  set). `river_height_mask` marks where two height maps differ by more than a
  threshold.
- `terraforge.river_profile`: `FloatCurve` is a piecewise-linear curve, and
  `river_profile` gives the width, depth and velocity at each spline point of
  a river, optionally shaped by curves.

## Example

```python
from terraforge.preset import MapPreset
from terraforge.noise import RandomStream
from terraforge.heightmap import HeightScale, TerrainNoise, generate_height_map
from terraforge.erosion import erode
from terraforge.smoothing import smooth_height_map
from terraforge.export import export_grayscale
from terraforge.river import RiverPlanner

preset = MapPreset(map_resolution=(129, 129), erosion=True,
                   num_erosion_iterations=2000, generate_river=True)
stream = RandomStream(preset.seed)
noise = TerrainNoise.from_preset(preset, stream)
scale = HeightScale.from_preset(preset)

heights = generate_height_map(preset, noise)
heights = erode(preset, heights, scale, stream)
heights = smooth_height_map(preset, heights, scale)
export_grayscale(heights, preset.width, preset.height, "out/HeightMap.png")

planner = RiverPlanner(preset, heights, origin=(0.0, 0.0, 0.0),
                       extent=(6400.0, 6400.0, 0.0))
rivers = planner.plan_rivers()
```

## What it does not do

- There is no command-line program; the package is used as a library.
- It does not generate temperature or humidity maps, choose or blend biomes,
  or reshape terrain per biome. `BiomeSettings` and the related preset fields
  are carried as data only.
- There is no single call that runs every stage; the stages are combined by
  the caller, as in the example above.