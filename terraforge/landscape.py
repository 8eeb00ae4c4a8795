"""Landscape component layout derived from a map preset."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields

from .preset import MapPreset

logger = logging.getLogger(__name__)


def _ceil_log_two(value: int) -> int:
    return 0 if value <= 1 else (value - 1).bit_length()


def _divide_round_up(dividend: int, divisor: int) -> int:
    return (dividend + divisor - 1) // divisor


@dataclass(frozen=True)
class LandscapeSetting:
    """Sizes and component counts of a landscape built from a preset."""

    world_partition_grid_size: int = 0
    world_partition_region_size: int = 0
    quads_per_section: int = 0
    total_landscape_component_size: int = 0
    component_count_x: int = 0
    component_count_y: int = 0
    quads_per_component: int = 0
    size_x: int = 0
    size_y: int = 0

    @classmethod
    def from_preset(cls, preset: MapPreset) -> "LandscapeSetting":
        quads_per_section = int(preset.landscape_quads_per_section)
        sections = int(preset.landscape_sections_per_component)
        quads_per_component = sections * quads_per_section
        if quads_per_section <= 0 or sections <= 0:
            raise ValueError("quads per section and sections per component must be positive")
        count_x = (preset.width - 1) // quads_per_component
        count_y = (preset.height - 1) // quads_per_component
        setting = cls(
            world_partition_grid_size=preset.world_partition_grid_size,
            world_partition_region_size=preset.world_partition_region_size,
            quads_per_section=quads_per_section,
            component_count_x=count_x,
            component_count_y=count_y,
            quads_per_component=quads_per_component,
            size_x=count_x * quads_per_component + 1,
            size_y=count_y * quads_per_component + 1,
        )
        if not setting.is_recommended(preset):
            logger.warning("LandscapeSize is not a recommended value.")
        return setting

    @property
    def static_lighting_lod(self) -> int:
        """Static lighting LOD suited to the landscape's vertex count."""
        blocks = (self.size_x * self.size_y) // (2048 * 2048) + 1
        return _divide_round_up(_ceil_log_two(blocks), 2)

    def differs_from(self, other: "LandscapeSetting") -> bool:
        """True when any layout field differs, which calls for a new landscape."""
        return any(getattr(self, f.name) != getattr(other, f.name) for f in fields(self))

    def is_recommended(self, preset: MapPreset) -> bool:
        """True when the preset's resolution fits a whole number of components."""
        quads = self.quads_per_section * int(preset.landscape_sections_per_component)
        if quads <= 0:
            return False
        return (preset.width - 1) % quads == 0 and (preset.height - 1) % quads == 0