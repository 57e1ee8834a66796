"""
Pydantic schemas for farmspawn settings and results.

All data structures exchanged with the host are defined here.

Design Philosophy:
- Spawn areas are immutable for the day (frozen models)
- Settings carry the stock defaults, so an empty settings file is a valid one
- Per-area fields override the global ones when set
- PlacedObjectSpec is the only thing the engine hands back to the host
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from farmspawn.environment import Footprint, TileCoordinate
from farmspawn.skills import Skill


# ============================================================================
# Stock tables
# ============================================================================

DEFAULT_QUARRY_TILE_INDEX: Tuple[int, ...] = (
    556, 558, 583, 606, 607, 608, 630, 635, 636, 680, 681, 685,
)
"""Back-layer indices of the quarry floor texture, matched by the "Quarry" terrain type."""

DEFAULT_MINING_LEVEL_REQUIRED: Dict[str, int] = {
    "stone": 0,
    "geode": 0,
    "frozengeode": 5,
    "magmageode": 8,
    "gem": 6,
    "copper": 0,
    "iron": 4,
    "gold": 7,
    "iridium": 9,
    "mystic": 10,
}

DEFAULT_STARTING_SPAWN_CHANCE: Dict[str, int] = {
    "stone": 66,
    "geode": 8,
    "frozengeode": 4,
    "magmageode": 2,
    "gem": 1,
    "copper": 21,
    "iron": 15,
    "gold": 10,
    "iridium": 1,
    "mystic": 1,
}

DEFAULT_LEVEL_TEN_SPAWN_CHANCE: Dict[str, int] = {
    "stone": 28,
    "geode": 6,
    "frozengeode": 5,
    "magmageode": 2,
    "gem": 1,
    "copper": 16,
    "iron": 13,
    "gold": 10,
    "iridium": 1,
    "mystic": 1,
}


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"


class SpawnCategory(str, Enum):
    FORAGE = "forage"
    LARGE_OBJECT = "large_object"
    ORE = "ore"


# ============================================================================
# Spawn areas
# ============================================================================


class SpawnArea(BaseModel):
    """A map plus the terrain rules that decide where objects may appear.

    ``terrain_types`` entries are case-insensitive: a back-layer "Type" value
    (e.g. "Grass", "Dirt"), or one of the special selectors "All", "Diggable",
    "Custom" and "Quarry". Include/exclude entries are region strings of four
    integers ("x1,y1/x2,y2" and similar) naming opposite corners.
    """

    model_config = ConfigDict(frozen=True)

    map_name: str = Field(..., description="Name of the map to spawn on")
    unique_area_id: str = Field("", description="Optional label used in log messages")
    min_spawns: int = Field(1, ge=0, description="Minimum spawns per day before skill bonus")
    max_spawns: int = Field(5, ge=0, description="Maximum spawns per day before skill bonus")
    terrain_types: Tuple[str, ...] = Field(default_factory=tuple)
    include_areas: Tuple[str, ...] = Field(default_factory=tuple)
    exclude_areas: Tuple[str, ...] = Field(default_factory=tuple)

    @property
    def label(self) -> str:
        """Human-friendly name for logs: the area id, or the map name without one."""
        if self.unique_area_id:
            return f"{self.unique_area_id} ({self.map_name})"
        return self.map_name


class ForageSpawnArea(SpawnArea):
    """Forage area; seasonal item lists override the global ones when set."""

    spring_item_index: Optional[Tuple[int, ...]] = None
    summer_item_index: Optional[Tuple[int, ...]] = None
    fall_item_index: Optional[Tuple[int, ...]] = None
    winter_item_index: Optional[Tuple[int, ...]] = None


class LargeObjectSpawnArea(SpawnArea):
    """Area for 2x2 objects such as stumps, logs and boulders.

    Duplicated names in ``object_types`` make that object proportionally more likely.
    """

    object_types: Tuple[str, ...] = Field(default_factory=tuple)


class OreSpawnArea(SpawnArea):
    """Ore area; the three chance tables override the global ones when set."""

    mining_level_required: Optional[Dict[str, int]] = None
    starting_spawn_chance: Optional[Dict[str, int]] = None
    level_ten_spawn_chance: Optional[Dict[str, int]] = None


# ============================================================================
# Engine inputs and outputs
# ============================================================================


class ObjectTypeEntry(BaseModel):
    """Chance-table row: required level and weights at that level and at level 10."""

    model_config = ConfigDict(frozen=True)

    name: str
    level_required: int = 0
    start_weight: int = 0
    max_weight: int = 0


class SpawnCountRequest(BaseModel):
    """How many objects an area asks for, before the skill bonus."""

    model_config = ConfigDict(frozen=True)

    min_spawns: int
    max_spawns: int
    percent_per_level: int = 0
    skill: Skill = Skill.FORAGING


class PlacedObjectSpec(BaseModel):
    """A resolved object and where to put it, for the host to instantiate."""

    model_config = ConfigDict(frozen=True)

    identity: int = Field(..., description="Internal object id")
    time_until_usable: int = Field(
        0, description="Hits to break (ore), clump health (large objects), 0 for forage",
    )
    tile: TileCoordinate
    name: str = ""
    category: SpawnCategory = SpawnCategory.FORAGE
    map_name: str = ""
    footprint: Footprint = Footprint.ONE_TILE


# ============================================================================
# Settings
# ============================================================================


class ForageSettings(BaseModel):
    areas: List[ForageSpawnArea] = Field(default_factory=list)
    percent_extra_spawns_per_foraging_level: int = 10
    spring_item_index: List[int] = Field(default_factory=lambda: [16, 18, 20, 22, 399])
    summer_item_index: List[int] = Field(default_factory=lambda: [396, 398, 402])
    fall_item_index: List[int] = Field(default_factory=lambda: [404, 406, 408, 410])
    winter_item_index: List[int] = Field(default_factory=lambda: [412, 414, 416, 418])
    custom_tile_index: List[int] = Field(default_factory=list)

    def items_for(self, area: ForageSpawnArea, season: Season) -> Tuple[int, ...]:
        """Item ids for ``season``, preferring the area's own list."""

        field_name = f"{season.value}_item_index"
        override = getattr(area, field_name)
        if override is not None:
            return tuple(override)
        return tuple(getattr(self, field_name))


class LargeObjectSettings(BaseModel):
    areas: List[LargeObjectSpawnArea] = Field(default_factory=list)
    percent_extra_spawns_per_foraging_level: int = 10
    custom_tile_index: List[int] = Field(default_factory=list)


class OreSettings(BaseModel):
    areas: List[OreSpawnArea] = Field(default_factory=list)
    percent_extra_spawns_per_mining_level: int = 10
    mining_level_required: Dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_MINING_LEVEL_REQUIRED)
    )
    starting_spawn_chance: Dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_STARTING_SPAWN_CHANCE)
    )
    level_ten_spawn_chance: Dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_LEVEL_TEN_SPAWN_CHANCE)
    )
    custom_tile_index: List[int] = Field(default_factory=list)

    def entries_for(self, area: OreSpawnArea) -> Dict[str, ObjectTypeEntry]:
        """Build the chance table for ``area``.

        Each of the area's three tables replaces the matching global table as
        a whole. Names come from the level-required table; a name missing
        from a chance table gets weight 0 there.
        """

        levels = area.mining_level_required if area.mining_level_required is not None else self.mining_level_required
        starting = area.starting_spawn_chance if area.starting_spawn_chance is not None else self.starting_spawn_chance
        level_ten = area.level_ten_spawn_chance if area.level_ten_spawn_chance is not None else self.level_ten_spawn_chance

        return {
            name: ObjectTypeEntry(
                name=name,
                level_required=level,
                start_weight=starting.get(name, 0),
                max_weight=level_ten.get(name, 0),
            )
            for name, level in levels.items()
        }


class SpawnSettings(BaseModel):
    """Everything the engine reads from a farm's settings file."""

    forage_spawn_enabled: bool = True
    large_object_spawn_enabled: bool = True
    ore_spawn_enabled: bool = True
    quarry_tile_index: List[int] = Field(default_factory=lambda: list(DEFAULT_QUARRY_TILE_INDEX))
    forage: ForageSettings = Field(default_factory=ForageSettings)
    large_objects: LargeObjectSettings = Field(default_factory=LargeObjectSettings)
    ore: OreSettings = Field(default_factory=OreSettings)
