"""
farmspawn - procedural spawn placement for farming-simulation maps.

Finds eligible tiles, decides how many objects to spawn from player skill,
weights object types by skill level, and returns placement instructions.

No file I/O required. No global state. No game loop.
All collaborators (maps, skills, randomness, logging) injected by the caller.
"""

__version__ = "0.3.0"

# Main engine
from .spawner import SpawnEngine
from .context import RandomSource, SpawnContext

# Engine steps
from .tiles import (
    is_valid_large_spawn_location,
    parse_region,
    scan,
    tiles_by_index,
    tiles_by_property,
    tiles_in_region,
)
from .counts import adjusted_spawn_count, spawn_count_for
from .chances import adjusted_spawn_chances, interpolate_weight
from .objects import (
    LargeObjectType,
    ObjectIdentity,
    OreType,
    resolve,
    resolve_forage,
    resolve_large_object,
    resolve_large_object_ids,
    resolve_ore,
    weighted_choice,
)

# Collaborator contracts
from .environment import (
    Footprint,
    GameMap,
    MapQuery,
    MapTile,
    PlacementSink,
    TileCoordinate,
    TileGrid,
)
from .skills import Farmer, FarmerRoster, Skill, SkillLookup
from .logging_utils import ConsoleLog, LogLevel, RecordingLog, SpawnLog

# Schemas
from .schemas import (
    DEFAULT_QUARRY_TILE_INDEX,
    ForageSettings,
    ForageSpawnArea,
    LargeObjectSettings,
    LargeObjectSpawnArea,
    ObjectTypeEntry,
    OreSettings,
    OreSpawnArea,
    PlacedObjectSpec,
    Season,
    SpawnArea,
    SpawnCategory,
    SpawnCountRequest,
    SpawnSettings,
)

# Settings loader helpers
from .loader import SettingsLoader, load_settings

__all__ = [
    # Main class
    "SpawnEngine",
    "SpawnContext",
    "RandomSource",
    # Engine steps
    "scan",
    "parse_region",
    "tiles_by_index",
    "tiles_by_property",
    "tiles_in_region",
    "is_valid_large_spawn_location",
    "adjusted_spawn_count",
    "spawn_count_for",
    "adjusted_spawn_chances",
    "interpolate_weight",
    "ObjectIdentity",
    "OreType",
    "LargeObjectType",
    "resolve",
    "resolve_ore",
    "resolve_large_object",
    "resolve_forage",
    "resolve_large_object_ids",
    "weighted_choice",
    # Collaborators
    "MapQuery",
    "PlacementSink",
    "TileGrid",
    "GameMap",
    "MapTile",
    "TileCoordinate",
    "Footprint",
    "Skill",
    "SkillLookup",
    "Farmer",
    "FarmerRoster",
    "SpawnLog",
    "ConsoleLog",
    "RecordingLog",
    "LogLevel",
    # Schemas
    "DEFAULT_QUARRY_TILE_INDEX",
    "SpawnArea",
    "ForageSpawnArea",
    "LargeObjectSpawnArea",
    "OreSpawnArea",
    "ObjectTypeEntry",
    "SpawnCountRequest",
    "PlacedObjectSpec",
    "Season",
    "SpawnCategory",
    "SpawnSettings",
    "ForageSettings",
    "LargeObjectSettings",
    "OreSettings",
    # Settings helpers
    "SettingsLoader",
    "load_settings",
]
