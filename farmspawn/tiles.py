"""Tile eligibility scanning.

Builds the set of tiles a spawn area may use today:

1. Terrain selectors each contribute the open tiles they match
2. Include regions contribute every open tile inside them
3. Exclude regions remove their open tiles, whichever rule added them
4. For 2x2 objects, tiles without a fully open 2x2 block are dropped

Every tile must be open and placeable at scan time. Region strings come
straight from player configs, so malformed ones are logged and skipped.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .context import SpawnContext
from .environment import BACK_LAYER, Footprint, TileCoordinate
from .logging_utils import LogLevel
from .schemas import DEFAULT_QUARRY_TILE_INDEX, SpawnArea

Region = Tuple[TileCoordinate, TileCoordinate]

_REGION_DELIMITERS = re.compile(r"[,/;]")
_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)


def parse_region(region: str) -> Optional[Region]:
    """Parse a region string into ``(top_left, bottom_right)``.

    The string holds four integers separated by commas, slashes or
    semicolons, naming two opposite corners in any order. Returns None when
    the token count is wrong or a token is not an integer.
    """

    tokens = [token.strip() for token in _REGION_DELIMITERS.split(region)]
    if len(tokens) != 4 or not all(_INTEGER.fullmatch(token) for token in tokens):
        return None
    x1, y1, x2, y2 = (int(token) for token in tokens)
    return (
        TileCoordinate(min(x1, x2), min(y1, y2)),
        TileCoordinate(max(x1, x2), max(y1, y2)),
    )


def _iter_map(context: SpawnContext, map_name: str) -> Iterable[TileCoordinate]:
    # top-left to bottom-right, rows first; unknown maps have no tiles
    if not context.maps.has_map(map_name):
        return
    width, height = context.maps.map_dimensions(map_name)
    for y in range(height):
        for x in range(width):
            yield TileCoordinate(x, y)


def tiles_by_index(
    map_name: str, tile_indices: Iterable[int], *, context: SpawnContext
) -> List[TileCoordinate]:
    """Open tiles whose back-layer index is in ``tile_indices``."""

    wanted = set(tile_indices)
    if not wanted:
        return []
    maps = context.maps
    return [
        tile
        for tile in _iter_map(context, map_name)
        if maps.tile_index_at(map_name, tile.x, tile.y, BACK_LAYER) in wanted
        and maps.is_open_and_placeable(map_name, tile.x, tile.y)
    ]


def tiles_by_property(
    map_name: str, terrain_type: str, *, context: SpawnContext
) -> List[TileCoordinate]:
    """Open tiles matching a terrain selector.

    "All" matches every open tile; "Diggable" matches tiles whose Diggable
    property is "T"; anything else is compared case-insensitively with the
    tile's Type property.
    """

    maps = context.maps
    selector = terrain_type.strip().lower()

    def matches(tile: TileCoordinate) -> bool:
        if selector == "all":
            return True
        if selector == "diggable":
            return maps.tile_property_at(map_name, tile.x, tile.y, "Diggable", BACK_LAYER) == "T"
        # missing property compares as an empty string
        current = maps.tile_property_at(map_name, tile.x, tile.y, "Type", BACK_LAYER) or ""
        return current.lower() == selector

    return [
        tile
        for tile in _iter_map(context, map_name)
        if matches(tile) and maps.is_open_and_placeable(map_name, tile.x, tile.y)
    ]


def tiles_in_region(
    map_name: str, region: str, *, context: SpawnContext
) -> List[TileCoordinate]:
    """Open tiles inside a region string, bounds inclusive.

    A malformed string is logged at INFO and yields no tiles.
    """

    parsed = parse_region(region)
    if parsed is None:
        context.log.log(
            f"Issue: This include/exclude area for the {map_name} map isn't formatted correctly: \"{region}\"",
            LogLevel.INFO,
        )
        return []

    maps = context.maps
    if not maps.has_map(map_name):
        return []

    # tiles outside the map are never open
    width, height = maps.map_dimensions(map_name)
    (left, top), (right, bottom) = parsed
    left, top = max(left, 0), max(top, 0)
    right, bottom = min(right, width - 1), min(bottom, height - 1)
    return [
        TileCoordinate(x, y)
        for y in range(top, bottom + 1)
        for x in range(left, right + 1)
        if maps.is_open_and_placeable(map_name, x, y)
    ]


def is_valid_large_spawn_location(
    map_name: str, tile: TileCoordinate, *, context: SpawnContext
) -> bool:
    """True when ``tile`` is the top-left of a fully open 2x2 block."""

    maps = context.maps
    return all(
        maps.is_open_and_placeable(map_name, coord.x, coord.y)
        for coord in Footprint.TWO_BY_TWO.tiles(tile)
    )


def scan(
    area: SpawnArea,
    custom_tile_index: Sequence[int] = (),
    footprint: Footprint = Footprint.ONE_TILE,
    *,
    context: SpawnContext,
    quarry_tile_index: Sequence[int] = DEFAULT_QUARRY_TILE_INDEX,
) -> Set[TileCoordinate]:
    """Return every tile in ``area`` that may receive a spawned object today.

    Args:
        area: Map name plus terrain selectors and include/exclude regions
        custom_tile_index: Indices matched by the "Custom" selector
        footprint: TWO_BY_TWO keeps only tiles with a fully open 2x2 block
        context: Map adapter and log sink for this pass
        quarry_tile_index: Indices matched by the "Quarry" selector

    Returns:
        Deduplicated set of candidate tiles (possibly empty)
    """

    map_name = area.map_name
    if not context.maps.has_map(map_name):
        context.log.log(
            f"Issue: No map named \"{map_name}\" could be found for {area.label}. No objects will be spawned there.",
            LogLevel.INFO,
        )
        return set()

    candidates: Set[TileCoordinate] = set()

    for terrain_type in area.terrain_types:
        selector = terrain_type.strip().lower()
        if selector == "quarry":
            candidates.update(tiles_by_index(map_name, quarry_tile_index, context=context))
        elif selector == "custom":
            candidates.update(tiles_by_index(map_name, custom_tile_index, context=context))
        else:
            candidates.update(tiles_by_property(map_name, terrain_type, context=context))

    for include in area.include_areas:
        candidates.update(tiles_in_region(map_name, include, context=context))

    for exclude in area.exclude_areas:
        candidates.difference_update(tiles_in_region(map_name, exclude, context=context))

    if footprint is Footprint.TWO_BY_TWO:
        candidates = {
            tile for tile in candidates
            if is_valid_large_spawn_location(map_name, tile, context=context)
        }

    context.log.log(f"{area.label}: {len(candidates)} candidate tiles", LogLevel.TRACE)
    return candidates
