"""Map access for farmspawn: the query contract and an in-memory implementation."""

from .map_query import (
    BACK_LAYER,
    Footprint,
    MapQuery,
    PlacementSink,
    TileCoordinate,
)
from .grid import GameMap, MapTile, TileGrid
from .schemas import GameMapState, MapTileState

__all__ = [
    "BACK_LAYER",
    "Footprint",
    "MapQuery",
    "PlacementSink",
    "TileCoordinate",
    "GameMap",
    "MapTile",
    "TileGrid",
    "GameMapState",
    "MapTileState",
]
