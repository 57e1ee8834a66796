"""In-memory tile maps.

TileGrid implements both MapQuery and PlacementSink over plain dataclasses.
Hosts that keep their own world model implement the two contracts
themselves; tests and the bundled examples use this module.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from .map_query import BACK_LAYER, MapQuery, PlacementSink, TileCoordinate
from .schemas import GameMapState, MapTileState


@dataclass
class MapTile:
    """Metadata about a single back-layer tile."""

    index: int = -1
    properties: Dict[str, str] = field(default_factory=dict)
    open: bool = True


@dataclass
class GameMap:
    """A rectangular map with sparse tile overrides."""

    name: str
    width: int
    height: int
    tiles: Dict[Tuple[int, int], MapTile] = field(default_factory=dict)
    default_tile: MapTile = field(default_factory=MapTile)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> MapTile | None:
        """Return the tile at (x, y); None when out of bounds.

        Untouched positions share ``default_tile``; treat the result as read-only.
        """
        if not self.in_bounds(x, y):
            return None
        return self.tiles.get((x, y), self.default_tile)

    def writable_tile(self, x: int, y: int) -> MapTile | None:
        """Like get_tile, but gives the position its own copy of the default first."""
        if not self.in_bounds(x, y):
            return None
        tile = self.tiles.get((x, y))
        if tile is None:
            tile = MapTile(
                index=self.default_tile.index,
                properties=dict(self.default_tile.properties),
                open=self.default_tile.open,
            )
            self.tiles[(x, y)] = tile
        return tile

    @classmethod
    def from_rows(
        cls,
        name: str,
        rows: Sequence[str],
        legend: Mapping[str, MapTile],
    ) -> "GameMap":
        """Build a map from ASCII rows, one character per tile.

        Characters missing from ``legend`` become blocked tiles.
        """

        height = len(rows)
        width = max((len(row) for row in rows), default=0)
        game_map = cls(name=name, width=width, height=height)
        for y, row in enumerate(rows):
            for x in range(width):
                char = row[x] if x < len(row) else " "
                template = legend.get(char)
                if template is None:
                    game_map.tiles[(x, y)] = MapTile(open=False)
                else:
                    game_map.tiles[(x, y)] = MapTile(
                        index=template.index,
                        properties=dict(template.properties),
                        open=template.open,
                    )
        return game_map

    @classmethod
    def from_state(cls, state: GameMapState) -> "GameMap":
        """Build a map from its serializable snapshot."""

        if state.rows is not None:
            legend = {char: _tile_from_state(tile) for char, tile in state.legend.items()}
            game_map = cls.from_rows(state.name, state.rows, legend)
            # area beyond the rows is blocked, like padding inside them
            game_map.default_tile = MapTile(open=False)
            game_map.width = max(game_map.width, state.width)
            game_map.height = max(game_map.height, state.height)
        else:
            game_map = cls(
                name=state.name,
                width=state.width,
                height=state.height,
                default_tile=MapTile(
                    index=state.default_index,
                    properties=dict(state.default_properties),
                ),
            )
        for tile_state in state.tiles:
            game_map.tiles[(tile_state.x, tile_state.y)] = _tile_from_state(tile_state)
        return game_map


def _tile_from_state(state: MapTileState) -> MapTile:
    return MapTile(index=state.index, properties=dict(state.properties), open=state.open)


class TileGrid(MapQuery, PlacementSink):
    """Collection of named GameMaps answering map queries and taking placements.

    Map names are matched case-insensitively, as the game does for location names.
    Committed placements mark every tile of their footprint as no longer open.
    """

    def __init__(self, maps: Iterable[GameMap] = ()):
        self._maps: Dict[str, GameMap] = {}
        for game_map in maps:
            self.add_map(game_map)

    def add_map(self, game_map: GameMap) -> None:
        self._maps[game_map.name.lower()] = game_map

    def get_map(self, map_name: str) -> GameMap:
        try:
            return self._maps[map_name.lower()]
        except KeyError:
            raise KeyError(f"Map '{map_name}' not found") from None

    def _tile(self, map_name: str, x: int, y: int) -> MapTile | None:
        return self.get_map(map_name).get_tile(x, y)

    # MapQuery -------------------------------------------------------------

    def has_map(self, map_name: str) -> bool:
        return map_name.lower() in self._maps

    def map_dimensions(self, map_name: str) -> Tuple[int, int]:
        game_map = self.get_map(map_name)
        return game_map.width, game_map.height

    def tile_index_at(self, map_name: str, x: int, y: int, layer: str = BACK_LAYER) -> int:
        tile = self._tile(map_name, x, y)
        if tile is None or layer != BACK_LAYER:
            return -1
        return tile.index

    def tile_property_at(
        self, map_name: str, x: int, y: int, property_name: str, layer: str = BACK_LAYER
    ) -> Optional[str]:
        tile = self._tile(map_name, x, y)
        if tile is None or layer != BACK_LAYER:
            return None
        return tile.properties.get(property_name)

    def is_open_and_placeable(self, map_name: str, x: int, y: int) -> bool:
        tile = self._tile(map_name, x, y)
        return tile is not None and tile.open

    # PlacementSink --------------------------------------------------------

    def commit(self, map_name: str, placements) -> None:
        game_map = self.get_map(map_name)
        for placement in placements:
            for coord in placement.footprint.tiles(placement.tile):
                tile = game_map.writable_tile(coord.x, coord.y)
                if tile is not None:
                    tile.open = False

    def occupy(self, map_name: str, tiles: Iterable[TileCoordinate]) -> None:
        """Mark tiles as obstructed, e.g. to model existing debris in tests."""

        game_map = self.get_map(map_name)
        for coord in tiles:
            tile = game_map.writable_tile(coord[0], coord[1])
            if tile is not None:
                tile.open = False
