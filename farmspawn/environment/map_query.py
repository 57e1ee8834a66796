"""Read-only map query contract plus the placement hand-off.

The engine never touches the live game world. Everything it knows about a
map comes through MapQuery, which the host implements on top of its own
location objects, and everything it decides goes out through PlacementSink.
``TileGrid`` in ``grid.py`` implements both in memory.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Iterator, NamedTuple, Optional, Sequence, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from farmspawn.schemas import PlacedObjectSpec

BACK_LAYER = "Back"
"""Layer holding terrain tiles; all terrain checks read from it by default."""


class TileCoordinate(NamedTuple):
    """Zero-based (x, y) tile position, origin top-left."""

    x: int
    y: int


class Footprint(str, Enum):
    """Tiles occupied by a spawned object, anchored at its top-left tile."""

    ONE_TILE = "1x1"
    TWO_BY_TWO = "2x2"

    def tiles(self, anchor: TileCoordinate) -> Iterator[TileCoordinate]:
        """Yield every tile covered by an object whose top-left is ``anchor``."""

        yield anchor
        if self is Footprint.TWO_BY_TWO:
            yield TileCoordinate(anchor.x + 1, anchor.y)
            yield TileCoordinate(anchor.x, anchor.y + 1)
            yield TileCoordinate(anchor.x + 1, anchor.y + 1)


class MapQuery(ABC):
    """Abstract read-only view of the game's maps.

    Implementations must treat out-of-bounds coordinates as "not open" rather
    than raising, because region strings in player configs routinely reach
    past the edge of a map.
    """

    @abstractmethod
    def has_map(self, map_name: str) -> bool:
        """Return True if ``map_name`` names a loaded map."""

    @abstractmethod
    def map_dimensions(self, map_name: str) -> Tuple[int, int]:
        """Return ``(width, height)`` of the map in tiles."""

    @abstractmethod
    def tile_index_at(self, map_name: str, x: int, y: int, layer: str = BACK_LAYER) -> int:
        """Return the spritesheet index of the tile, or -1 when there is none."""

    @abstractmethod
    def tile_property_at(
        self, map_name: str, x: int, y: int, property_name: str, layer: str = BACK_LAYER
    ) -> Optional[str]:
        """Return the named tile property, or None when it is not set."""

    @abstractmethod
    def is_open_and_placeable(self, map_name: str, x: int, y: int) -> bool:
        """Return True if the tile is clear of obstructions and can receive an object."""


class PlacementSink(ABC):
    """Receives placement instructions and applies them to the live world.

    The engine calls ``commit`` once per spawn area, after that area's
    placements are decided and before the next area is scanned, so a sink
    that commits immediately lets later areas see earlier placements.
    """

    @abstractmethod
    def commit(self, map_name: str, placements: Sequence["PlacedObjectSpec"]) -> None:
        """Apply ``placements`` to ``map_name``."""
