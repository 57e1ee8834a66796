"""
Spawn engine: runs a day's forage, large-object and ore passes.

Fully decoupled from the game loop. The map adapter, skill lookup, random
source and log sink arrive in a SpawnContext; placements go back as
PlacedObjectSpec lists and, optionally, through a PlacementSink.

Per area:
1. Scan the map for candidate tiles
2. Work out today's count from the area's range and the relevant skill
3. Build the pool of objects (and weights, for ore)
4. Draw an object and a random candidate tile until the count is met or tiles run out
5. Commit the area's placements before moving on

Step 5 is what lets a later area see an earlier area's objects: the next
scan asks the map adapter whether tiles are open, and a sink that commits
immediately has already marked them as taken.
"""

from __future__ import annotations

from typing import Callable, List, Mapping, Optional, Sequence, Set

from .chances import adjusted_spawn_chances
from .context import SpawnContext
from .counts import adjusted_spawn_count
from .environment import Footprint, PlacementSink, TileCoordinate
from .logging_utils import LogLevel
from .objects import (
    ObjectIdentity,
    place,
    resolve_forage,
    resolve_large_object,
    resolve_ore,
    resolve_pool,
    weighted_choice,
)
from .schemas import (
    PlacedObjectSpec,
    Season,
    SpawnArea,
    SpawnCategory,
    SpawnSettings,
)
from .skills import Skill
from .tiles import scan

Chooser = Callable[[], Optional[ObjectIdentity]]


def _overlaps(a: TileCoordinate, b: TileCoordinate) -> bool:
    """True when 2x2 objects anchored at ``a`` and ``b`` share a tile."""
    return abs(a.x - b.x) <= 1 and abs(a.y - b.y) <= 1


class SpawnEngine:
    """Drives complete spawn passes for one set of settings.

    The engine holds no state between calls beyond its collaborators, so the
    same instance can run every day of a save as long as the caller swaps in
    a fresh context (or reseeds the rng) when it wants independent days.
    """

    def __init__(
        self,
        settings: SpawnSettings,
        context: SpawnContext,
        placement: Optional[PlacementSink] = None,
    ):
        self.settings = settings
        self.context = context
        self.placement = placement

    # =============================
    # Passes
    # =============================

    def run_day(self, season: Season) -> List[PlacedObjectSpec]:
        """Run every enabled pass in order: forage, large objects, ore."""

        placements: List[PlacedObjectSpec] = []
        if self.settings.forage_spawn_enabled:
            placements.extend(self.run_forage(season))
        if self.settings.large_object_spawn_enabled:
            placements.extend(self.run_large_objects())
        if self.settings.ore_spawn_enabled:
            placements.extend(self.run_ore())

        self.context.log.log(f"Spawn pass complete: {len(placements)} objects placed", LogLevel.DEBUG)
        return placements

    def run_forage(self, season: Season) -> List[PlacedObjectSpec]:
        forage = self.settings.forage
        results: List[PlacedObjectSpec] = []

        for area in forage.areas:
            if not self._map_ready(area):
                continue

            items = [str(item) for item in forage.items_for(area, season)]
            pool = resolve_pool(items, resolve_forage, log=self.context.log, kind="forage")
            choose = self._uniform_chooser([pool[item] for item in items if item in pool])

            results.extend(
                self._spawn_area(
                    area,
                    custom_tile_index=forage.custom_tile_index,
                    percent_per_level=forage.percent_extra_spawns_per_foraging_level,
                    skill=Skill.FORAGING,
                    choose=choose,
                    category=SpawnCategory.FORAGE,
                    footprint=Footprint.ONE_TILE,
                )
            )
        return results

    def run_large_objects(self) -> List[PlacedObjectSpec]:
        large = self.settings.large_objects
        results: List[PlacedObjectSpec] = []

        for area in large.areas:
            if not self._map_ready(area):
                continue

            pool = resolve_pool(area.object_types, resolve_large_object, log=self.context.log, kind="large object")
            # duplicates in object_types stay in the list so they weight the pick
            identities = [pool[name] for name in area.object_types if name in pool]
            choose = self._uniform_chooser(identities)

            results.extend(
                self._spawn_area(
                    area,
                    custom_tile_index=large.custom_tile_index,
                    percent_per_level=large.percent_extra_spawns_per_foraging_level,
                    skill=Skill.FORAGING,
                    choose=choose,
                    category=SpawnCategory.LARGE_OBJECT,
                    footprint=Footprint.TWO_BY_TWO,
                )
            )
        return results

    def run_ore(self) -> List[PlacedObjectSpec]:
        ore = self.settings.ore
        results: List[PlacedObjectSpec] = []

        for area in ore.areas:
            if not self._map_ready(area):
                continue

            chances = adjusted_spawn_chances(Skill.MINING, ore.entries_for(area), context=self.context)
            pool = resolve_pool(chances.keys(), resolve_ore, log=self.context.log, kind="ore")
            weights = {name: weight for name, weight in chances.items() if name in pool}
            choose = self._weighted_chooser(weights, pool)

            results.extend(
                self._spawn_area(
                    area,
                    custom_tile_index=ore.custom_tile_index,
                    percent_per_level=ore.percent_extra_spawns_per_mining_level,
                    skill=Skill.MINING,
                    choose=choose,
                    category=SpawnCategory.ORE,
                    footprint=Footprint.ONE_TILE,
                )
            )
        return results

    # =============================
    # Shared steps
    # =============================

    def _map_ready(self, area: SpawnArea) -> bool:
        if self.context.maps.has_map(area.map_name):
            return True
        self.context.log.log(
            f"Issue: No map named \"{area.map_name}\" could be found for {area.label}. No objects will be spawned there.",
            LogLevel.INFO,
        )
        return False

    def _uniform_chooser(self, identities: Sequence[ObjectIdentity]) -> Chooser:
        rng = self.context.rng

        def choose() -> Optional[ObjectIdentity]:
            if not identities:
                return None
            return identities[rng.randint(0, len(identities) - 1)]

        return choose

    def _weighted_chooser(
        self, weights: Mapping[str, int], pool: Mapping[str, ObjectIdentity]
    ) -> Chooser:
        rng = self.context.rng

        def choose() -> Optional[ObjectIdentity]:
            name = weighted_choice(weights, rng)
            return pool[name] if name is not None else None

        return choose

    def _spawn_area(
        self,
        area: SpawnArea,
        *,
        custom_tile_index: Sequence[int],
        percent_per_level: int,
        skill: Skill,
        choose: Chooser,
        category: SpawnCategory,
        footprint: Footprint,
    ) -> List[PlacedObjectSpec]:
        context = self.context
        tiles: Set[TileCoordinate] = scan(
            area,
            custom_tile_index,
            footprint,
            context=context,
            quarry_tile_index=self.settings.quarry_tile_index,
        )
        count = adjusted_spawn_count(
            area.min_spawns, area.max_spawns, percent_per_level, skill, context=context
        )

        # sorted so a seeded rng picks the same tiles regardless of set ordering
        remaining = sorted(tiles)
        placed: List[PlacedObjectSpec] = []

        while len(placed) < count and remaining:
            identity = choose()
            if identity is None:
                break
            tile = remaining.pop(context.rng.randint(0, len(remaining) - 1))
            placed.append(
                place(
                    identity,
                    tile,
                    rng=context.rng,
                    map_name=area.map_name,
                    category=category,
                    footprint=footprint,
                )
            )
            if footprint is Footprint.TWO_BY_TWO:
                remaining = [other for other in remaining if not _overlaps(other, tile)]

        context.log.log(
            f"{area.label}: {len(placed)}/{count} {category.value} spawns placed ({len(tiles)} candidate tiles)",
            LogLevel.DEBUG,
        )

        if self.placement is not None and placed:
            self.placement.commit(area.map_name, placed)
        return placed
