"""Tests for full spawn passes."""

import random

from farmspawn import (
    Footprint,
    ForageSettings,
    ForageSpawnArea,
    GameMap,
    LargeObjectSettings,
    LargeObjectSpawnArea,
    LogLevel,
    MapTile,
    OreSettings,
    OreSpawnArea,
    RecordingLog,
    Season,
    SpawnCategory,
    SpawnContext,
    SpawnEngine,
    SpawnSettings,
    FarmerRoster,
    TileCoordinate,
    TileGrid,
)


def quarry_map() -> GameMap:
    """10x6 map: quarry floor in columns 0-4, grass elsewhere."""
    game_map = GameMap(
        name="Quarry",
        width=10,
        height=6,
        default_tile=MapTile(index=175, properties={"Type": "Grass"}),
    )
    for y in range(6):
        for x in range(5):
            game_map.tiles[(x, y)] = MapTile(index=556, properties={"Type": "Stone"})
    return game_map


def make_engine(settings: SpawnSettings, grid: TileGrid, *, seed: int = 0, commit: bool = True, **levels):
    context = SpawnContext(
        maps=grid,
        skills=FarmerRoster.single(**levels),
        rng=random.Random(seed),
        log=RecordingLog(),
    )
    return SpawnEngine(settings, context, placement=grid if commit else None)


def test_ore_pass_places_known_ore_on_quarry_tiles():
    grid = TileGrid([quarry_map()])
    settings = SpawnSettings(
        ore=OreSettings(
            percent_extra_spawns_per_mining_level=0,
            areas=[OreSpawnArea(map_name="Quarry", terrain_types=("Quarry",), min_spawns=5, max_spawns=8)],
        )
    )

    placements = make_engine(settings, grid, mining=4).run_ore()

    assert 5 <= len(placements) <= 8
    assert len({p.tile for p in placements}) == len(placements)
    for placement in placements:
        assert placement.tile.x < 5
        assert placement.category is SpawnCategory.ORE
        # gold needs level 7, iridium 9: neither is possible at level 4
        assert placement.name in {"stone", "geode", "copper", "iron"}


def test_ore_area_tables_override_globals():
    grid = TileGrid([quarry_map()])
    area = OreSpawnArea(
        map_name="Quarry",
        terrain_types=("Quarry",),
        min_spawns=10,
        max_spawns=10,
        mining_level_required={"gold": 0},
        starting_spawn_chance={"gold": 1},
        level_ten_spawn_chance={"gold": 1},
    )
    settings = SpawnSettings(ore=OreSettings(percent_extra_spawns_per_mining_level=0, areas=[area]))

    placements = make_engine(settings, grid).run_ore()

    assert len(placements) == 10
    assert {p.identity for p in placements} == {764}
    assert {p.time_until_usable for p in placements} == {8}


def test_unknown_ore_names_are_dropped_and_logged():
    grid = TileGrid([quarry_map()])
    area = OreSpawnArea(
        map_name="Quarry",
        terrain_types=("Quarry",),
        min_spawns=3,
        max_spawns=3,
        mining_level_required={"mithril": 0},
        starting_spawn_chance={"mithril": 50},
        level_ten_spawn_chance={"mithril": 50},
    )
    engine = make_engine(SpawnSettings(ore=OreSettings(areas=[area])), grid)

    assert engine.run_ore() == []
    assert any("mithril" in message for message in engine.context.log.messages(LogLevel.INFO))


def test_large_objects_never_overlap_and_fit_their_footprint():
    grid = TileGrid([GameMap(name="Farm", width=12, height=12)])
    area = LargeObjectSpawnArea(
        map_name="Farm",
        terrain_types=("All",),
        min_spawns=40,
        max_spawns=40,
        object_types=("Stump", "log", "Boulder"),
    )
    settings = SpawnSettings(
        large_objects=LargeObjectSettings(percent_extra_spawns_per_foraging_level=0, areas=[area])
    )

    placements = make_engine(settings, grid).run_large_objects()

    assert placements
    covered = []
    for placement in placements:
        assert placement.footprint is Footprint.TWO_BY_TWO
        assert placement.tile.x <= 10 and placement.tile.y <= 10
        covered.extend(placement.footprint.tiles(placement.tile))
    assert len(covered) == len(set(covered))


def test_later_areas_see_committed_placements():
    grid = TileGrid([GameMap(name="Farm", width=6, height=6)])
    areas = [
        LargeObjectSpawnArea(
            map_name="Farm", terrain_types=("All",), min_spawns=9, max_spawns=9, object_types=("boulder",),
        ),
        LargeObjectSpawnArea(
            map_name="Farm", terrain_types=("All",), min_spawns=9, max_spawns=9, object_types=("stump",),
        ),
    ]
    settings = SpawnSettings(
        large_objects=LargeObjectSettings(percent_extra_spawns_per_foraging_level=0, areas=areas)
    )

    placements = make_engine(settings, grid, seed=3).run_large_objects()

    covered = [tile for p in placements for tile in p.footprint.tiles(p.tile)]
    assert len(covered) == len(set(covered))
    for tile in covered:
        assert not grid.is_open_and_placeable("Farm", tile.x, tile.y)


def test_placements_stop_when_tiles_run_out():
    game_map = GameMap(name="Farm", width=3, height=1)
    game_map.tiles[(1, 0)] = MapTile(open=False)
    grid = TileGrid([game_map])
    area = ForageSpawnArea(map_name="Farm", terrain_types=("All",), min_spawns=10, max_spawns=10)
    settings = SpawnSettings(forage=ForageSettings(areas=[area]))

    placements = make_engine(settings, grid).run_forage(Season.SUMMER)

    assert sorted(p.tile for p in placements) == [TileCoordinate(0, 0), TileCoordinate(2, 0)]


def test_forage_uses_season_lists_with_area_override():
    grid = TileGrid([GameMap(name="Farm", width=8, height=8)])
    areas = [
        ForageSpawnArea(map_name="Farm", include_areas=("0,0/3,7",), min_spawns=6, max_spawns=6),
        ForageSpawnArea(
            map_name="Farm",
            include_areas=("4,0/7,7",),
            min_spawns=6,
            max_spawns=6,
            winter_item_index=(283,),
        ),
    ]
    settings = SpawnSettings(
        forage=ForageSettings(percent_extra_spawns_per_foraging_level=0, areas=areas)
    )

    placements = make_engine(settings, grid).run_forage(Season.WINTER)

    left = [p for p in placements if p.tile.x < 4]
    right = [p for p in placements if p.tile.x >= 4]
    assert len(left) == len(right) == 6
    assert {p.identity for p in left} <= {412, 414, 416, 418}
    assert {p.identity for p in right} == {283}


def test_unknown_map_is_logged_and_skipped():
    grid = TileGrid([quarry_map()])
    area = ForageSpawnArea(map_name="Nowhere", terrain_types=("All",))
    engine = make_engine(SpawnSettings(forage=ForageSettings(areas=[area])), grid)

    assert engine.run_forage(Season.SPRING) == []
    assert any("Nowhere" in message for message in engine.context.log.messages(LogLevel.INFO))


def test_empty_object_pool_spawns_nothing():
    grid = TileGrid([GameMap(name="Farm", width=6, height=6)])
    area = LargeObjectSpawnArea(
        map_name="Farm", terrain_types=("All",), min_spawns=3, max_spawns=3, object_types=("treehouse",),
    )
    engine = make_engine(SpawnSettings(large_objects=LargeObjectSettings(areas=[area])), grid)

    assert engine.run_large_objects() == []


def test_run_day_respects_enabled_flags():
    grid = TileGrid([quarry_map()])
    settings = SpawnSettings(
        forage_spawn_enabled=False,
        large_object_spawn_enabled=False,
        forage=ForageSettings(areas=[ForageSpawnArea(map_name="Quarry", terrain_types=("Grass",))]),
        ore=OreSettings(areas=[OreSpawnArea(map_name="Quarry", terrain_types=("Quarry",))]),
    )

    placements = make_engine(settings, grid, mining=10).run_day(Season.FALL)

    assert placements
    assert {p.category for p in placements} == {SpawnCategory.ORE}


def test_same_seed_gives_same_day():
    def run(seed):
        grid = TileGrid([quarry_map()])
        settings = SpawnSettings(
            forage=ForageSettings(areas=[ForageSpawnArea(map_name="Quarry", terrain_types=("Grass",))]),
            ore=OreSettings(areas=[OreSpawnArea(map_name="Quarry", terrain_types=("Quarry",))]),
        )
        return make_engine(settings, grid, seed=seed, mining=5, foraging=5).run_day(Season.SPRING)

    assert run(42) == run(42)
