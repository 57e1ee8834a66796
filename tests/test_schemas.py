"""Unit tests for settings schemas and skill lookups."""

import pytest
from pydantic import ValidationError

from farmspawn import (
    Farmer,
    FarmerRoster,
    ForageSettings,
    ForageSpawnArea,
    OreSettings,
    OreSpawnArea,
    Season,
    Skill,
    SpawnArea,
)


def test_spawn_area_is_frozen_and_coerces_lists():
    area = SpawnArea.model_validate({"map_name": "Farm", "terrain_types": ["Grass", "Dirt"]})

    assert area.terrain_types == ("Grass", "Dirt")
    with pytest.raises(ValidationError):
        area.map_name = "Forest"


def test_spawn_area_rejects_negative_counts():
    with pytest.raises(ValidationError):
        SpawnArea(map_name="Farm", min_spawns=-1)


def test_spawn_area_label():
    assert SpawnArea(map_name="Farm").label == "Farm"
    assert SpawnArea(map_name="Farm", unique_area_id="north field").label == "north field (Farm)"


def test_ore_entries_use_global_tables_by_default():
    entries = OreSettings().entries_for(OreSpawnArea(map_name="Farm"))

    assert entries["stone"].start_weight == 66
    assert entries["stone"].max_weight == 28
    assert entries["mystic"].level_required == 10


def test_ore_area_table_replaces_global_table_wholesale():
    area = OreSpawnArea(map_name="Farm", mining_level_required={"copper": 2, "gold": 5})
    entries = OreSettings().entries_for(area)

    assert set(entries) == {"copper", "gold"}
    assert entries["copper"].level_required == 2
    # chance tables still come from the globals
    assert entries["gold"].start_weight == 10


def test_forage_items_prefer_area_list():
    settings = ForageSettings()
    plain = ForageSpawnArea(map_name="Farm")
    custom = ForageSpawnArea(map_name="Farm", fall_item_index=[281, 420])

    assert settings.items_for(plain, Season.FALL) == (404, 406, 408, 410)
    assert settings.items_for(custom, Season.FALL) == (281, 420)
    assert settings.items_for(custom, Season.SPRING) == (16, 18, 20, 22, 399)


def test_roster_reports_best_level_per_skill():
    roster = FarmerRoster([
        Farmer(name="host", levels={Skill.MINING: 3, Skill.FORAGING: 8}),
        Farmer(name="farmhand", levels={Skill.MINING: 6}),
    ])

    assert roster.max_effective_skill_level(Skill.MINING) == 6
    assert roster.max_effective_skill_level(Skill.FORAGING) == 8
    assert roster.max_effective_skill_level(Skill.LUCK) == 0
    assert FarmerRoster().max_effective_skill_level(Skill.MINING) == 0


def test_skill_parse():
    assert Skill.parse("Mining") is Skill.MINING
    assert Skill.parse(2) is Skill.FORAGING
    with pytest.raises(ValueError):
        Skill.parse("cooking")
