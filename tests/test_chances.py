"""Tests for skill-interpolated spawn weights."""

import random

from farmspawn import (
    Farmer,
    FarmerRoster,
    ObjectTypeEntry,
    RecordingLog,
    Skill,
    SpawnContext,
    TileGrid,
    adjusted_spawn_chances,
    interpolate_weight,
)


def chances_at(level: int, entries) -> dict:
    context = SpawnContext(
        maps=TileGrid(),
        skills=FarmerRoster.single(mining=level),
        rng=random.Random(0),
        log=RecordingLog(),
    )
    return adjusted_spawn_chances(Skill.MINING, entries, context=context)


def test_boundaries_are_exact():
    entry = {"gold": ObjectTypeEntry(name="gold", level_required=3, start_weight=10, max_weight=100)}

    assert chances_at(3, entry) == {"gold": 10}
    assert chances_at(10, entry) == {"gold": 100}
    assert chances_at(1, entry) == {}


def test_weight_is_monotonic_between_required_level_and_ten():
    weights = [interpolate_weight(3, 10, 100, level) for level in range(3, 11)]
    assert weights == sorted(weights)
    assert weights[0] == 10 and weights[-1] == 100


def test_decreasing_weights_move_toward_level_ten_value():
    weights = [interpolate_weight(0, 66, 28, level) for level in range(0, 11)]
    assert weights[0] == 66
    assert weights[-1] == 28
    assert weights == sorted(weights, reverse=True)


def test_stepped_average_matches_hand_computation():
    # levels 3..9 sampled: 3, 4, 5 are below 6 -> 3 * 100 + 4 * 10 = 340 / 7
    assert interpolate_weight(3, 10, 100, 6) == 49
    # levels 0..9: only 0 is below 1 -> (28 + 9 * 66) / 10 = 62.2
    assert interpolate_weight(0, 66, 28, 1) == 62


def test_halves_round_to_even():
    # samples at levels 8 and 9 for a level-9 player: [3, 2] -> 2.5
    assert interpolate_weight(8, 2, 3, 9) == 2
    # [2, 1] -> 1.5
    assert interpolate_weight(8, 1, 2, 9) == 2


def test_levels_above_ten_use_max_weight():
    assert interpolate_weight(2, 5, 50, 13) == 50


def test_non_positive_weights_are_dropped():
    entries = {
        "stone": ObjectTypeEntry(name="stone", level_required=0, start_weight=0, max_weight=0),
        "geode": ObjectTypeEntry(name="geode", level_required=0, start_weight=-4, max_weight=-4),
        "copper": ObjectTypeEntry(name="copper", level_required=0, start_weight=5, max_weight=5),
    }
    assert chances_at(0, entries) == {"copper": 5}
    assert chances_at(5, entries) == {"copper": 5}


def test_highest_player_level_drives_weights():
    entries = {"iridium": ObjectTypeEntry(name="iridium", level_required=9, start_weight=1, max_weight=4)}
    roster = FarmerRoster([
        Farmer(name="host", levels={Skill.MINING: 2}),
        Farmer(name="farmhand", levels={Skill.MINING: 9}),
    ])
    context = SpawnContext(maps=TileGrid(), skills=roster, rng=random.Random(0), log=RecordingLog())

    assert adjusted_spawn_chances(Skill.MINING, entries, context=context) == {"iridium": 1}
