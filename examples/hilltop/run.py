"""
Example: One Day on Hilltop Farm
================================

WHAT THIS SHOWS:
- Loading spawn settings and a map from JSON
- Running a full day (forage, large objects, ore) against an in-memory map
- How player skill changes what the quarry produces

RUN:
    uv run python -m examples.hilltop.run --seed 7 --mining 6
"""

import argparse
from collections import Counter

from farmspawn import (
    Farmer,
    FarmerRoster,
    Season,
    SettingsLoader,
    Skill,
    SpawnContext,
    SpawnEngine,
)
from farmspawn.config import Config
from farmspawn.logging_utils import log_success

_SYMBOLS = {"forage": "f", "large_object": "L", "ore": "o"}


def render(grid, map_name: str, placements) -> str:
    """ASCII view of the map: '#' blocked, '.' open, letters for new objects."""
    game_map = grid.get_map(map_name)
    marks = {}
    for placement in placements:
        for tile in placement.footprint.tiles(placement.tile):
            marks[tile] = _SYMBOLS[placement.category.value]

    lines = []
    for y in range(game_map.height):
        row = []
        for x in range(game_map.width):
            if (x, y) in marks:
                row.append(marks[(x, y)])
            elif grid.is_open_and_placeable(map_name, x, y):
                row.append(".")
            else:
                row.append("#")
        lines.append("".join(row))
    return "\n".join(lines)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run one spawn day on the hilltop example farm")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--season", choices=[s.value for s in Season], default="spring")
    parser.add_argument("--foraging", type=int, default=2)
    parser.add_argument("--mining", type=int, default=4)
    parser.add_argument("--show-config", action="store_true", help="Print FARMSPAWN_* settings first")
    args = parser.parse_args()

    try:
        Config.validate()
    except ValueError as e:
        print(f"Configuration error: {e}")
        raise SystemExit(1)
    if args.show_config:
        print(Config.display())
        print()

    settings, grid = SettingsLoader().load("hilltop")
    roster = FarmerRoster([
        Farmer(name="host", levels={Skill.FORAGING: args.foraging, Skill.MINING: args.mining}),
    ])
    context = SpawnContext.from_config(grid, roster, seed=args.seed)

    engine = SpawnEngine(settings, context, placement=grid)
    placements = engine.run_day(Season(args.season))

    print(render(grid, "Farm", placements))
    print()
    for name, count in sorted(Counter(p.name for p in placements).items()):
        print(f"  {name}: {count}")
    log_success(f"{len(placements)} objects placed on Farm")


if __name__ == "__main__":
    main()
