"""Skill-interpolated spawn weights.

Each object type has a required level, a weight at that level and a weight
at level 10. Between the two the weight is a stepped average rather than a
straight line: for every level ``x`` from the requirement up to 9 the sample
is the level-10 weight if the player's level is above ``x`` and the starting
weight otherwise, and the samples are averaged and rounded.

Rounding is Python's ``round``, which rounds halves to even.
"""

from __future__ import annotations

from typing import Dict, Mapping

from .context import SpawnContext
from .schemas import ObjectTypeEntry
from .skills import MAX_SKILL_LEVEL, Skill


def interpolate_weight(level_required: int, start_weight: int, max_weight: int, level: int) -> int:
    """Weight of one object type for a player at ``level``.

    >>> interpolate_weight(3, 10, 100, 3)
    10
    >>> interpolate_weight(3, 10, 100, 10)
    100
    >>> interpolate_weight(3, 10, 100, 6)
    49
    """

    if level_required > level:
        return 0
    if level_required == level:
        return start_weight
    if level >= MAX_SKILL_LEVEL:
        return max_weight

    samples = [
        max_weight if level > x else start_weight
        for x in range(level_required, MAX_SKILL_LEVEL)
    ]
    return int(round(sum(samples) / len(samples)))


def adjusted_spawn_chances(
    skill: Skill,
    entries: Mapping[str, ObjectTypeEntry],
    *,
    context: SpawnContext,
) -> Dict[str, int]:
    """Return ``{name: weight}`` for every entry with a positive weight.

    The level used is the best effective level of ``skill`` among active players.
    """

    level = context.skills.max_effective_skill_level(skill)

    chances: Dict[str, int] = {}
    for name, entry in entries.items():
        weight = interpolate_weight(entry.level_required, entry.start_weight, entry.max_weight, level)
        if weight > 0:
            chances[name] = weight
    return chances
