"""Skill-scaled spawn counts."""

from __future__ import annotations

from .context import SpawnContext
from .logging_utils import LogLevel
from .schemas import SpawnCountRequest
from .skills import Skill


def adjusted_spawn_count(
    min_spawns: int,
    max_spawns: int,
    percent_per_level: int,
    skill: Skill,
    *,
    context: SpawnContext,
) -> int:
    """Return how many objects to spawn today.

    A base count is drawn uniformly from ``[min_spawns, max_spawns]`` and
    multiplied by ``1 + percent_per_level/100 * level``, where ``level`` is
    the best effective level of ``skill`` among active players. The whole
    part is guaranteed; the fractional part is the chance of one extra
    object, rolled with a second, independent draw.

    Example: base 1, 10% per level, level 7 → 1.7 → 1 object, 70% chance of 2.
    """

    if max_spawns < min_spawns:
        context.log.log(
            f"Spawn range {min_spawns}-{max_spawns} is reversed; using {max_spawns}-{min_spawns}",
            LogLevel.INFO,
        )
        min_spawns, max_spawns = max_spawns, min_spawns

    base = context.rng.randint(min_spawns, max_spawns)

    level = context.skills.max_effective_skill_level(skill)
    multiplier = 1.0 + (percent_per_level / 100.0) * level

    scaled = base * multiplier
    count = int(scaled)
    remainder = scaled - count

    if context.rng.random() < remainder:
        count += 1

    return max(count, 0)


def spawn_count_for(request: SpawnCountRequest, *, context: SpawnContext) -> int:
    """``adjusted_spawn_count`` for a SpawnCountRequest."""

    return adjusted_spawn_count(
        request.min_spawns,
        request.max_spawns,
        request.percent_per_level,
        request.skill,
        context=context,
    )
