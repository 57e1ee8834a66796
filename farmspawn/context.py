"""Per-pass context handed to every engine call.

Nothing in the engine reads process-wide state. The map adapter, skill
lookup, random source and log sink travel together in a SpawnContext owned
by the caller, so passes for different maps or days never share a
generator and tests can substitute seeded ones.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable

from .config import Config
from .environment import MapQuery
from .logging_utils import ConsoleLog, LogLevel, SpawnLog
from .skills import SkillLookup


@runtime_checkable
class RandomSource(Protocol):
    """The two draws the engine needs. ``random.Random`` satisfies it."""

    def randint(self, a: int, b: int) -> int:
        """Uniform integer in ``[a, b]`` inclusive."""

    def random(self) -> float:
        """Uniform float in ``[0.0, 1.0)``."""


@dataclass
class SpawnContext:
    """Collaborators for one spawn pass."""

    maps: MapQuery
    skills: SkillLookup
    rng: RandomSource = field(default_factory=random.Random)
    log: SpawnLog = field(default_factory=ConsoleLog)

    @classmethod
    def from_config(
        cls,
        maps: MapQuery,
        skills: SkillLookup,
        *,
        seed: Optional[int] = None,
        log: Optional[SpawnLog] = None,
    ) -> "SpawnContext":
        """Build a context using FARMSPAWN_* environment settings for the defaults.

        An explicit ``seed`` wins over FARMSPAWN_SEED.
        """

        effective_seed = seed if seed is not None else Config.SEED
        return cls(
            maps=maps,
            skills=skills,
            rng=random.Random(effective_seed),
            log=log if log is not None else ConsoleLog(LogLevel.parse(Config.LOG_LEVEL)),
        )
