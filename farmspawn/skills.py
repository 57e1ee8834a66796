"""Player skills and the skill-lookup contract.

Spawn counts and ore chances scale with the *highest* effective level of a
skill among all active players, not just the host. The engine asks a
SkillLookup for that number; FarmerRoster is the in-memory implementation
used by tests and by hosts that mirror their player list into the engine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Iterable, List

MAX_SKILL_LEVEL = 10


class Skill(IntEnum):
    """Player skills, in the order the game stores them internally."""

    FARMING = 0
    FISHING = 1
    FORAGING = 2
    MINING = 3
    COMBAT = 4
    LUCK = 5

    @classmethod
    def parse(cls, value: str | int | "Skill") -> "Skill":
        """Accept ``"Mining"``, ``"mining"``, ``3`` or a Skill."""

        if isinstance(value, Skill):
            return value
        if isinstance(value, int):
            return cls(value)
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown skill: {value!r}") from None


class SkillLookup(ABC):
    """Answers "what is the best effective level of this skill right now?"."""

    @abstractmethod
    def max_effective_skill_level(self, skill: Skill) -> int:
        """Return the highest effective level of ``skill`` across all active players."""


@dataclass
class Farmer:
    """A single player's effective skill levels (buffs already applied)."""

    name: str
    levels: Dict[Skill, int] = field(default_factory=dict)

    def effective_level(self, skill: Skill) -> int:
        return self.levels.get(skill, 0)


class FarmerRoster(SkillLookup):
    """SkillLookup over an explicit list of active players.

    An empty roster reports level 0 for every skill.
    """

    def __init__(self, farmers: Iterable[Farmer] = ()):
        self.farmers: List[Farmer] = list(farmers)

    @classmethod
    def single(cls, **levels: int) -> "FarmerRoster":
        """Build a one-player roster from keyword levels, e.g. ``single(mining=4)``."""

        parsed = {Skill.parse(name): level for name, level in levels.items()}
        return cls([Farmer(name="player", levels=parsed)])

    def add(self, farmer: Farmer) -> None:
        self.farmers.append(farmer)

    def max_effective_skill_level(self, skill: Skill) -> int:
        highest = 0
        for farmer in self.farmers:
            highest = max(highest, farmer.effective_level(skill))
        return highest
