"""Object identity tables and weighted selection.

Names from player configs are resolved against fixed tables, case-insensitively
and with the usual aliases ("stump"/"stumps", "mine rock 1"/"minerock1").
A name that isn't in a table but parses as a plain integer is taken as a raw
object id, so new game content can be spawned before it gets a name here.
Anything else is logged and left out of the spawn pool.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from .context import RandomSource
from .environment import Footprint, TileCoordinate
from .logging_utils import LogLevel, SpawnLog
from .schemas import PlacedObjectSpec, SpawnCategory

RAW_ORE_DURABILITY = 2
RAW_LARGE_OBJECT_HEALTH = 10


@dataclass(frozen=True)
class ObjectIdentity:
    """Resolved object: candidate ids plus its "time until usable" value.

    Most objects have a single id. Some (plain stone, gem rocks) have several
    visual variants; one is drawn when the object is placed.
    """

    name: str
    codes: Tuple[int, ...]
    time_until_usable: int

    @property
    def code(self) -> int:
        """The first (canonical) id."""
        return self.codes[0]

    def pick_code(self, rng: RandomSource) -> int:
        if len(self.codes) == 1:
            return self.codes[0]
        return self.codes[rng.randint(0, len(self.codes) - 1)]


class OreType(Enum):
    """Ore and rock objects; ``time_until_usable`` is hits with a basic pickaxe."""

    STONE = ObjectIdentity("stone", (668, 670), 2)
    GEODE = ObjectIdentity("geode", (75,), 3)
    FROZEN_GEODE = ObjectIdentity("frozengeode", (76,), 5)
    MAGMA_GEODE = ObjectIdentity("magmageode", (77,), 8)
    GEM = ObjectIdentity("gem", (2, 4, 6, 8, 10, 12, 14), 5)
    COPPER = ObjectIdentity("copper", (751,), 3)
    IRON = ObjectIdentity("iron", (290,), 4)
    GOLD = ObjectIdentity("gold", (764,), 8)
    IRIDIUM = ObjectIdentity("iridium", (765,), 16)
    MYSTIC = ObjectIdentity("mystic", (46,), 16)


class LargeObjectType(Enum):
    """2x2 resource clumps; ``time_until_usable`` is the clump's health."""

    STUMP = ObjectIdentity("stump", (600,), 10)
    LOG = ObjectIdentity("log", (602,), 20)
    BOULDER = ObjectIdentity("boulder", (672,), 10)
    METEORITE = ObjectIdentity("meteorite", (622,), 20)
    MINE_ROCK_1 = ObjectIdentity("minerock1", (752,), 8)
    MINE_ROCK_2 = ObjectIdentity("minerock2", (754,), 8)
    MINE_ROCK_3 = ObjectIdentity("minerock3", (756,), 8)
    MINE_ROCK_4 = ObjectIdentity("minerock4", (758,), 8)


ORE_NAMES: Mapping[str, OreType] = MappingProxyType({
    "stone": OreType.STONE,
    "geode": OreType.GEODE,
    "frozengeode": OreType.FROZEN_GEODE,
    "magmageode": OreType.MAGMA_GEODE,
    "gem": OreType.GEM,
    "copper": OreType.COPPER,
    "iron": OreType.IRON,
    "gold": OreType.GOLD,
    "iridium": OreType.IRIDIUM,
    "mystic": OreType.MYSTIC,
})

LARGE_OBJECT_NAMES: Mapping[str, LargeObjectType] = MappingProxyType({
    "stump": LargeObjectType.STUMP,
    "stumps": LargeObjectType.STUMP,
    "log": LargeObjectType.LOG,
    "logs": LargeObjectType.LOG,
    "boulder": LargeObjectType.BOULDER,
    "boulders": LargeObjectType.BOULDER,
    "meteor": LargeObjectType.METEORITE,
    "meteors": LargeObjectType.METEORITE,
    "meteorite": LargeObjectType.METEORITE,
    "meteorites": LargeObjectType.METEORITE,
    "minerock1": LargeObjectType.MINE_ROCK_1,
    "mine rock 1": LargeObjectType.MINE_ROCK_1,
    "minerock2": LargeObjectType.MINE_ROCK_2,
    "mine rock 2": LargeObjectType.MINE_ROCK_2,
    "minerock3": LargeObjectType.MINE_ROCK_3,
    "mine rock 3": LargeObjectType.MINE_ROCK_3,
    "minerock4": LargeObjectType.MINE_ROCK_4,
    "mine rock 4": LargeObjectType.MINE_ROCK_4,
})

Resolver = Callable[[str], Optional[ObjectIdentity]]


def _parse_raw_code(name: str) -> Optional[int]:
    try:
        return int(name.strip())
    except ValueError:
        return None


def resolve_ore(name: str) -> Optional[ObjectIdentity]:
    """Look up an ore by name; integers pass through as raw ids."""

    ore = ORE_NAMES.get(name.strip().lower())
    if ore is not None:
        return ore.value
    code = _parse_raw_code(name)
    if code is None:
        return None
    return ObjectIdentity(str(code), (code,), RAW_ORE_DURABILITY)


def resolve_large_object(name: str) -> Optional[ObjectIdentity]:
    """Look up a large object by name; integers pass through as raw ids."""

    large = LARGE_OBJECT_NAMES.get(name.strip().lower())
    if large is not None:
        return large.value
    code = _parse_raw_code(name)
    if code is None:
        return None
    return ObjectIdentity(str(code), (code,), RAW_LARGE_OBJECT_HEALTH)


def resolve_forage(name: str) -> Optional[ObjectIdentity]:
    """Forage items are configured by id only."""

    code = _parse_raw_code(name)
    if code is None:
        return None
    return ObjectIdentity(str(code), (code,), 0)


RESOLVERS: Mapping[SpawnCategory, Resolver] = MappingProxyType({
    SpawnCategory.FORAGE: resolve_forage,
    SpawnCategory.LARGE_OBJECT: resolve_large_object,
    SpawnCategory.ORE: resolve_ore,
})


def resolve(name: str, category: SpawnCategory = SpawnCategory.ORE) -> Optional[ObjectIdentity]:
    """Resolve ``name`` against the table for ``category``; None when unknown."""

    return RESOLVERS[category](name)


def resolve_pool(
    names: Iterable[str],
    resolver: Resolver,
    *,
    log: SpawnLog,
    kind: str = "object",
) -> Dict[str, ObjectIdentity]:
    """Resolve each distinct name; unknown names are logged and left out."""

    pool: Dict[str, ObjectIdentity] = {}
    for name in names:
        if name in pool:
            continue
        identity = resolver(name)
        if identity is None:
            log.log(
                f"The {kind} to be spawned (\"{name}\") doesn't match any known {kind} types. "
                "Make sure that name isn't misspelled in your config file.",
                LogLevel.INFO,
            )
            continue
        pool[name] = identity
    return pool


def resolve_large_object_ids(names: Iterable[str], *, log: SpawnLog) -> List[int]:
    """Map large-object names to ids, keeping duplicates and dropping unknowns."""

    names = list(names)
    pool = resolve_pool(names, resolve_large_object, log=log, kind="large object")
    return [pool[name].code for name in names if name in pool]


def weighted_choice(weights: Mapping[str, int], rng: RandomSource) -> Optional[str]:
    """Pick a name with probability proportional to its weight.

    Weights need not sum to 100. Returns None when nothing has positive weight.
    """

    positive = [(name, weight) for name, weight in weights.items() if weight > 0]
    total = sum(weight for _, weight in positive)
    if total <= 0:
        return None

    roll = rng.randint(0, total - 1)
    for name, weight in positive:
        if roll < weight:
            return name
        roll -= weight
    return None


def place(
    identity: ObjectIdentity,
    tile: TileCoordinate,
    *,
    rng: RandomSource,
    map_name: str,
    category: SpawnCategory,
    footprint: Footprint = Footprint.ONE_TILE,
) -> PlacedObjectSpec:
    """Turn a resolved identity into a concrete placement instruction."""

    return PlacedObjectSpec(
        identity=identity.pick_code(rng),
        time_until_usable=identity.time_until_usable,
        tile=tile,
        name=identity.name,
        category=category,
        map_name=map_name,
        footprint=footprint,
    )
