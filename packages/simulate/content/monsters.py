"""
Monster and dungeon tables.

Every dungeon is a fixed, ordered roster of monsters; a character works
through it one monster at a time. Pet habitats work the same way.

The rosters ship as content/data/dungeons.json and are loaded once, lazily,
into an immutable DungeonTables instance shared by every simulation (and by
every worker process, which loads its own copy on first use).

Dungeon identifiers:
- LightDungeon / ShadowDungeon enums, both accepted wherever a Dungeon is
- parse_dungeon("light:MinesOfGloria") / parse_dungeon("shadow:Hell")
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from ..calc.damage import DamageRange, DEFAULT_CRIT_MULTIPLIER
from ..fighters.base import FighterSpec
from .classes import Class, parse_class

logger = logging.getLogger(__name__)

__all__ = [
    "Monster",
    "DungeonType",
    "LightDungeon",
    "ShadowDungeon",
    "HabitatType",
    "Dungeon",
    "dungeon_type",
    "parse_dungeon",
    "dungeon_key",
    "DungeonTables",
    "get_tables",
    "DEFAULT_TABLES_PATH",
]

DEFAULT_TABLES_PATH = Path(__file__).parent / "data" / "dungeons.json"


# =============================================================================
# MONSTER
# =============================================================================

@dataclass(frozen=True)
class Monster:
    """A single enemy from a dungeon or habitat roster."""
    name: str
    level: int
    class_: Class
    health: float
    min_damage: float
    max_damage: float
    crit_chance: float = 0.0
    crit_multiplier: float = DEFAULT_CRIT_MULTIPLIER
    armor: float = 0.0
    luck: Optional[float] = None

    def to_fighter(self) -> FighterSpec:
        """Convert to the fighter description used by the simulator."""
        return FighterSpec(
            name=self.name,
            class_=self.class_,
            health=self.health,
            damage=DamageRange(self.min_damage, self.max_damage),
            crit_chance=self.crit_chance,
            crit_multiplier=self.crit_multiplier,
            level=self.level,
            armor=self.armor,
            luck=self.luck,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Monster':
        try:
            return cls(
                name=data["name"],
                level=int(data["level"]),
                class_=parse_class(data["class"]),
                health=float(data["health"]),
                min_damage=float(data["min_damage"]),
                max_damage=float(data["max_damage"]),
                crit_chance=float(data.get("crit_chance", 0.0)),
                crit_multiplier=float(data.get("crit_multiplier", DEFAULT_CRIT_MULTIPLIER)),
                armor=float(data.get("armor", 0.0)),
                luck=float(data["luck"]) if data.get("luck") is not None else None,
            )
        except KeyError as e:
            raise ValueError(f"Monster entry is missing field {e.args[0]!r}: {data!r}") from None


# =============================================================================
# DUNGEON IDENTIFIERS
# =============================================================================

class DungeonType(Enum):
    LIGHT = "light"
    SHADOW = "shadow"


class LightDungeon(Enum):
    """Light dungeons. Values follow the game's dungeon ids (17 is unused)."""
    DesecratedCatacombs = 0
    MinesOfGloria = 1
    RuinsOfGnark = 2
    CutthroatGrotto = 3
    EmeraldScaleAltar = 4
    ToxicTree = 5
    MagmaStream = 6
    FrostBloodTemple = 7
    PyramidsOfMadness = 8
    BlackSkullFortress = 9
    CircusOfHorror = 10
    Hell = 11
    The13thFloor = 12
    Easteros = 13
    Tower = 14
    TimeHonoredSchoolOfMagic = 15
    Hemorridor = 16
    NordicGods = 18
    MountOlympus = 19
    TavernOfTheDarkDoppelgangers = 20
    DragonsHoard = 21
    HouseOfHorrors = 22
    ThirdLeagueOfSuperheroes = 23
    DojoOfChildhoodHeroes = 24
    MonsterGrotto = 25
    CityOfIntrigues = 26
    SchoolOfMagicExpress = 27
    AshMountain = 28
    PlayaGamesHQ = 29
    TrainingCamp = 30
    Sandstorm = 31


class ShadowDungeon(Enum):
    DesecratedCatacombs = 0
    MinesOfGloria = 1
    RuinsOfGnark = 2
    CutthroatGrotto = 3
    EmeraldScaleAltar = 4
    ToxicTree = 5
    MagmaStream = 6
    FrostBloodTemple = 7
    PyramidsOfMadness = 8
    BlackSkullFortress = 9
    CircusOfHorror = 10
    Hell = 11
    The13thFloor = 12
    Easteros = 13
    Twister = 14
    TimeHonoredSchoolOfMagic = 15
    Hemorridor = 16
    ContinuousLoopOfIdols = 17
    NordicGods = 18
    MountOlympus = 19
    TavernOfTheDarkDoppelgangers = 20
    DragonsHoard = 21
    HouseOfHorrors = 22
    ThirdLeagueOfSuperheroes = 23
    DojoOfChildhoodHeroes = 24
    MonsterGrotto = 25
    CityOfIntrigues = 26
    SchoolOfMagicExpress = 27
    AshMountain = 28
    PlayaGamesHQ = 29


class HabitatType(Enum):
    """Pet habitats, each with its own roster of guardians."""
    WATER = "Water"
    LIGHT = "Light"
    EARTH = "Earth"
    SHADOW = "Shadow"
    FIRE = "Fire"


Dungeon = Union[LightDungeon, ShadowDungeon]


def dungeon_type(dungeon: Dungeon) -> DungeonType:
    if isinstance(dungeon, LightDungeon):
        return DungeonType.LIGHT
    if isinstance(dungeon, ShadowDungeon):
        return DungeonType.SHADOW
    raise ValueError(f"Not a dungeon: {dungeon!r}")


def dungeon_key(dungeon: Dungeon) -> str:
    """Stable "type:Name" string for a dungeon, the inverse of parse_dungeon."""
    return f"{dungeon_type(dungeon).value}:{dungeon.name}"


def parse_dungeon(text: str) -> Dungeon:
    """
    Parse "light:Name" / "shadow:Name" (a bare name means light).

    Names are matched case-insensitively, ignoring "_" and "-".
    """
    kind, sep, name = text.partition(":")
    if not sep:
        kind, name = DungeonType.LIGHT.value, text

    try:
        enum_cls = {
            DungeonType.LIGHT.value: LightDungeon,
            DungeonType.SHADOW.value: ShadowDungeon,
        }[kind.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown dungeon type {kind!r} in {text!r}") from None

    wanted = _normalize(name)
    for member in enum_cls:
        if _normalize(member.name) == wanted:
            return member
    raise ValueError(f"Unknown dungeon {text!r}")


def _normalize(name: str) -> str:
    return name.replace("_", "").replace("-", "").replace(" ", "").lower()


# =============================================================================
# TABLES
# =============================================================================

class DungeonTables:
    """
    Read-only dungeon and habitat rosters.

    Lookups for dungeons/habitats without a roster return an empty tuple.
    """

    def __init__(
        self,
        dungeons: Optional[Mapping[Dungeon, Tuple[Monster, ...]]] = None,
        habitats: Optional[Mapping[HabitatType, Tuple[Monster, ...]]] = None,
    ):
        self._dungeons: Dict[Dungeon, Tuple[Monster, ...]] = dict(dungeons or {})
        self._habitats: Dict[HabitatType, Tuple[Monster, ...]] = dict(habitats or {})

    def dungeon_monsters(self, dungeon: Dungeon) -> Tuple[Monster, ...]:
        return self._dungeons.get(dungeon, ())

    def habitat_monsters(self, habitat: HabitatType) -> Tuple[Monster, ...]:
        return self._habitats.get(habitat, ())

    def current_enemy(self, dungeon: Dungeon, finished: int) -> Optional[Monster]:
        """The monster after `finished` beaten ones, or None if cleared/unknown."""
        roster = self.dungeon_monsters(dungeon)
        if 0 <= finished < len(roster):
            return roster[finished]
        return None

    @property
    def dungeons(self) -> Tuple[Dungeon, ...]:
        return tuple(self._dungeons)

    @property
    def habitats(self) -> Tuple[HabitatType, ...]:
        return tuple(self._habitats)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'DungeonTables':
        dungeons: Dict[Dungeon, Tuple[Monster, ...]] = {}
        for kind in DungeonType:
            for name, roster in data.get(kind.value, {}).items():
                dungeon = parse_dungeon(f"{kind.value}:{name}")
                dungeons[dungeon] = tuple(Monster.from_dict(m) for m in roster)

        habitats: Dict[HabitatType, Tuple[Monster, ...]] = {}
        for name, roster in data.get("habitats", {}).items():
            try:
                habitat = HabitatType(name)
            except ValueError:
                raise ValueError(f"Unknown habitat {name!r}") from None
            habitats[habitat] = tuple(Monster.from_dict(m) for m in roster)

        return cls(dungeons, habitats)

    @classmethod
    def load(cls, path: Union[str, Path] = DEFAULT_TABLES_PATH) -> 'DungeonTables':
        with open(path, "r") as f:
            data = json.load(f)
        tables = cls.from_dict(data)
        logger.debug(
            "Loaded %d dungeons and %d habitats from %s",
            len(tables.dungeons), len(tables.habitats), path,
        )
        return tables


_TABLES: Optional[DungeonTables] = None


def get_tables() -> DungeonTables:
    """The packaged tables, loaded on first use."""
    global _TABLES
    if _TABLES is None:
        _TABLES = DungeonTables.load()
    return _TABLES
