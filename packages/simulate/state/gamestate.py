"""
Game-state snapshot consumed by the simulator.

Only the combat-relevant part of the character is kept, plus how far the
character got in each dungeon. Snapshots are built from a parsed payload with
GameState.from_dict:

    {
        "character": {
            "name": "Hero", "class": "Warrior", "level": 120,
            "max_health": 250000, "min_damage": 900, "max_damage": 1500,
            "crit_chance": 0.35, "crit_multiplier": 2.0, "armor": 4000,
            "block_chance": 25
        },
        "dungeon_progress": {"light:DesecratedCatacombs": 4}
    }

Optional fields on the character: luck (drives the druid rage crit chance)
and the class seeds block_chance, secondary_damage ([min, max]),
fireball_damage, rage_crit_chance, base_damage_multiplier.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..calc.damage import DamageRange, DEFAULT_CRIT_MULTIPLIER
from ..content.classes import Class, parse_class
from ..content.monsters import Dungeon, dungeon_key, parse_dungeon
from ..fighters.base import FighterSpec

__all__ = ["CharacterStats", "GameState"]


@dataclass(frozen=True)
class CharacterStats:
    """Combat stats of the player's character."""
    name: str
    class_: Class
    level: int
    max_health: float
    damage: DamageRange
    crit_chance: float = 0.0
    crit_multiplier: float = DEFAULT_CRIT_MULTIPLIER
    armor: float = 0.0
    luck: Optional[float] = None

    block_chance: Optional[int] = None
    secondary_damage: Optional[DamageRange] = None
    fireball_damage: Optional[float] = None
    rage_crit_chance: Optional[float] = None
    base_damage_multiplier: Optional[float] = None

    @property
    def health(self) -> float:
        """Fights always start at full life."""
        return self.max_health

    def to_fighter(self) -> FighterSpec:
        return FighterSpec(
            name=self.name,
            class_=self.class_,
            health=self.max_health,
            damage=self.damage,
            crit_chance=self.crit_chance,
            crit_multiplier=self.crit_multiplier,
            level=self.level,
            armor=self.armor,
            luck=self.luck,
            block_chance=self.block_chance,
            secondary_damage=self.secondary_damage,
            fireball_damage=self.fireball_damage,
            rage_crit_chance=self.rage_crit_chance,
            base_damage_multiplier=self.base_damage_multiplier,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'CharacterStats':
        try:
            secondary = data.get("secondary_damage")
            return cls(
                name=data.get("name", "Player"),
                class_=parse_class(data["class"]),
                level=int(data["level"]),
                max_health=float(data["max_health"]),
                damage=DamageRange(float(data["min_damage"]), float(data["max_damage"])),
                crit_chance=float(data.get("crit_chance", 0.0)),
                crit_multiplier=float(data.get("crit_multiplier", DEFAULT_CRIT_MULTIPLIER)),
                armor=float(data.get("armor", 0.0)),
                luck=_optional(data, "luck", float),
                block_chance=_optional(data, "block_chance", int),
                secondary_damage=DamageRange(*map(float, secondary)) if secondary else None,
                fireball_damage=_optional(data, "fireball_damage", float),
                rage_crit_chance=_optional(data, "rage_crit_chance", float),
                base_damage_multiplier=_optional(data, "base_damage_multiplier", float),
            )
        except KeyError as e:
            raise ValueError(f"Character is missing field {e.args[0]!r}") from None


def _optional(data: Mapping[str, Any], key: str, convert):
    value = data.get(key)
    return None if value is None else convert(value)


@dataclass
class GameState:
    """
    The slice of the game state the simulator reads.

    dungeon_progress maps a dungeon to the number of monsters already beaten.
    Dungeons not in the map count as untouched.
    """
    character: CharacterStats
    dungeon_progress: Dict[Dungeon, int] = field(default_factory=dict)

    def __post_init__(self):
        for dungeon, finished in self.dungeon_progress.items():
            if finished < 0:
                raise ValueError(f"Negative progress for {dungeon_key(dungeon)}: {finished}")

    def finished_monsters(self, dungeon: Dungeon) -> int:
        return self.dungeon_progress.get(dungeon, 0)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'GameState':
        """
        Build a snapshot from a parsed payload.

        Raises:
            ValueError: on missing fields, unknown classes/dungeons or
                invalid stats
        """
        if "character" not in data:
            raise ValueError("Game state has no character")

        character = CharacterStats.from_dict(data["character"])
        progress = {
            parse_dungeon(key): int(finished)
            for key, finished in data.get("dungeon_progress", {}).items()
        }
        return cls(character=character, dungeon_progress=progress)

    def to_dict(self) -> Dict[str, Any]:
        c = self.character
        character: Dict[str, Any] = {
            "name": c.name,
            "class": c.class_.value,
            "level": c.level,
            "max_health": c.max_health,
            "min_damage": c.damage.min,
            "max_damage": c.damage.max,
            "crit_chance": c.crit_chance,
            "crit_multiplier": c.crit_multiplier,
            "armor": c.armor,
        }
        for key in ("luck", "block_chance", "fireball_damage", "rage_crit_chance", "base_damage_multiplier"):
            value = getattr(c, key)
            if value is not None:
                character[key] = value
        if c.secondary_damage is not None:
            character["secondary_damage"] = [c.secondary_damage.min, c.secondary_damage.max]

        return {
            "character": character,
            "dungeon_progress": {
                dungeon_key(d): finished for d, finished in self.dungeon_progress.items()
            },
        }
