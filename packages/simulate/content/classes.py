"""
Character classes and their static combat constants.

The per-class numbers are game constants: the damage multiplier applied to a
class's weapon damage, the life multiplier applied to constitution, and how
armor converts into damage reduction. They are consumed by the derived damage
formulas in calc.damage.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

__all__ = [
    "Class",
    "ClassConfig",
    "CLASS_CONFIGS",
    "get_class_config",
    "parse_class",
]


class Class(Enum):
    """Playable classes (monsters reuse the same set)."""
    WARRIOR = "Warrior"
    MAGE = "Mage"
    SCOUT = "Scout"
    ASSASSIN = "Assassin"
    BATTLE_MAGE = "BattleMage"
    BERSERKER = "Berserker"
    DEMON_HUNTER = "DemonHunter"
    DRUID = "Druid"
    BARD = "Bard"
    NECROMANCER = "Necromancer"
    PALADIN = "Paladin"
    PLAGUE_DOCTOR = "PlagueDoctor"


@dataclass(frozen=True)
class ClassConfig:
    """Static combat constants of one class."""
    damage_multiplier: float
    health_multiplier: float
    armor_multiplier: float
    max_armor_reduction: int  # percent


CLASS_CONFIGS: Dict[Class, ClassConfig] = {
    Class.WARRIOR: ClassConfig(2.0, 5.0, 1.0, 50),
    Class.MAGE: ClassConfig(4.5, 2.0, 1.0, 10),
    Class.SCOUT: ClassConfig(2.5, 4.0, 1.0, 25),
    Class.ASSASSIN: ClassConfig(2.0, 4.0, 1.0, 25),
    Class.BATTLE_MAGE: ClassConfig(2.0, 5.0, 5.0, 50),
    Class.BERSERKER: ClassConfig(2.0, 4.0, 0.5, 25),
    Class.DEMON_HUNTER: ClassConfig(2.5, 4.0, 1.0, 50),
    Class.DRUID: ClassConfig(4.5, 5.0, 2.0, 40),
    Class.BARD: ClassConfig(4.5, 2.0, 2.0, 50),
    Class.NECROMANCER: ClassConfig(4.5, 4.0, 2.0, 20),
    Class.PALADIN: ClassConfig(2.0, 6.0, 1.0, 45),
    Class.PLAGUE_DOCTOR: ClassConfig(4.0, 4.0, 2.0, 35),
}

# Spellings used by older data dumps
_ALIASES = {
    "warmage": Class.BATTLE_MAGE,
    "battle_mage": Class.BATTLE_MAGE,
    "demon_hunter": Class.DEMON_HUNTER,
    "plague_doctor": Class.PLAGUE_DOCTOR,
}


def get_class_config(class_: Class) -> ClassConfig:
    return CLASS_CONFIGS[class_]


def parse_class(name: str) -> Class:
    """
    Look up a class by its name, case-insensitively.

    Accepts the enum value ("BattleMage"), the enum name ("BATTLE_MAGE") and
    the legacy "WarMage" spelling.

    Raises:
        ValueError: if the name matches no class
    """
    key = name.strip()
    for class_ in Class:
        if key.lower() in (class_.value.lower(), class_.name.lower()):
            return class_
    if key.lower() in _ALIASES:
        return _ALIASES[key.lower()]
    raise ValueError(f"Unknown class: {name}")
