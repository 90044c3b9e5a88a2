"""
Fighter strategies, one per character class.

Use create_fighter() to turn a FighterSpec into the matching strategy.
"""

from typing import Dict, Type

from ..content.classes import Class
from .assassin import AssassinFighter
from .bard import BardFighter
from .base import FightContext, Fighter, FighterSpec, RoundCounter
from .basic import MageFighter, ScoutFighter, WarriorFighter
from .battle_mage import BattleMageFighter
from .berserker import BerserkerFighter
from .demon_hunter import DemonHunterFighter
from .druid import DruidFighter
from .necromancer import Minion, NecromancerFighter
from .paladin import PaladinFighter, Stance
from .plague_doctor import PlagueDoctorFighter

FIGHTER_CLASSES: Dict[Class, Type[Fighter]] = {
    Class.WARRIOR: WarriorFighter,
    Class.MAGE: MageFighter,
    Class.SCOUT: ScoutFighter,
    Class.ASSASSIN: AssassinFighter,
    Class.BATTLE_MAGE: BattleMageFighter,
    Class.BERSERKER: BerserkerFighter,
    Class.DEMON_HUNTER: DemonHunterFighter,
    Class.DRUID: DruidFighter,
    Class.BARD: BardFighter,
    Class.NECROMANCER: NecromancerFighter,
    Class.PALADIN: PaladinFighter,
    Class.PLAGUE_DOCTOR: PlagueDoctorFighter,
}


def create_fighter(spec: FighterSpec) -> Fighter:
    """Build a fresh strategy instance for spec.class_."""
    try:
        fighter_cls = FIGHTER_CLASSES[spec.class_]
    except KeyError:
        raise ValueError(f"No fighter strategy for class {spec.class_!r}") from None
    return fighter_cls(spec)


__all__ = [
    "FIGHTER_CLASSES",
    "create_fighter",
    "FightContext",
    "Fighter",
    "FighterSpec",
    "RoundCounter",
    "AssassinFighter",
    "BardFighter",
    "BattleMageFighter",
    "BerserkerFighter",
    "DemonHunterFighter",
    "DruidFighter",
    "MageFighter",
    "NecromancerFighter",
    "PaladinFighter",
    "PlagueDoctorFighter",
    "ScoutFighter",
    "WarriorFighter",
    "Minion",
    "Stance",
]
