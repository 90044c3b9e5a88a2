"""
Mage, Warrior and Scout - the classes whose only twist is how they defend.
"""

from ..content.classes import Class
from ..state.rng import Random
from .base import Fighter, FighterSpec

__all__ = [
    "MageFighter",
    "WarriorFighter",
    "ScoutFighter",
    "WARRIOR_BLOCK_CHANCE",
    "SCOUT_EVADE_CHANCE",
]

WARRIOR_BLOCK_CHANCE = 25
SCOUT_EVADE_CHANCE = 50


class MageFighter(Fighter):
    """Pure default behavior; the baseline every other class builds on."""

    class_ = Class.MAGE


class WarriorFighter(Fighter):
    """Blocks incoming hits with a fixed percentage chance."""

    class_ = Class.WARRIOR

    def __init__(self, spec: FighterSpec):
        super().__init__(spec)
        if spec.block_chance is None:
            self.block_chance = WARRIOR_BLOCK_CHANCE
        else:
            self.block_chance = spec.block_chance

    def will_take_attack(self, rng: Random) -> bool:
        return rng.random_int_range(1, 100) > self.block_chance


class ScoutFighter(Fighter):
    """Evades half of all incoming hits."""

    class_ = Class.SCOUT

    def will_take_attack(self, rng: Random) -> bool:
        return rng.random_int_range(1, 100) > SCOUT_EVADE_CHANCE
