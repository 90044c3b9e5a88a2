"""
Bard - plays rotating melodies that boost damage for a few rounds.
"""

from typing import Tuple

from ..content.classes import Class
from ..state.rng import Random
from .base import Fighter, RoundCounter

__all__ = ["BardFighter", "MELODY_COOLDOWN", "roll_melody"]

# Rounds between two melody rolls
MELODY_COOLDOWN = 4


def roll_melody(rng: Random) -> Tuple[int, float]:
    """
    Pick the next melody as (duration, damage multiplier).

    (3, 1.4) half of the time, (3, 1.2) and (4, 1.6) a quarter each.
    """
    roll = rng.random_int_range(0, 3)
    if roll <= 1:
        return 3, 1.4
    if roll == 2:
        return 3, 1.2
    return 4, 1.6


class BardFighter(Fighter):
    """Melodies do not work against mages; those fights are plain exchanges."""

    class_ = Class.BARD

    def __init__(self, spec):
        super().__init__(spec)
        self.melody_length = 0
        self.next_melody_round = 0
        self.melody_dmg_multiplier = 1.0

    def reset_state(self) -> None:
        self.reset_health()
        self.melody_length = 0
        self.next_melody_round = 0
        self.melody_dmg_multiplier = 1.0

    def attack(self, target: Fighter, round_counter: RoundCounter, rng: Random) -> bool:
        if target.is_mage():
            return self.attack_generic(target, round_counter, rng)
        return self.melodies_attack(target, round_counter, rng)

    def melodies_attack(self, target: Fighter, round_counter: RoundCounter, rng: Random) -> bool:
        round_counter.advance()

        if self.melody_length == 0:
            self.melody_dmg_multiplier = 1.0
        if self.melody_length <= 0 and self.next_melody_round <= 0:
            self.melody_length, self.melody_dmg_multiplier = roll_melody(rng)
            self.next_melody_round = MELODY_COOLDOWN

        self.melody_length -= 1
        self.next_melody_round -= 1

        if not target.will_take_attack(rng):
            return False

        dmg = self.melody_dmg_multiplier * self.calculate_basic_hit_damage(round_counter.value, rng)
        return target.take_attack(dmg, round_counter, rng)
