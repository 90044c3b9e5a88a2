"""
Assassin - strikes with both weapons every turn.
"""

from ..content.classes import Class
from ..state.rng import Random
from .base import Fighter, FighterSpec, RoundCounter

__all__ = ["AssassinFighter"]


class AssassinFighter(Fighter):
    """
    Two strikes per turn, each taking its own round.

    The first uses the main weapon. The second uses the off-hand band and is
    only attempted while the target is still standing.
    """

    class_ = Class.ASSASSIN

    def __init__(self, spec: FighterSpec):
        super().__init__(spec)
        self.secondary_damage = spec.secondary_damage or spec.damage

    def attack(self, target: Fighter, round_counter: RoundCounter, rng: Random) -> bool:
        round_counter.advance()
        if target.will_take_attack(rng):
            first_weapon_damage = self.calculate_basic_hit_damage(round_counter.value, rng)
            if target.take_attack(first_weapon_damage, round_counter, rng):
                return True

        round_counter.advance()

        if not target.will_take_attack(rng):
            return False

        second_weapon_damage = self.calculate_hit_damage(
            self.secondary_damage,
            round_counter.value,
            self.context.crit_chance,
            self.context.crit_multiplier,
            rng,
        )
        return target.take_attack(second_weapon_damage, round_counter, rng)

    def will_take_attack(self, rng: Random) -> bool:
        return rng.random_int_range(1, 100) > 50
