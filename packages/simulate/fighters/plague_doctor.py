"""
Plague Doctor - throws a poison tincture that keeps hurting for three rounds.

While poison is active the doctor is much harder to hit: evasion is 65%, 50%
and 35% for the remaining poison rounds 3, 2 and 1, and 20% otherwise.
"""

from typing import List

from ..calc.damage import calculate_damage_multiplier
from ..content.classes import Class, get_class_config
from ..state.rng import Random
from .base import Fighter, FighterSpec, RoundCounter

__all__ = ["PlagueDoctorFighter", "POISON_ROUNDS", "poison_multipliers", "evade_chance_for"]

POISON_ROUNDS = 3

_EVADE_BY_POISON_ROUND = {3: 65, 2: 50, 1: 35}
_DEFAULT_EVADE_CHANCE = 20


def poison_multipliers(base_damage_multiplier: float) -> List[float]:
    """Damage factors for poison ticks, weakest first. The last is the throw."""
    class_multiplier = base_damage_multiplier / get_class_config(Class.PLAGUE_DOCTOR).damage_multiplier
    return [
        (base_damage_multiplier - factor * class_multiplier) / base_damage_multiplier
        for factor in (0.9, 0.55, 0.2)
    ]


def evade_chance_for(poison_round: int) -> int:
    return _EVADE_BY_POISON_ROUND.get(poison_round, _DEFAULT_EVADE_CHANCE)


class PlagueDoctorFighter(Fighter):

    class_ = Class.PLAGUE_DOCTOR

    def __init__(self, spec: FighterSpec):
        super().__init__(spec)
        self.poison_round = 0
        self._set_base_multiplier(
            spec.base_damage_multiplier or get_class_config(Class.PLAGUE_DOCTOR).damage_multiplier
        )

    def _set_base_multiplier(self, value: float) -> None:
        self.base_damage_multiplier = value
        self.poison_dmg_multipliers = poison_multipliers(value)

    def face(self, opponent: Fighter) -> None:
        super().face(opponent)
        if self.spec.base_damage_multiplier is None:
            self._set_base_multiplier(
                calculate_damage_multiplier(self.class_, opponent.context.fighter.class_)
            )

    def reset_state(self) -> None:
        self.poison_round = 0
        self.reset_health()

    @property
    def evade_chance(self) -> int:
        return evade_chance_for(self.poison_round)

    def will_take_attack(self, rng: Random) -> bool:
        return rng.random_int_range(1, 100) > self.evade_chance

    def attack(self, target: Fighter, round_counter: RoundCounter, rng: Random) -> bool:
        if target.is_mage():
            return self.attack_generic(target, round_counter, rng)

        ctx = self.context

        if self.poison_round <= 0 and rng.random_boolean():
            round_counter.advance()
            if not target.will_take_attack(rng):
                return False

            self.poison_round = POISON_ROUNDS
            throw_dmg = self.calculate_hit_damage(
                ctx.damage * self.poison_dmg_multipliers[2],
                round_counter.value,
                ctx.crit_chance,
                ctx.crit_multiplier,
                rng,
            )
            return target.take_attack(throw_dmg, round_counter, rng)

        if self.poison_round > 0:
            round_counter.advance()
            self.poison_round -= 1
            poison_dmg = self.calculate_hit_damage(
                ctx.damage * self.poison_dmg_multipliers[self.poison_round],
                round_counter.value,
                ctx.crit_chance,
                ctx.crit_multiplier,
                rng,
            )
            if target.take_attack(poison_dmg, round_counter, rng):
                return True

        return self.attack_generic(target, round_counter, rng)
