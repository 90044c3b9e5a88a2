"""
Paladin - switches between three stances that trade damage for defense.

Stance      damage    block  incoming damage
Initial     1.0       30%    as armor allows
Defensive   0.68      -      blocked hits (50%) heal 30% of the hit instead
Offensive   1.50      25%    part of the armor bonus is lost
"""

from enum import Enum

from ..calc.damage import calculate_damage_reduction
from ..content.classes import Class
from ..state.rng import Random
from .base import Fighter, FighterSpec, RoundCounter

__all__ = ["PaladinFighter", "Stance", "DEFENSIVE_HEAL_RATIO"]

DEFENSIVE_HEAL_RATIO = 0.3
OFFENSIVE_REDUCTION_CAP = 0.2


class Stance(Enum):
    INITIAL = "initial"
    DEFENSIVE = "defensive"
    OFFENSIVE = "offensive"

    @property
    def damage_multiplier(self) -> float:
        return _STANCE_DAMAGE[self]

    @property
    def block_chance(self) -> int:
        return _STANCE_BLOCK[self]

    def next(self) -> "Stance":
        return _STANCE_ROTATION[self]


_STANCE_DAMAGE = {
    Stance.INITIAL: 1.0,
    Stance.DEFENSIVE: 1.0 / 0.833 * 0.568,
    Stance.OFFENSIVE: 1.0 / 0.833 * 1.253,
}

_STANCE_BLOCK = {
    Stance.INITIAL: 30,
    Stance.DEFENSIVE: 50,
    Stance.OFFENSIVE: 25,
}

_STANCE_ROTATION = {
    Stance.INITIAL: Stance.DEFENSIVE,
    Stance.DEFENSIVE: Stance.OFFENSIVE,
    Stance.OFFENSIVE: Stance.INITIAL,
}


class PaladinFighter(Fighter):

    class_ = Class.PALADIN

    def __init__(self, spec: FighterSpec):
        super().__init__(spec)
        self.stance = Stance.INITIAL
        self.initial_armor_reduction = 0.0

    def face(self, opponent: Fighter) -> None:
        super().face(opponent)
        self.initial_armor_reduction = calculate_damage_reduction(
            opponent.context.fighter.class_,
            self.class_,
            self.spec.armor,
            opponent.context.fighter.level,
        )

    def reset_state(self) -> None:
        self.reset_health()
        self.stance = Stance.INITIAL

    def change_stance(self, rng: Random) -> None:
        """Keep the stance on a coin flip, otherwise rotate to the next one."""
        if rng.random_boolean():
            return
        self.stance = self.stance.next()

    def current_armor_reduction(self) -> float:
        if self.stance is not Stance.OFFENSIVE:
            return 1.0
        reduction = self.initial_armor_reduction
        return 1.0 / (1.0 - reduction) * (1.0 - min(reduction, OFFENSIVE_REDUCTION_CAP))

    def attack(self, target: Fighter, round_counter: RoundCounter, rng: Random) -> bool:
        if target.is_mage():
            return self.attack_generic(target, round_counter, rng)

        round_counter.advance()
        self.change_stance(rng)

        if not target.will_take_attack(rng):
            return False

        dmg = self.calculate_basic_hit_damage(round_counter.value, rng) * self.stance.damage_multiplier
        return target.take_attack(dmg, round_counter, rng)

    def will_take_attack(self, rng: Random) -> bool:
        return self.stance is Stance.DEFENSIVE or rng.random_int_range(1, 100) > self.stance.block_chance

    def take_attack(self, damage: float, round_counter: RoundCounter, rng: Random) -> bool:
        ctx = self.context
        if ctx.opponent_is_mage:
            ctx.health -= damage
            return ctx.health <= 0

        actual_damage = damage * self.current_armor_reduction()

        if self.stance is Stance.DEFENSIVE and rng.random_int_range(1, 100) <= self.stance.block_chance:
            heal = actual_damage * DEFENSIVE_HEAL_RATIO
            ctx.health += min(max(ctx.max_health - ctx.health, 0.0), heal)
            return False

        ctx.health -= actual_damage
        return ctx.health <= 0
