"""
Druid - shapeshifter that answers a dodge with a bear-form mauling.

Outside bear form the druid evades 35% of incoming hits. A successful dodge
turns the next attack into a bear strike with the rage crit chance and an
inflated crit multiplier. Normal attacks may be preceded by an eagle swoop
whose chance grows every time it happens.
"""

from ..calc.damage import calculate_crit_chance
from ..content.classes import Class
from ..state.rng import Random
from .base import Fighter, FighterSpec, RoundCounter

__all__ = [
    "DruidFighter",
    "DRUID_EVADE_CHANCE",
    "RAGE_CRIT_MULTIPLIER_BONUS",
    "INITIAL_SWOOP_CHANCE",
    "MAX_SWOOP_CHANCE",
    "SWOOP_DAMAGE_MODIFIER",
    "derive_rage_crit_chance",
]

DRUID_EVADE_CHANCE = 35
RAGE_CRIT_MULTIPLIER_BONUS = 40.0
INITIAL_SWOOP_CHANCE = 0.15
SWOOP_CHANCE_STEP = 0.05
MAX_SWOOP_CHANCE = 0.5
SWOOP_DAMAGE_MODIFIER = (1.0 / 3.0 + 0.8) / (1.0 / 3.0)

RAGE_CRIT_BONUS = 0.1
RAGE_CRIT_CAP = 0.75


def derive_rage_crit_chance(crit_chance: float) -> float:
    """
    Rage crit chance from the druid's normal crit chance.

    Used when luck is unknown. Matches the luck formula while the normal crit
    chance is below its own cap.
    """
    return min(crit_chance + RAGE_CRIT_BONUS, RAGE_CRIT_CAP)


class DruidFighter(Fighter):

    class_ = Class.DRUID

    def __init__(self, spec: FighterSpec):
        super().__init__(spec)
        self.evade_chance = DRUID_EVADE_CHANCE
        self.is_in_bear_form = False
        self.has_just_dodged = False
        if spec.rage_crit_chance is None:
            self.rage_crit_chance = derive_rage_crit_chance(spec.crit_chance)
        else:
            self.rage_crit_chance = spec.rage_crit_chance
        self.rage_crit_multiplier_bonus = RAGE_CRIT_MULTIPLIER_BONUS
        self.swoop_chance = INITIAL_SWOOP_CHANCE
        self.swoop_damage_modifier = SWOOP_DAMAGE_MODIFIER

    def face(self, opponent: Fighter) -> None:
        super().face(opponent)
        if self.spec.rage_crit_chance is None and self.spec.luck is not None:
            self.rage_crit_chance = calculate_crit_chance(
                self.spec.luck, opponent.spec.level, RAGE_CRIT_CAP, RAGE_CRIT_BONUS,
            )

    def reset_state(self) -> None:
        self.reset_health()
        self.swoop_chance = INITIAL_SWOOP_CHANCE
        self.is_in_bear_form = False
        self.has_just_dodged = False

    def attack(self, target: Fighter, round_counter: RoundCounter, rng: Random) -> bool:
        if target.is_mage():
            return self.attack_generic(target, round_counter, rng)
        if self.has_just_dodged:
            return self.attack_bear_form(target, round_counter, rng)
        return self.attack_not_bear_form(target, round_counter, rng)

    def attack_bear_form(self, target: Fighter, round_counter: RoundCounter, rng: Random) -> bool:
        self.is_in_bear_form = True
        self.has_just_dodged = False
        round_counter.advance()

        if not target.will_take_attack(rng):
            return False

        crit_multiplier = (2.0 + self.rage_crit_multiplier_bonus) * self.context.crit_chance / 2.0
        dmg = self.calculate_hit_damage(
            self.context.damage,
            round_counter.value,
            self.rage_crit_chance,
            crit_multiplier,
            rng,
        )
        return target.take_attack(dmg, round_counter, rng)

    def attack_not_bear_form(self, target: Fighter, round_counter: RoundCounter, rng: Random) -> bool:
        self.is_in_bear_form = False

        if rng.random_float() < self.swoop_chance:
            round_counter.advance()
            self.swoop_chance = min(MAX_SWOOP_CHANCE, self.swoop_chance + SWOOP_CHANCE_STEP)

            if target.will_take_attack(rng):
                swoop_dmg = self.calculate_basic_hit_damage(round_counter.value, rng) * self.swoop_damage_modifier
                if target.take_attack(swoop_dmg, round_counter, rng):
                    return True

        round_counter.advance()
        if not target.will_take_attack(rng):
            return False

        dmg = self.calculate_basic_hit_damage(round_counter.value, rng)
        return target.take_attack(dmg, round_counter, rng)

    def will_take_attack(self, rng: Random) -> bool:
        if not self.is_in_bear_form and rng.random_int_range(1, 100) <= self.evade_chance:
            self.has_just_dodged = True
            return False
        return True
