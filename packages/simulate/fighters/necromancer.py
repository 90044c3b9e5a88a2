"""
Necromancer - summons a minion that attacks after every necromancer strike.

Minions:
- Skeleton: 3 rounds, gets back up once for one more round
- Hound: 2 rounds, better crits
- Golem: 4 rounds, blocks 25% of the hits aimed at the necromancer
"""

from enum import Enum
from typing import Optional

from ..calc.damage import calculate_damage_multiplier
from ..content.classes import Class, get_class_config
from ..state.rng import Random
from .base import Fighter, FighterSpec, RoundCounter

__all__ = ["NecromancerFighter", "Minion", "MINION_ROUNDS", "GOLEM_BLOCK_CHANCE"]


class Minion(Enum):
    SKELETON = "skeleton"
    HOUND = "hound"
    GOLEM = "golem"


MINION_ROUNDS = {
    Minion.SKELETON: 3,
    Minion.HOUND: 2,
    Minion.GOLEM: 4,
}

GOLEM_BLOCK_CHANCE = 25
SUMMON_CHANCE = 50
HOUND_CRIT_BONUS = 0.1
HOUND_CRIT_CAP = 0.6
HOUND_CRIT_MULTIPLIER = 2.5


class NecromancerFighter(Fighter):

    class_ = Class.NECROMANCER

    def __init__(self, spec: FighterSpec):
        super().__init__(spec)
        self.base_damage_multiplier = (
            spec.base_damage_multiplier or get_class_config(Class.NECROMANCER).damage_multiplier
        )
        self.minion: Optional[Minion] = None
        self.minion_rounds = 0
        self.skeleton_revives = 0

    def face(self, opponent: Fighter) -> None:
        super().face(opponent)
        if self.spec.base_damage_multiplier is None:
            self.base_damage_multiplier = calculate_damage_multiplier(
                self.class_, opponent.context.fighter.class_
            )

    def reset_state(self) -> None:
        self.reset_health()
        self.minion = None
        self.minion_rounds = 0
        self.skeleton_revives = 0

    def will_take_attack(self, rng: Random) -> bool:
        if self.context.opponent_is_mage or self.minion is not Minion.GOLEM:
            return True
        return rng.random_int_range(1, 100) > GOLEM_BLOCK_CHANCE

    def attack(self, target: Fighter, round_counter: RoundCounter, rng: Random) -> bool:
        if target.is_mage():
            return self.attack_generic(target, round_counter, rng)

        round_counter.advance()

        if self.minion is None and rng.random_int_range(1, 100) <= SUMMON_CHANCE:
            self.summon_minion(rng)
            return self.attack_with_minion(target, round_counter, rng)

        if target.will_take_attack(rng):
            dmg = self.calculate_basic_hit_damage(round_counter.value, rng)
            if target.take_attack(dmg, round_counter, rng):
                return True

        return self.attack_with_minion(target, round_counter, rng)

    def summon_minion(self, rng: Random) -> Minion:
        roll = rng.random_int_range(1, 3)
        if roll == 1:
            self.minion = Minion.SKELETON
        elif roll == 2:
            self.minion = Minion.HOUND
        else:
            self.minion = Minion.GOLEM
        self.minion_rounds = MINION_ROUNDS[self.minion]
        return self.minion

    def minion_damage_multiplier(self, minion: Minion) -> float:
        base = self.base_damage_multiplier
        if minion is Minion.SKELETON:
            return (base + 0.25) / base
        if minion is Minion.HOUND:
            return (base + 1.0) / base
        return 1.0

    def attack_with_minion(self, target: Fighter, round_counter: RoundCounter, rng: Random) -> bool:
        if self.minion is None:
            return False

        round_counter.advance()

        self.minion_rounds -= 1
        current = self.minion
        if self.minion_rounds == 0 and current is Minion.SKELETON and self.skeleton_revives < 1:
            self.minion_rounds = 1
            self.skeleton_revives += 1
        elif self.minion_rounds == 0:
            self.minion = None
            self.skeleton_revives = 0

        if not target.will_take_attack(rng):
            return False

        crit_chance = self.context.crit_chance
        crit_multiplier = self.context.crit_multiplier
        if current is Minion.HOUND:
            crit_chance = min(crit_chance + HOUND_CRIT_BONUS, HOUND_CRIT_CAP)
            crit_multiplier = HOUND_CRIT_MULTIPLIER * (crit_multiplier / 2.0)

        dmg = self.calculate_hit_damage(
            self.context.damage, round_counter.value, crit_chance, crit_multiplier, rng
        )
        dmg *= self.minion_damage_multiplier(current)
        return target.take_attack(dmg, round_counter, rng)
