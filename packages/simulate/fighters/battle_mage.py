"""
Battle Mage - opens its first fight of a trial with a fireball.

The fireball is spent once per trial; later monsters of the same roster
face the battle mage without it.
"""

from ..calc.damage import calculate_fireball_damage
from ..content.classes import Class
from ..state.rng import Random
from .base import Fighter, FighterSpec, RoundCounter

__all__ = ["BattleMageFighter"]


class BattleMageFighter(Fighter):

    class_ = Class.BATTLE_MAGE

    def __init__(self, spec: FighterSpec):
        super().__init__(spec)
        self.fireball_dmg = spec.fireball_damage or 0.0
        self.used_fireball = False

    def face(self, opponent: Fighter) -> None:
        super().face(opponent)
        if self.spec.fireball_damage is None:
            self.fireball_dmg = calculate_fireball_damage(
                self.context.max_health,
                opponent.context.fighter.class_,
                opponent.context.max_health,
            )

    def reset_state(self) -> None:
        self.reset_health()
        self.used_fireball = False

    def attack_before_fight(self, target: Fighter, round_counter: RoundCounter, rng: Random) -> bool:
        if self.used_fireball:
            return False
        self.used_fireball = True
        round_counter.advance()
        return target.take_attack(self.fireball_dmg, round_counter, rng)
