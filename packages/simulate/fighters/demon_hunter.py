"""
Demon Hunter - can get back up after a lethal blow, less likely each time.
"""

from ..content.classes import Class
from ..state.rng import Random
from .base import Fighter, RoundCounter

__all__ = ["DemonHunterFighter", "revive_chance"]


def revive_chance(revive_count: int) -> float:
    """44% for the first revive, 11 points less for every revive after."""
    return max(0, 44 - 11 * revive_count) / 100.0


class DemonHunterFighter(Fighter):
    """Revives are impossible against mages."""

    class_ = Class.DEMON_HUNTER

    def __init__(self, spec):
        super().__init__(spec)
        self.revive_count = 0

    def reset_state(self) -> None:
        self.reset_health()
        self.revive_count = 0

    def take_attack(self, damage: float, round_counter: RoundCounter, rng: Random) -> bool:
        self.context.health -= damage
        if self.context.health > 0:
            return False
        if self.context.opponent_is_mage:
            return True
        return not self.revive(round_counter, rng)

    def revive(self, round_counter: RoundCounter, rng: Random) -> bool:
        """Try to revive. Returns True if the demon hunter is back up."""
        chance = revive_chance(self.revive_count)
        if chance <= 0.0 or rng.random_float() >= chance:
            return False

        round_counter.advance()
        self.context.health = self.context.max_health * (0.9 - 0.1 * self.revive_count)
        self.revive_count += 1
        return True
