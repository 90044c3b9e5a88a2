"""
Berserker - frenzied chain attacks that rob the opponent of its turn.
"""

from ..content.classes import Class
from ..state.rng import Random
from .base import Fighter, RoundCounter

__all__ = ["BerserkerFighter", "MAX_CHAIN_ATTACKS"]

MAX_CHAIN_ATTACKS = 14


class BerserkerFighter(Fighter):
    """
    Before the opponent acts, the berserker may chain another attack turn.

    Each chain costs a round. After MAX_CHAIN_ATTACKS chains in a row the
    opponent always gets its turn. The streak starts over against every new
    opponent. Mages are not affected.
    """

    class_ = Class.BERSERKER

    def __init__(self, spec):
        super().__init__(spec)
        self.chain_attack_counter = 0

    def face(self, opponent: Fighter) -> None:
        super().face(opponent)
        self.chain_attack_counter = 0

    def reset_state(self) -> None:
        self.reset_health()
        self.chain_attack_counter = 0

    def will_skip_opponent_round(self, opponent: Fighter, round_counter: RoundCounter, rng: Random) -> bool:
        if opponent.is_mage():
            return False

        if self.chain_attack_counter >= MAX_CHAIN_ATTACKS:
            self.chain_attack_counter = 0
        elif rng.random_int_range(1, 100) > 50:
            round_counter.advance()
            self.chain_attack_counter += 1
            return True
        else:
            self.chain_attack_counter = 0

        return False
