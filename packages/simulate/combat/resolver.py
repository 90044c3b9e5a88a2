"""
Fight Resolver - plays out a single encounter between two fighters.

Turn order:
1. Both fighters face each other (opponent-dependent values are derived)
2. Pre-fight actions: player first, then the monster
3. Exchanges until someone dies: the player attacks unless the monster
   skips the player's turn, then the monster attacks unless the player
   skips the monster's turn

Every discrete action advances the encounter's round counter, which starts
at 0 and is never reset within the encounter.
"""

import logging
from enum import Enum

from ..config import DEFAULT_MAX_ROUNDS
from ..fighters.base import Fighter, RoundCounter
from ..state.rng import Random

logger = logging.getLogger(__name__)

__all__ = [
    "FightOutcome",
    "SimulationError",
    "EncounterAborted",
    "resolve_fight",
]


class FightOutcome(Enum):
    LEFT_SIDE_WIN = "left"
    RIGHT_SIDE_WIN = "right"


class SimulationError(Exception):
    """A simulation could not produce a result."""


class EncounterAborted(SimulationError):
    """An encounter hit the exchange ceiling without a winner."""

    def __init__(self, left: Fighter, right: Fighter, rounds: int):
        super().__init__(
            f"Encounter {left.spec.name} vs {right.spec.name} did not end "
            f"after {rounds} rounds"
        )
        self.rounds = rounds


def resolve_fight(
    left: Fighter,
    right: Fighter,
    rng: Random,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
) -> FightOutcome:
    """
    Fight until one side dies. The left fighter always acts first.

    Args:
        left: The player's side of the encounter
        right: The opposing side
        rng: Random source for every roll of the encounter
        max_rounds: Maximum number of exchanges

    Returns:
        Which side won

    Raises:
        EncounterAborted: if no one died within max_rounds exchanges
    """
    left.face(right)
    right.face(left)

    round_counter = RoundCounter()

    if left.attack_before_fight(right, round_counter, rng):
        return FightOutcome.LEFT_SIDE_WIN
    if right.attack_before_fight(left, round_counter, rng):
        return FightOutcome.RIGHT_SIDE_WIN

    for _ in range(max_rounds):
        skip = right.will_skip_opponent_round(left, round_counter, rng)
        if not skip and left.attack(right, round_counter, rng):
            return FightOutcome.LEFT_SIDE_WIN

        skip = left.will_skip_opponent_round(right, round_counter, rng)
        if not skip and right.attack(left, round_counter, rng):
            return FightOutcome.RIGHT_SIDE_WIN

    logger.warning(
        "Encounter %r vs %r aborted after %d exchanges (round %d)",
        left, right, max_rounds, round_counter.value,
    )
    raise EncounterAborted(left, right, round_counter.value)
