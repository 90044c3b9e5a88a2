"""
Dungeon Simulator - Monte Carlo estimate of a character's odds in a dungeon.

A trial is one full attempt: the player works through the opposing side in
order, one encounter at a time. The loser of an encounter is replaced by the
next fighter of its side while the winner keeps its current health and class
state. A trial is won when the opposing side runs out of fighters.

    win_ratio = won trials / completed trials

Aborted trials (an encounter that never ends) are logged and left out of the
ratio.
"""

import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..config import SimulationConfig
from ..content.monsters import Dungeon, DungeonTables, dungeon_key, get_tables
from ..fighters import create_fighter
from ..fighters.base import Fighter, FighterSpec
from ..state.gamestate import GameState
from ..state.rng import Random
from .resolver import EncounterAborted, FightOutcome, SimulationError, resolve_fight

logger = logging.getLogger(__name__)

__all__ = [
    "FightSimulationResult",
    "simulate_battle",
    "simulate_dungeon",
    "simulate_current_enemy",
    "run_trials",
    "run_trial",
]


@dataclass
class FightSimulationResult:
    """Aggregated outcome of many trials."""
    win_ratio: float
    won_fights: int
    trials: int
    aborted: int = 0

    @property
    def completed(self) -> int:
        return self.trials - self.aborted

    @classmethod
    def from_tally(cls, won_fights: int, trials: int, aborted: int = 0) -> 'FightSimulationResult':
        completed = trials - aborted
        win_ratio = won_fights / completed if completed > 0 else 0.0
        return cls(win_ratio=win_ratio, won_fights=won_fights, trials=trials, aborted=aborted)

    def merge(self, other: 'FightSimulationResult') -> 'FightSimulationResult':
        return FightSimulationResult.from_tally(
            self.won_fights + other.won_fights,
            self.trials + other.trials,
            self.aborted + other.aborted,
        )


# =============================================================================
# TRIALS
# =============================================================================

def run_trial(
    left: Sequence[Fighter],
    right: Sequence[Fighter],
    rng: Random,
    config: SimulationConfig,
) -> bool:
    """
    Play one trial. Returns True if the left side wins.

    Every fighter is reset to its start-of-trial state first; from then on
    health and class counters carry over between encounters.

    Raises:
        EncounterAborted: if an encounter or the trial itself never ends
    """
    for fighter in left:
        fighter.reset_state()
    for fighter in right:
        fighter.reset_state()

    li = ri = 0
    for _ in range(config.max_encounters):
        if li >= len(left):
            return False
        if ri >= len(right):
            return True

        outcome = resolve_fight(left[li], right[ri], rng, config.max_rounds)
        if outcome is FightOutcome.LEFT_SIDE_WIN:
            ri += 1
        else:
            li += 1

    if li >= len(left):
        return False
    if ri >= len(right):
        return True
    raise EncounterAborted(left[li], right[ri], config.max_encounters)


def run_trials(
    left: Sequence[FighterSpec],
    right: Sequence[FighterSpec],
    trials: int,
    rng: Random,
    config: SimulationConfig,
) -> FightSimulationResult:
    """Run `trials` trials and tally them. Never raises for aborted trials."""
    left_side = [create_fighter(spec) for spec in left]
    right_side = [create_fighter(spec) for spec in right]

    won = 0
    aborted = 0
    for _ in range(trials):
        try:
            if run_trial(left_side, right_side, rng, config):
                won += 1
        except EncounterAborted as e:
            aborted += 1
            logger.warning("Trial aborted: %s", e)

    return FightSimulationResult.from_tally(won, trials, aborted)


# =============================================================================
# PUBLIC API
# =============================================================================

def simulate_battle(
    left: Sequence[FighterSpec],
    right: Sequence[FighterSpec],
    trials: int,
    rng: Optional[Random] = None,
    config: Optional[SimulationConfig] = None,
) -> FightSimulationResult:
    """
    Simulate `trials` battles between two sides.

    Args:
        left: Fighters of the player's side, in order
        right: Fighters of the opposing side, in order
        trials: Number of independent trials (> 0)
        rng: Random source; defaults to one seeded from config.seed
        config: Simulation configuration

    Returns:
        Tally of the trials. A battle with an empty side is never won.

    Raises:
        ValueError: if trials <= 0
        SimulationError: if every trial was aborted
    """
    if trials <= 0:
        raise ValueError(f"trials must be positive, got {trials}")

    config = config or SimulationConfig()

    if not left or not right:
        return FightSimulationResult.from_tally(0, trials)

    rng = rng or Random(config.seed)

    start = time.perf_counter()
    result = run_trials(left, right, trials, rng, config)
    elapsed_ms = (time.perf_counter() - start) * 1000

    if result.aborted == trials:
        raise SimulationError(f"All {trials} trials were aborted")

    logger.debug(
        "Simulated %d trials in %.1fms: %d won, %d aborted (ratio %.4f)",
        trials, elapsed_ms, result.won_fights, result.aborted, result.win_ratio,
    )
    return result


def simulate_dungeon(
    game_state: GameState,
    dungeon: Dungeon,
    trials: int,
    rng: Optional[Random] = None,
    tables: Optional[DungeonTables] = None,
    config: Optional[SimulationConfig] = None,
) -> Optional[FightSimulationResult]:
    """
    Estimate the odds of clearing the whole dungeon roster in one go.

    Returns:
        The tally, or None if the dungeon has no roster
    """
    tables = tables or get_tables()
    roster = tables.dungeon_monsters(dungeon)
    if not roster:
        logger.info("No roster for %s", dungeon_key(dungeon))
        return None

    player = game_state.character.to_fighter()
    monsters: List[FighterSpec] = [m.to_fighter() for m in roster]
    logger.debug("Simulating %s: %d monsters", dungeon_key(dungeon), len(monsters))
    return simulate_battle([player], monsters, trials, rng, config)


def simulate_current_enemy(
    game_state: GameState,
    dungeon: Dungeon,
    trials: int,
    rng: Optional[Random] = None,
    tables: Optional[DungeonTables] = None,
    config: Optional[SimulationConfig] = None,
) -> Optional[FightSimulationResult]:
    """
    Estimate the odds of beating the next unbeaten monster of a dungeon.

    Returns:
        The tally, or None if the dungeon has no roster or is cleared
    """
    tables = tables or get_tables()
    monster = tables.current_enemy(dungeon, game_state.finished_monsters(dungeon))
    if monster is None:
        logger.info("No enemy left in %s", dungeon_key(dungeon))
        return None

    player = game_state.character.to_fighter()
    return simulate_battle([player], [monster.to_fighter()], trials, rng, config)
