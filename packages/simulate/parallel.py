"""
Parallel Simulation - spread Monte Carlo trials over worker processes.

Trials are independent, so the trial count is split into batches and each
batch runs in a worker with its own random stream. Only the per-batch tallies
come back to the parent, where they are summed.

Seeding:
- The root seed (config.seed) feeds a numpy SeedSequence
- SeedSequence.spawn gives one statistically independent child per batch
- Batch i always gets child i, so the same root seed and inputs reproduce
  the same result regardless of worker count or completion order
"""

from __future__ import annotations

import logging
import math
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .combat.resolver import SimulationError
from .combat.simulator import FightSimulationResult, run_trials
from .config import SimulationConfig
from .content.monsters import Dungeon, DungeonTables, get_tables
from .fighters.base import FighterSpec
from .state.gamestate import GameState
from .state.rng import Random

logger = logging.getLogger(__name__)

__all__ = ["ParallelSimulator", "batch_seeds"]


def batch_seeds(root_seed: Optional[int], n_batches: int) -> List[int]:
    """One independent 64-bit seed per batch, derived from the root seed."""
    children = np.random.SeedSequence(root_seed).spawn(n_batches)
    return [int(child.generate_state(1, dtype=np.uint64)[0]) for child in children]


class ParallelSimulator:
    """
    Process-pool backed battle simulator.

    Usage:
        with ParallelSimulator(n_workers=8) as sim:
            result = sim.simulate_dungeon(game_state, LightDungeon.Hell, 100_000)
    """

    def __init__(
        self,
        n_workers: int = 0,
        config: Optional[SimulationConfig] = None,
    ):
        """
        Initialize the parallel simulator.

        Args:
            n_workers: Number of worker processes (0 = auto-detect)
            config: Simulation configuration (uses defaults if None)
        """
        self.config = config or SimulationConfig()
        if n_workers > 0:
            self.config = replace(self.config, n_workers=n_workers)

        self._executor: Optional[ProcessPoolExecutor] = None

        # Statistics
        self._total_trials = 0
        self._total_time_ms = 0.0

    def _initialize(self):
        if self._executor is None:
            self._executor = ProcessPoolExecutor(max_workers=self.config.n_workers)

    def shutdown(self):
        """Shutdown the worker pool."""
        if self._executor:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self):
        self._initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()
        return False

    # =========================================================================
    # Simulation
    # =========================================================================

    def simulate_battle(
        self,
        left: Sequence[FighterSpec],
        right: Sequence[FighterSpec],
        trials: int,
    ) -> FightSimulationResult:
        """
        Parallel counterpart of combat.simulator.simulate_battle.

        Raises:
            ValueError: if trials <= 0
            SimulationError: if every trial was aborted
        """
        if trials <= 0:
            raise ValueError(f"trials must be positive, got {trials}")
        if not left or not right:
            return FightSimulationResult.from_tally(0, trials)

        self._initialize()
        start_time = time.perf_counter()

        batch_size = self.config.batch_size
        n_batches = math.ceil(trials / batch_size)
        seeds = batch_seeds(self.config.seed, n_batches)

        futures = []
        for i, seed in enumerate(seeds):
            batch_trials = min(batch_size, trials - i * batch_size)
            futures.append(self._executor.submit(
                _run_batch, list(left), list(right), batch_trials, seed, self.config,
            ))

        result = FightSimulationResult.from_tally(0, 0)
        for future in as_completed(futures):
            result = result.merge(future.result())

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        self._total_trials += trials
        self._total_time_ms += elapsed_ms

        if result.aborted == trials:
            raise SimulationError(f"All {trials} trials were aborted")

        logger.debug(
            "Simulated %d trials in %d batches on %d workers in %.1fms (ratio %.4f)",
            trials, n_batches, self.config.n_workers, elapsed_ms, result.win_ratio,
        )
        return result

    def simulate_dungeon(
        self,
        game_state: GameState,
        dungeon: Dungeon,
        trials: int,
        tables: Optional[DungeonTables] = None,
    ) -> Optional[FightSimulationResult]:
        """Parallel counterpart of combat.simulator.simulate_dungeon."""
        tables = tables or get_tables()
        roster = tables.dungeon_monsters(dungeon)
        if not roster:
            return None
        player = game_state.character.to_fighter()
        return self.simulate_battle([player], [m.to_fighter() for m in roster], trials)

    def get_stats(self) -> Dict[str, Any]:
        """Get simulation statistics."""
        trials_per_second = (
            self._total_trials / (self._total_time_ms / 1000)
            if self._total_time_ms > 0 else 0
        )
        return {
            "total_trials": self._total_trials,
            "total_time_ms": self._total_time_ms,
            "trials_per_second": trials_per_second,
            "n_workers": self.config.n_workers,
            "batch_size": self.config.batch_size,
        }


# =============================================================================
# Worker Functions (run in separate processes)
# =============================================================================

def _run_batch(
    left: List[FighterSpec],
    right: List[FighterSpec],
    trials: int,
    seed: int,
    config: SimulationConfig,
) -> FightSimulationResult:
    """Run one batch of trials with its own random stream."""
    return run_trials(left, right, trials, Random(seed), config)
