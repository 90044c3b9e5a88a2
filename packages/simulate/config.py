"""
Simulation configuration shared by the sequential and parallel simulators.
"""

from dataclasses import dataclass
from multiprocessing import cpu_count
from typing import Optional

__all__ = ["SimulationConfig", "DEFAULT_MAX_ROUNDS", "DEFAULT_MAX_ENCOUNTERS"]

# Exchanges per encounter before the fight is considered broken
DEFAULT_MAX_ROUNDS = 1_000_000

# Encounters per trial (fighter replacements included)
DEFAULT_MAX_ENCOUNTERS = 500


@dataclass
class SimulationConfig:
    """Configuration for dungeon/battle simulation."""

    # Safety ceilings
    max_rounds: int = DEFAULT_MAX_ROUNDS
    max_encounters: int = DEFAULT_MAX_ENCOUNTERS

    # Worker configuration
    n_workers: int = 0  # 0 = auto-detect (cpu_count - 1)
    batch_size: int = 1000  # Trials per submitted task

    # Root seed; None = fresh entropy on every run
    seed: Optional[int] = None

    def __post_init__(self):
        if self.max_rounds <= 0:
            raise ValueError(f"max_rounds must be positive, got {self.max_rounds}")
        if self.max_encounters <= 0:
            raise ValueError(f"max_encounters must be positive, got {self.max_encounters}")
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")
        if self.n_workers <= 0:
            # Leave one core for main process
            self.n_workers = max(1, cpu_count() - 1)
