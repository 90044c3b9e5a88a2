"""
Combat - encounter resolution and Monte Carlo aggregation.
"""

from .resolver import FightOutcome, SimulationError, EncounterAborted, resolve_fight
from .simulator import (
    FightSimulationResult,
    simulate_battle,
    simulate_dungeon,
    simulate_current_enemy,
)
