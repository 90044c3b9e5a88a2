"""
Dungeon fight simulator

Estimates a character's odds of clearing a dungeon by simulating many
independent fights against the dungeon's monsters, following each character
class's combat rules.

Core subsystems:
- state: RNG (XorShift128) and the game-state snapshot
- content: Class table, monster and dungeon rosters
- calc: Damage model and derived fight formulas
- fighters: Per-class fighter strategies
- combat: Fight resolver and Monte Carlo simulator
- parallel: Process-pool simulator

Usage:
    from packages.simulate import GameState, LightDungeon, simulate_dungeon

    state = GameState.from_dict(payload)
    result = simulate_dungeon(state, LightDungeon.DesecratedCatacombs, 10_000)
    print(result.win_ratio)
"""

__version__ = "0.1.0"

# RNG System
from .state.rng import XorShift128, Random, seed_to_long

# Classes
from .content.classes import Class, ClassConfig, get_class_config, parse_class

# Damage Calculation
from .calc.damage import DamageRange, calculate_hit_damage

# Fighters
from .fighters import (
    FIGHTER_CLASSES,
    create_fighter,
    FightContext,
    Fighter,
    FighterSpec,
    RoundCounter,
)

# Content tables
from .content.monsters import (
    Monster,
    LightDungeon,
    ShadowDungeon,
    HabitatType,
    DungeonTables,
    get_tables,
    parse_dungeon,
)

# Game state
from .state.gamestate import CharacterStats, GameState

# Simulation
from .config import SimulationConfig
from .combat import (
    FightOutcome,
    SimulationError,
    EncounterAborted,
    resolve_fight,
    FightSimulationResult,
    simulate_battle,
    simulate_dungeon,
    simulate_current_enemy,
)
from .parallel import ParallelSimulator

__all__ = [
    "XorShift128", "Random", "seed_to_long",
    "Class", "ClassConfig", "get_class_config", "parse_class",
    "DamageRange", "calculate_hit_damage",
    "FIGHTER_CLASSES", "create_fighter", "FightContext", "Fighter", "FighterSpec", "RoundCounter",
    "Monster", "LightDungeon", "ShadowDungeon", "HabitatType", "DungeonTables", "get_tables",
    "parse_dungeon",
    "CharacterStats", "GameState",
    "SimulationConfig",
    "FightOutcome", "SimulationError", "EncounterAborted", "resolve_fight",
    "FightSimulationResult", "simulate_battle", "simulate_dungeon", "simulate_current_enemy",
    "ParallelSimulator",
]
