"""
Shared pytest fixtures for the dungeon simulator test suite.

This module provides reusable fixtures for:
- RNG with known seeds
- Fighter specs for the common classes
- Small, hand-built dungeon tables
- Game-state snapshots
"""

import pytest
import sys

# Ensure project root is in path
import os
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _project_root)

from packages.simulate.calc.damage import DamageRange
from packages.simulate.config import SimulationConfig
from packages.simulate.content.classes import Class
from packages.simulate.content.monsters import DungeonTables, HabitatType, LightDungeon, Monster
from packages.simulate.fighters.base import FighterSpec
from packages.simulate.state.gamestate import CharacterStats, GameState
from packages.simulate.state.rng import Random


# =============================================================================
# RNG Fixtures
# =============================================================================


@pytest.fixture
def rng_seed_42():
    """RNG initialized with seed 42 for deterministic tests."""
    return Random(42)


@pytest.fixture
def rng_seed_12345():
    """RNG initialized with seed 12345 for deterministic tests."""
    return Random(12345)


class ScriptedRandom(Random):
    """
    Random source that replays scripted values.

    Each draw pops the next value from the matching queue; an empty queue
    falls back to the seeded stream. Lets tests force a specific branch.
    """

    def __init__(self, ints=(), floats=(), bools=(), seed=7):
        super().__init__(seed)
        self.ints = list(ints)
        self.floats = list(floats)
        self.bools = list(bools)

    def random_int_range(self, start, end):
        if self.ints:
            self.counter += 1
            return self.ints.pop(0)
        return super().random_int_range(start, end)

    def random_float(self):
        if self.floats:
            self.counter += 1
            return self.floats.pop(0)
        return super().random_float()

    def random_boolean(self, chance=None):
        if self.bools:
            self.counter += 1
            return self.bools.pop(0)
        return super().random_boolean(chance)


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRandom instances."""
    return ScriptedRandom


# =============================================================================
# Fighter Fixtures
# =============================================================================


def make_spec(class_=Class.WARRIOR, health=1000.0, min_dmg=100.0, max_dmg=100.0, **kwargs):
    """FighterSpec with sensible defaults; no crits unless asked for."""
    kwargs.setdefault("name", class_.value)
    return FighterSpec(
        class_=class_,
        health=health,
        damage=DamageRange(min_dmg, max_dmg),
        **kwargs,
    )


@pytest.fixture
def spec_factory():
    """Factory for FighterSpec instances."""
    return make_spec


@pytest.fixture
def strong_mage_spec():
    """A mage that one-shots anything in the test tables."""
    return make_spec(Class.MAGE, health=5000, min_dmg=100_000, max_dmg=100_000, name="Archmage")


@pytest.fixture
def weak_warrior_spec():
    return make_spec(Class.WARRIOR, health=100, min_dmg=1, max_dmg=2, name="Peasant", block_chance=0)


# =============================================================================
# Tables and Game State
# =============================================================================


@pytest.fixture
def small_tables():
    """Two short dungeons and one habitat."""
    catacombs = (
        Monster("Rat", 1, Class.SCOUT, 100, 5, 10),
        Monster("Skeleton", 2, Class.WARRIOR, 200, 8, 12, armor=10),
        Monster("Lich", 3, Class.MAGE, 150, 20, 30, crit_chance=0.1),
    )
    mines = (
        Monster("Troll", 10, Class.WARRIOR, 5000, 50, 80),
    )
    water = (
        Monster("Crab", 5, Class.WARRIOR, 300, 10, 20),
    )
    return DungeonTables(
        dungeons={
            LightDungeon.DesecratedCatacombs: catacombs,
            LightDungeon.MinesOfGloria: mines,
        },
        habitats={HabitatType.WATER: water},
    )


@pytest.fixture
def mage_state():
    """Game state for a mage strong enough to one-shot every test monster."""
    character = CharacterStats(
        name="Merlin",
        class_=Class.MAGE,
        level=50,
        max_health=10_000,
        damage=DamageRange(100_000, 100_000),
    )
    return GameState(character=character)


@pytest.fixture
def fast_config():
    """Sequential config with a fixed seed."""
    return SimulationConfig(n_workers=1, batch_size=250, seed=1234)
