"""
State module - random source and the game-state snapshot.

Contains:
- RNG system (XorShift128, seed helpers)
- GameState / CharacterStats (import from .gamestate)
"""

from .rng import XorShift128, Random, seed_to_long

__all__ = ["XorShift128", "Random", "seed_to_long"]
