"""
Damage Model - damage bands, rolls, crits and the derived fight formulas.

Design principles:
1. Pure functions - no side effects, the random source is always passed in
2. DamageRange is immutable; scaling produces a new band
3. Optimized for millions of calls in simulations

Hit damage calculation order:
1. Roll uniformly inside the band [min, max]
2. Scale by the round: damage * (1 + (round - 1) / 6)
3. Crit check: with probability crit_chance multiply by crit_multiplier
"""

import math
from dataclasses import dataclass

from ..content.classes import Class, get_class_config
from ..state.rng import Random

__all__ = [
    "DamageRange",
    "apply_crit",
    "round_scaling",
    "calculate_hit_damage",
    "calculate_crit_chance",
    "calculate_fireball_damage",
    "calculate_damage_multiplier",
    "calculate_damage_reduction",
    # Constants
    "ROUND_SCALING_STEP",
    "DEFAULT_CRIT_MULTIPLIER",
    "BASE_CRIT_CAP",
]


# =============================================================================
# CONSTANTS
# =============================================================================

# Every round adds a sixth of the base damage
ROUND_SCALING_STEP = 1.0 / 6.0

DEFAULT_CRIT_MULTIPLIER = 2.0

# Luck-based crit chance never exceeds 50%
BASE_CRIT_CAP = 0.5


# =============================================================================
# DAMAGE BAND
# =============================================================================

@dataclass(frozen=True)
class DamageRange:
    """A [min, max] damage band."""
    min: float
    max: float

    def __post_init__(self):
        if self.min < 0 or self.max < 0:
            raise ValueError(f"Damage bounds must be non-negative: {self}")
        if self.min > self.max:
            raise ValueError(f"Damage min must not exceed max: {self}")

    def __mul__(self, factor: float) -> 'DamageRange':
        return DamageRange(self.min * factor, self.max * factor)

    __rmul__ = __mul__

    def roll(self, rng: Random) -> float:
        """Uniform sample inside the band."""
        return rng.random_float() * (self.max - self.min) + self.min

    @property
    def average(self) -> float:
        return (self.min + self.max) / 2.0


def apply_crit(
    rolled: float,
    crit_chance: float,
    crit_multiplier: float,
    rng: Random,
) -> float:
    """With probability crit_chance multiply the rolled value."""
    if rng.random_float() < crit_chance:
        return rolled * crit_multiplier
    return rolled


def round_scaling(round_number: int) -> float:
    """Damage factor for the given round (1.0 in round 1)."""
    return 1.0 + (round_number - 1) * ROUND_SCALING_STEP


def calculate_hit_damage(
    damage: DamageRange,
    round_number: int,
    crit_chance: float,
    crit_multiplier: float,
    rng: Random,
) -> float:
    """
    Damage of a single hit.

    Args:
        damage: Band to roll in
        round_number: Current fight round (>= 1)
        crit_chance: Probability of a critical hit
        crit_multiplier: Factor applied on a critical hit
        rng: Random source

    Returns:
        Rolled, round-scaled, crit-adjusted damage
    """
    dmg = damage.roll(rng) * round_scaling(round_number)
    return apply_crit(dmg, crit_chance, crit_multiplier, rng)


# =============================================================================
# DERIVED FORMULAS
# =============================================================================

def calculate_crit_chance(
    luck: float,
    opponent_level: int,
    cap: float = BASE_CRIT_CAP,
    crit_bonus: float = 0.0,
) -> float:
    """
    Crit chance from the attacker's luck against an opponent's level.

    Druids use cap=0.75 and crit_bonus=0.1 for their rage crit chance.
    """
    if opponent_level <= 0:
        return min(crit_bonus, cap)
    chance = luck * 5.0 / (opponent_level * 2.0) / 100.0 + crit_bonus
    return min(chance, cap)


def calculate_fireball_damage(
    attacker_max_health: float,
    target_class: Class,
    target_max_health: float,
) -> float:
    """
    Damage of the battle mage's opening fireball.

    Mages are immune. Otherwise 5% of the caster's life scaled by the
    target's class life multiplier, capped at a third of the target's life.
    """
    if target_class is Class.MAGE:
        return 0.0

    multiplier = get_class_config(target_class).health_multiplier
    dmg = math.ceil(multiplier * 0.05 * attacker_max_health)
    return float(min(math.ceil(target_max_health / 3.0), dmg))


def calculate_damage_multiplier(attacker: Class, target: Class) -> float:
    """Class damage multiplier including matchup specific bonuses."""
    base_multi = get_class_config(attacker).damage_multiplier

    if (attacker, target) in ((Class.MAGE, Class.PALADIN), (Class.PALADIN, Class.MAGE)):
        return base_multi * 1.5
    if attacker is Class.DRUID and target is Class.MAGE:
        return base_multi * 4.0 / 3.0
    if attacker is Class.DRUID and target is Class.DEMON_HUNTER:
        return base_multi * 1.15
    if attacker is Class.BARD and target is Class.PLAGUE_DOCTOR:
        return base_multi * 1.05
    if attacker is Class.NECROMANCER and target is Class.DEMON_HUNTER:
        return base_multi + 0.1
    if attacker is Class.PLAGUE_DOCTOR and target is Class.DEMON_HUNTER:
        return base_multi * 1.06
    return base_multi


def calculate_damage_reduction(
    attacker: Class,
    target: Class,
    target_armor: float,
    attacker_level: int,
) -> float:
    """
    Fraction of incoming damage the target's armor absorbs.

    Mages ignore armor entirely.
    """
    if attacker is Class.MAGE or target_armor <= 0 or attacker_level <= 0:
        return 0.0

    config = get_class_config(target)
    reduction = config.armor_multiplier * target_armor / attacker_level / 100.0
    return min(reduction, config.max_armor_reduction / 100.0)
