"""
Damage calculation (pure functions, no side effects).
"""

from .damage import (
    DamageRange,
    apply_crit,
    round_scaling,
    calculate_hit_damage,
    calculate_crit_chance,
    calculate_fireball_damage,
    calculate_damage_multiplier,
    calculate_damage_reduction,
    # Constants
    ROUND_SCALING_STEP,
    DEFAULT_CRIT_MULTIPLIER,
    BASE_CRIT_CAP,
)
