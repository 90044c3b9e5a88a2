"""
Fighter base - the fight context and the shared fighter contract.

Every class plays by the same basic exchange: advance the round, ask the
target whether the hit lands, roll the damage and let the target apply it.
Class strategies subclass Fighter and override only the hooks whose rules
differ (evasion, death handling, multi-hit turns, pre-fight actions).

The round counter is owned by the fight resolver and passed into every call;
fighters never keep a reference to it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..calc.damage import DamageRange, DEFAULT_CRIT_MULTIPLIER, calculate_hit_damage
from ..content.classes import Class
from ..state.rng import Random

__all__ = [
    "FighterSpec",
    "FightContext",
    "RoundCounter",
    "Fighter",
]


@dataclass(frozen=True)
class FighterSpec:
    """
    Immutable description of a combatant.

    Built from the player's game-state snapshot or from a monster table entry,
    and turned into a fresh Fighter for every trial/encounter.

    Class seeds left as None are derived from the opponent when the fight
    starts (see Fighter.face).
    """
    name: str
    class_: Class
    health: float
    damage: DamageRange
    crit_chance: float = 0.0
    crit_multiplier: float = DEFAULT_CRIT_MULTIPLIER
    level: int = 1
    armor: float = 0.0
    luck: Optional[float] = None

    # Class seeds
    block_chance: Optional[int] = None
    secondary_damage: Optional[DamageRange] = None
    fireball_damage: Optional[float] = None
    rage_crit_chance: Optional[float] = None
    base_damage_multiplier: Optional[float] = None

    def __post_init__(self):
        if self.health <= 0:
            raise ValueError(f"{self.name}: health must be positive")
        if not 0.0 <= self.crit_chance <= 1.0:
            raise ValueError(f"{self.name}: crit chance must be in [0, 1]")
        if self.crit_multiplier < 1.0:
            raise ValueError(f"{self.name}: crit multiplier must be >= 1")
        if self.block_chance is not None and not 0 <= self.block_chance <= 100:
            raise ValueError(f"{self.name}: block chance must be in [0, 100]")


@dataclass
class FightContext:
    """Mutable per-fight state of one participant."""
    fighter: FighterSpec
    health: float
    max_health: float
    damage: DamageRange
    crit_chance: float
    crit_multiplier: float
    opponent_is_mage: bool = False

    @classmethod
    def from_spec(cls, spec: FighterSpec) -> FightContext:
        return cls(
            fighter=spec,
            health=spec.health,
            max_health=spec.health,
            damage=spec.damage,
            crit_chance=spec.crit_chance,
            crit_multiplier=spec.crit_multiplier,
        )

    @property
    def is_dead(self) -> bool:
        return self.health <= 0


class RoundCounter:
    """The encounter's round number, shared by both fighters."""

    __slots__ = ("value",)

    def __init__(self, value: int = 0):
        self.value = value

    def advance(self) -> int:
        self.value += 1
        return self.value

    def __repr__(self) -> str:
        return f"RoundCounter({self.value})"


class Fighter:
    """
    Shared fighter behavior.

    Subclasses override:
    - will_take_attack: evasion / blocking
    - take_attack: death handling (revives, damage reduction)
    - attack: the class's attack turn
    - attack_before_fight: one-off opening action
    - will_skip_opponent_round: extra turns
    - reset_state: class counters
    """

    class_: Optional[Class] = None

    def __init__(self, spec: FighterSpec):
        self.spec = spec
        self.context = FightContext.from_spec(spec)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.spec.name!r}, "
            f"health={self.context.health:.1f}/{self.context.max_health:.1f})"
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def is_mage(self) -> bool:
        return self.context.fighter.class_ is Class.MAGE

    def face(self, opponent: Fighter) -> None:
        """Recompute everything that depends on who we are fighting."""
        self.context.opponent_is_mage = opponent.is_mage()

    def reset_state(self) -> None:
        """Restore the fighter to its start-of-trial state."""
        self.reset_health()

    def reset_health(self) -> None:
        self.context.health = self.context.max_health

    # =========================================================================
    # Defense
    # =========================================================================

    def will_take_attack(self, rng: Random) -> bool:
        """Whether an incoming hit connects."""
        return True

    def take_attack(self, damage: float, round_counter: RoundCounter, rng: Random) -> bool:
        """Apply damage. Returns True if this fighter is now (finally) dead."""
        self.context.health -= damage
        return self.context.health <= 0

    # =========================================================================
    # Offense
    # =========================================================================

    def attack(self, target: Fighter, round_counter: RoundCounter, rng: Random) -> bool:
        """Perform one attack turn. Returns True if the target died."""
        return self.attack_generic(target, round_counter, rng)

    def attack_generic(self, target: Fighter, round_counter: RoundCounter, rng: Random) -> bool:
        round_counter.advance()

        if not target.will_take_attack(rng):
            return False

        dmg = self.calculate_basic_hit_damage(round_counter.value, rng)
        return target.take_attack(dmg, round_counter, rng)

    def attack_before_fight(self, target: Fighter, round_counter: RoundCounter, rng: Random) -> bool:
        return False

    def will_skip_opponent_round(self, opponent: Fighter, round_counter: RoundCounter, rng: Random) -> bool:
        return False

    # =========================================================================
    # Damage helpers
    # =========================================================================

    def calculate_basic_hit_damage(self, round_number: int, rng: Random) -> float:
        """The damage a single normal hit with the main weapon does this round."""
        ctx = self.context
        return calculate_hit_damage(
            ctx.damage, round_number, ctx.crit_chance, ctx.crit_multiplier, rng
        )

    def calculate_hit_damage(
        self,
        damage: DamageRange,
        round_number: int,
        crit_chance: float,
        crit_multiplier: float,
        rng: Random,
    ) -> float:
        return calculate_hit_damage(damage, round_number, crit_chance, crit_multiplier, rng)
