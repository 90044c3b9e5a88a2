"""
Damage Model Tests

Tests damage bands, round scaling, crits and the derived fight formulas.
"""

import math

import pytest

from packages.simulate.calc.damage import (
    DamageRange,
    apply_crit,
    round_scaling,
    calculate_hit_damage,
    calculate_crit_chance,
    calculate_fireball_damage,
    calculate_damage_multiplier,
    calculate_damage_reduction,
)
from packages.simulate.content.classes import Class, get_class_config
from packages.simulate.state.rng import Random


class TestDamageRange:
    """Test the immutable damage band."""

    def test_scaling(self):
        band = DamageRange(10, 20) * 1.5
        assert band == DamageRange(15, 30)
        assert 2 * DamageRange(1, 2) == DamageRange(2, 4)

    def test_scaling_returns_new_band(self):
        band = DamageRange(10, 20)
        band * 3
        assert band == DamageRange(10, 20)

    def test_negative_bounds_rejected(self):
        with pytest.raises(ValueError):
            DamageRange(-1, 5)

    def test_unordered_bounds_rejected(self):
        with pytest.raises(ValueError):
            DamageRange(10, 5)

    def test_roll_stays_in_band(self, rng_seed_42):
        band = DamageRange(100, 200)
        for _ in range(1000):
            assert 100 <= band.roll(rng_seed_42) <= 200

    def test_degenerate_band(self, rng_seed_42):
        assert DamageRange(50, 50).roll(rng_seed_42) == 50

    def test_average(self):
        assert DamageRange(10, 30).average == 20


class TestHitDamage:
    """Test round scaling and crits."""

    def test_round_one_is_unscaled(self):
        assert round_scaling(1) == 1.0

    def test_every_round_adds_a_sixth(self):
        assert round_scaling(7) == pytest.approx(2.0)
        assert round_scaling(4) == pytest.approx(1.5)

    def test_no_crit_bounds(self, rng_seed_42):
        """Without crits, hit damage stays inside the round-scaled band."""
        band = DamageRange(100, 200)
        for round_number in (1, 5, 20):
            factor = round_scaling(round_number)
            for _ in range(200):
                dmg = calculate_hit_damage(band, round_number, 0.0, 2.0, rng_seed_42)
                assert 100 * factor <= dmg <= 200 * factor

    def test_crit_bounds(self, rng_seed_42):
        """Crit damage never exceeds max * scaling * crit multiplier."""
        band = DamageRange(100, 200)
        for _ in range(500):
            dmg = calculate_hit_damage(band, 3, 0.5, 2.5, rng_seed_42)
            assert 100 * round_scaling(3) <= dmg <= 200 * round_scaling(3) * 2.5

    def test_always_crit(self, rng_seed_42):
        dmg = calculate_hit_damage(DamageRange(10, 10), 1, 1.0, 3.0, rng_seed_42)
        assert dmg == pytest.approx(30.0)

    def test_apply_crit_never_with_zero_chance(self, rng_seed_42):
        assert all(apply_crit(10, 0.0, 2.0, rng_seed_42) == 10 for _ in range(100))

    def test_crit_rate_matches_chance(self):
        rng = Random(2024)
        crits = sum(1 for _ in range(10000) if apply_crit(1.0, 0.3, 2.0, rng) == 2.0)
        assert 2700 < crits < 3300

    def test_hit_consumes_two_draws(self):
        """One draw for the roll, one for the crit check."""
        rng = Random(5)
        calculate_hit_damage(DamageRange(1, 2), 1, 0.5, 2.0, rng)
        assert rng.counter == 2


class TestDerivedFormulas:
    """Test the opponent-dependent helpers."""

    def test_crit_chance_capped(self):
        assert calculate_crit_chance(1_000_000, 10) == 0.5
        assert calculate_crit_chance(1_000_000, 10, cap=0.75, crit_bonus=0.1) == 0.75

    def test_crit_chance_formula(self):
        # 200 luck * 5 / (50 * 2) / 100 = 0.1
        assert calculate_crit_chance(200, 50) == pytest.approx(0.1)

    def test_fireball_immune_mage(self):
        assert calculate_fireball_damage(10_000, Class.MAGE, 5000) == 0.0

    def test_fireball_formula(self):
        multiplier = get_class_config(Class.WARRIOR).health_multiplier
        expected = math.ceil(multiplier * 0.05 * 10_000)
        assert calculate_fireball_damage(10_000, Class.WARRIOR, 1_000_000) == expected

    def test_fireball_capped_at_third_of_target(self):
        assert calculate_fireball_damage(1_000_000, Class.SCOUT, 300) == 100

    def test_damage_multiplier_matchups(self):
        mage = get_class_config(Class.MAGE).damage_multiplier
        assert calculate_damage_multiplier(Class.MAGE, Class.PALADIN) == pytest.approx(mage * 1.5)
        assert calculate_damage_multiplier(Class.MAGE, Class.WARRIOR) == mage

        necro = get_class_config(Class.NECROMANCER).damage_multiplier
        assert calculate_damage_multiplier(Class.NECROMANCER, Class.DEMON_HUNTER) == pytest.approx(necro + 0.1)

    def test_damage_reduction_ignored_by_mage(self):
        assert calculate_damage_reduction(Class.MAGE, Class.WARRIOR, 10_000, 10) == 0.0

    def test_damage_reduction_capped(self):
        cap = get_class_config(Class.WARRIOR).max_armor_reduction / 100
        assert calculate_damage_reduction(Class.SCOUT, Class.WARRIOR, 1_000_000, 10) == cap

    def test_damage_reduction_formula(self):
        # 1.0 * 500 armor / level 100 / 100 = 0.05
        assert calculate_damage_reduction(Class.SCOUT, Class.WARRIOR, 500, 100) == pytest.approx(0.05)
