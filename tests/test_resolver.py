"""
Fight Resolver Tests

Tests turn order, pre-fight actions, chain attacks and the exchange ceiling.
"""

import logging

import pytest

from packages.simulate.combat.resolver import (
    EncounterAborted,
    FightOutcome,
    SimulationError,
    resolve_fight,
)
from packages.simulate.content.classes import Class
from packages.simulate.fighters import create_fighter
from packages.simulate.fighters.base import Fighter, RoundCounter
from packages.simulate.state.rng import Random


class RecordingFighter(Fighter):
    """Mage-like fighter that records the order of its actions."""

    class_ = Class.MAGE

    def __init__(self, spec, log):
        super().__init__(spec)
        self.log = log

    def attack_before_fight(self, target, round_counter, rng):
        self.log.append(("before", self.spec.name))
        return False

    def attack(self, target, round_counter, rng):
        self.log.append(("attack", self.spec.name))
        return super().attack(target, round_counter, rng)


class TestTurnOrder:
    """Test who acts when."""

    def test_left_side_acts_first(self, spec_factory):
        log = []
        left = RecordingFighter(spec_factory(Class.MAGE, health=250, name="L"), log)
        right = RecordingFighter(spec_factory(Class.MAGE, health=250, name="R"), log)

        outcome = resolve_fight(left, right, Random(1))

        assert log[:2] == [("before", "L"), ("before", "R")]
        assert log[2:] == [("attack", "L"), ("attack", "R"), ("attack", "L"), ("attack", "R")]
        # Hits in rounds 2 and 4 (116.7 + 150) outscale rounds 1 and 3 (100 + 133.3)
        assert outcome is FightOutcome.RIGHT_SIDE_WIN

    def test_one_turn_win(self, spec_factory):
        left = create_fighter(spec_factory(Class.MAGE, min_dmg=10_000, max_dmg=10_000))
        right = create_fighter(spec_factory(Class.WARRIOR, health=500, block_chance=0))
        assert resolve_fight(left, right, Random(1)) is FightOutcome.LEFT_SIDE_WIN
        assert left.context.health == left.context.max_health

    def test_mage_wins_in_one_attacker_turn(self, spec_factory):
        mage_spec = spec_factory(
            Class.MAGE, health=500, min_dmg=50, max_dmg=60, crit_chance=0.0, crit_multiplier=1.0,
        )
        monster_spec = spec_factory(Class.MAGE, health=40, min_dmg=1, max_dmg=1, name="Rat")

        mage, monster = create_fighter(mage_spec), create_fighter(monster_spec)
        mage.face(monster)
        monster.face(mage)
        round_counter = RoundCounter()
        assert mage.attack(monster, round_counter, Random(1))
        assert round_counter.value == 1

        mage, monster = create_fighter(mage_spec), create_fighter(monster_spec)
        assert resolve_fight(mage, monster, Random(1)) is FightOutcome.LEFT_SIDE_WIN
        assert mage.context.health == 500

    def test_right_side_can_win(self, spec_factory):
        left = create_fighter(spec_factory(Class.MAGE, health=50, min_dmg=1, max_dmg=1))
        right = create_fighter(spec_factory(Class.MAGE, health=10_000, min_dmg=100, max_dmg=100))
        assert resolve_fight(left, right, Random(1)) is FightOutcome.RIGHT_SIDE_WIN

    def test_face_called_on_both(self, spec_factory):
        left = create_fighter(spec_factory(Class.WARRIOR, min_dmg=10_000, max_dmg=10_000, block_chance=0))
        right = create_fighter(spec_factory(Class.MAGE, health=100))
        resolve_fight(left, right, Random(1))
        assert left.context.opponent_is_mage
        assert not right.context.opponent_is_mage


class TestPreFightActions:
    """Test the battle mage's fireball timing."""

    def test_fireball_kill_ends_fight(self, spec_factory):
        left = create_fighter(spec_factory(Class.BATTLE_MAGE, fireball_damage=1000, min_dmg=0, max_dmg=0))
        right = create_fighter(spec_factory(Class.WARRIOR, health=500))
        rng = Random(1)
        assert resolve_fight(left, right, rng) is FightOutcome.LEFT_SIDE_WIN
        assert rng.counter == 0

    def test_defender_fireball_kills_first(self, spec_factory):
        left = create_fighter(spec_factory(Class.WARRIOR, health=100))
        right = create_fighter(spec_factory(Class.BATTLE_MAGE, fireball_damage=1000))
        assert resolve_fight(left, right, Random(1)) is FightOutcome.RIGHT_SIDE_WIN


class TestChainAttacks:
    """Test the berserker skipping the opponent's turn."""

    def test_berserker_attacks_repeatedly(self, spec_factory, scripted_rng):
        # Left berserker kills in 3 hits; right would kill left in 1
        left = create_fighter(spec_factory(Class.BERSERKER, health=10, min_dmg=100, max_dmg=100))
        right = create_fighter(spec_factory(
            Class.BATTLE_MAGE, health=350, min_dmg=1000, max_dmg=1000, fireball_damage=0,
        ))

        # Chain roll succeeds twice, so the opponent never gets a turn
        rng = scripted_rng(ints=[100, 100])
        assert resolve_fight(left, right, rng) is FightOutcome.LEFT_SIDE_WIN
        assert left.chain_attack_counter == 2

    def test_berserker_vs_mage_unchanged(self, spec_factory, scripted_rng):
        left = create_fighter(spec_factory(Class.MAGE, health=250))
        right = create_fighter(spec_factory(Class.BERSERKER, health=200))

        # Rolls that would always chain if mages were not immune
        rng = scripted_rng(ints=[100] * 10)
        assert resolve_fight(left, right, rng) is FightOutcome.LEFT_SIDE_WIN
        assert right.chain_attack_counter == 0


class TestCeiling:
    """Test the exchange ceiling."""

    def test_stalemate_aborts(self, spec_factory, caplog):
        left = create_fighter(spec_factory(Class.MAGE, min_dmg=0, max_dmg=0))
        right = create_fighter(spec_factory(Class.MAGE, min_dmg=0, max_dmg=0))

        with caplog.at_level(logging.WARNING):
            with pytest.raises(EncounterAborted) as exc_info:
                resolve_fight(left, right, Random(1), max_rounds=50)

        assert exc_info.value.rounds == 100
        assert isinstance(exc_info.value, SimulationError)
        assert "aborted" in caplog.text
