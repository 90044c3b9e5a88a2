"""
Game State Tests

Tests building the snapshot the simulator reads from a parsed payload.
"""

import pytest

from packages.simulate.calc.damage import DamageRange
from packages.simulate.content.classes import Class
from packages.simulate.content.monsters import LightDungeon, ShadowDungeon
from packages.simulate.state.gamestate import CharacterStats, GameState


@pytest.fixture
def payload():
    return {
        "character": {
            "name": "Hero",
            "class": "Assassin",
            "level": 120,
            "max_health": 250000,
            "min_damage": 900,
            "max_damage": 1500,
            "crit_chance": 0.35,
            "armor": 4000,
            "secondary_damage": [800, 1400],
        },
        "dungeon_progress": {
            "light:DesecratedCatacombs": 4,
            "shadow:MinesOfGloria": 0,
        },
    }


class TestFromDict:
    """Test payload parsing."""

    def test_character(self, payload):
        state = GameState.from_dict(payload)
        c = state.character
        assert c.name == "Hero"
        assert c.class_ is Class.ASSASSIN
        assert c.level == 120
        assert c.health == c.max_health == 250000
        assert c.damage == DamageRange(900, 1500)
        assert c.crit_multiplier == 2.0
        assert c.secondary_damage == DamageRange(800, 1400)
        assert c.block_chance is None

    def test_progress(self, payload):
        state = GameState.from_dict(payload)
        assert state.finished_monsters(LightDungeon.DesecratedCatacombs) == 4
        assert state.finished_monsters(ShadowDungeon.MinesOfGloria) == 0
        assert state.finished_monsters(LightDungeon.Hell) == 0

    def test_missing_character(self):
        with pytest.raises(ValueError):
            GameState.from_dict({"dungeon_progress": {}})

    def test_missing_field(self, payload):
        del payload["character"]["max_health"]
        with pytest.raises(ValueError):
            GameState.from_dict(payload)

    def test_bad_damage_band(self, payload):
        payload["character"]["min_damage"] = 2000
        with pytest.raises(ValueError):
            GameState.from_dict(payload)

    def test_unknown_class(self, payload):
        payload["character"]["class"] = "Jester"
        with pytest.raises(ValueError):
            GameState.from_dict(payload)

    def test_unknown_dungeon(self, payload):
        payload["dungeon_progress"]["light:Narnia"] = 1
        with pytest.raises(ValueError):
            GameState.from_dict(payload)

    def test_negative_progress(self, payload):
        payload["dungeon_progress"]["light:DesecratedCatacombs"] = -1
        with pytest.raises(ValueError):
            GameState.from_dict(payload)

    def test_luck_reaches_fighter(self, payload):
        payload["character"]["class"] = "Druid"
        payload["character"]["luck"] = 1200
        state = GameState.from_dict(payload)
        assert state.character.to_fighter().luck == 1200.0
        assert state.to_dict()["character"]["luck"] == 1200.0

    def test_to_dict_roundtrip(self, payload):
        state = GameState.from_dict(payload)
        assert GameState.from_dict(state.to_dict()) == state


class TestCharacterStats:
    """Test conversion to a fighter."""

    def test_to_fighter_carries_class_seeds(self):
        character = CharacterStats(
            name="Guard",
            class_=Class.WARRIOR,
            level=40,
            max_health=20000,
            damage=DamageRange(100, 200),
            crit_chance=0.25,
            armor=1200,
            block_chance=30,
        )
        spec = character.to_fighter()
        assert spec.class_ is Class.WARRIOR
        assert spec.health == 20000
        assert spec.block_chance == 30
        assert spec.level == 40
        assert spec.armor == 1200

    def test_invalid_crit_chance(self):
        character = CharacterStats(
            name="Lucky", class_=Class.SCOUT, level=1, max_health=100,
            damage=DamageRange(1, 2), crit_chance=1.5,
        )
        with pytest.raises(ValueError):
            character.to_fighter()
