"""
Monster and Dungeon Table Tests

Tests dungeon identifiers, roster lookups and the packaged tables.
"""

import json

import pytest

from packages.simulate.calc.damage import DamageRange
from packages.simulate.content.classes import Class, parse_class
from packages.simulate.content.monsters import (
    DungeonTables,
    DungeonType,
    HabitatType,
    LightDungeon,
    Monster,
    ShadowDungeon,
    dungeon_key,
    dungeon_type,
    get_tables,
    parse_dungeon,
)


class TestClasses:
    """Test class lookup."""

    @pytest.mark.parametrize("name,expected", [
        ("Warrior", Class.WARRIOR),
        ("mage", Class.MAGE),
        ("BattleMage", Class.BATTLE_MAGE),
        ("BATTLE_MAGE", Class.BATTLE_MAGE),
        ("WarMage", Class.BATTLE_MAGE),
        ("plague_doctor", Class.PLAGUE_DOCTOR),
    ])
    def test_parse_class(self, name, expected):
        assert parse_class(name) is expected

    def test_unknown_class(self):
        with pytest.raises(ValueError):
            parse_class("Bartender")


class TestDungeonIdentifiers:
    """Test dungeon parsing and keys."""

    def test_parse_light_and_shadow(self):
        assert parse_dungeon("light:MinesOfGloria") is LightDungeon.MinesOfGloria
        assert parse_dungeon("shadow:Hell") is ShadowDungeon.Hell

    def test_bare_name_is_light(self):
        assert parse_dungeon("DesecratedCatacombs") is LightDungeon.DesecratedCatacombs

    def test_loose_spelling(self):
        assert parse_dungeon("Shadow:desecrated_catacombs") is ShadowDungeon.DesecratedCatacombs

    @pytest.mark.parametrize("text", ["dark:Hell", "light:Atlantis", "shadow:TrainingCamp"])
    def test_unknown(self, text):
        with pytest.raises(ValueError):
            parse_dungeon(text)

    def test_key_roundtrip(self):
        for dungeon in list(LightDungeon) + list(ShadowDungeon):
            assert parse_dungeon(dungeon_key(dungeon)) is dungeon

    def test_dungeon_type(self):
        assert dungeon_type(LightDungeon.Tower) is DungeonType.LIGHT
        assert dungeon_type(ShadowDungeon.Twister) is DungeonType.SHADOW
        with pytest.raises(ValueError):
            dungeon_type(HabitatType.FIRE)


class TestMonster:
    """Test monster records."""

    def test_to_fighter(self):
        monster = Monster("Ghoul", 18, Class.WARRIOR, 6220, 71, 118, crit_chance=0.09, armor=270)
        spec = monster.to_fighter()
        assert spec.name == "Ghoul"
        assert spec.class_ is Class.WARRIOR
        assert spec.health == 6220
        assert spec.damage == DamageRange(71, 118)
        assert spec.crit_chance == 0.09
        assert spec.level == 18
        assert spec.armor == 270

    def test_from_dict_luck_optional(self):
        entry = {"name": "Owlbear", "level": 30, "class": "Druid", "health": 9000,
                 "min_damage": 90, "max_damage": 160}
        assert Monster.from_dict(entry).to_fighter().luck is None
        assert Monster.from_dict({**entry, "luck": 250}).to_fighter().luck == 250.0

    def test_from_dict_missing_field(self):
        with pytest.raises(ValueError):
            Monster.from_dict({"name": "Nameless", "level": 1})


class TestDungeonTables:
    """Test roster lookups."""

    def test_lookup(self, small_tables):
        roster = small_tables.dungeon_monsters(LightDungeon.DesecratedCatacombs)
        assert [m.name for m in roster] == ["Rat", "Skeleton", "Lich"]
        assert small_tables.habitat_monsters(HabitatType.WATER)[0].name == "Crab"

    def test_missing_roster_is_empty(self, small_tables):
        assert small_tables.dungeon_monsters(ShadowDungeon.Hell) == ()
        assert small_tables.habitat_monsters(HabitatType.FIRE) == ()

    def test_current_enemy(self, small_tables):
        dungeon = LightDungeon.DesecratedCatacombs
        assert small_tables.current_enemy(dungeon, 0).name == "Rat"
        assert small_tables.current_enemy(dungeon, 2).name == "Lich"
        assert small_tables.current_enemy(dungeon, 3) is None

    def test_from_dict(self):
        tables = DungeonTables.from_dict({
            "light": {"Hell": [
                {"name": "Imp", "level": 100, "class": "Scout", "health": 50000,
                 "min_damage": 300, "max_damage": 500},
            ]},
            "habitats": {"Fire": []},
        })
        assert tables.dungeon_monsters(LightDungeon.Hell)[0].class_ is Class.SCOUT
        assert tables.habitats == (HabitatType.FIRE,)

    def test_unknown_habitat(self):
        with pytest.raises(ValueError):
            DungeonTables.from_dict({"habitats": {"Air": []}})

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text(json.dumps({"shadow": {"Hell": [
            {"name": "Shadow Imp", "level": 300, "class": "Mage", "health": 1,
             "min_damage": 1, "max_damage": 2},
        ]}}))
        tables = DungeonTables.load(path)
        assert tables.dungeons == (ShadowDungeon.Hell,)


class TestPackagedTables:
    """Test the bundled rosters."""

    def test_loaded_once(self):
        assert get_tables() is get_tables()

    def test_rosters_are_ordered_by_level(self):
        tables = get_tables()
        assert tables.dungeons
        for dungeon in tables.dungeons:
            levels = [m.level for m in tables.dungeon_monsters(dungeon)]
            assert levels == sorted(levels), dungeon_key(dungeon)

    def test_catacombs_has_ten_monsters(self):
        assert len(get_tables().dungeon_monsters(LightDungeon.DesecratedCatacombs)) == 10

    def test_every_monster_is_valid(self):
        tables = get_tables()
        for dungeon in tables.dungeons:
            for monster in tables.dungeon_monsters(dungeon):
                spec = monster.to_fighter()
                assert spec.health > 0
        for habitat in tables.habitats:
            assert tables.habitat_monsters(habitat)
