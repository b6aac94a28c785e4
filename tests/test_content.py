"""Tests for content keys, loot key parsing and the content catalog."""

import json

import pytest

from stargen.content import (
    CatalogError,
    ContentCatalog,
    ContentDefinition,
    ContentKey,
    ContentKind,
    ItemType,
    LootKey,
    Rarity,
)


def test_content_key_str():
    key = ContentKey(kind=ContentKind.ENEMY, value="scout_12")
    assert str(key) == "scout_12"


def test_content_key_dumps_as_value():
    key = ContentKey(kind=ContentKind.ITEM, value="armor_epic_7")
    assert key.model_dump() == "armor_epic_7"
    assert key.model_dump_json() == '"armor_epic_7"'


def test_content_key_is_hashable():
    a = ContentKey(kind=ContentKind.NPC, value="trader_1")
    b = ContentKey(kind=ContentKind.NPC, value="trader_1")
    assert {a, b} == {a}


class TestLootKey:
    def test_parse(self):
        loot = LootKey.parse("weapon_rare_42")
        assert loot.item_type == ItemType.WEAPON
        assert loot.rarity == Rarity.RARE
        assert loot.number == 42

    def test_parse_content_key(self):
        key = ContentKey(kind=ContentKind.ITEM, value="tech_legendary_999")
        loot = LootKey.parse(key)
        assert loot.rarity == Rarity.LEGENDARY

    def test_to_key(self):
        key = LootKey(item_type=ItemType.ARMOR, rarity=Rarity.EPIC, number=7).to_key()
        assert key.kind == ContentKind.ITEM
        assert key.value == "armor_epic_7"

    @pytest.mark.parametrize(
        "value",
        ["weapon_shiny_1", "sword_rare_1", "weapon_rare", "weapon_rare_x", "", "a_b_c_d"],
    )
    def test_parse_rejects_malformed(self, value):
        with pytest.raises(ValueError):
            LootKey.parse(value)


def _definition(kind=ContentKind.ENEMY, key="scout_12", name="Scout") -> ContentDefinition:
    return ContentDefinition(kind=kind, key=key, name=name)


class TestContentCatalog:
    def test_resolve_registered(self):
        catalog = ContentCatalog()
        catalog.register(_definition())
        found = catalog.resolve(ContentKey(kind=ContentKind.ENEMY, value="scout_12"))
        assert found is not None
        assert found.name == "Scout"

    def test_resolve_unknown_returns_none(self):
        catalog = ContentCatalog()
        assert catalog.resolve(ContentKey(kind=ContentKind.ENEMY, value="nope_1")) is None

    def test_resolve_respects_kind(self):
        catalog = ContentCatalog()
        catalog.register(_definition(kind=ContentKind.NPC, key="smuggler_3"))
        assert catalog.resolve(ContentKey(kind=ContentKind.ENEMY, value="smuggler_3")) is None
        assert catalog.resolve(ContentKey(kind=ContentKind.NPC, value="smuggler_3")) is not None

    def test_register_replaces(self):
        catalog = ContentCatalog()
        catalog.register(_definition(name="Old"))
        catalog.register(_definition(name="New"))
        assert len(catalog) == 1
        assert catalog.resolve(ContentKey(kind=ContentKind.ENEMY, value="scout_12")).name == "New"

    def test_keys_filtered_by_kind(self):
        catalog = ContentCatalog()
        catalog.register(_definition())
        catalog.register(_definition(kind=ContentKind.PUZZLE, key="calibration_4", name="Calibrate"))
        assert catalog.keys(ContentKind.PUZZLE) == [
            ContentKey(kind=ContentKind.PUZZLE, value="calibration_4")
        ]
        assert len(catalog.keys()) == 2

    def test_load(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([
            {"kind": "enemy", "key": "drone_5", "name": "Patrol Drone"},
            {"kind": "item", "key": "weapon_rare_42", "name": "Arc Rifle",
             "data": {"damage": 12}},
        ]))
        catalog = ContentCatalog()
        loaded = catalog.load(path)
        assert len(loaded) == 2
        rifle = catalog.resolve(ContentKey(kind=ContentKind.ITEM, value="weapon_rare_42"))
        assert rifle.data == {"damage": 12}

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="not found"):
            ContentCatalog().load(tmp_path / "missing.json")

    def test_load_invalid_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(CatalogError, match="Failed to parse"):
            ContentCatalog().load(path)

    def test_load_wrong_shape(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"kind": "dragon", "key": "x", "name": "X"}]))
        with pytest.raises(CatalogError):
            ContentCatalog().load(path)
