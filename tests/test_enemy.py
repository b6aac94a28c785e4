"""Tests for enemy, ability and loot generation."""

from unittest.mock import patch

import pytest

from stargen.content import ContentKind, LootKey, Rarity
from stargen.generator import clamp_danger, round_half_up
from stargen.tables import (
    ABILITY_TEMPLATES,
    ENEMY_MODIFIERS,
    ENEMY_TEMPLATES,
    TechLevel,
)

FIXED_MILLIS = 1_700_000_000_000


def _template_for(danger: int):
    return ENEMY_TEMPLATES[min(danger // 2, len(ENEMY_TEMPLATES) - 1)]


def test_round_half_up():
    assert round_half_up(16.5) == 17
    assert round_half_up(2.5) == 3
    assert round_half_up(3.3) == 3
    assert round_half_up(3.7) == 4


@pytest.mark.parametrize("value,expected", [(-4, 1), (0, 1), (1, 1), (7, 7), (10, 10), (99, 10)])
def test_clamp_danger(value, expected):
    assert clamp_danger(value) == expected


class TestEnemy:
    def test_danger_one_drone(self, generator):
        enemy = generator.generate_enemy(1)
        assert enemy.name == "Drone"
        assert enemy.health == 17
        assert enemy.max_health == 17
        assert enemy.damage == 3
        assert enemy.description == "A simple automated drone with basic offensive capabilities."
        assert enemy.reward.experience == 20
        assert len(enemy.abilities) == 1

    def test_id_uses_clock(self, generator):
        enemy = generator.generate_enemy(5)
        prefix, millis, suffix = enemy.id.split("_")
        assert prefix == "enemy"
        assert int(millis) == FIXED_MILLIS
        assert 1000 <= int(suffix) <= 9999

    def test_stronger_at_higher_danger(self, make_generator):
        weak = make_generator(8).generate_enemy(1)
        strong = make_generator(8).generate_enemy(10)
        assert strong.health > weak.health
        assert strong.damage > weak.damage
        assert strong.reward.experience > weak.reward.experience

    @pytest.mark.parametrize("danger", range(1, 11))
    def test_health_matches_max(self, make_generator, danger):
        enemy = make_generator(danger).generate_enemy(danger)
        assert enemy.health == enemy.max_health > 0
        assert enemy.reward.experience == 20 * danger

    @pytest.mark.parametrize("danger", range(1, 11))
    def test_ability_count(self, make_generator, danger):
        enemy = make_generator(100 + danger).generate_enemy(danger)
        templates = ABILITY_TEMPLATES[_template_for(danger).tech_level]
        expected = min(max(1, min(5, danger // 2)), len(templates))
        assert len(enemy.abilities) == expected
        assert len({a.name for a in enemy.abilities}) == expected

    @pytest.mark.parametrize("danger", [4, 6, 9, 10])
    def test_modifier_prefix_above_three(self, make_generator, danger):
        enemy = make_generator(danger).generate_enemy(danger)
        modifier, kind = enemy.name.split(" ", 1)
        assert modifier in ENEMY_MODIFIERS
        assert kind == _template_for(danger).type

    @pytest.mark.parametrize("danger", [1, 2, 3])
    def test_no_modifier_up_to_three(self, make_generator, danger):
        enemy = make_generator(danger).generate_enemy(danger)
        assert enemy.name == _template_for(danger).type

    def test_modifier_bonus_bounds(self, make_generator):
        template = _template_for(6)
        scaling = 1 + 6 * 0.1
        for seed in range(20):
            enemy = make_generator(seed).generate_enemy(6)
            assert round_half_up((template.health + 5) * scaling) <= enemy.health
            assert enemy.health <= round_half_up((template.health + 15) * scaling)
            assert round_half_up((template.damage + 1) * scaling) <= enemy.damage
            assert enemy.damage <= round_half_up((template.damage + 3) * scaling)

    def test_danger_is_clamped(self, generator):
        assert generator.generate_enemy(0).reward.experience == 20
        assert generator.generate_enemy(15).reward.experience == 200
        assert generator.generate_enemy(-3).name == "Drone"

    def test_loot_dumps_as_string(self, generator):
        with patch.object(generator.rng, "next", return_value=0.1):
            enemy = generator.generate_enemy(9)
        (item,) = enemy.model_dump(mode="json", by_alias=True)["reward"]["items"]
        assert isinstance(item, str)
        assert LootKey.parse(item).rarity == Rarity.COMMON

    def test_same_seed_same_enemy(self, make_generator):
        a = make_generator(55).generate_enemy(7)
        b = make_generator(55).generate_enemy(7)
        assert a.model_dump() == b.model_dump()

    def test_camel_case_dump(self, generator):
        data = generator.generate_enemy(8).model_dump(by_alias=True)
        assert "maxHealth" in data
        assert "energyCost" in data["abilities"][0]
        assert "currentCooldown" in data["abilities"][0]


class TestAbilities:
    @pytest.mark.parametrize("tech_level", list(TechLevel))
    def test_values_stay_near_template(self, make_generator, tech_level):
        templates = {t.name: t for t in ABILITY_TEMPLATES[tech_level]}
        gen = make_generator(3)
        for _ in range(20):
            for ability in gen._generate_enemy_abilities(tech_level, 10):
                template = templates[ability.name]
                assert ability.cooldown == template.cooldown
                assert ability.current_cooldown == 0
                assert ability.description == f"Enemy {template.name.lower()} ability"
                assert template.energy_cost * 0.9 - 1 <= ability.energy_cost
                assert ability.energy_cost <= template.energy_cost * 1.1 + 1
                if template.damage:
                    assert template.damage * 0.8 - 1 <= ability.damage <= template.damage * 1.2 + 1
                else:
                    assert ability.damage is None
                if template.healing:
                    assert template.healing * 0.8 - 1 <= ability.healing <= template.healing * 1.2 + 1
                else:
                    assert ability.healing is None

    def test_support_ability_has_no_damage_or_healing(self, generator):
        abilities = generator._generate_enemy_abilities(TechLevel.NATURAL, 10)
        sense = next(a for a in abilities if a.name == "Predator Sense")
        assert sense.damage is None
        assert sense.healing is None
        assert sense.energy_cost >= 0

    def test_ability_ids(self, generator):
        for ability in generator._generate_enemy_abilities(TechLevel.HIGH, 10):
            assert ability.id.startswith(f"ability_{FIXED_MILLIS}_")

    def test_fallback_basic_attack(self, generator):
        with patch.object(generator.rng, "shuffle", return_value=[]):
            abilities = generator._generate_enemy_abilities(TechLevel.ALIEN, 6)
        assert len(abilities) == 1
        fallback = abilities[0]
        assert fallback.name == "Basic Attack"
        assert fallback.damage == 12
        assert fallback.energy_cost == 0
        assert fallback.cooldown == 0


class TestLoot:
    def test_low_danger_is_common(self, generator):
        for _ in range(50):
            key = generator._generate_loot_key(1)
            assert LootKey.parse(key).rarity == Rarity.COMMON

    def test_legendary_roll(self, generator):
        with patch.object(generator.rng, "next", return_value=0.95):
            key = generator._generate_loot_key(10)
        assert key.kind == ContentKind.ITEM
        assert key.value == "upgrade_legendary_950"

    def test_epic_roll(self, generator):
        with patch.object(generator.rng, "next", return_value=0.65):
            key = generator._generate_loot_key(10)
        assert key.value == "tech_epic_650"

    def test_legendary_needs_danger_eight(self, generator):
        with patch.object(generator.rng, "next", return_value=0.95):
            key = generator._generate_loot_key(7)
        assert LootKey.parse(key).rarity == Rarity.EPIC

    def test_rarity_gated_by_danger(self, make_generator):
        allowed = {
            1: {Rarity.COMMON},
            3: {Rarity.COMMON, Rarity.UNCOMMON},
            5: {Rarity.COMMON, Rarity.UNCOMMON, Rarity.RARE},
        }
        gen = make_generator(60)
        for danger, rarities in allowed.items():
            for _ in range(100):
                assert LootKey.parse(gen._generate_loot_key(danger)).rarity in rarities

    def test_enemy_loot_is_parseable(self, make_generator):
        gen = make_generator(61)
        dropped = 0
        for _ in range(60):
            items = gen.generate_enemy(9).reward.items
            if items is None:
                continue
            dropped += 1
            assert len(items) == 1
            assert LootKey.parse(items[0]).number in range(1, 1000)
        assert dropped > 0
