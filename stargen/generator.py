"""Procedural generation of planets, star systems, regions and enemies.

Every value comes from the generator's own ``SeededRandom``, so two
generators built with the same seed and driven through the same calls hand
back identical records. The order in which rolls are made is part of that
contract: reordering draws changes every record that follows.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Callable

from stargen.config import Settings, settings as default_settings
from stargen.content import ContentKey, ContentKind, LootKey, Rarity
from stargen.models import (
    Ability,
    Encounters,
    Enemy,
    EnemyReward,
    EnvironmentEffect,
    Faction,
    Location,
    LocationType,
)
from stargen.rng import SeededRandom
from stargen.tables import (
    ABILITY_TEMPLATES,
    CONTROLLING_FACTIONS,
    DANGER_RANGES,
    DEFAULT_FACTION_DANGER,
    ENEMY_DESCRIPTIONS,
    ENEMY_MODIFIERS,
    ENEMY_TEMPLATES,
    ENEMY_TIERS,
    ENVIRONMENT_EFFECTS,
    ITEM_TYPES,
    LIFE_MULTIPLIERS,
    LIFE_TYPES,
    NPC_TIERS,
    PLANET_NAME_PREFIXES,
    PLANET_NAME_SUFFIXES,
    PLANET_TYPES,
    PUZZLE_TIERS,
    RARITY_GATES,
    RESOURCE_TYPES,
    STAR_TYPES,
    UNKNOWN_PLANET_DESCRIPTION,
    PlanetType,
    StarType,
    TechLevel,
    validate_tables,
)
from stargen.text import compose, slugify

logger = logging.getLogger(__name__)

validate_tables()

MIN_DANGER = 1
MAX_DANGER = 10


def clamp_danger(danger_level: int) -> int:
    return max(MIN_DANGER, min(MAX_DANGER, int(danger_level)))


def round_half_up(value: float) -> int:
    """Round .5 upwards, unlike Python's banker's rounding."""
    return math.floor(value + 0.5)


def _tier(danger_level: int, names: tuple[str, str, str]) -> str:
    if danger_level <= 3:
        return names[0]
    if danger_level <= 6:
        return names[1]
    return names[2]


class ProceduralGenerator:
    """Seeded content generator for one generation session.

    Holds the random source and the set of names already handed out. Names
    are unique per instance only; separate generators may repeat them.
    """

    def __init__(
        self,
        seed: int | None = None,
        rng: SeededRandom | None = None,
        clock: Callable[[], float] | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or default_settings
        if rng is None:
            rng = SeededRandom(seed if seed is not None else self.settings.default_seed)
        self.rng = rng
        self._clock = clock or time.time
        self.used_names: set[str] = set()

    def get_seed(self) -> int:
        return self.rng.get_seed()

    def set_seed(self, seed: int) -> None:
        """Reseed and forget previously used names."""
        self.rng.set_seed(seed)
        self.used_names.clear()

    def _timestamp_ms(self) -> int:
        return int(self._clock() * 1000)

    # --- Names ---

    def generate_planet_name(self) -> str:
        attempts = 0
        while True:
            prefix = self.rng.choose(PLANET_NAME_PREFIXES)
            suffix = self.rng.choose(PLANET_NAME_SUFFIXES)
            name = f"{prefix} {suffix}"
            attempts += 1
            if attempts > self.settings.max_name_attempts:
                name = self._numbered_name(name)
                break
            if name not in self.used_names:
                break
        self.used_names.add(name)
        return name

    def _numbered_name(self, name: str) -> str:
        number = self.rng.next_int(1, 999)
        while f"{name} {number}" in self.used_names:
            number += 1
        logger.debug("Name space crowded, falling back to '%s %d'", name, number)
        return f"{name} {number}"

    # --- Planets ---

    def generate_planet(self, region_name: str | None = None) -> Location:
        planet_type = self.rng.choose(PLANET_TYPES)
        variant = self.rng.choose(planet_type.variants)
        is_stable = self.rng.next() < 0.7
        star = self.rng.choose(STAR_TYPES)
        life_probability = _life_probability(star, is_stable, planet_type, variant)

        controller = self._roll_controller()
        danger_level = self._roll_planet_danger(controller)
        effects = self._roll_environment_effects()

        description = compose([
            lambda: planet_type.descriptions.get(variant, UNKNOWN_PLANET_DESCRIPTION),
            lambda: _faction_sentence(controller),
            self._resources_sentence,
            lambda: self._life_sentence(life_probability),
        ])

        name = self.generate_planet_name()
        planet = Location(
            id=slugify(name),
            name=name,
            type=LocationType.PLANET,
            description=description,
            encounters=Encounters(
                enemies=self._generate_encounter_keys(ContentKind.ENEMY, danger_level, 0, 3),
                puzzles=self._generate_encounter_keys(ContentKind.PUZZLE, danger_level, 0, 2),
                npcs=self._generate_encounter_keys(ContentKind.NPC, danger_level, 0, 3),
            ),
            region=region_name or self.settings.default_region_name,
            controlled_by=controller,
            danger_level=danger_level,
            environment_effects=effects or None,
        )
        logger.debug(
            "Generated planet %s (%s %s, danger %d, %s)",
            planet.id, variant, planet_type.type, danger_level,
            controller.value if controller else "unclaimed",
        )
        return planet

    def _roll_controller(self) -> Faction | None:
        if self.rng.next() >= 0.7:
            return None
        if self.rng.next() < 0.05:
            return Faction.VOID_ENTITY
        return self.rng.choose(CONTROLLING_FACTIONS)

    def _roll_planet_danger(self, controller: Faction | None) -> int:
        low, high = DANGER_RANGES.get(controller, DEFAULT_FACTION_DANGER)
        return self.rng.next_int(low, high)

    def _roll_environment_effects(self) -> list[EnvironmentEffect]:
        effects = []
        for _ in range(self.rng.next_int(0, 2)):
            template = self.rng.choose(ENVIRONMENT_EFFECTS)
            effects.append(EnvironmentEffect(
                type=template.type,
                severity=self.rng.next_int(1, template.max_severity),
                effect=template.description,
            ))
        return effects

    def _resources_sentence(self) -> str | None:
        if self.rng.next() >= 0.4:
            return None
        return f"Known for its deposits of {self.rng.choose(RESOURCE_TYPES)}."

    def _life_sentence(self, life_probability: float) -> str | None:
        if self.rng.next() >= life_probability:
            return None
        return f"Scans detect {self.rng.choose(LIFE_TYPES)} life forms."

    # --- Star systems and regions ---

    def generate_star_system(self, region_name: str, planet_count: int = 0) -> list[Location]:
        """Generate a system and its planets, system first.

        A planet_count of 0 or less picks 1-8 planets at random.
        """
        if planet_count <= 0:
            planet_count = self.rng.next_int(1, 8)

        system_name = f"{self.generate_planet_name()} System"
        star = self.rng.choose(STAR_TYPES)
        if planet_count == 1:
            body = "a single planet"
        else:
            body = f"{planet_count} planets"
        description = f"A {star.temp.lower()} {star.type} star system with {body}"

        planets = [self.generate_planet(region_name) for _ in range(planet_count)]

        system = Location(
            id=slugify(system_name),
            name=system_name,
            type=LocationType.SPACE,
            description=description,
            encounters=Encounters(
                enemies=self._generate_encounter_keys(ContentKind.ENEMY, 3, 1, 3),
                puzzles=self._generate_encounter_keys(ContentKind.PUZZLE, 3, 0, 2),
            ),
            region=region_name,
            danger_level=self.rng.next_int(1, 7),
        )
        for planet in planets:
            system.connect(planet)

        logger.debug("Generated system %s with %d planet(s)", system.id, planet_count)
        return [system, *planets]

    def generate_region(self, region_name: str, system_count: int = 0) -> list[Location]:
        """Generate linked star systems and return every location in them.

        A system_count of 0 or less picks 3-10 systems at random. Each system is
        linked to between 1 and 3 of the others.
        """
        if system_count <= 0:
            system_count = self.rng.next_int(3, 10)

        locations: list[Location] = []
        for _ in range(system_count):
            locations.extend(self.generate_star_system(region_name))

        systems = [loc for loc in locations if loc.type == LocationType.SPACE]
        for system in systems:
            others = [s for s in systems if s.id != system.id]
            if not others:
                continue
            count = self.rng.next_int(1, min(3, len(others)))
            for target in self.rng.shuffle(others)[:count]:
                system.connect(target)

        logger.info(
            "Generated region '%s': %d systems, %d locations",
            region_name, len(systems), len(locations),
        )
        return locations

    # --- Encounters ---

    def _generate_encounter_keys(
        self, kind: ContentKind, danger_level: int, min_count: int, max_count: int
    ) -> list[ContentKey]:
        keys = []
        for _ in range(self.rng.next_int(min_count, max_count)):
            if kind == ContentKind.ENEMY:
                pool = ENEMY_TIERS[_tier(danger_level, ("low", "medium", "high"))]
            elif kind == ContentKind.PUZZLE:
                pool = PUZZLE_TIERS[_tier(danger_level, ("easy", "medium", "hard"))]
            else:
                rarity_roll = self.rng.next()
                if rarity_roll < 0.6:
                    pool = NPC_TIERS["common"]
                elif rarity_roll < 0.9:
                    pool = NPC_TIERS["uncommon"]
                else:
                    pool = NPC_TIERS["rare"]
            name = self.rng.choose(pool)
            keys.append(ContentKey(kind=kind, value=f"{name}_{self.rng.next_int(1, 999)}"))
        return keys

    # --- Enemies ---

    def generate_enemy(self, danger_level: int) -> Enemy:
        """Generate an enemy scaled to danger_level (clamped to 1-10)."""
        danger_level = clamp_danger(danger_level)
        template = ENEMY_TEMPLATES[min(danger_level // 2, len(ENEMY_TEMPLATES) - 1)]

        enemy_id = f"enemy_{self._timestamp_ms()}_{self.rng.next_int(1000, 9999)}"

        name = template.type
        health_bonus = 0
        damage_bonus = 0
        if danger_level > 3:
            modifier = self.rng.choose(ENEMY_MODIFIERS)
            name = f"{modifier} {template.type}"
            health_bonus = self.rng.next_int(5, 15)
            damage_bonus = self.rng.next_int(1, 3)

        scaling = 1 + danger_level * 0.1
        health = round_half_up((template.health + health_bonus) * scaling)
        damage = round_half_up((template.damage + damage_bonus) * scaling)

        abilities = self._generate_enemy_abilities(template.tech_level, danger_level)
        description = ENEMY_DESCRIPTIONS[template.tech_level].format(kind=template.type.lower())

        items = [self._generate_loot_key(danger_level)] if self.rng.next() < 0.3 else None

        enemy = Enemy(
            id=enemy_id,
            name=name,
            health=health,
            max_health=health,
            damage=damage,
            abilities=abilities,
            description=description,
            reward=EnemyReward(experience=20 * danger_level, items=items),
        )
        logger.debug(
            "Generated enemy %s (danger %d, hp %d, dmg %d, %d abilities)",
            name, danger_level, health, damage, len(abilities),
        )
        return enemy

    def _generate_enemy_abilities(self, tech_level: TechLevel, danger_level: int) -> list[Ability]:
        count = max(1, min(5, danger_level // 2))
        templates = ABILITY_TEMPLATES.get(tech_level) or ABILITY_TEMPLATES[TechLevel.BASIC]

        abilities = []
        for template in self.rng.shuffle(templates)[:count]:
            damage_variation = self.rng.next_int(-20, 20) / 100 if template.damage else 0
            healing_variation = self.rng.next_int(-20, 20) / 100 if template.healing else 0
            energy_variation = self.rng.next_int(-10, 10) / 100
            ability_id = f"ability_{self._timestamp_ms()}_{self.rng.next_int(1000, 9999)}"

            ability = Ability(
                id=ability_id,
                name=template.name,
                description=f"Enemy {template.name.lower()} ability",
                energy_cost=max(0, round_half_up(template.energy_cost * (1 + energy_variation))),
                cooldown=template.cooldown,
                current_cooldown=0,
            )
            if template.damage:
                ability.damage = max(1, round_half_up(template.damage * (1 + damage_variation)))
            if template.healing:
                ability.healing = max(1, round_half_up(template.healing * (1 + healing_variation)))
            abilities.append(ability)

        if not abilities:
            abilities.append(Ability(
                id=f"ability_{self._timestamp_ms()}_{self.rng.next_int(1000, 9999)}",
                name="Basic Attack",
                description="A simple attack",
                energy_cost=0,
                damage=max(1, danger_level * 2),
                cooldown=0,
                current_cooldown=0,
            ))
        return abilities

    # --- Loot ---

    def _generate_loot_key(self, danger_level: int) -> ContentKey:
        rarity_roll = self.rng.next()
        rarity = Rarity.COMMON
        for gated_rarity, min_danger, cutoff in RARITY_GATES:
            if danger_level >= min_danger and rarity_roll > cutoff:
                rarity = gated_rarity
                break
        item_type = self.rng.choose(ITEM_TYPES)
        return LootKey(
            item_type=item_type, rarity=rarity, number=self.rng.next_int(1, 999)
        ).to_key()


def _life_probability(
    star: StarType, is_stable: bool, planet_type: PlanetType, variant: str
) -> float:
    probability = star.life_prob * (1.5 if is_stable else 0.5)
    multiplier = LIFE_MULTIPLIERS.get(
        (planet_type.type, variant), LIFE_MULTIPLIERS.get((planet_type.type, None), 1.0)
    )
    return max(0.0, min(1.0, probability * multiplier))


def _faction_sentence(controller: Faction | None) -> str:
    if controller is None:
        return "No known faction claims this planet."
    return f"Controlled by the {controller.value}."
