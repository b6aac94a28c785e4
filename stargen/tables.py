"""Static name, taxonomy and template tables used by the generators."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from stargen.content import ItemType, Rarity
from stargen.models import EffectType, Faction


class TableError(Exception):
    pass


class TechLevel(str, Enum):
    BASIC = "basic"
    MODERATE = "moderate"
    ADVANCED = "advanced"
    HIGH = "high"
    NATURAL = "natural"
    ALIEN = "alien"


class _Row(BaseModel):
    model_config = ConfigDict(frozen=True)


class StarType(_Row):
    type: str
    color: str
    temp: str
    life_prob: float


class PlanetType(_Row):
    type: str
    variants: tuple[str, ...]
    descriptions: dict[str, str]


class EffectTemplate(_Row):
    type: EffectType
    max_severity: int
    description: str


class EnemyTemplate(_Row):
    type: str
    health: int
    damage: int
    tech_level: TechLevel


class AbilityTemplate(_Row):
    name: str
    energy_cost: int
    damage: int = 0
    healing: int = 0
    cooldown: int = 0


# --- Names ---

PLANET_NAME_PREFIXES: list[str] = [
    "Nova", "Stella", "Astro", "Orb", "Lux", "Cosmo", "Terra", "Neo",
    "Xeno", "Umbra", "Prime", "Void", "Sol", "Exo", "Gaia", "Echo",
    "Halo", "Nexus", "Omega", "Alpha", "Vega", "Ceti", "Dawn", "Dusk",
]

PLANET_NAME_SUFFIXES: list[str] = [
    "world", "sphere", "globe", "planet", "terra", "cluster", "haven",
    "home", "scape", "stead", "port", "shore", "realm", "domain", "land",
    "orb", "rock", "giant", "system", "sector", "zone", "region", "quadrant",
]


# --- Stars and planets ---

# Selection is uniform; life_prob only scales the chance of life afterwards.
STAR_TYPES: list[StarType] = [
    StarType(type="O", color="#9bb0ff", temp="Extremely hot", life_prob=0.01),
    StarType(type="B", color="#aabfff", temp="Very hot", life_prob=0.05),
    StarType(type="A", color="#cad7ff", temp="Hot", life_prob=0.1),
    StarType(type="F", color="#f8f7ff", temp="Warm", life_prob=0.2),
    StarType(type="G", color="#fff4ea", temp="Moderate", life_prob=0.4),
    StarType(type="K", color="#ffd2a1", temp="Cool", life_prob=0.3),
    StarType(type="M", color="#ffcc6f", temp="Cold", life_prob=0.15),
    StarType(type="Red Dwarf", color="#ff6060", temp="Variable", life_prob=0.1),
    StarType(type="White Dwarf", color="#ffffff", temp="Cooling", life_prob=0.05),
    StarType(type="Neutron", color="#c0ffff", temp="Extreme radiation", life_prob=0.001),
    StarType(type="Black Hole", color="#000000", temp="Event horizon", life_prob=0.0),
]

PLANET_TYPES: list[PlanetType] = [
    PlanetType(
        type="Terrestrial",
        variants=("Earthlike", "Desert", "Arctic", "Volcanic", "Ocean", "Rocky", "Jungle"),
        descriptions={
            "Earthlike": "A lush world with diverse ecosystems, oceans, and habitable conditions.",
            "Desert": "A dry, arid world with vast dune seas and minimal surface water.",
            "Arctic": "A frigid world covered in ice and snow with extreme low temperatures.",
            "Volcanic": "An active world with frequent eruptions, lava flows, and ash-filled skies.",
            "Ocean": "A world almost entirely covered in water with scattered archipelagos.",
            "Rocky": "A barren world with rocky terrain, craters, and minimal atmosphere.",
            "Jungle": "A densely vegetated world with towering alien flora and complex ecosystems.",
        },
    ),
    PlanetType(
        type="Gas Giant",
        variants=("Ringed", "Stormy", "Multi-colored", "Super-massive"),
        descriptions={
            "Ringed": "A massive gas planet surrounded by spectacular rings of ice and rock debris.",
            "Stormy": "A turbulent gas giant with violent storms and powerful atmospheric winds.",
            "Multi-colored": "A gas giant with distinct colored bands in its atmosphere.",
            "Super-massive": "An enormous gas planet with intense gravitational forces.",
        },
    ),
    PlanetType(
        type="Exotic",
        variants=("Crystal", "Sentient", "Quantum", "Artificial", "Shadow"),
        descriptions={
            "Crystal": "A world where crystalline formations dominate the landscape.",
            "Sentient": "A mysterious planet exhibiting signs of collective consciousness.",
            "Quantum": "A planet with unstable physics affected by quantum phenomena.",
            "Artificial": "A constructed world built by an ancient advanced civilization.",
            "Shadow": "A dark world existing partially in another dimension.",
        },
    ),
]

UNKNOWN_PLANET_DESCRIPTION = "A mysterious planet with unknown properties."

# Multipliers applied to a planet's chance of life, keyed by (type, variant).
# A variant of None matches every variant of that type.
LIFE_MULTIPLIERS: dict[tuple[str, str | None], float] = {
    ("Terrestrial", "Earthlike"): 2.0,
    ("Gas Giant", None): 0.1,
    ("Exotic", None): 0.5,
}

# Factions that can claim a planet outright; Void Entities are a separate rare roll.
CONTROLLING_FACTIONS: list[Faction] = [
    Faction.ALLIANCE,
    Faction.SYNDICATE,
    Faction.SETTLERS,
    Faction.MYSTICS,
    Faction.INDEPENDENT,
]

# Inclusive danger ranges by controller; None is an unclaimed planet.
DANGER_RANGES: dict[Faction | None, tuple[int, int]] = {
    Faction.ALLIANCE: (1, 5),
    Faction.VOID_ENTITY: (7, 10),
    None: (2, 10),
}
DEFAULT_FACTION_DANGER: tuple[int, int] = (3, 7)

ENVIRONMENT_EFFECTS: list[EffectTemplate] = [
    EffectTemplate(
        type="radiation", max_severity=5,
        description="Dangerous radiation affects unshielded equipment and living organisms.",
    ),
    EffectTemplate(
        type="lowGravity", max_severity=3,
        description="Reduced gravity affects movement and physical tasks.",
    ),
    EffectTemplate(
        type="highGravity", max_severity=3,
        description="Increased gravity strains equipment and limits mobility.",
    ),
    EffectTemplate(
        type="extremeTemperature", max_severity=5,
        description="Extreme temperatures require specialized equipment to survive.",
    ),
    EffectTemplate(
        type="toxicAtmosphere", max_severity=4,
        description="Toxic atmospheric compounds damage respiratory systems.",
    ),
    EffectTemplate(
        type="voidEnergy", max_severity=5,
        description="Strange energy patterns disrupt technology and mental processes.",
    ),
]

RESOURCE_TYPES: list[str] = [
    "rare minerals",
    "ancient artifacts",
    "exotic compounds",
    "valuable gases",
    "unique biological specimens",
    "advanced technology",
]

LIFE_TYPES: list[str] = [
    "primitive microbial",
    "abundant plant",
    "diverse aquatic",
    "exotic insectoid",
    "primitive vertebrate",
    "advanced sentient",
]


# --- Encounter key tiers ---

ENEMY_TIERS: dict[str, list[str]] = {
    "low": ["scout", "drone", "pirate", "smuggler", "wildlife"],
    "medium": ["soldier", "mercenary", "elite_guard", "scavenger", "predator"],
    "high": ["elite", "commander", "void_entity", "ancient_guardian", "rogue_ai"],
}

PUZZLE_TIERS: dict[str, list[str]] = {
    "easy": ["basic_encryption", "power_routing", "maintenance", "calibration"],
    "medium": ["security_override", "data_recovery", "malfunction", "system_repair"],
    "hard": ["advanced_encryption", "void_stabilization", "ai_corruption", "ancient_tech"],
}

NPC_TIERS: dict[str, list[str]] = {
    "common": ["trader", "settler", "technician", "crew_member", "scientist"],
    "uncommon": ["captain", "smuggler", "faction_agent", "bounty_hunter", "researcher"],
    "rare": ["faction_leader", "ancient_ai", "void_touched", "mystic_elder", "rogue_scientist"],
}


# --- Enemies ---

ENEMY_TEMPLATES: list[EnemyTemplate] = [
    EnemyTemplate(type="Drone", health=15, damage=3, tech_level=TechLevel.BASIC),
    EnemyTemplate(type="Pirate", health=20, damage=5, tech_level=TechLevel.MODERATE),
    EnemyTemplate(type="Guard", health=25, damage=4, tech_level=TechLevel.MODERATE),
    EnemyTemplate(type="Mercenary", health=30, damage=6, tech_level=TechLevel.ADVANCED),
    EnemyTemplate(type="Creature", health=35, damage=7, tech_level=TechLevel.NATURAL),
    EnemyTemplate(type="Elite", health=40, damage=8, tech_level=TechLevel.ADVANCED),
    EnemyTemplate(type="Commander", health=50, damage=7, tech_level=TechLevel.HIGH),
    EnemyTemplate(type="Void Entity", health=60, damage=10, tech_level=TechLevel.ALIEN),
]

ENEMY_MODIFIERS: list[str] = [
    "Armored", "Enhanced", "Tactical", "Frenzied", "Stealth",
    "Cyber", "Rogue", "Corrupted", "Veteran", "Alpha",
]

# Formatted with the lowercased template type.
ENEMY_DESCRIPTIONS: dict[TechLevel, str] = {
    TechLevel.BASIC: "A simple automated {kind} with basic offensive capabilities.",
    TechLevel.MODERATE: "A combat-ready {kind} equipped with standard weaponry.",
    TechLevel.ADVANCED: "A highly trained {kind} with advanced combat systems.",
    TechLevel.HIGH: "An elite {kind} utilizing cutting-edge technology and tactics.",
    TechLevel.NATURAL: "A dangerous {kind} with evolved natural weapons.",
    TechLevel.ALIEN: "A mysterious entity with capabilities beyond conventional understanding.",
}

ABILITY_TEMPLATES: dict[TechLevel, list[AbilityTemplate]] = {
    TechLevel.BASIC: [
        AbilityTemplate(name="Basic Attack", energy_cost=0, damage=5, cooldown=0),
        AbilityTemplate(name="Defensive Mode", energy_cost=10, healing=5, cooldown=3),
    ],
    TechLevel.MODERATE: [
        AbilityTemplate(name="Rapid Fire", energy_cost=5, damage=8, cooldown=1),
        AbilityTemplate(name="Shield Boost", energy_cost=15, healing=10, cooldown=4),
        AbilityTemplate(name="Disabling Shot", energy_cost=12, damage=3, cooldown=2),
    ],
    TechLevel.ADVANCED: [
        AbilityTemplate(name="Precision Strike", energy_cost=15, damage=15, cooldown=2),
        AbilityTemplate(name="Tactical Barrier", energy_cost=20, healing=15, cooldown=3),
        AbilityTemplate(name="System Hack", energy_cost=25, damage=5, cooldown=3),
        AbilityTemplate(name="Overcharge", energy_cost=30, damage=20, cooldown=4),
    ],
    TechLevel.HIGH: [
        AbilityTemplate(name="Devastating Blast", energy_cost=25, damage=25, cooldown=3),
        AbilityTemplate(name="Advanced Shielding", energy_cost=30, healing=25, cooldown=4),
        AbilityTemplate(name="Neural Disruptor", energy_cost=35, damage=10, cooldown=3),
        AbilityTemplate(name="Tactical Override", energy_cost=40, damage=15, cooldown=3),
        AbilityTemplate(name="Weapon Overload", energy_cost=50, damage=35, cooldown=5),
    ],
    TechLevel.NATURAL: [
        AbilityTemplate(name="Feral Strike", energy_cost=5, damage=12, cooldown=1),
        AbilityTemplate(name="Regenerate", energy_cost=20, healing=15, cooldown=4),
        AbilityTemplate(name="Toxic Spray", energy_cost=15, damage=8, cooldown=2),
        AbilityTemplate(name="Predator Sense", energy_cost=10, cooldown=3),
    ],
    TechLevel.ALIEN: [
        AbilityTemplate(name="Void Touch", energy_cost=20, damage=20, cooldown=2),
        AbilityTemplate(name="Phase Shift", energy_cost=30, healing=20, cooldown=3),
        AbilityTemplate(name="Reality Tear", energy_cost=40, damage=30, cooldown=4),
        AbilityTemplate(name="Mind Fracture", energy_cost=35, damage=15, cooldown=3),
        AbilityTemplate(name="Cosmic Pulse", energy_cost=50, damage=40, cooldown=5),
    ],
}


# --- Loot ---

ITEM_TYPES: list[ItemType] = list(ItemType)

# Checked top to bottom: (rarity, minimum danger, roll must exceed).
RARITY_GATES: list[tuple[Rarity, int, float]] = [
    (Rarity.LEGENDARY, 8, 0.7),
    (Rarity.EPIC, 6, 0.6),
    (Rarity.RARE, 4, 0.5),
    (Rarity.UNCOMMON, 2, 0.4),
]


def validate_tables() -> None:
    """Fail fast if any table the generators choose from is empty or inconsistent."""
    lists: dict[str, list] = {
        "PLANET_NAME_PREFIXES": PLANET_NAME_PREFIXES,
        "PLANET_NAME_SUFFIXES": PLANET_NAME_SUFFIXES,
        "STAR_TYPES": STAR_TYPES,
        "PLANET_TYPES": PLANET_TYPES,
        "CONTROLLING_FACTIONS": CONTROLLING_FACTIONS,
        "ENVIRONMENT_EFFECTS": ENVIRONMENT_EFFECTS,
        "RESOURCE_TYPES": RESOURCE_TYPES,
        "LIFE_TYPES": LIFE_TYPES,
        "ENEMY_TEMPLATES": ENEMY_TEMPLATES,
        "ENEMY_MODIFIERS": ENEMY_MODIFIERS,
        "ITEM_TYPES": ITEM_TYPES,
    }
    for name, table in lists.items():
        if not table:
            raise TableError(f"Table {name} is empty.")

    for tiers_name, tiers in (
        ("ENEMY_TIERS", ENEMY_TIERS),
        ("PUZZLE_TIERS", PUZZLE_TIERS),
        ("NPC_TIERS", NPC_TIERS),
    ):
        for tier, entries in tiers.items():
            if not entries:
                raise TableError(f"Tier '{tier}' in {tiers_name} is empty.")

    for planet_type in PLANET_TYPES:
        if not planet_type.variants:
            raise TableError(f"Planet type '{planet_type.type}' has no variants.")

    for effect in ENVIRONMENT_EFFECTS:
        if not 1 <= effect.max_severity <= 5:
            raise TableError(
                f"Effect '{effect.type}' max_severity {effect.max_severity} outside 1-5."
            )

    for template in ENEMY_TEMPLATES:
        if template.tech_level not in ABILITY_TEMPLATES:
            raise TableError(
                f"Enemy '{template.type}' uses tech level "
                f"'{template.tech_level.value}' with no ability templates."
            )
        if template.tech_level not in ENEMY_DESCRIPTIONS:
            raise TableError(
                f"Enemy '{template.type}' uses tech level "
                f"'{template.tech_level.value}' with no description."
            )
    if not ABILITY_TEMPLATES.get(TechLevel.BASIC):
        raise TableError("Basic ability templates are required as the fallback.")
