"""Exploration points: free-floating sites scattered into an existing map.

Points are generated relative to locations the caller already has (for
example a region from ``ProceduralGenerator.generate_region``) and are linked
into that map by a pseudo-distance over location ids.
"""

from __future__ import annotations

import logging
import math
from enum import Enum

from pydantic import BaseModel, Field

from stargen.config import Settings, settings as default_settings
from stargen.content import ContentKey, ContentKind
from stargen.models import EffectType, EnvironmentEffect, Encounters, Location, LocationType
from stargen.rng import SeededRandom

logger = logging.getLogger(__name__)


class ExplorationPointType(str, Enum):
    ASTEROID_FIELD = "Asteroid Field"
    DEBRIS_CLUSTER = "Debris Cluster"
    VOID_RIFT = "Void Rift"
    ANCIENT_RUINS = "Ancient Ruins"
    NEBULA_CLOUD = "Nebula Cloud"
    ABANDONED_STATION = "Abandoned Station"
    SIGNAL_SOURCE = "Signal Source"
    STELLAR_ANOMALY = "Stellar Anomaly"
    DERELICT_VESSEL = "Derelict Vessel"
    RESOURCE_DEPOSIT = "Resource Deposit"


class EnvironmentalHazard(str, Enum):
    RADIATION_BURST = "Radiation Burst"
    GRAVITY_DISTORTION = "Gravity Distortion"
    SPACETIME_TEAR = "Spacetime Tear"
    COSMIC_STORM = "Cosmic Storm"
    EXTREME_PRESSURE = "Extreme Pressure"
    VOID_CORRUPTION = "Void Corruption"
    THERMAL_FLUCTUATION = "Thermal Fluctuation"


class ExplorationOptions(BaseModel):
    base_regions: list[str] = Field(default_factory=list)
    base_seed: int | None = None
    density_factor: float = Field(default=0.5, ge=0.0, le=1.0)
    generate_connections: bool = True
    max_connection_distance: int = Field(default=100, gt=0)
    danger_variance: int = Field(default=3, ge=0)


_LOCATION_TYPES: dict[ExplorationPointType, LocationType] = {
    ExplorationPointType.ANCIENT_RUINS: LocationType.RUINS,
    ExplorationPointType.ABANDONED_STATION: LocationType.STATION,
    ExplorationPointType.DERELICT_VESSEL: LocationType.DERELICT,
}

_BASE_DANGER: dict[ExplorationPointType, int] = {
    ExplorationPointType.ASTEROID_FIELD: 3,
    ExplorationPointType.DEBRIS_CLUSTER: 4,
    ExplorationPointType.VOID_RIFT: 8,
    ExplorationPointType.ANCIENT_RUINS: 6,
    ExplorationPointType.NEBULA_CLOUD: 3,
    ExplorationPointType.ABANDONED_STATION: 5,
    ExplorationPointType.SIGNAL_SOURCE: 4,
    ExplorationPointType.STELLAR_ANOMALY: 7,
    ExplorationPointType.DERELICT_VESSEL: 6,
    ExplorationPointType.RESOURCE_DEPOSIT: 2,
}

_DESCRIPTIONS: dict[ExplorationPointType, list[str]] = {
    ExplorationPointType.ASTEROID_FIELD: [
        "A dense cluster of asteroids drifting through space. Scans suggest valuable mineral deposits.",
        "Countless rock formations floating in a complex orbital pattern. Navigation will be challenging.",
        "An expansive field of asteroids, some showing traces of advanced mineral composition.",
    ],
    ExplorationPointType.DEBRIS_CLUSTER: [
        "The scattered remains of ships and structures. This area may contain salvageable technology.",
        "A massive collection of wreckage from an unknown conflict. Proceed with caution.",
        "Floating debris of technological origin. Signs of a recent incident or battle.",
    ],
    ExplorationPointType.VOID_RIFT: [
        "A tear in the fabric of space-time. Sensors detect highly unusual energy patterns.",
        "A spatial anomaly emitting unknown radiation. Standard physics may not apply here.",
        "A mysterious rift with gravity fluctuations and temporal distortions. Extremely dangerous.",
    ],
    ExplorationPointType.ANCIENT_RUINS: [
        "The remains of an ancient civilization on a barren planetoid. Origin unknown.",
        "Structures of apparent artificial origin dating back millennia. Technology may still be active.",
        "Monolithic ruins showing signs of advanced engineering beyond current understanding.",
    ],
    ExplorationPointType.NEBULA_CLOUD: [
        "A colorful cloud of interstellar gas and dust. Sensors detect unusual particle activity.",
        "A nebula with dense pockets of exotic matter. Communication might be disrupted inside.",
        "Swirling gases forming complex patterns of light and energy. Visually stunning but potentially hazardous.",
    ],
    ExplorationPointType.ABANDONED_STATION: [
        "A derelict space station showing no signs of recent activity. Life support systems offline.",
        "Once a thriving outpost, now eerily empty. Internal power sources still functioning.",
        "A station of unknown origin, abandoned but intact. Signs of hasty evacuation visible.",
    ],
    ExplorationPointType.SIGNAL_SOURCE: [
        "A repeating transmission of unknown origin. Pattern suggests artificial creation.",
        "Intermittent signals of non-standard frequency. Could be a distress call or automated beacon.",
        "Encrypted communication bursts detected from this location. Source concealed.",
    ],
    ExplorationPointType.STELLAR_ANOMALY: [
        "A star exhibiting impossible physical properties. Gravitational readings are off the charts.",
        "A stellar body behaving contrary to known physics. Safe observation distance recommended.",
        "A unique astronomical phenomenon never before documented. Scientific opportunity and extreme danger.",
    ],
    ExplorationPointType.DERELICT_VESSEL: [
        "An abandoned spacecraft drifting through space. Origins and fate of crew unknown.",
        "A ghost ship with systems still partially operational. Black box may provide answers.",
        "A vessel of unusual design showing battle damage. Valuable technology may be salvageable.",
    ],
    ExplorationPointType.RESOURCE_DEPOSIT: [
        "Scans indicate a rich concentration of rare minerals and elements in this region.",
        "An untapped source of valuable resources. Mining operations could be highly profitable.",
        "Unusually pure deposits of strategic materials. Worth the journey to extract.",
    ],
}

# Gravity distortion maps to either gravity effect; the generator picks one.
_HAZARD_EFFECTS: dict[EnvironmentalHazard, tuple[EffectType, ...]] = {
    EnvironmentalHazard.RADIATION_BURST: ("radiation",),
    EnvironmentalHazard.GRAVITY_DISTORTION: ("lowGravity", "highGravity"),
    EnvironmentalHazard.SPACETIME_TEAR: ("voidEnergy",),
    EnvironmentalHazard.COSMIC_STORM: ("radiation",),
    EnvironmentalHazard.EXTREME_PRESSURE: ("highGravity",),
    EnvironmentalHazard.VOID_CORRUPTION: ("voidEnergy",),
    EnvironmentalHazard.THERMAL_FLUCTUATION: ("extremeTemperature",),
}

_HAZARD_DESCRIPTIONS: dict[EnvironmentalHazard, str] = {
    EnvironmentalHazard.RADIATION_BURST: "{intensity} radiation levels detected. Shielding recommended.",
    EnvironmentalHazard.GRAVITY_DISTORTION: "{intensity} gravitational anomalies affecting navigation and movement.",
    EnvironmentalHazard.SPACETIME_TEAR: "{intensity} distortions in the fabric of reality. Unpredictable effects possible.",
    EnvironmentalHazard.COSMIC_STORM: "{intensity} charged particle storm affecting systems and life forms.",
    EnvironmentalHazard.EXTREME_PRESSURE: "{intensity} pressure differentials threatening hull integrity.",
    EnvironmentalHazard.VOID_CORRUPTION: "{intensity} void energy corrupting matter and technology.",
    EnvironmentalHazard.THERMAL_FLUCTUATION: "{intensity} temperature fluctuations exceeding safe operational parameters.",
}

_NAME_PREFIXES = [
    "Alpha", "Beta", "Gamma", "Delta", "Epsilon", "Zeta", "Theta", "Kappa",
    "Omicron", "Sigma", "Tau", "Omega", "Proxima", "Nova", "Stellar", "Cosmic",
    "Astral", "Celestial", "Void", "Echo", "Quantum", "Nebula", "Pulsar", "Quasar",
    "Helios", "Chronos", "Eternia", "Vega", "Arcturus", "Andromeda", "Orion", "Phoenix",
    "Hyperion", "Prometheus", "Atlas", "Enigma", "Zenith", "Nexus", "Oblivion", "Infinity",
]

_NAME_DESCRIPTORS = [
    "Forgotten", "Ancient", "Lost", "Hidden", "Mysterious", "Anomalous", "Drifting",
    "Shattered", "Fractured", "Glimmering", "Pulsing", "Unstable", "Radiant", "Shadowed",
    "Distorted", "Resonating", "Whispering", "Echoing", "Frozen", "Burning", "Tranquil",
    "Tumultuous", "Haunted", "Remnant", "Primal", "Twilight", "Dawning", "Crimson",
    "Azure", "Emerald", "Sapphire", "Obsidian", "Crystal", "Onyx", "Ivory",
]


def hash_string(text: str) -> int:
    """31-multiplier string hash folded to a signed 32-bit int, then made positive."""
    value = 0
    for char in text:
        value = ((value << 5) - value + ord(char)) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return abs(value)


def intensity_label(severity: int) -> str:
    if severity <= 2:
        return "Minor"
    if severity <= 4:
        return "Significant"
    return "Extreme"


def generate_exploration_points(
    existing: list[Location],
    options: ExplorationOptions | None = None,
    rng: SeededRandom | None = None,
    settings: Settings | None = None,
) -> list[Location]:
    """Generate exploration points and link them into ``existing``.

    Existing locations gain back-edges to the points they are linked to, so
    the list passed in is mutated when connections are generated.
    """
    options = options or ExplorationOptions()
    settings = settings or default_settings
    if rng is None:
        rng = SeededRandom(options.base_seed)

    regions = list(options.base_regions)
    if not regions:
        regions = list(dict.fromkeys(loc.region or "Unknown" for loc in existing))
    if not regions:
        regions = [settings.default_region_name]

    names = _point_names(rng)
    base_count = math.ceil(len(existing) * 0.5)
    point_count = max(3, math.ceil(base_count * options.density_factor))

    points = [_generate_point(rng, regions, names, options) for _ in range(point_count)]

    if options.generate_connections:
        _link_points(points, existing, rng, options.max_connection_distance)

    logger.info(
        "Generated %d exploration point(s) across %d region(s)", len(points), len(regions)
    )
    return points


def _generate_point(
    rng: SeededRandom,
    regions: list[str],
    names: list[str],
    options: ExplorationOptions,
) -> Location:
    region = rng.choose(regions)
    point_type = rng.choose(list(ExplorationPointType))
    point_id = f"exp_{rng.next_int(0, 0xFFFF):04x}{rng.next_int(0, 0xFFFF):04x}"
    name = f"{rng.choose(names)} {point_type.value}"
    description = rng.choose(_DESCRIPTIONS[point_type])

    variance = options.danger_variance
    danger_level = max(1, min(10, _BASE_DANGER[point_type] + rng.next_int(-variance, variance)))
    has_hazard = rng.chance(danger_level / 15)

    enemies: list[ContentKey] = []
    if rng.chance(0.3 + danger_level / 20):
        enemies = [
            ContentKey(kind=ContentKind.ENEMY, value=f"procedural_enemy_{rng.next_int(1, 10)}")
            for _ in range(rng.next_int(1, math.ceil(danger_level / 3)))
        ]
    puzzles: list[ContentKey] = []
    if rng.chance(0.4):
        puzzles = [
            ContentKey(kind=ContentKind.PUZZLE, value=f"procedural_puzzle_{rng.next_int(1, 5)}")
            for _ in range(rng.next_int(1, 2))
        ]

    effects = None
    if has_hazard:
        hazard = rng.choose(list(EnvironmentalHazard))
        severity = rng.next_int(1, min(5, math.ceil(danger_level / 2)))
        detail = _HAZARD_DESCRIPTIONS[hazard].format(intensity=intensity_label(severity))
        effects = [EnvironmentEffect(
            type=rng.choose(_HAZARD_EFFECTS[hazard]),
            severity=severity,
            effect=f"{hazard.value} - {detail}",
        )]

    items = None
    if rng.chance(0.4):
        items = [ContentKey(kind=ContentKind.ITEM, value=f"exploration_item_{rng.next_int(1, 15)}")]

    return Location(
        id=point_id,
        name=name,
        type=_LOCATION_TYPES.get(point_type, LocationType.SPACE),
        description=description,
        encounters=Encounters(enemies=enemies, puzzles=puzzles),
        items=items,
        region=region,
        danger_level=danger_level,
        environment_effects=effects,
    )


def _point_names(rng: SeededRandom) -> list[str]:
    names = [
        f"{rng.choose(_NAME_DESCRIPTORS)} {rng.choose(_NAME_PREFIXES)}" for _ in range(15)
    ]
    names.extend(_NAME_PREFIXES)
    names.extend(_NAME_DESCRIPTORS)
    return names


def _link_points(
    points: list[Location],
    existing: list[Location],
    rng: SeededRandom,
    max_distance: int,
) -> None:
    for point in points:
        linked = _nearest(point, existing, rng.next_int(1, 2), max_distance, rng)
        if rng.chance(0.3):
            others = [p for p in points if p.id != point.id]
            linked.extend(_nearest(point, others, rng.next_int(0, 2), max_distance, rng))
        for target in linked:
            point.connect(target)


def _nearest(
    point: Location,
    candidates: list[Location],
    count: int,
    max_distance: int,
    rng: SeededRandom,
) -> list[Location]:
    """Closest candidates by id-hash distance, each kept with 80% chance."""
    origin = hash_string(point.id)
    ranked = sorted(candidates, key=lambda loc: abs(origin - hash_string(loc.id)) % max_distance)
    kept = [loc for loc in ranked[: count + 2] if rng.chance(0.8)]
    return kept[:count]
