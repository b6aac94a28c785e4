"""Pydantic v2 records handed out by the generator."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from stargen.content import ContentKey, ContentKind


class LocationType(str, Enum):
    SHIP = "Ship"
    PLANET = "Planet"
    SPACE = "Space"
    STATION = "Station"
    DERELICT = "Derelict"
    SETTLEMENT = "Settlement"
    RUINS = "Ruins"
    ANOMALY = "Anomaly"


class Faction(str, Enum):
    ALLIANCE = "Alliance"
    SYNDICATE = "Syndicate"
    SETTLERS = "Settlers"
    MYSTICS = "Mystics"
    INDEPENDENT = "Independent"
    VOID_ENTITY = "Void Entities"


EffectType = Literal[
    "radiation",
    "lowGravity",
    "highGravity",
    "extremeTemperature",
    "toxicAtmosphere",
    "voidEnergy",
]


class Record(BaseModel):
    """Base for records: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _tag_keys(value: Any, kind: ContentKind) -> Any:
    """Accept serialized keys (plain strings) and tag them with the field's kind."""
    if not isinstance(value, list):
        return value
    return [ContentKey(kind=kind, value=v) if isinstance(v, str) else v for v in value]


class EnvironmentEffect(Record):
    type: EffectType
    severity: int = Field(ge=1, le=5)
    effect: str


class Encounters(Record):
    enemies: list[ContentKey] = Field(default_factory=list)
    puzzles: list[ContentKey] = Field(default_factory=list)
    npcs: list[ContentKey] = Field(default_factory=list)

    @field_validator("enemies", mode="before")
    @classmethod
    def tag_enemies(cls, v: Any) -> Any:
        return _tag_keys(v, ContentKind.ENEMY)

    @field_validator("puzzles", mode="before")
    @classmethod
    def tag_puzzles(cls, v: Any) -> Any:
        return _tag_keys(v, ContentKind.PUZZLE)

    @field_validator("npcs", mode="before")
    @classmethod
    def tag_npcs(cls, v: Any) -> Any:
        return _tag_keys(v, ContentKind.NPC)


class Location(Record):
    id: str
    name: str
    type: LocationType
    description: str = ""
    encounters: Encounters = Field(default_factory=Encounters)
    items: list[ContentKey] | None = None
    connections: list[str] = Field(default_factory=list)  # ids of linked locations
    region: str | None = None
    controlled_by: Faction | None = None
    danger_level: int = Field(default=1, ge=1, le=10)
    environment_effects: list[EnvironmentEffect] | None = None
    discovered: bool = False

    @field_validator("items", mode="before")
    @classmethod
    def tag_items(cls, v: Any) -> Any:
        return _tag_keys(v, ContentKind.ITEM)

    def connect(self, other: Location) -> None:
        """Record an undirected edge on both ends, skipping existing ones."""
        if other.id not in self.connections:
            self.connections.append(other.id)
        if self.id not in other.connections:
            other.connections.append(self.id)


class Ability(Record):
    id: str
    name: str
    description: str = ""
    energy_cost: int = Field(default=0, ge=0)
    damage: int | None = Field(default=None, ge=1)
    healing: int | None = Field(default=None, ge=1)
    cooldown: int = 0
    current_cooldown: int = 0


class EnemyReward(Record):
    experience: int
    items: list[ContentKey] | None = None

    @field_validator("items", mode="before")
    @classmethod
    def tag_items(cls, v: Any) -> Any:
        return _tag_keys(v, ContentKind.ITEM)


class Enemy(Record):
    id: str
    name: str
    health: int
    max_health: int
    damage: int
    abilities: list[Ability] = Field(default_factory=list)
    description: str = ""
    reward: EnemyReward

    @model_validator(mode="after")
    def check_health(self) -> Enemy:
        if self.max_health <= 0:
            raise ValueError("max_health must be positive")
        if self.health > self.max_health:
            raise ValueError("health cannot exceed max_health")
        return self
