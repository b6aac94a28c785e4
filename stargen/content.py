"""Content keys and the catalog that resolves them into definitions.

The generator only ever emits keys. Whether a key names something the game
actually defines is the catalog's business, and ``resolve`` is allowed to
come back empty.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    model_serializer,
)

logger = logging.getLogger(__name__)


class ContentKind(str, Enum):
    ENEMY = "enemy"
    PUZZLE = "puzzle"
    NPC = "npc"
    ITEM = "item"


class ItemType(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"
    CONSUMABLE = "consumable"
    TECH = "tech"
    UPGRADE = "upgrade"


class Rarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class ContentKey(BaseModel):
    """Opaque reference to a piece of game content, tagged with its kind.

    Serializes as the bare value string; the kind is implied by the field
    holding the key and is restored from it on load.
    """

    model_config = ConfigDict(frozen=True)

    kind: ContentKind
    value: str

    def __str__(self) -> str:
        return self.value

    @model_serializer
    def _as_value(self) -> str:
        return self.value


class LootKey(BaseModel):
    """Parsed form of a ``{type}_{rarity}_{number}`` loot identifier."""

    item_type: ItemType
    rarity: Rarity
    number: int

    @classmethod
    def parse(cls, value: str | ContentKey) -> LootKey:
        text = str(value)
        parts = text.split("_")
        if len(parts) != 3:
            raise ValueError(f"Malformed loot key: {text!r}")
        item_type, rarity, number = parts
        try:
            return cls(item_type=ItemType(item_type), rarity=Rarity(rarity), number=int(number))
        except ValueError as e:
            raise ValueError(f"Malformed loot key {text!r}: {e}") from e

    def to_key(self) -> ContentKey:
        return ContentKey(
            kind=ContentKind.ITEM,
            value=f"{self.item_type.value}_{self.rarity.value}_{self.number}",
        )


class ContentDefinition(BaseModel):
    """A concrete definition a key can resolve to."""

    kind: ContentKind
    key: str
    name: str
    description: str = ""
    data: dict[str, Any] = Field(default_factory=dict)


class CatalogError(Exception):
    pass


_DEFINITION_LIST = TypeAdapter(list[ContentDefinition])


class ContentCatalog:
    """Registry of content definitions, keyed by (kind, key)."""

    def __init__(self) -> None:
        self._definitions: dict[tuple[ContentKind, str], ContentDefinition] = {}

    def register(self, definition: ContentDefinition) -> None:
        self._definitions[(definition.kind, definition.key)] = definition

    def load(self, path: Path) -> list[ContentDefinition]:
        """Load a JSON list of definitions and register each one."""
        if not path.exists():
            raise CatalogError(f"Catalog file not found: {path}")
        try:
            definitions = _DEFINITION_LIST.validate_json(path.read_text())
        except ValidationError as e:
            raise CatalogError(f"Failed to parse catalog file {path}: {e}") from e
        for definition in definitions:
            self.register(definition)
        logger.info("Loaded %d definitions from %s", len(definitions), path)
        return definitions

    def resolve(self, key: ContentKey) -> ContentDefinition | None:
        """Look up a key. Returns None when nothing is defined for it."""
        definition = self._definitions.get((key.kind, key.value))
        if definition is None:
            logger.debug("No definition for %s key %r", key.kind.value, key.value)
        return definition

    def keys(self, kind: ContentKind | None = None) -> list[ContentKey]:
        return [
            ContentKey(kind=k, value=v)
            for (k, v) in self._definitions
            if kind is None or k == kind
        ]

    def __len__(self) -> int:
        return len(self._definitions)
