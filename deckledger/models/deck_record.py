"""
Deck record shapes.

A deck reaches the model in one of three shapes:

- INTERNAL: a record this application persisted (``type == "InternalDeck"``)
- LEGACY: a deck as the game client reports it, without the internal-only
  fields (custom, archetype, tags, type). Older client logs use
  capitalized keys (``MainDeck``, ``DeckTileId``); newer ones use camelCase.
- PARTIAL: anything else, usually a hand-built dict with some fields left
  out for the defaults to fill in

classify_record() is the single place that decides which shape a record is.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, TypedDict

INTERNAL_DECK_TYPE = "InternalDeck"

# Capitalized client keys and their persisted names
CLIENT_KEYS = {
    "MainDeck": "mainDeck",
    "Sideboard": "sideboard",
    "Name": "name",
    "Id": "id",
    "DeckTileId": "deckTileId",
    "CommandZoneGRPIds": "commandZoneGRPIds",
    "Format": "format",
    "Description": "description",
    "LastUpdated": "lastUpdated",
}

# Fields the client sends that never appear in a persisted record
CLIENT_ONLY_KEYS = frozenset({"cardBack", "cardSkins", "isValid", "lockedForUse", "lockedForEdit"})

INTERNAL_ONLY_KEYS = frozenset({"custom", "archetype", "tags", "type"})


class RecordKind(str, Enum):
    INTERNAL = "internal"
    PARTIAL = "partial"
    LEGACY = "legacy"


class InternalDeckRecord(TypedDict):
    """Persisted deck record."""

    mainDeck: list[Any]
    sideboard: list[Any]
    name: str
    id: str
    lastUpdated: str  # ISO-8601
    deckTileId: int
    colors: list[int]
    tags: list[str]
    custom: bool
    archetype: str
    commandZoneGRPIds: list[int]
    format: str
    type: str
    description: str


def classify_record(record: Mapping[str, Any]) -> RecordKind:
    """Decide which shape a deck record has."""
    if record.get("type") == INTERNAL_DECK_TYPE:
        return RecordKind.INTERNAL
    if any(key in record for key in CLIENT_KEYS) or any(key in record for key in CLIENT_ONLY_KEYS):
        return RecordKind.LEGACY
    if "deckTileId" in record and not INTERNAL_ONLY_KEYS.intersection(record):
        return RecordKind.LEGACY
    return RecordKind.PARTIAL


def normalize_client_record(record: Mapping[str, Any]) -> dict[str, Any]:
    """
    Copy of a record with capitalized client keys renamed.

    camelCase keys already present win over their capitalized twins.
    """
    normalized = dict(record)
    for client_key, key in CLIENT_KEYS.items():
        if client_key in normalized:
            value = normalized.pop(client_key)
            normalized.setdefault(key, value)
    return normalized


def default_record() -> dict[str, Any]:
    """Record used when a deck is created from nothing."""
    return {
        "commandZoneGRPIds": [],
        "mainDeck": [],
        "sideboard": [],
        "name": "",
        "deckTileId": 0,
        "format": "",
        "type": INTERNAL_DECK_TYPE,
    }
