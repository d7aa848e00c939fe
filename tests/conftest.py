import json
from pathlib import Path
from typing import Any

import pytest

from deckledger.services.card_database import CardDatabase
from tests.card_ids import (
    BOLAS_MED,
    BOLAS_WAR,
    BOLT,
    COUNTERSPELL,
    ELVES,
    MOUNTAIN,
    SHEOLDRED,
    STEAM_VENTS,
)


@pytest.fixture
def card_db_payload() -> dict[str, Any]:
    """Small card database in the persisted JSON shape."""
    return {
        "cards": {
            str(BOLT): {
                "name": "Lightning Bolt",
                "rarity": "common",
                "set": "Strixhaven Mystical Archive",
                "collector_number": "42",
                "type": "Instant",
                "cost": ["r"],
                "frame": [4],
            },
            str(COUNTERSPELL): {
                "name": "Counterspell",
                "rarity": "uncommon",
                "set": "Dominaria",
                "collector_number": "50",
                "type": "Instant",
                "cost": ["u", "u"],
                "frame": [2],
            },
            str(SHEOLDRED): {
                "name": "Sheoldred, the Apocalypse",
                "rarity": "mythic",
                "set": "Dominaria United",
                "collector_number": "107",
                "type": "Legendary Creature — Phyrexian Praetor",
                "cost": ["2", "b", "b"],
                "frame": [3],
            },
            str(MOUNTAIN): {
                "name": "Mountain",
                "rarity": "land",
                "set": "Dominaria United",
                "collector_number": "269",
                "type": "Basic Land — Mountain",
                "cost": [],
                "frame": [4],
            },
            str(STEAM_VENTS): {
                "name": "Steam Vents",
                "rarity": "rare",
                "set": "Guilds of Ravnica",
                "collector_number": "257",
                "type": "Land — Island Mountain",
                "cost": [],
                "frame": [2, 4],
            },
            str(BOLAS_MED): {
                "name": "Nicol Bolas, Dragon-God",
                "rarity": "mythic",
                "set": "Mythic Edition",
                "collector_number": "WS7",
                "type": "Legendary Planeswalker — Bolas",
                "cost": ["u", "b", "b", "b", "r"],
                "frame": [2, 3, 4],
                "reprints": [BOLAS_WAR],
            },
            str(BOLAS_WAR): {
                "name": "Nicol Bolas, Dragon-God",
                "rarity": "mythic",
                "set": "War of the Spark",
                "collector_number": "207",
                "type": "Legendary Planeswalker — Bolas",
                "cost": ["u", "b", "b", "b", "r"],
                "frame": [2, 3, 4],
                "reprints": [BOLAS_MED],
            },
            str(ELVES): {
                "name": "Llanowar Elves",
                "rarity": "common",
                "set": "Dominaria",
                "collector_number": "168",
                "type": "Creature — Elf Druid",
                "cost": ["g"],
                "frame": [5],
            },
        },
        "sets": {
            "Strixhaven Mystical Archive": {"code": "STA"},
            "Dominaria": {"code": "DOM", "arenacode": "DAR"},
            "Dominaria United": {"code": "DMU"},
            "Guilds of Ravnica": {"code": "GRN"},
            "Mythic Edition": {"code": "MED"},
            "War of the Spark": {"code": "WAR"},
        },
    }


@pytest.fixture
def card_db(card_db_payload: dict[str, Any]) -> CardDatabase:
    return CardDatabase.from_dict(card_db_payload)


@pytest.fixture
def card_db_file(card_db_payload: dict[str, Any], tmp_path: Path) -> Path:
    """Card database written to a temporary file."""
    db_path = tmp_path / "cards.json"
    with open(db_path, "w", encoding="utf-8") as f:
        json.dump(card_db_payload, f)
    return db_path


@pytest.fixture
def internal_record() -> dict[str, Any]:
    """A deck as this application persists it."""
    return {
        "mainDeck": [
            {"id": BOLT, "quantity": 4},
            {"id": SHEOLDRED, "quantity": 2},
            {"id": MOUNTAIN, "quantity": 20},
        ],
        "sideboard": [{"id": COUNTERSPELL, "quantity": 3}],
        "name": "Rakdos Midrange",
        "id": "deck-123",
        "lastUpdated": "2020-01-31T10:15:00.000Z",
        "deckTileId": 3001,
        "colors": [3, 4],
        "tags": ["standard"],
        "custom": True,
        "archetype": "midrange",
        "commandZoneGRPIds": [],
        "format": "Standard",
        "type": "InternalDeck",
        "description": "Testing list",
    }


@pytest.fixture
def sample_arena_export() -> str:
    """Sample Arena deck export for testing."""
    return """Deck
4 Lightning Bolt (LEB) 163
4 Monastery Swiftspear (BRO) 144
20 Mountain (NEO) 290

Sideboard
2 Abrade (VOW) 139"""
