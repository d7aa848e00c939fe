"""
Card database service.

Read-only lookup of Arena cards by id (grpId) and of sets by name.
The database is a JSON document shaped like::

    {
        "cards": {"<grpId>": {"name": ..., "rarity": ..., "set": ..., ...}},
        "sets": {"<set name>": {"code": ..., "arenacode": ...}}
    }

It can be built from Scryfall's default-cards bulk data, which carries
Arena ids for every printing available in the client.
"""

import json
import logging
import re
from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any, TypedDict

import httpx

from deckledger.config import settings

logger = logging.getLogger(__name__)

ARENA_RARITIES = frozenset({"common", "uncommon", "rare", "mythic"})

# Matches each {...} group of a Scryfall mana cost
MANA_SYMBOL_PATTERN = re.compile(r"\{([^}]+)\}")


class CardData(TypedDict):
    """Card fields used by the deck model."""

    id: int
    name: str
    rarity: str  # common, uncommon, rare, mythic, token, land
    set: str  # full set name, e.g. "Dominaria"
    collector_number: str
    type: str
    cost: list[str]  # lowercase mana symbols, e.g. ["1", "w", "ub"]
    frame: list[int]  # color codes of the card frame
    reprints: list[int]


class SetData(TypedDict, total=False):
    code: str
    arenacode: str


class CardNotFoundError(LookupError):
    """Raised when a card id that must be in the database is missing."""

    def __init__(self, card_id: int) -> None:
        self.card_id = card_id
        super().__init__(f"Card {card_id} is not in the card database")


class CardDatabase:
    """In-memory card and set lookup."""

    def __init__(
        self,
        cards: Mapping[int, CardData] | None = None,
        sets: Mapping[str, SetData] | None = None,
    ) -> None:
        self._cards: dict[int, CardData] = dict(cards or {})
        self._sets: dict[str, SetData] = dict(sets or {})
        self._by_name: dict[str, int] = {}
        for card_id, card in self._cards.items():
            self._by_name.setdefault(card["name"].lower(), card_id)

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._cards

    def lookup(self, card_id: int) -> CardData | None:
        """Card data for an id, or None if unknown."""
        return self._cards.get(card_id)

    def require(self, card_id: int) -> CardData:
        """
        Card data for an id that is expected to exist.

        Raises:
            CardNotFoundError: If the id is unknown
        """
        card = self._cards.get(card_id)
        if card is None:
            raise CardNotFoundError(card_id)
        return card

    def lookup_set(self, set_name: str) -> SetData | None:
        """Set data for a full set name, or None if unknown."""
        return self._sets.get(set_name)

    def find_by_name(self, name: str) -> CardData | None:
        """First card (lowest id seen first at load) with this name."""
        card_id = self._by_name.get(name.lower())
        return None if card_id is None else self._cards[card_id]

    def find_printing(self, set_code: str, collector_number: str) -> CardData | None:
        """Card for a set code and collector number, as shown in Arena exports."""
        for card in self._cards.values():
            if card["collector_number"] != collector_number:
                continue
            set_data = self._sets.get(card["set"], {})
            codes = {set_data.get("arenacode"), set_data.get("code")}
            if set_code.upper() in {c.upper() for c in codes if c}:
                return card
        return None

    def get_set_code(self, set_name: str | None) -> str:
        """
        Short code for a set name.

        Falls back to the name itself when the set is unknown.
        """
        if not set_name:
            return ""
        set_data = self._sets.get(set_name)
        if set_data and set_data.get("code"):
            return set_data["code"]
        return set_name

    def arena_set_code(self, set_name: str) -> str:
        """Code the game client accepts on import for a set."""
        set_data = self._sets.get(set_name) or {}
        return set_data.get("arenacode") or self.get_set_code(set_name)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "CardDatabase":
        """Build a database from its JSON payload."""
        cards: dict[int, CardData] = {}
        for key, raw in payload.get("cards", {}).items():
            card_id = int(key)
            cards[card_id] = CardData(
                id=card_id,
                name=raw["name"],
                rarity=raw.get("rarity", "common"),
                set=raw.get("set", ""),
                collector_number=str(raw.get("collector_number", "")),
                type=raw.get("type", ""),
                cost=list(raw.get("cost", [])),
                frame=list(raw.get("frame", [])),
                reprints=[int(r) for r in raw.get("reprints", [])],
            )
        sets: dict[str, SetData] = {
            name: SetData(**data) for name, data in payload.get("sets", {}).items()
        }
        return cls(cards, sets)

    def to_dict(self) -> dict[str, Any]:
        """JSON payload for this database."""
        return {
            "cards": {str(card_id): dict(card) for card_id, card in self._cards.items()},
            "sets": {name: dict(data) for name, data in self._sets.items()},
        }

    @classmethod
    def from_scryfall(cls, cards: Iterable[Mapping[str, Any]]) -> "CardDatabase":
        """
        Build a database from Scryfall bulk card objects.

        Only printings with an ``arena_id`` are kept. Printings sharing an
        oracle id list each other as reprints.
        """
        parsed: dict[int, CardData] = {}
        sets: dict[str, SetData] = {}
        by_oracle: dict[str, list[int]] = {}

        for card in cards:
            arena_id = card.get("arena_id")
            if arena_id is None:
                continue
            face = (card.get("card_faces") or [{}])[0]
            type_line = card.get("type_line", face.get("type_line", ""))
            mana_cost = card.get("mana_cost") or face.get("mana_cost", "")
            colors = card.get("colors", face.get("colors", []))
            set_name = card.get("set_name", "")

            parsed[arena_id] = CardData(
                id=arena_id,
                name=card["name"],
                rarity=_arena_rarity(card.get("rarity", "common"), type_line, card.get("layout")),
                set=set_name,
                collector_number=str(card.get("collector_number", "")),
                type=type_line,
                cost=parse_mana_cost(mana_cost),
                frame=[_COLOR_CODES[c] for c in colors if c in _COLOR_CODES],
                reprints=[],
            )
            if set_name and set_name not in sets:
                sets[set_name] = SetData(code=str(card.get("set", "")).upper())
            oracle_id = card.get("oracle_id")
            if oracle_id:
                by_oracle.setdefault(oracle_id, []).append(arena_id)

        for printings in by_oracle.values():
            for arena_id in printings:
                parsed[arena_id]["reprints"] = [p for p in printings if p != arena_id]

        logger.info("Built card database with %d Arena cards", len(parsed))
        return cls(parsed, sets)


_COLOR_CODES = {"W": 1, "U": 2, "B": 3, "R": 4, "G": 5}


def parse_mana_cost(mana_cost: str) -> list[str]:
    """
    Split a Scryfall mana cost into lowercase symbols.

    "{2}{W}{U/B}" -> ["2", "w", "ub"]
    """
    return [
        symbol.replace("/", "").lower() for symbol in MANA_SYMBOL_PATTERN.findall(mana_cost or "")
    ]


def _arena_rarity(rarity: str, type_line: str, layout: str | None) -> str:
    """Map a Scryfall rarity onto Arena's wildcard buckets."""
    if layout == "token" or type_line.startswith("Token"):
        return "token"
    if "Basic Land" in type_line:
        return "land"
    if rarity in ARENA_RARITIES:
        return rarity
    # special, bonus
    return "mythic" if rarity == "bonus" else "rare"


def load_card_database(path: Path | None = None) -> CardDatabase:
    """
    Load card database from file.

    Args:
        path: Path to JSON file. Defaults to the configured card_db_path

    Returns:
        CardDatabase keyed by Arena id.

    Raises:
        FileNotFoundError: If database file doesn't exist
        ValueError: If the file is not valid JSON
    """
    if path is None:
        path = settings.card_db_path

    if not path.exists():
        raise FileNotFoundError(
            f"Card database not found at {path}. "
            "Run `python -m deckledger.jobs.download_cards` first."
        )

    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Card database at {path} is corrupted: {e}") from e

    db = CardDatabase.from_dict(payload)
    logger.info("Loaded %d cards from %s", len(db), path)
    return db


@lru_cache(maxsize=1)
def get_card_database() -> CardDatabase:
    """
    Get cached card database.

    Raises:
        FileNotFoundError: If database file doesn't exist
    """
    return load_card_database()


async def download_card_database(output_path: Path | None = None) -> Path:
    """
    Download Scryfall default-cards bulk data and convert it.

    Args:
        output_path: Where to save the database. Defaults to card_db_path

    Returns:
        Path to the written database file.

    Raises:
        ValueError: If bulk data URL not found
        httpx.HTTPError: If download fails
    """
    if output_path is None:
        output_path = settings.card_db_path

    output_path.parent.mkdir(parents=True, exist_ok=True)
    bulk_path = output_path.with_suffix(".scryfall.json")

    async with httpx.AsyncClient(timeout=30.0) as client:
        response = await client.get(settings.scryfall_bulk_api)
        response.raise_for_status()
        data = response.json()

        download_url = None
        for item in data["data"]:
            if item["type"] == "default_cards":
                download_url = item["download_uri"]
                break

        if not download_url:
            raise ValueError("Could not find default_cards bulk data URL")

        # Stream download (file is ~70MB)
        async with client.stream("GET", download_url, timeout=300.0) as response:
            response.raise_for_status()
            with open(bulk_path, "wb") as f:
                async for chunk in response.aiter_bytes(8192):
                    f.write(chunk)

    with open(bulk_path, encoding="utf-8") as f:
        db = CardDatabase.from_scryfall(json.load(f))

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(db.to_dict(), f)

    bulk_path.unlink()
    return output_path
