"""
Deck: a constructed deck with its zones, metadata and derived values.

A Deck is built from any of the record shapes in deck_record and can be
written back to the persisted InternalDeck shape. Colors are derived from
the cards and cached until either zone changes.

A Deck is meant to have a single owner. Hand other code a clone().
"""

import copy
import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from deckledger.config import CARD_RARITIES, MYTHIC_EDITION_SET, settings
from deckledger.models.card_entry import CardEntry
from deckledger.models.cards_list import CardsList, RawCard, SortKey
from deckledger.models.colors import Colors
from deckledger.models.deck_record import (
    INTERNAL_DECK_TYPE,
    InternalDeckRecord,
    RecordKind,
    classify_record,
    default_record,
    normalize_client_record,
)
from deckledger.services.card_database import CardData, CardDatabase

logger = logging.getLogger(__name__)

# (deck snapshot, card id, is sideboard) -> wildcards still needed
MissingWildcardCount = Callable[[Mapping[str, Any], int, bool], int]


class Deck:
    """
    A constructed deck.

    Attributes:
        id: Deck id, empty for decks that were never saved
        format: Format name as reported by the client
        description: Free text description
        tags: Tags shown in the deck list; starts as [format]
        custom: True for decks created in this application
        archetype: Archetype label
        last_updated: Time of the last change (timezone aware, UTC)
        tile: Arena art id used as the deck's tile
    """

    def __init__(
        self,
        record: Mapping[str, Any] | None = None,
        main: Iterable[RawCard] = (),
        side: Iterable[RawCard] = (),
        *,
        card_db: CardDatabase,
    ) -> None:
        self._card_db = card_db

        if record is None:
            record = default_record()
        kind = classify_record(record)
        data = normalize_client_record(record)

        main = list(main)
        side = list(side)
        self._mainboard = CardsList(main if main else data.get("mainDeck") or [])
        self._sideboard = CardsList(side if side else data.get("sideboard") or [])

        self._commanders: list[int] = list(data.get("commandZoneGRPIds") or [])
        self._name: str = data.get("name") or ""
        self.tile: int = data.get("deckTileId") or settings.default_tile
        self.format: str = data.get("format") or ""
        self.id: str = data.get("id") or ""
        self.description: str = data.get("description") or ""

        # Tags always restart from the format, whatever the record carried
        fmt = data.get("format")
        self.tags: list[str] = [fmt if fmt is not None else "unknown"]

        internal = kind is RecordKind.INTERNAL
        self.custom: bool = bool(data.get("custom")) if internal else False
        self.archetype: str = (data.get("archetype") or "") if internal else ""

        self.last_updated = _parse_timestamp(data.get("lastUpdated"))

        self._colors = Colors()
        self._colors_selection = (True, False)
        self._colors_key: tuple[int, ...] | None = None
        self.get_colors()

    def __repr__(self) -> str:
        return f"Deck(id={self.id!r}, name={self._name!r}, format={self.format!r})"

    # -------------------------------------------------------------------------
    # Zones and metadata
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value

    def get_name(self) -> str:
        return self._name

    def set_name(self, name: str) -> None:
        self._name = name

    def get_mainboard(self) -> CardsList:
        return self._mainboard

    def get_sideboard(self) -> CardsList:
        return self._sideboard

    def set_mainboard(self, cards: CardsList) -> None:
        self._mainboard = cards
        self._colors_key = None

    def set_sideboard(self, cards: CardsList) -> None:
        self._sideboard = cards
        self._colors_key = None

    def sort_mainboard(self, key: SortKey | None = None) -> None:
        """Reorder the mainboard in place."""
        self._mainboard.sort(key)

    def sort_sideboard(self, key: SortKey | None = None) -> None:
        """Reorder the sideboard in place."""
        self._sideboard.sort(key)

    # -------------------------------------------------------------------------
    # Commanders
    # -------------------------------------------------------------------------

    def has_commander(self) -> float:
        """
        Number of commanders, 0 when there is none.

        The command zone list holds (commander id, related id) pairs, so a
        list of odd length gives a fractional count. Callers should treat
        that as no valid commander.
        """
        return len(self._commanders) / 2

    def get_commander_id(self, pos: int = 0) -> int | None:
        """Id of the commander at ``pos``, or None if there is none."""
        index = pos * 2
        if index < 0 or index >= len(self._commanders):
            return None
        return self._commanders[index]

    def get_commanders(self) -> list[int]:
        """The raw command zone list."""
        return self._commanders

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    @property
    def colors(self) -> Colors:
        """
        Cached deck colors.

        Recomputed with the last requested zone selection when either zone
        changed since they were computed.
        """
        if self._colors_key != self._zones_key():
            self.get_colors(*self._colors_selection)
        return self._colors

    def get_colors(self, count_mainboard: bool = True, count_sideboard: bool = False) -> Colors:
        """
        Recompute the deck colors from the chosen zones and cache them.

        By default only the mainboard counts.
        """
        colors = Colors()
        if count_mainboard:
            colors.add_from_color(self._mainboard.get_colors(self._card_db))
        if count_sideboard:
            colors.add_from_color(self._sideboard.get_colors(self._card_db))

        self._colors = colors
        self._colors_selection = (count_mainboard, count_sideboard)
        self._colors_key = self._zones_key()
        return colors

    def _zones_key(self) -> tuple[int, ...]:
        return (
            id(self._mainboard),
            self._mainboard.revision,
            id(self._sideboard),
            self._sideboard.revision,
        )

    def get_missing_wildcards(
        self,
        missing_count: MissingWildcardCount,
        count_mainboard: bool = True,
        count_sideboard: bool = True,
    ) -> dict[str, int]:
        """
        Wildcards needed to complete this deck, per rarity.

        Args:
            missing_count: Shortfall for one card given the deck snapshot
            count_mainboard: Count mainboard cards
            count_sideboard: Count sideboard cards

        Returns:
            Dict with every rarity in CARD_RARITIES (zero when nothing is
            missing). Cards unknown to the database add nothing.
        """
        missing = dict.fromkeys(CARD_RARITIES, 0)
        snapshot = self.get_save_raw()

        zones: list[tuple[CardsList, bool]] = []
        if count_mainboard:
            zones.append((self._mainboard, False))
        if count_sideboard:
            zones.append((self._sideboard, True))

        for zone, is_sideboard in zones:
            for entry in zone.get():
                card = self._card_db.lookup(entry.id)
                if card is None:
                    continue
                rarity = card["rarity"]
                missing[rarity] = missing.get(rarity, 0) + missing_count(
                    snapshot, entry.id, is_sideboard
                )

        return missing

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def get_export_txt(self) -> str:
        """
        Plain text decklist: "<qty> <name>" lines, mainboard, blank line,
        sideboard. Lines end with CRLF.

        Raises:
            CardNotFoundError: If a card is missing from the database
        """
        lines = [self._txt_line(entry) for entry in self._mainboard.remove_duplicates()]
        lines.append("\r\n")
        lines.extend(self._txt_line(entry) for entry in self._sideboard.remove_duplicates())
        return "".join(lines)

    def _txt_line(self, entry: CardEntry) -> str:
        name = self._card_db.require(entry.id)["name"]
        return f"{entry.display_quantity} {name}\r\n"

    def get_export_arena(self) -> str:
        """
        Decklist the game client can import:
        "<qty> <name> (<set code>) <collector number> " lines with CRLF.

        Mythic Edition printings are exported as their first reprint.

        Raises:
            CardNotFoundError: If a card is missing from the database
        """
        lines = [self._arena_line(entry) for entry in self._mainboard.remove_duplicates()]
        lines.append("\r\n")
        lines.extend(self._arena_line(entry) for entry in self._sideboard.remove_duplicates())
        return "".join(lines)

    def _arena_line(self, entry: CardEntry) -> str:
        card: CardData = self._card_db.require(entry.id)
        if card["set"] == MYTHIC_EDITION_SET and card["reprints"]:
            card = self._card_db.require(card["reprints"][0])

        set_code = self._card_db.arena_set_code(card["set"])
        return (
            f"{entry.display_quantity} {card['name']} "
            f"({set_code}) {card['collector_number']} \r\n"
        )

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def get_save_raw(self) -> InternalDeckRecord:
        """
        Persisted record sharing this deck's live lists.

        ``mainDeck``, ``sideboard``, ``tags`` and ``commandZoneGRPIds`` are
        the deck's own lists (the zones as CardEntry objects). Do not
        change them unless that is the point.
        """
        return InternalDeckRecord(
            mainDeck=self._mainboard.get(),
            sideboard=self._sideboard.get(),
            name=self._name,
            id=self.id,
            lastUpdated=_format_timestamp(self.last_updated),
            deckTileId=self.tile,
            colors=self.colors.get(),
            tags=self.tags,
            custom=self.custom,
            archetype=self.archetype,
            commandZoneGRPIds=self._commanders,
            format=self.format,
            type=INTERNAL_DECK_TYPE,
            description=self.description,
        )

    def get_save(self) -> InternalDeckRecord:
        """Persisted record as plain data, independent of this deck."""
        record = self.get_save_raw()
        record["mainDeck"] = self._mainboard.to_list()
        record["sideboard"] = self._sideboard.to_list()
        record["tags"] = list(self.tags)
        record["commandZoneGRPIds"] = list(self._commanders)
        return record

    def clone(self) -> "Deck":
        """Independent copy of this deck. No list or entry is shared."""
        record = {
            "name": self._name,
            "id": self.id,
            "lastUpdated": self.last_updated,
            "deckTileId": self.tile,
            "custom": self.custom,
            "archetype": self.archetype,
            "commandZoneGRPIds": list(self._commanders),
            "format": self.format,
            "description": self.description,
            "type": INTERNAL_DECK_TYPE,
        }
        deck = Deck(record, card_db=self._card_db)
        deck.set_mainboard(self._mainboard.clone())
        deck.set_sideboard(self._sideboard.clone())
        deck.tags = copy.copy(self.tags)
        deck.get_colors(*self._colors_selection)
        return deck

    def get_unique_string(self, check_side: bool = True) -> str:
        """
        Fingerprint of the deck's cards.

        Sorts both zones in place into the canonical order, then lists
        "<id>,<quantity>," for each mainboard entry and, with
        ``check_side``, each sideboard entry. Decks with the same cards give
        the same string whatever order the cards were added in.
        """
        self.sort_mainboard()
        self.sort_sideboard()

        parts = [f"{entry.id},{entry.quantity}," for entry in self._mainboard.get()]
        if check_side:
            parts.extend(f"{entry.id},{entry.quantity}," for entry in self._sideboard.get())
        return "".join(parts)


def _parse_timestamp(value: datetime | str | None) -> datetime:
    """Parse a record timestamp; missing means now. Naive values are UTC."""
    if not value:
        return datetime.now(timezone.utc)
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. 2020-01-31T10:00:00.000Z"""
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")
