"""
Parser for pasted decklists.

Reads both export formats the deck model writes:
    4 Lightning Bolt
    4 Lightning Bolt (STA) 42

Mainboard and sideboard are separated by a blank line. Lists copied from
the game client may also carry section headers (Deck, Sideboard,
Commander, Companion).
"""

import logging
import re
from dataclasses import dataclass, field

from deckledger.models.card_entry import CardEntry
from deckledger.models.deck import Deck
from deckledger.services.card_database import CardData, CardDatabase

logger = logging.getLogger(__name__)

# Pattern: "4 Lightning Bolt (LEB) 163" or "4 Card (SET) 290a"
# Groups: (quantity, card_name, set_code, collector_number)
FULL_LINE_PATTERN = re.compile(r"^(\d+)\s+(.+?)\s+\(([A-Za-z0-9_]+)\)\s+(\S+)$")

# Pattern: "4 Lightning Bolt" (no set info)
SIMPLE_LINE_PATTERN = re.compile(r"^(\d+)\s+(.+)$")

MAIN_HEADERS = frozenset({"deck", "maindeck", "mainboard"})
SIDE_HEADERS = frozenset({"sideboard"})
OTHER_HEADERS = frozenset({"commander", "companion", "about"})


@dataclass(frozen=True, slots=True)
class DeckLine:
    """One card line of a pasted decklist."""

    quantity: int
    name: str
    set_code: str | None = None
    collector_number: str | None = None


@dataclass
class ParsedDeckText:
    main: list[DeckLine] = field(default_factory=list)
    side: list[DeckLine] = field(default_factory=list)
    other: list[DeckLine] = field(default_factory=list)


def parse_line(line: str) -> DeckLine | None:
    """Parse one card line; None if it is not a card line."""
    match = FULL_LINE_PATTERN.match(line)
    if match:
        quantity, name, set_code, collector_number = match.groups()
        return DeckLine(int(quantity), name, set_code, collector_number)

    match = SIMPLE_LINE_PATTERN.match(line)
    if match:
        quantity, name = match.groups()
        return DeckLine(int(quantity), name)

    return None


def parse_deck_text(text: str) -> ParsedDeckText:
    """
    Split a decklist into mainboard and sideboard lines.

    Args:
        text: Decklist text (CRLF or LF line endings). A blank line before
            any card or header means the mainboard is empty.

    Returns:
        ParsedDeckText. Lines that are not card lines are skipped.
    """
    parsed = ParsedDeckText()
    if not text or not text.strip():
        return parsed

    section = parsed.main
    header_seen = False
    # Exports of a deck with an empty mainboard start with the zone separator
    for raw_line in text.rstrip().splitlines():
        line = raw_line.strip()

        if not line:
            # Blank line ends the mainboard
            if section is parsed.main and (parsed.main or not header_seen):
                section = parsed.side
            continue

        header = line.lower()
        if header in MAIN_HEADERS:
            section = parsed.main
            header_seen = True
            continue
        if header in SIDE_HEADERS:
            section = parsed.side
            header_seen = True
            continue
        if header in OTHER_HEADERS:
            section = parsed.other
            header_seen = True
            continue

        card = parse_line(line)
        if card is None:
            logger.debug("Skipping unparseable decklist line: %r", line)
            continue
        section.append(card)

    return parsed


def resolve_line(line: DeckLine, card_db: CardDatabase) -> CardData | None:
    """Card for a decklist line: exact printing first, then by name."""
    if line.set_code and line.collector_number:
        card = card_db.find_printing(line.set_code, line.collector_number)
        if card is not None and card["name"].lower() == line.name.lower():
            return card
    return card_db.find_by_name(line.name)


def _resolve_zone(lines: list[DeckLine], card_db: CardDatabase) -> list[CardEntry]:
    entries: list[CardEntry] = []
    for line in lines:
        card = resolve_line(line, card_db)
        if card is None:
            logger.warning("Card not found in database, skipping: %s", line.name)
            continue
        entries.append(CardEntry(card["id"], line.quantity))
    return entries


def deck_from_text(text: str, card_db: CardDatabase, name: str = "") -> Deck:
    """
    Build a Deck from a pasted decklist.

    Commander and companion sections are not part of either zone and are
    left out.
    """
    parsed = parse_deck_text(text)
    if parsed.other:
        logger.info("Ignoring %d commander/companion lines", len(parsed.other))

    record = {"name": name, "mainDeck": [], "sideboard": []}
    return Deck(
        record,
        _resolve_zone(parsed.main, card_db),
        _resolve_zone(parsed.side, card_db),
        card_db=card_db,
    )
