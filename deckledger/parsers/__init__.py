from deckledger.parsers.deck_text import (
    DeckLine,
    ParsedDeckText,
    deck_from_text,
    parse_deck_text,
    parse_line,
)

__all__ = [
    "DeckLine",
    "ParsedDeckText",
    "deck_from_text",
    "parse_deck_text",
    "parse_line",
]
