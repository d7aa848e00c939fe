"""
DeckLedger services.

Collaborators the deck model reads from.
"""

from deckledger.services.card_database import (
    CardData,
    CardDatabase,
    CardNotFoundError,
    SetData,
    download_card_database,
    get_card_database,
    load_card_database,
    parse_mana_cost,
)

__all__ = [
    "CardData",
    "CardDatabase",
    "CardNotFoundError",
    "SetData",
    "download_card_database",
    "get_card_database",
    "load_card_database",
    "parse_mana_cost",
]
