from deckledger.models.card_entry import CardEntry, canonical_order
from deckledger.models.cards_list import CardsList
from deckledger.models.colors import BLACK, BLUE, GREEN, RED, WHITE, Colors
from deckledger.models.deck import Deck, MissingWildcardCount
from deckledger.models.deck_record import (
    INTERNAL_DECK_TYPE,
    InternalDeckRecord,
    RecordKind,
    classify_record,
    default_record,
    normalize_client_record,
)

__all__ = [
    "BLACK",
    "BLUE",
    "CardEntry",
    "CardsList",
    "Colors",
    "Deck",
    "GREEN",
    "INTERNAL_DECK_TYPE",
    "InternalDeckRecord",
    "MissingWildcardCount",
    "RED",
    "RecordKind",
    "WHITE",
    "canonical_order",
    "classify_record",
    "default_record",
    "normalize_client_record",
]
