"""
Wildcard shortfall for decks.

Works out how many wildcards of each rarity a player still needs to
build a deck from the cards they own, and roughly how many boosters
that represents.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from deckledger.config import MAX_COPIES
from deckledger.models.card_entry import CardEntry
from deckledger.services.card_database import CardDatabase

# Average boosters opened per wildcard of each rarity
BOOSTER_RATES = {
    "common": 3.36,
    "uncommon": 2.6,
    "rare": 5.72,
    "mythic": 13.24,
}


@dataclass
class Collection:
    """
    Cards and wildcards a player owns. Cards are keyed by Arena card id.

    Each printing is its own id; reprints are combined when a deck asks.
    """

    cards: dict[int, int] = field(default_factory=dict)
    # Unspent wildcards by rarity (common, uncommon, rare, mythic)
    wildcards: dict[str, int] = field(default_factory=dict)

    def get_quantity(self, card_id: int) -> int:
        """Copies owned of one printing."""
        return self.cards.get(card_id, 0)

    def add_card(self, card_id: int, quantity: int = 1) -> None:
        self.cards[card_id] = self.cards.get(card_id, 0) + quantity

    def total_cards(self) -> int:
        return sum(self.cards.values())


@dataclass
class WildcardCost:
    """Wildcards needed to complete a deck."""

    common: int = 0
    uncommon: int = 0
    rare: int = 0
    mythic: int = 0

    @classmethod
    def from_missing(cls, missing: Mapping[str, int]) -> "WildcardCost":
        """Build from Deck.get_missing_wildcards() output. Token and land buckets are dropped."""
        return cls(
            common=missing.get("common", 0),
            uncommon=missing.get("uncommon", 0),
            rare=missing.get("rare", 0),
            mythic=missing.get("mythic", 0),
        )

    def total(self) -> int:
        """Total wildcards needed."""
        return self.common + self.uncommon + self.rare + self.mythic

    def as_dict(self) -> dict[str, int]:
        return {
            "common": self.common,
            "uncommon": self.uncommon,
            "rare": self.rare,
            "mythic": self.mythic,
        }

    def remaining(self, owned: Mapping[str, int]) -> "WildcardCost":
        """Wildcards still to earn once the owned wildcards are spent."""
        return WildcardCost(
            **{
                rarity: max(0, needed - owned.get(rarity, 0))
                for rarity, needed in self.as_dict().items()
            }
        )

    def boosters(self, owned: Mapping[str, int] | None = None) -> float:
        return estimate_booster_count(self.as_dict(), owned)


def _zone_quantity(zone: list[Any], card_id: int) -> int:
    """Quantity of the first entry for an id in a persisted zone."""
    for raw in zone:
        entry = CardEntry.coerce(raw)
        if entry.id == card_id:
            return entry.quantity
    return 0


def missing_wildcard_count(
    deck: Mapping[str, Any],
    card_id: int,
    is_sideboard: bool,
    collection: Collection,
    card_db: CardDatabase,
) -> int:
    """
    Wildcards needed for one card of a deck.

    Args:
        deck: Persisted deck record (Deck.get_save_raw() or get_save())
        card_id: Card to check
        is_sideboard: Check the sideboard copies instead of the mainboard
        collection: Cards the player owns
        card_db: Card database, for reprints and basic lands

    Returns:
        Copies still missing. Needs are capped at four copies, basic lands
        never need wildcards, and owned copies of any reprint count. For the
        sideboard, owned copies already used by the mainboard are not
        available again.
    """
    card = card_db.lookup(card_id)
    if card is None or "Basic Land" in card["type"]:
        return 0

    main_quantity = _zone_quantity(deck.get("mainDeck", []), card_id)
    side_quantity = _zone_quantity(deck.get("sideboard", []), card_id)

    needed = min(MAX_COPIES, side_quantity if is_sideboard else main_quantity)

    owned = collection.get_quantity(card_id)
    owned += sum(collection.get_quantity(reprint) for reprint in card["reprints"])

    if is_sideboard:
        owned -= min(MAX_COPIES, main_quantity, owned)

    return max(0, needed - owned)


class WildcardShortfall:
    """
    missing_wildcard_count bound to a collection and card database.

    Instances have the (deck, card id, is sideboard) call signature
    Deck.get_missing_wildcards() expects.
    """

    def __init__(self, collection: Collection, card_db: CardDatabase) -> None:
        self.collection = collection
        self.card_db = card_db

    def __call__(self, deck: Mapping[str, Any], card_id: int, is_sideboard: bool) -> int:
        return missing_wildcard_count(deck, card_id, is_sideboard, self.collection, self.card_db)


def estimate_booster_count(
    missing: Mapping[str, int], owned: Mapping[str, int] | None = None
) -> float:
    """
    Boosters likely needed to earn the missing wildcards.

    Owned wildcards are spent first; the rarity that then takes longest to
    collect sets the estimate. Keys of both mappings may be rarity names or
    their first letter ("c", "u", "r", "m").
    """
    owned = owned or {}
    boosters = 0.0
    for rarity, rate in BOOSTER_RATES.items():
        needed = missing.get(rarity) or missing.get(rarity[0]) or 0
        needed -= owned.get(rarity) or owned.get(rarity[0]) or 0
        needed = max(0, needed)
        boosters = max(boosters, rate * needed)
    return boosters
