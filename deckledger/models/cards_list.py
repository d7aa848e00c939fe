"""
CardsList: the ordered multiset of cards making up one deck zone.

INVARIANTS:
- Every element of the live list is a CardEntry
- remove_duplicates() yields at most one entry per id, quantities summed,
  in order of first occurrence
- revision increases on every in-place change, so owners can tell when
  values derived from the list are stale
"""

import copy
import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from deckledger.models.card_entry import CardEntry, canonical_order
from deckledger.models.colors import Colors
from deckledger.services.card_database import CardDatabase

logger = logging.getLogger(__name__)

RawCard = CardEntry | Mapping[str, Any] | int
SortKey = Callable[[CardEntry], Any]


class CardsList:
    """Cards of a single zone (mainboard or sideboard)."""

    def __init__(self, cards: Iterable[RawCard] = ()) -> None:
        self._list: list[CardEntry] = [CardEntry.coerce(card) for card in cards]
        self.revision = 0

    def __len__(self) -> int:
        return len(self._list)

    def __iter__(self) -> Iterator[CardEntry]:
        return iter(self._list)

    def __repr__(self) -> str:
        return f"CardsList({self._list!r})"

    def get(self) -> list[CardEntry]:
        """
        The live list of entries.

        Changes made through this list are not tracked by ``revision``;
        use sort(), add() and remove() to keep derived values fresh.
        """
        return self._list

    def sort(self, key: SortKey | None = None) -> None:
        """Reorder the live list in place. Defaults to the canonical card order."""
        self._list.sort(key=key or canonical_order)
        self.revision += 1

    def sorted(self, key: SortKey | None = None) -> list[CardEntry]:
        """Ordered copy of the entries; the live list is left alone."""
        return sorted(self._list, key=key or canonical_order)

    def add(self, card_id: int, quantity: int = 1, unique: bool = False) -> None:
        """
        Add copies of a card.

        Args:
            card_id: Arena card id
            quantity: Copies to add
            unique: Add onto the existing entry for this id instead of
                appending a new one
        """
        if unique:
            for entry in self._list:
                if entry.id == card_id:
                    entry.quantity += quantity
                    self.revision += 1
                    return
        self._list.append(CardEntry(card_id, quantity))
        self.revision += 1

    def remove(self, card_id: int, quantity: int = 1) -> None:
        """Remove copies of a card, dropping entries that reach zero."""
        remaining = quantity
        kept: list[CardEntry] = []
        for entry in self._list:
            if entry.id == card_id and remaining > 0:
                taken = min(entry.quantity, remaining)
                entry.quantity -= taken
                remaining -= taken
                if entry.quantity == 0:
                    continue
            kept.append(entry)
        self._list[:] = kept
        self.revision += 1

    def count(self) -> int:
        """Total number of copies in the zone."""
        return sum(entry.quantity for entry in self._list)

    def count_of(self, card_id: int) -> int:
        """Copies of one card across all of its entries."""
        return sum(entry.quantity for entry in self._list if entry.id == card_id)

    def remove_duplicates(self, replace: bool = False) -> list[CardEntry]:
        """
        Merge entries sharing an id.

        Returns a new list of new entries; existing entries are never
        modified. The merged entry keeps the measurable flag of the first
        occurrence.

        Args:
            replace: Also install the merged list as this zone's live list
        """
        merged: dict[int, CardEntry] = {}
        for entry in self._list:
            found = merged.get(entry.id)
            if found is None:
                merged[entry.id] = CardEntry(entry.id, entry.quantity, entry.measurable)
            else:
                found.quantity += entry.quantity
        result = list(merged.values())
        if replace:
            self._list = list(result)
            self.revision += 1
        return result

    def get_colors(self, card_db: CardDatabase) -> Colors:
        """
        Colors contributed by the cards of this zone.

        Lands add their frame colors when they have at most two; every
        card adds the colors of its mana cost. Unknown ids are skipped.
        """
        colors = Colors()
        for card_id in dict.fromkeys(entry.id for entry in self._list):
            card = card_db.lookup(card_id)
            if card is None:
                logger.debug("Skipping unknown card %d in color count", card_id)
                continue
            if "Land" in card["type"] and len(card["frame"]) < 3:
                colors.add_from_array(card["frame"])
            colors.add_from_cost(card["cost"])
        return colors

    def clone(self) -> "CardsList":
        """Independent copy with its own entries."""
        return CardsList(copy.deepcopy(self._list))

    def to_list(self) -> list[dict[str, Any]]:
        """Persisted form of the zone."""
        return [entry.to_dict() for entry in self._list]
