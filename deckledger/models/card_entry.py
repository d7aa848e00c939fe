from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

# Keys the game client has used for the card id in deck lists
_ID_KEYS = ("id", "cardId", "grpId")


@dataclass(slots=True)
class CardEntry:
    """
    One line of a deck zone.

    Attributes:
        id: Arena card id (grpId)
        quantity: Number of copies
        measurable: False when the quantity is not meaningful (exports show 1)
    """

    id: int
    quantity: int = 1
    measurable: bool = True

    @property
    def display_quantity(self) -> int:
        """Quantity shown in text exports."""
        return self.quantity if self.measurable else 1

    @classmethod
    def coerce(cls, raw: "CardEntry | Mapping[str, Any] | int") -> "CardEntry":
        """
        Build an entry from any shape found in deck records.

        Accepts another CardEntry (copied), a mapping keyed by ``id``,
        ``cardId`` or ``grpId``, or a bare card id meaning one copy.

        Raises:
            TypeError: If the value is none of the accepted shapes
            KeyError: If a mapping carries no card id
        """
        if isinstance(raw, CardEntry):
            return cls(raw.id, raw.quantity, raw.measurable)
        if isinstance(raw, bool):
            raise TypeError(f"Not a card entry: {raw!r}")
        if isinstance(raw, int):
            return cls(raw)
        if isinstance(raw, Mapping):
            for key in _ID_KEYS:
                if key in raw:
                    return cls(
                        id=int(raw[key]),
                        quantity=int(raw.get("quantity", 1)),
                        measurable=bool(raw.get("measurable", True)),
                    )
            raise KeyError(f"Card entry has no id: {dict(raw)!r}")
        raise TypeError(f"Not a card entry: {raw!r}")

    def to_dict(self) -> dict[str, Any]:
        """Persisted form of this entry."""
        data: dict[str, Any] = {"id": self.id, "quantity": self.quantity}
        if not self.measurable:
            data["measurable"] = False
        return data


def canonical_order(entry: CardEntry) -> tuple[int, int]:
    """Sort key giving a total order over entries: id, then quantity."""
    return (entry.id, entry.quantity)
