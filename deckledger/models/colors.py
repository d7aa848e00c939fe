"""
Deck color identity.

Colors are stored as presence flags for the five Magic colors. The
persisted form is the sorted list of numeric codes below, which is what
deck records carry in their ``colors`` field.
"""

from collections.abc import Iterable

WHITE = 1
BLUE = 2
BLACK = 3
RED = 4
GREEN = 5

COLOR_SYMBOLS = "WUBRG"

_CODE_BY_SYMBOL = {symbol: code for code, symbol in enumerate(COLOR_SYMBOLS, start=1)}


class Colors:
    """Set of colors contributed by a group of cards."""

    __slots__ = ("_codes",)

    def __init__(self) -> None:
        self._codes: set[int] = set()

    @classmethod
    def from_list(cls, values: Iterable[int | str]) -> "Colors":
        """Restore colors from a persisted list of codes or symbols."""
        colors = cls()
        colors.add_from_array(values)
        return colors

    @property
    def w(self) -> bool:
        return WHITE in self._codes

    @property
    def u(self) -> bool:
        return BLUE in self._codes

    @property
    def b(self) -> bool:
        return BLACK in self._codes

    @property
    def r(self) -> bool:
        return RED in self._codes

    @property
    def g(self) -> bool:
        return GREEN in self._codes

    def add_from_color(self, other: "Colors") -> "Colors":
        """Merge another Colors into this one."""
        self._codes |= other._codes
        return self

    def add_from_cost(self, cost: Iterable[str]) -> "Colors":
        """
        Add the colors found in a mana cost.

        Each symbol is a lowercase mana symbol as stored in the card
        database ("2", "w", "wu", "bp", "x"). Every color letter counts,
        so hybrid symbols add both halves.
        """
        for symbol in cost:
            for letter in str(symbol).upper():
                code = _CODE_BY_SYMBOL.get(letter)
                if code is not None:
                    self._codes.add(code)
        return self

    def add_from_array(self, values: Iterable[int | str]) -> "Colors":
        """Add colors given as numeric codes or color letters."""
        for value in values:
            if isinstance(value, str):
                code = _CODE_BY_SYMBOL.get(value.upper())
            else:
                code = value if WHITE <= value <= GREEN else None
            if code is not None:
                self._codes.add(code)
        return self

    def get(self) -> list[int]:
        """Persisted representation: color codes in WUBRG order."""
        return sorted(self._codes)

    @property
    def symbols(self) -> str:
        """Color letters in WUBRG order, e.g. "UR"."""
        return "".join(COLOR_SYMBOLS[code - 1] for code in self.get())

    @property
    def length(self) -> int:
        return len(self._codes)

    @property
    def is_colorless(self) -> bool:
        return not self._codes

    @property
    def is_multicolor(self) -> bool:
        return len(self._codes) > 1

    def issuperset(self, other: "Colors") -> bool:
        return self._codes >= other._codes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Colors):
            return NotImplemented
        return self._codes == other._codes

    def __len__(self) -> int:
        return len(self._codes)

    def __repr__(self) -> str:
        return f"Colors({self.symbols or 'C'})"
