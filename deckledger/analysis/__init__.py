from deckledger.analysis.wildcards import (
    Collection,
    WildcardCost,
    WildcardShortfall,
    estimate_booster_count,
    missing_wildcard_count,
)

__all__ = [
    "Collection",
    "WildcardCost",
    "WildcardShortfall",
    "estimate_booster_count",
    "missing_wildcard_count",
]
