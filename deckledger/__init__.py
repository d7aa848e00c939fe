"""DeckLedger: deck model and card aggregation for an Arena companion."""

__version__ = "0.1.0"
