from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).parent.parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DECKLEDGER_")

    app_name: str = "DeckLedger"
    debug: bool = False

    card_db_path: Path = DATA_DIR / "cards.json"

    scryfall_bulk_api: str = "https://api.scryfall.com/bulk-data"

    # Art id shown for decks that never picked a tile
    default_tile: int = 67003


settings = Settings()


# =============================================================================
# DECK CONSTANTS
# =============================================================================

# Wildcard buckets reported for every deck, in display order
CARD_RARITIES = ("rare", "common", "uncommon", "mythic", "token", "land")

# Reprint-only set whose printings cannot be imported directly
MYTHIC_EDITION_SET = "Mythic Edition"

# Copies of one card a constructed deck can need wildcards for
MAX_COPIES = 4
