"""
Build the card database.

Fetches Scryfall bulk data and converts it into the Arena-id keyed
database the deck model reads.
"""

import asyncio
import logging

from deckledger.config import settings
from deckledger.services.card_database import download_card_database

logger = logging.getLogger(__name__)


async def run_download() -> None:
    """Fetch Scryfall bulk data and write the converted card database."""
    logger.info("Fetching Scryfall bulk data for %s", settings.card_db_path)

    try:
        path = await download_card_database()
    except Exception as e:
        logger.error("Could not build card database: %s", e)
        raise

    logger.info("Converted Arena printings into card database at %s", path)


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_download())


if __name__ == "__main__":
    main()
