# scripts/seed_inspirations.py
import asyncio
import logging
from typing import List

from capsule.core.config import settings
from capsule.core.database import DatabaseSessionManager
from capsule.services.InspirationService import InspirationService
from capsule.services.InspirationStore import InspirationStore
from capsule.utils.classify_content import classify_content

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

STARTER_INSPIRATIONS: List[str] = [
    "Less, but better.",
    "Stay hungry, stay foolish.",
    "The obstacle is the way.",
    "Write the test you wish someone had written for you.",
    "Small daily improvements compound into remarkable results.",
    "TODO: read one chapter before bed",
    "https://www.gutenberg.org/ebooks/2680",
    "Clarity comes from engagement, not thought. You will rarely figure out what you "
    "want by sitting and thinking about it; start, and adjust as you go.",
]


async def seed_inspirations(dry_run=True):
    """Insert the starter inspirations into an empty capsule

    Args:
        dry_run: If True, only shows what would be stored without writing
    """
    if dry_run:
        logger.info("DRY RUN MODE - No changes will be made to the database")
        for content in STARTER_INSPIRATIONS:
            logger.info(f"[{classify_content(content)}] {content[:50]}")
        return 0

    session_manager = DatabaseSessionManager()
    await session_manager.init()

    try:
        store = InspirationStore(session_manager)
        existing = await store.count()
        if existing:
            logger.info(f"Capsule already holds {existing} inspirations, skipping seed")
            return 0

        service = InspirationService(store)
        for content in STARTER_INSPIRATIONS:
            await service.add_inspiration(content)

        logger.info(f"Seeded {len(STARTER_INSPIRATIONS)} inspirations")
        return len(STARTER_INSPIRATIONS)
    finally:
        await session_manager.close()


if __name__ == "__main__":
    import sys
    asyncio.run(seed_inspirations(dry_run="--commit" not in sys.argv))
