from capsule.core.config import settings
from capsule.core.database import DatabaseSessionManager
from capsule.services.InspirationStore import InspirationStore
from sqlalchemy import inspect
import asyncio
import logging

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


async def list_tables():
    session_manager = DatabaseSessionManager()
    await session_manager.init()

    try:
        async with session_manager.engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        logger.info(f"Tables in database: {tables}")

        store = InspirationStore(session_manager)
        logger.info(f"Inspirations: {await store.count()}")
        for category in sorted(await store.distinct_categories()):
            logger.info(f"  {category}: {await store.count([category])}")
    finally:
        await session_manager.close()


if __name__ == "__main__":
    asyncio.run(list_tables())
