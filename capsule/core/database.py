"""
Async database manager for the inspiration store.
- SQLite (aiosqlite) for local use and tests, PostgreSQL (asyncpg) in production
- Automatic database creation if missing (PostgreSQL)
- Table initialization from the registered models
"""
import logging
from importlib import import_module
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
from sqlalchemy import event, text
import sqlalchemy
from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
    AsyncEngine
)
import asyncpg
from capsule.core.config import settings
from capsule.models.base import Base

logger = logging.getLogger(__name__)


def _casefold(value):
    return value.casefold() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection, connection_record):
    """Replace SQLite's ASCII-only lower() so ILIKE folds every script"""
    dbapi_connection.create_function("lower", 1, _casefold, deterministic=True)


class DatabaseSessionManager:
    """Manages async database sessions with auto-creation and setup."""

    def __init__(self, database_url: Optional[str] = None, echo: Optional[bool] = None):
        self.database_url = database_url or settings.DATABASE_URL
        self.echo = settings.DB_ECHO if echo is None else echo
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None

    async def init(self):
        """Initialize database connection with auto-creation fallback"""
        try:
            self.engine = self._create_engine(self.database_url)

            try:
                async with self.engine.begin() as conn:
                    await self._setup_database(conn)
            except (asyncpg.exceptions.InvalidCatalogNameError, sqlalchemy.exc.DBAPIError) as e:
                if not self._is_missing_database(e):
                    raise
                await self.engine.dispose()
                if not await self._create_database():
                    raise
                await self._setup_database_after_creation()

            self.session_factory = async_sessionmaker(
                bind=self.engine,
                expire_on_commit=False,
                autoflush=False
            )

        except Exception as e:
            logger.error(f"Database initialization failed: {e}")
            raise

    def _create_engine(self, db_url: str) -> AsyncEngine:
        if make_url(db_url).get_backend_name() == "postgresql":
            return create_async_engine(
                db_url,
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=5,
                pool_timeout=30,
                pool_recycle=300,
                pool_pre_ping=True,
                echo=self.echo,
            )
        engine = create_async_engine(db_url, echo=self.echo)
        if make_url(db_url).get_backend_name() == "sqlite":
            event.listen(engine.sync_engine, "connect", _register_sqlite_functions)
        return engine

    @staticmethod
    def _is_missing_database(exc: BaseException) -> bool:
        """Walk the exception chain looking for asyncpg's unknown-database error."""
        seen = exc
        while seen is not None:
            if isinstance(seen, asyncpg.exceptions.InvalidCatalogNameError):
                return True
            seen = getattr(seen, "orig", None) or seen.__cause__
        return False

    async def _setup_database(self, conn):
        """Initialize database schema"""
        try:
            await conn.execute(text("SELECT 1"))
            for model in settings.DB_MODELS:
                import_module(model)

            logger.debug(f"Models registered: {list(Base.metadata.tables.keys())}")
            await conn.run_sync(Base.metadata.create_all)

        except Exception as e:
            logger.error(f"Database setup failed: {e}")
            raise

    async def _setup_database_after_creation(self):
        """Reinitialize after database creation"""
        logger.info("Setting up newly created database...")
        self.engine = self._create_engine(self.database_url)
        async with self.engine.begin() as conn:
            await self._setup_database(conn)

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Context manager for safe session handling"""
        if not self.session_factory:
            raise RuntimeError("DatabaseSessionManager not initialized")
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def _create_database(self) -> bool:
        """Create the database if it does not exist"""
        try:
            db_url = make_url(self.database_url)
            db_name = db_url.database

            # Connect to the default database (usually 'postgres')
            default_url = db_url.set(database="postgres")
            engine = create_async_engine(
                default_url,
                echo=self.echo,
                isolation_level="AUTOCOMMIT"
            )
            async with engine.connect() as conn:
                await conn.execute(text(f'CREATE DATABASE "{db_name}"'))
            await engine.dispose()
            logger.info(f"Database '{db_name}' created successfully.")
            return True
        except (asyncpg.exceptions.PostgresError, sqlalchemy.exc.SQLAlchemyError) as e:
            logger.error(f"Failed to create database: {e}")
            return False

    async def close(self):
        """Cleanup connection pool"""
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None
