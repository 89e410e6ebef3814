"""Persistence boundary for inspirations, backed by an async SQLAlchemy session."""

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncGenerator, Collection, List, Optional

from sqlalchemy import delete, distinct, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from capsule.core.database import DatabaseSessionManager
from capsule.core.errors import StoreError
from capsule.models.base import utcnow
from capsule.models.inspiration import Inspiration
from capsule.schemas.inspirationSchema import InspirationResponse

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def like_pattern(query: str) -> str:
    """Wrap a literal substring in % wildcards, escaping LIKE metacharacters."""
    escaped = (
        query.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class InspirationStore:
    """
    Record-oriented access to the ``inspirations`` table.

    Count and range reads share one filter predicate and one ordering
    ``(created_at, id)`` so an offset drawn from ``count`` addresses the
    same sequence ``read_at`` walks. Both calls run in separate
    transactions; the caller must tolerate the collection changing in
    between (read-committed, no cross-call atomicity).

    Every database failure surfaces as ``StoreError``.
    """

    def __init__(self, session_manager: DatabaseSessionManager):
        self.session_manager = session_manager

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncGenerator[AsyncSession, None]:
        try:
            async with self.session_manager.get_session() as session:
                yield session
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Store {operation} failed: {e}")
            raise StoreError(f"{operation} failed: {e}") from e

    @staticmethod
    def _filtered(stmt, categories: Optional[Collection[str]]):
        if categories:
            stmt = stmt.where(Inspiration.category.in_(list(categories)))
        return stmt

    async def count(self, categories: Optional[Collection[str]] = None) -> int:
        """Number of records, optionally restricted to ``category in categories``."""
        stmt = self._filtered(select(func.count(Inspiration.id)), categories)
        async with self._session("count") as db:
            result = await db.execute(stmt)
            return result.scalar() or 0

    async def read_at(
        self,
        offset: int,
        categories: Optional[Collection[str]] = None
    ) -> Optional[InspirationResponse]:
        """The single record at zero-based ``offset`` of the filtered ordering, if any."""
        stmt = self._filtered(select(Inspiration), categories)
        stmt = (
            stmt.order_by(Inspiration.created_at.asc(), Inspiration.id.asc())
            .offset(offset)
            .limit(1)
        )
        async with self._session("range read") as db:
            result = await db.execute(stmt)
            row = result.scalars().first()
            return InspirationResponse.model_validate(row) if row else None

    async def search(self, query: str, limit: int) -> List[InspirationResponse]:
        """Case-insensitive substring match on content, newest first."""
        stmt = (
            select(Inspiration)
            .where(Inspiration.content.ilike(like_pattern(query), escape=LIKE_ESCAPE))
            .order_by(Inspiration.created_at.desc(), Inspiration.id.desc())
            .limit(limit)
        )
        async with self._session("search") as db:
            result = await db.execute(stmt)
            return [InspirationResponse.model_validate(row) for row in result.scalars().all()]

    async def insert(
        self,
        content: str,
        category: str,
        created_at: Optional[datetime] = None
    ) -> InspirationResponse:
        inspiration = Inspiration(
            id=str(uuid.uuid4()),
            content=content,
            category=category,
            created_at=created_at or utcnow(),
        )
        async with self._session("insert") as db:
            db.add(inspiration)
            await db.flush()
            await db.refresh(inspiration)
            return InspirationResponse.model_validate(inspiration)

    async def delete(self, inspiration_id: str) -> int:
        """Remove matching rows; returns how many were removed (0 is fine)."""
        async with self._session("delete") as db:
            result = await db.execute(
                delete(Inspiration).where(Inspiration.id == inspiration_id)
            )
            return result.rowcount or 0

    async def get(self, inspiration_id: str) -> Optional[InspirationResponse]:
        async with self._session("get") as db:
            row = await db.get(Inspiration, inspiration_id)
            return InspirationResponse.model_validate(row) if row else None

    async def distinct_categories(self) -> List[str]:
        async with self._session("list categories") as db:
            result = await db.execute(select(distinct(Inspiration.category)))
            return [value for value in result.scalars().all() if value]
