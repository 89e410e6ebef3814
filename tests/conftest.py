"""Shared fixtures: a throwaway SQLite capsule per test."""

import random
from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from capsule.core.database import DatabaseSessionManager
from capsule.schemas.inspirationSchema import InspirationResponse
from capsule.services.InspirationService import InspirationService
from capsule.services.InspirationStore import InspirationStore


@pytest.fixture
async def session_manager(tmp_path):
    """Initialized session manager on a temp-file SQLite database."""
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'capsule.db'}", echo=False)
    await manager.init()
    yield manager
    await manager.close()


@pytest.fixture
def store(session_manager):
    return InspirationStore(session_manager)


@pytest.fixture
def service(store):
    return InspirationService(store, rng=random.Random(1234), search_limit=20, draw_retries=1)


def make_inspiration(index: int, category: str = "Quote") -> InspirationResponse:
    return InspirationResponse(
        id=f"insp-{index}",
        content=f"inspiration {index}",
        category=category,
        created_at=datetime(2026, 1, 1, 12, 0, index),
    )


@pytest.fixture
def mock_store():
    """Store double whose methods are AsyncMocks."""
    fake = AsyncMock(spec=InspirationStore)
    fake.count.return_value = 0
    fake.read_at.return_value = None
    fake.search.return_value = []
    fake.delete.return_value = 0
    fake.distinct_categories.return_value = []
    return fake
