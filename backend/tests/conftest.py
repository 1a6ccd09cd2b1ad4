"""Shared fixtures: a throwaway SQLite database, workers and a recording notifier.

Settings are read at import time, so the environment is prepared before any
``los`` module is imported.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SCHEDULER_ENABLED", "false")
os.environ.setdefault("SEED_SAMPLE_DATA", "false")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from factories import RecordingNotificationService
from los.db.base import Base
from los.db.session import build_session_factory
from los.models import domain  # noqa: F401
from los.services.notifications import NotificationDispatcher
from los.services.worker_pool import BoundedWorkerPool

# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """File-backed SQLite engine with all tables created."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'los.db'}",
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return build_session_factory(db_engine)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# Background workers
# ---------------------------------------------------------------------------


@pytest.fixture
def notification_service():
    return RecordingNotificationService()


@pytest_asyncio.fixture
async def dispatcher(notification_service):
    dispatcher = NotificationDispatcher(notification_service, workers=1, queue_capacity=100)
    await dispatcher.start()
    yield dispatcher
    await dispatcher.shutdown(timeout=5)


@pytest_asyncio.fixture
async def pool():
    # One worker keeps SQLite writes serialized.
    async with BoundedWorkerPool(name="test-processing", workers=1, queue_capacity=10) as pool:
        yield pool
