from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from login_attempts.backends.memory import InMemoryAttemptBackend
from login_attempts.backends.sql import SQLAlchemyAttemptBackend
from login_attempts.dependencies import get_attempt_store
from login_attempts.exceptions import StoreError
from login_attempts.main import app as fastapi_app
from login_attempts.models.base import Base
from login_attempts.services.attempt_store import AttemptStore

# Import all models so metadata is populated
import login_attempts.models  # noqa: F401

START = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Settable clock; call it for the current time, advance it to move forward."""

    def __init__(self, now: datetime = START) -> None:
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Provide a session factory over an in-memory SQLite database with tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture(params=["memory", "sqlalchemy"])
def backend(request, session_factory):
    """Run store tests against both the in-memory and the SQLAlchemy backend."""
    if request.param == "memory":
        return InMemoryAttemptBackend()
    return SQLAlchemyAttemptBackend(session_factory)


@pytest.fixture
def store(backend, clock: FakeClock) -> AttemptStore:
    return AttemptStore(backend, clock=clock)


@pytest_asyncio.fixture
async def client(store: AttemptStore) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP test client wired to the test store."""

    async def override_get_attempt_store():
        return store

    fastapi_app.dependency_overrides[get_attempt_store] = override_get_attempt_store
    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    fastapi_app.dependency_overrides.clear()


async def record_failures(
    store: AttemptStore,
    count: int,
    address: str = "203.0.113.5",
    action: str = "login",
    duration: str = "+5 minutes",
) -> None:
    """Record ``count`` failures for the same address and action."""
    for _ in range(count):
        await store.record_failure(address, action, duration)


class BrokenBackend:
    """Backend whose every call fails the way an unreachable database would."""

    async def insert(self, attempt):
        raise StoreError("Failed to record attempt")

    async def count(self, criteria):
        raise StoreError("Failed to count attempts")

    async def delete(self, criteria):
        raise StoreError("Failed to delete attempts")
