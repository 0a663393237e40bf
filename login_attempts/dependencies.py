from __future__ import annotations

from login_attempts.backends.sql import SQLAlchemyAttemptBackend
from login_attempts.config import settings
from login_attempts.database import async_session_factory
from login_attempts.services.attempt_store import AttemptStore

_store = AttemptStore(
    SQLAlchemyAttemptBackend(async_session_factory),
    purge_expired_on_check=settings.attempts_purge_expired_on_check,
)


async def get_attempt_store() -> AttemptStore:
    """Provide the shared, database-backed attempt store."""
    return _store
