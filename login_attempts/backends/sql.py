from __future__ import annotations

import logging

from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from login_attempts.backends.base import AttemptFilter
from login_attempts.exceptions import StoreError
from login_attempts.models.attempt import Attempt

logger = logging.getLogger(__name__)


def _conditions(criteria: AttemptFilter) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = []
    if criteria.address is not None:
        conditions.append(Attempt.address == criteria.address)
    if criteria.action is not None:
        conditions.append(Attempt.action == criteria.action)
    if criteria.expires_from is not None:
        conditions.append(Attempt.expires_at >= criteria.expires_from)
    if criteria.expires_before is not None:
        conditions.append(Attempt.expires_at < criteria.expires_before)
    return conditions


class SQLAlchemyAttemptBackend:
    """Attempt storage on the ``attempts`` table, one session per call."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def insert(self, attempt: Attempt) -> None:
        try:
            async with self._session_factory() as session:
                session.add(attempt)
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.exception("Failed to insert attempt for %s/%s", attempt.address, attempt.action)
            raise StoreError("Failed to record attempt") from e

    async def count(self, criteria: AttemptFilter) -> int:
        stmt = select(func.count()).select_from(Attempt).where(*_conditions(criteria))
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return int(result.scalar_one())
        except (SQLAlchemyError, OSError) as e:
            logger.exception("Failed to count attempts matching %s", criteria)
            raise StoreError("Failed to count attempts") from e

    async def delete(self, criteria: AttemptFilter) -> int:
        stmt = delete(Attempt).where(*_conditions(criteria))
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                await session.commit()
                return result.rowcount or 0
        except (SQLAlchemyError, OSError) as e:
            logger.exception("Failed to delete attempts matching %s", criteria)
            raise StoreError("Failed to delete attempts") from e
