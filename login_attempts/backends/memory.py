from __future__ import annotations

from uuid import UUID

from login_attempts.backends.base import AttemptFilter
from login_attempts.models.attempt import Attempt


class InMemoryAttemptBackend:
    """Process-local attempt storage for tests and single-process deployments."""

    def __init__(self) -> None:
        self._attempts: dict[UUID, Attempt] = {}

    async def insert(self, attempt: Attempt) -> None:
        self._attempts[attempt.id] = attempt

    async def count(self, criteria: AttemptFilter) -> int:
        return sum(1 for attempt in self._attempts.values() if criteria.matches(attempt))

    async def delete(self, criteria: AttemptFilter) -> int:
        doomed = [key for key, attempt in self._attempts.items() if criteria.matches(attempt)]
        for key in doomed:
            del self._attempts[key]
        return len(doomed)

    def __len__(self) -> int:
        return len(self._attempts)
