from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol

from login_attempts.models.attempt import Attempt


@dataclass(frozen=True)
class AttemptFilter:
    """Equality and expiry-range conditions; unset fields match everything."""

    address: Optional[str] = None
    action: Optional[str] = None
    expires_from: Optional[datetime] = None
    expires_before: Optional[datetime] = None

    def matches(self, attempt: Attempt) -> bool:
        if self.address is not None and attempt.address != self.address:
            return False
        if self.action is not None and attempt.action != self.action:
            return False
        if self.expires_from is not None and attempt.expires_at < self.expires_from:
            return False
        if self.expires_before is not None and attempt.expires_at >= self.expires_before:
            return False
        return True


class AttemptBackend(Protocol):
    """Storage used by AttemptStore. Each call is a single insert, count or delete."""

    async def insert(self, attempt: Attempt) -> None:
        ...

    async def count(self, criteria: AttemptFilter) -> int:
        ...

    async def delete(self, criteria: AttemptFilter) -> int:
        ...
