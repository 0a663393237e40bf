from __future__ import annotations

import logging
from datetime import datetime
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from login_attempts.backends.base import AttemptBackend, AttemptFilter
from login_attempts.exceptions import ValidationError
from login_attempts.models.attempt import Attempt
from login_attempts.schemas.attempt import AttemptKey
from login_attempts.utils.date_utils import Clock, Duration, ensure_utc, expiry_from, utc_now

logger = logging.getLogger(__name__)


def validate_key(address: str, action: str) -> AttemptKey:
    """Validate an (address, action) pair, raising ValidationError on bad input."""
    try:
        return AttemptKey(address=address, action=action)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error.get("loc") else "address"
        raise ValidationError(field, f"Invalid {field}: {error['msg']}") from e


class AttemptStore:
    """Records failed login attempts per (address, action) and enforces a limit.

    Expired rows are ignored by the limit check whether or not they have been
    physically removed. Removal is ``cleanup``'s job; set
    ``purge_expired_on_check`` to run it before every check instead of from a
    periodic job.
    """

    def __init__(
        self,
        backend: AttemptBackend,
        clock: Clock = utc_now,
        purge_expired_on_check: bool = False,
    ) -> None:
        self.backend = backend
        self.clock = clock
        self.purge_expired_on_check = purge_expired_on_check

    def now(self) -> datetime:
        return ensure_utc(self.clock())

    async def record_failure(self, address: str, action: str, duration: Duration) -> Attempt:
        """Record one failed attempt that counts until ``now + duration``."""
        key = validate_key(address, action)
        now = self.now()
        expires_at = expiry_from(now, duration)
        attempt = Attempt(
            id=uuid4(),
            address=key.normalized_address,
            action=key.action,
            expires_at=expires_at,
            created_at=now,
        )
        await self.backend.insert(attempt)
        logger.debug(
            "Recorded failed attempt for %s/%s, expires %s",
            key.normalized_address, key.action, expires_at.isoformat(),
        )
        return attempt

    async def count_active(self, address: str, action: str) -> int:
        """Number of unexpired attempts recorded for the pair."""
        return await self._count_active(validate_key(address, action))

    async def _count_active(self, key: AttemptKey) -> int:
        if self.purge_expired_on_check:
            await self.cleanup()
        return await self.backend.count(
            AttemptFilter(
                address=key.normalized_address,
                action=key.action,
                expires_from=self.now(),
            )
        )

    async def is_under_limit(self, address: str, action: str, limit: int) -> bool:
        """True while fewer than ``limit`` unexpired attempts are recorded."""
        _validate_limit(limit)
        key = validate_key(address, action)
        count = await self._count_active(key)
        if count >= limit:
            logger.warning(
                "Attempt limit reached for %s/%s (%d >= %d)",
                key.normalized_address, key.action, count, limit,
            )
            return False
        return True

    async def remaining(self, address: str, action: str, limit: int) -> int:
        _validate_limit(limit)
        return max(limit - await self.count_active(address, action), 0)

    async def reset(self, address: str, action: str) -> int:
        """Delete every attempt for the pair, typically after a successful login."""
        key = validate_key(address, action)
        deleted = await self.backend.delete(
            AttemptFilter(address=key.normalized_address, action=key.action)
        )
        if deleted:
            logger.info("Reset %d attempts for %s/%s", deleted, key.normalized_address, key.action)
        return deleted

    async def cleanup(self) -> int:
        """Delete attempts that expired before now."""
        deleted = await self.backend.delete(AttemptFilter(expires_before=self.now()))
        if deleted:
            logger.info("Cleaned up %d expired attempts", deleted)
        return deleted


def _validate_limit(limit: int) -> None:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValidationError("limit", f"Invalid limit: {limit!r}")
