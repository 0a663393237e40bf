import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from login_attempts.config import settings
from login_attempts.dependencies import get_attempt_store
from login_attempts.exceptions import StoreError, ValidationError
from login_attempts.services.attempt_store import AttemptStore
from login_attempts.utils.date_utils import Duration

logger = logging.getLogger(__name__)


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class ThrottleGuard:
    """Per-request handle returned by LoginThrottle for reporting the login outcome."""

    def __init__(self, throttle: "LoginThrottle", store: AttemptStore, address: str) -> None:
        self.throttle = throttle
        self.store = store
        self.address = address

    async def fail(self) -> None:
        """Record a failed login. Never raises; the login keeps its own error path."""
        try:
            await self.store.record_failure(self.address, self.throttle.action, self.throttle.duration)
        except ValidationError as e:
            logger.warning("Not recording failed %s from %s: %s", self.throttle.action, self.address, e)
        except StoreError:
            logger.exception("Failed to record failed %s from %s", self.throttle.action, self.address)

    async def succeed(self) -> None:
        """Clear recorded failures after a successful login."""
        try:
            await self.store.reset(self.address, self.throttle.action)
        except ValidationError as e:
            logger.warning("Not resetting %s for %s: %s", self.throttle.action, self.address, e)
        except StoreError:
            logger.exception("Failed to reset %s attempts for %s", self.throttle.action, self.address)


class LoginThrottle:
    """FastAPI dependency that rejects callers over the failure limit.

    Usage::

        login_throttle = LoginThrottle("login")

        @router.post("/login")
        async def login(body: LoginRequest, guard: ThrottleGuard = Depends(login_throttle)):
            ...
            await guard.fail()     # bad credentials
            await guard.succeed()  # authenticated

    When the store is unavailable the check fails closed (503) unless
    ``fail_closed`` is False, in which case the request is let through.
    """

    def __init__(
        self,
        action: str,
        limit: Optional[int] = None,
        duration: Optional[Duration] = None,
        fail_closed: Optional[bool] = None,
    ) -> None:
        self.action = action
        self.limit = limit if limit is not None else settings.attempts_default_limit
        self.duration = duration if duration is not None else settings.attempts_default_duration
        self.fail_closed = settings.attempts_fail_closed if fail_closed is None else fail_closed

    async def __call__(
        self,
        request: Request,
        store: AttemptStore = Depends(get_attempt_store),
    ) -> ThrottleGuard:
        address = client_address(request)
        try:
            allowed = await store.is_under_limit(address, self.action, self.limit)
        except ValidationError as e:
            logger.warning("Cannot throttle %s from %s: %s", self.action, address, e)
            allowed = True
        except StoreError:
            if self.fail_closed:
                raise HTTPException(
                    status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                    detail="Login is temporarily unavailable. Please try again later.",
                )
            logger.warning("Attempt store unavailable, letting %s from %s through", self.action, address)
            allowed = True

        if not allowed:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Too many failed attempts. Please try again later.",
            )
        return ThrottleGuard(self, store, address)
