from __future__ import annotations

from login_attempts.exceptions import AttemptError, StoreError, ValidationError
from login_attempts.services.attempt_store import AttemptStore

__all__ = [
    "AttemptError",
    "AttemptStore",
    "StoreError",
    "ValidationError",
]
