from __future__ import annotations

from login_attempts.backends.base import AttemptBackend, AttemptFilter
from login_attempts.backends.memory import InMemoryAttemptBackend
from login_attempts.backends.sql import SQLAlchemyAttemptBackend

__all__ = [
    "AttemptBackend",
    "AttemptFilter",
    "InMemoryAttemptBackend",
    "SQLAlchemyAttemptBackend",
]
