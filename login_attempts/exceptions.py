from __future__ import annotations


class AttemptError(Exception):
    """Base class for errors raised by the attempt store."""


class ValidationError(AttemptError, ValueError):
    """Rejected input: bad address, action, duration or limit."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class StoreError(AttemptError):
    """The backing store failed or is unavailable."""
