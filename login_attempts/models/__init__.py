from __future__ import annotations

from login_attempts.models.attempt import Attempt

__all__ = [
    "Attempt",
]
