from __future__ import annotations

import math
import re
from datetime import datetime, timedelta, timezone
from typing import Callable, Union

from dateutil.relativedelta import relativedelta

from login_attempts.exceptions import ValidationError

Clock = Callable[[], datetime]
Duration = Union[timedelta, relativedelta, int, float, str]

_DURATION_RE = re.compile(r"^\+?\s*(\d+)\s*([a-z]+)$")

_UNITS = {
    "second": "seconds",
    "sec": "seconds",
    "minute": "minutes",
    "min": "minutes",
    "hour": "hours",
    "day": "days",
    "week": "weeks",
    "month": "months",
    "year": "years",
}


def utc_now() -> datetime:
    """Default clock: the current time in UTC."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_duration(value: Duration) -> timedelta | relativedelta:
    """Turn a duration value into something that can be added to a datetime.

    Accepts a timedelta, a relativedelta, a number of seconds, or a relative
    string such as ``"+5 minutes"``, ``"1 hour"`` or ``"2 weeks"``.
    """
    if isinstance(value, bool):
        raise ValidationError("duration", f"Unsupported duration: {value!r}")
    if isinstance(value, (timedelta, relativedelta)):
        return value
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise ValidationError("duration", f"Invalid duration: {value!r}")
        try:
            return timedelta(seconds=value)
        except (OverflowError, ValueError) as e:
            raise ValidationError("duration", f"Duration out of range: {value!r}") from e
    if isinstance(value, str):
        match = _DURATION_RE.match(value.strip().lower())
        if match:
            amount, unit = match.groups()
            unit = unit[:-1] if unit.endswith("s") and unit[:-1] in _UNITS else unit
            if unit in _UNITS:
                return relativedelta(**{_UNITS[unit]: int(amount)})
        raise ValidationError("duration", f"Invalid duration: {value!r}")
    raise ValidationError("duration", f"Unsupported duration: {value!r}")


def expiry_from(now: datetime, duration: Duration) -> datetime:
    """Compute ``now + duration``, rejecting durations that do not move forward."""
    delta = parse_duration(duration)
    try:
        expires_at = now + delta
    except (OverflowError, ValueError) as e:
        raise ValidationError("duration", f"Duration out of range: {duration!r}") from e
    if expires_at <= now:
        raise ValidationError("duration", "Duration must be positive")
    return expires_at
