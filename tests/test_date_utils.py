from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from dateutil.relativedelta import relativedelta

from login_attempts.exceptions import ValidationError
from login_attempts.utils.date_utils import ensure_utc, expiry_from, parse_duration, utc_now


@pytest.mark.parametrize(
    "value,expected",
    [
        ("+5 minutes", relativedelta(minutes=5)),
        ("30 seconds", relativedelta(seconds=30)),
        ("1 hour", relativedelta(hours=1)),
        ("+2 days", relativedelta(days=2)),
        ("1 week", relativedelta(weeks=1)),
        ("+1 month", relativedelta(months=1)),
        ("10 mins", relativedelta(minutes=10)),
        ("  +3 HOURS ", relativedelta(hours=3)),
    ],
)
def test_parse_duration_strings(value, expected):
    assert parse_duration(value) == expected


def test_parse_duration_numbers_are_seconds():
    assert parse_duration(90) == timedelta(seconds=90)
    assert parse_duration(1.5) == timedelta(seconds=1.5)


def test_parse_duration_passes_deltas_through():
    delta = timedelta(minutes=3)
    assert parse_duration(delta) is delta


@pytest.mark.parametrize("value", ["", "five minutes", "5 fortnights", "-5 minutes", None, [5]])
def test_parse_duration_rejects_garbage(value):
    with pytest.raises(ValidationError):
        parse_duration(value)


def test_expiry_from_month_uses_calendar():
    now = datetime(2026, 1, 31, tzinfo=timezone.utc)
    assert expiry_from(now, "+1 month") == datetime(2026, 2, 28, tzinfo=timezone.utc)


def test_expiry_from_rejects_non_positive():
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    with pytest.raises(ValidationError):
        expiry_from(now, 0)


def test_ensure_utc():
    naive = datetime(2026, 1, 1, 12, 0)
    assert ensure_utc(naive) == datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    plus_two = datetime(2026, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    converted = ensure_utc(plus_two)
    assert converted.tzinfo == timezone.utc
    assert converted.hour == 12


def test_utc_now_is_aware():
    assert utc_now().tzinfo is not None
