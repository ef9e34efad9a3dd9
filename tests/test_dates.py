"""Tests for day keys."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfoNotFoundError

import pytest

from fitness_tracker.services.dates import DayClock


def test_today_uses_configured_timezone() -> None:
    instant = datetime(2024, 5, 6, 23, 30, tzinfo=UTC)

    utc_clock = DayClock(timezone_name="UTC", now=lambda: instant)
    tokyo_clock = DayClock(timezone_name="Asia/Tokyo", now=lambda: instant)

    assert utc_clock.today() == "2024-05-06"
    assert tokyo_clock.today() == "2024-05-07"


def test_weekday_name() -> None:
    clock = DayClock(now=lambda: datetime(2024, 5, 12, 8, 0, tzinfo=UTC))

    assert clock.weekday() == "Sunday"


def test_default_clock_returns_iso_date() -> None:
    key = DayClock().today()

    assert len(key) == 10
    assert key[4] == "-"
    assert key[7] == "-"


def test_unknown_timezone_fails_at_construction() -> None:
    with pytest.raises(ZoneInfoNotFoundError):
        DayClock(timezone_name="Mars/Olympus_Mons")
