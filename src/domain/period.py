from __future__ import annotations

from datetime import datetime, timedelta
from enum import StrEnum
from typing import Callable


class Period(StrEnum):
    DAY = "DAY"
    MONTH = "MONTH"
    QUARTER = "QUARTER"
    YEAR = "YEAR"


def _midnight(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _day_start(now: datetime) -> datetime:
    # The day period spans all of yesterday plus today so far.
    return _midnight(now - timedelta(days=1))


def _month_start(now: datetime) -> datetime:
    return _midnight(now.replace(day=1))


def _quarter_start(now: datetime) -> datetime:
    first_month = (now.month - 1) // 3 * 3 + 1
    return _midnight(now.replace(month=first_month, day=1))


def _year_start(now: datetime) -> datetime:
    return _midnight(now.replace(month=1, day=1))


_PERIOD_STARTS: dict[Period, Callable[[datetime], datetime]] = {
    Period.DAY: _day_start,
    Period.MONTH: _month_start,
    Period.QUARTER: _quarter_start,
    Period.YEAR: _year_start,
}


def period_start(period: Period, now: datetime) -> datetime:
    """Return the first instant of `period` relative to `now`, keeping `now`'s timezone."""
    return _PERIOD_STARTS[period](now)


def parse_period(value: str) -> Period:
    """Case-insensitive lookup; raises ValueError for unknown periods."""
    try:
        return Period(value.strip().upper())
    except ValueError as err:
        raise ValueError(f"Unknown period: {value!r}") from err
