"""Calendar helpers: weekday/day-of-month lookups and date coercion."""
from __future__ import annotations

import calendar
import numbers
from collections.abc import Iterable
from datetime import date, datetime, timedelta, timezone
from typing import Any

import pandas as pd

from paydate.utils.errors import InvalidInstantError

ONE_DAY = timedelta(days=1)

MONDAY = 1
SATURDAY = 6
SUNDAY = 7

DATE_FMT = "%Y-%m-%d"
COMPACT_FMT = "%Y%m%d"


def weekday_of(d: date) -> int:
    """ISO weekday: Monday=1 ... Sunday=7."""
    return d.isoweekday()


def day_of_month(d: date) -> int:
    return d.day


def days_in_month(d: date) -> int:
    """Number of days in the month containing d (28..31)."""
    return calendar.monthrange(d.year, d.month)[1]


def is_weekend(d: date) -> bool:
    return weekday_of(d) in (SATURDAY, SUNDAY)


def to_instant(value: Any) -> date:
    """
    Coerce a date-like value to a calendar date.

    Accepts date, datetime / pandas Timestamp (date part), 'YYYY-MM-DD' or
    'YYYYMMDD' strings, and integer Unix timestamps (UTC calendar day).
    Raises InvalidInstantError for anything else.
    """
    if isinstance(value, bool):
        raise InvalidInstantError(f"Unsupported type for date: {type(value).__name__}")
    if value is pd.NaT:
        raise InvalidInstantError("Missing date value (NaT)")
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, numbers.Integral):
        try:
            return datetime.fromtimestamp(int(value), tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError) as exc:
            raise InvalidInstantError(f"Timestamp out of range: {value}") from exc
    if isinstance(value, str):
        text = value.strip()
        for fmt in (DATE_FMT, COMPACT_FMT):
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
        raise InvalidInstantError(f"Unsupported date string format: {value!r}")
    raise InvalidInstantError(f"Unsupported type for date: {type(value).__name__}")


def to_holiday_set(values: Iterable[Any] | None) -> frozenset[date]:
    """Normalise an iterable of date-likes into a frozenset of dates."""
    if values is None:
        return frozenset()
    return frozenset(to_instant(v) for v in values)
