"""Billing period arithmetic."""

import calendar
from datetime import datetime, timezone
from typing import Optional

YEARLY_INTERVAL = "year"


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes (SQLite hands them back without tzinfo)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def add_months(value: datetime, months: int) -> datetime:
    """
    Add calendar months, clamping the day to the end of the target month.

    Jan 31 + 1 month is Feb 28 (or 29), never a date in March.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def add_years(value: datetime, years: int) -> datetime:
    """Add calendar years; Feb 29 falls back to Feb 28 in non-leap years."""
    return add_months(value, years * 12)


def period_end_for_interval(start: datetime, interval: Optional[str]) -> datetime:
    """One year after ``start`` for yearly billing, one month otherwise."""
    if interval == YEARLY_INTERVAL:
        return add_years(start, 1)
    return add_months(start, 1)
