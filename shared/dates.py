"""
dates.py – UTC-fixed calendar-day helpers
========================================

Day buckets never depend on the server's local zone: a trade at
23:59 UTC and one at 00:01 UTC land in different buckets everywhere.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

DAY_FMT = "%Y-%m-%d"


def now_utc() -> datetime:
    return datetime.now(tz=timezone.utc)


def utc_day(instant: Optional[datetime] = None) -> date:
    """Calendar date of `instant` in UTC (naive datetimes are taken as UTC)."""
    if instant is None:
        instant = now_utc()
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc).date()


def day_str(day: date) -> str:
    """`YYYY-MM-DD`."""
    return day.strftime(DAY_FMT)


def day_for_offset(today: date, offset: int) -> str:
    """Date string `offset` days before `today`."""
    return day_str(today - timedelta(days=offset))


def last_days(today: date, days: int) -> List[str]:
    """Newest first: offset 0 (today) … days-1."""
    return [day_for_offset(today, i) for i in range(days)]


def iso_utc(instant: datetime) -> str:
    """ISO-8601 with a trailing Z, millisecond precision."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    instant = instant.astimezone(timezone.utc)
    return instant.isoformat(timespec="milliseconds").replace("+00:00", "Z")
