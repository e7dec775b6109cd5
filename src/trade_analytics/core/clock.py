"""Clock abstraction and timestamp helpers.

Trade timestamps arrive as integer nanoseconds since the epoch (UTC).
All conversions go through this module so every analytic derives hours,
weekdays and date keys the same way.

WallClock: real wall-clock time
FixedClock: pinned time, for tests and reproducible reports
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Protocol

_NS_PER_SECOND = 1_000_000_000


class IClock(Protocol):
    """Clock interface used by time-dependent views (e.g. the current week)."""

    def now(self) -> datetime:
        """Current time as timezone-aware UTC datetime."""
        ...


class WallClock:
    """Real wall-clock time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock pinned to a single instant."""

    def __init__(self, at: datetime | None = None) -> None:
        self._time = at or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._time


def ns_to_datetime(timestamp_ns: int) -> datetime:
    """Convert a nanosecond epoch timestamp to an aware UTC datetime."""
    seconds, remainder = divmod(int(timestamp_ns), _NS_PER_SECOND)
    dt = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return dt.replace(microsecond=remainder // 1000)


def datetime_to_ns(dt: datetime) -> int:
    """Convert a datetime to nanoseconds since epoch.  Naive means UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = dt - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return (delta.days * 86_400 + delta.seconds) * _NS_PER_SECOND + delta.microseconds * 1000


def utc_hour(timestamp_ns: int) -> int:
    return ns_to_datetime(timestamp_ns).hour


def utc_weekday(timestamp_ns: int) -> int:
    """Day of week, 0=Sunday .. 6=Saturday."""
    return (ns_to_datetime(timestamp_ns).weekday() + 1) % 7


def date_key(value: int | date) -> str:
    """``YYYY-MM-DD`` key for a nanosecond timestamp or a date."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return ns_to_datetime(value).date().isoformat()


def month_key(timestamp_ns: int) -> str:
    """``YYYY-MM`` key for a nanosecond timestamp."""
    return date_key(timestamp_ns)[:7]
