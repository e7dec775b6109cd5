"""Hour-of-day and day-of-week performance buckets (UTC).

All 24 hours and all 7 weekdays are always present so charts keep a
stable axis; weekdays run Sunday-first.
"""

from __future__ import annotations

from collections.abc import Iterable

from trade_analytics.core.clock import utc_hour, utc_weekday
from trade_analytics.core.enums import WEEKDAY_NAMES
from trade_analytics.core.models import Trade

from .grouping import CategoryGroup, group_trades

HOURS = list(range(24))


def trade_hour(trade: Trade) -> int:
    return utc_hour(trade.created_at)


def trade_weekday(trade: Trade) -> str:
    return WEEKDAY_NAMES[utc_weekday(trade.created_at)]


def compute_hour_buckets(trades: Iterable[Trade]) -> list[CategoryGroup[int]]:
    return group_trades(trades, trade_hour, order=HOURS)


def compute_weekday_buckets(trades: Iterable[Trade]) -> list[CategoryGroup[str]]:
    return group_trades(trades, trade_weekday, order=WEEKDAY_NAMES)


def hour_label(hour: int) -> str:
    """Display label for an hour bucket, e.g. ``"9:00"``."""
    return f"{hour}:00"
