"""Calendar rollup: per-day aggregates and month/week grid view models.

The calendar shows all closed activity regardless of any analytics
scope filter.  Days are keyed by the UTC date the trade closed (its
``closed_at`` when recorded, otherwise ``created_at``).

Usage::

    by_day = aggregate_trades_by_day(trades)
    grid = get_month_calendar_grid(2024, 5, by_day)
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from trade_analytics.core.clock import IClock, WallClock, date_key
from trade_analytics.core.models import Trade

from .outcome import realize, risk_amount
from .scope import completed_trades

GRID_CELLS = 42  # 6 weeks x 7 days

# Sunday-first weeks
_CALENDAR = calendar.Calendar(firstweekday=calendar.SUNDAY)


@dataclass
class DayAggregates:
    """Totals for the trades closed on one UTC day."""

    date: str  # YYYY-MM-DD
    trades: list[Trade] = field(default_factory=list)
    total_pl_dollar: float = 0.0
    total_pl_percent: float = 0.0
    net_r: float = 0.0

    @property
    def trade_count(self) -> int:
        return len(self.trades)

    def record(self, trade: Trade) -> None:
        outcome = realize(trade)
        self.trades.append(trade)
        self.total_pl_dollar += outcome.pl
        self.total_pl_percent += percent_pl(trade, outcome.pl)
        self.net_r += outcome.rr

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "trade_ids": [t.id for t in self.trades],
            "total_pl_dollar": round(self.total_pl_dollar, 2),
            "total_pl_percent": round(self.total_pl_percent, 2),
            "net_r": round(self.net_r, 4),
            "trade_count": self.trade_count,
        }


@dataclass(frozen=True)
class CalendarDay:
    date: str
    day_of_month: int
    is_current_month: bool
    aggregates: DayAggregates | None = None

    @property
    def is_clickable(self) -> bool:
        """Only days of the displayed month open a drilldown."""
        return self.is_current_month

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "day_of_month": self.day_of_month,
            "is_current_month": self.is_current_month,
            "is_clickable": self.is_clickable,
            "aggregates": self.aggregates.to_dict() if self.aggregates else None,
        }


def percent_pl(trade: Trade, pl: float) -> float:
    """P/L as a percentage of initial risk; 0.0 when there is no risk basis."""
    risk = risk_amount(trade)
    return pl / risk * 100 if risk > 0 else 0.0


def aggregate_trades_by_day(trades: Iterable[Trade]) -> dict[str, DayAggregates]:
    """Roll completed trades up by close date.  Keys are in first-seen order."""
    days: dict[str, DayAggregates] = {}
    for trade in completed_trades(trades):
        key = date_key(trade.close_timestamp)
        if key not in days:
            days[key] = DayAggregates(date=key)
        days[key].record(trade)
    return days


def get_month_calendar_grid(
    year: int,
    month: int,
    aggregates: Mapping[str, DayAggregates],
) -> list[CalendarDay]:
    """Six Sunday-first weeks covering ``month`` (1-12).

    Leading and trailing days from the adjacent months fill the grid and
    are flagged ``is_current_month=False``.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be 1-12, got {month}")

    dates = list(_CALENDAR.itermonthdates(year, month))
    while len(dates) < GRID_CELLS:
        dates.append(dates[-1] + timedelta(days=1))

    return [
        CalendarDay(
            date=date_key(d),
            day_of_month=d.day,
            is_current_month=d.month == month,
            aggregates=aggregates.get(date_key(d)),
        )
        for d in dates
    ]


def get_week_days(
    aggregates: Mapping[str, DayAggregates],
    clock: IClock | None = None,
) -> list[CalendarDay]:
    """The current Sunday-to-Saturday week."""
    today = (clock or WallClock()).now().date()
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    days = [start + timedelta(days=i) for i in range(7)]
    return [
        CalendarDay(
            date=date_key(d),
            day_of_month=d.day,
            is_current_month=True,
            aggregates=aggregates.get(date_key(d)),
        )
        for d in days
    ]
