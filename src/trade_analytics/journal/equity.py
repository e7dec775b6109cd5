"""Equity curves and peak-to-trough drawdown.

Two curve variants:

- ``compute_equity_curve``: relative curve starting at 0, one point per
  completed trade, keyed by 1-based index.
- ``compute_balance_curve``: account-balance curve seeded at an initial
  balance, keyed by UTC date string.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass
from typing import Any, Protocol

from trade_analytics.core.clock import date_key
from trade_analytics.core.models import Trade

from .outcome import trade_pl
from .scope import completed_trades


@dataclass(frozen=True)
class EquityPoint:
    index: int  # 1-based
    equity: float
    date: str  # YYYY-MM-DD, UTC

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BalancePoint:
    date: str
    equity: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class _HasEquity(Protocol):
    @property
    def equity(self) -> float: ...


def chronological(trades: Iterable[Trade]) -> list[Trade]:
    """Completed trades ordered by ``created_at``; ties keep input order."""
    return sorted(completed_trades(trades), key=lambda t: t.created_at)


def compute_equity_curve(trades: Iterable[Trade]) -> list[EquityPoint]:
    running = 0.0
    curve: list[EquityPoint] = []
    for index, trade in enumerate(chronological(trades), start=1):
        running += trade_pl(trade)
        curve.append(EquityPoint(index=index, equity=running, date=date_key(trade.created_at)))
    return curve


def compute_balance_curve(
    trades: Iterable[Trade],
    initial_balance: float = 10_000.0,
) -> list[BalancePoint]:
    balance = initial_balance
    curve: list[BalancePoint] = []
    for trade in chronological(trades):
        balance += trade_pl(trade)
        curve.append(BalancePoint(date=date_key(trade.created_at), equity=balance))
    return curve


def compute_max_drawdown(curve: Sequence[_HasEquity]) -> float:
    """Largest decline from a running peak.  Always >= 0; 0 for an empty curve."""
    if not curve:
        return 0.0

    peak = curve[0].equity
    max_drawdown = 0.0
    for point in curve:
        if point.equity > peak:
            peak = point.equity
        drawdown = peak - point.equity
        if drawdown > max_drawdown:
            max_drawdown = drawdown
    return max_drawdown
