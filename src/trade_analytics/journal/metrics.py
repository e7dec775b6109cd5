"""Aggregate performance metrics over a trade set.

Usage::

    m = compute_metrics(trades)
    print(m.win_rate, m.profit_factor)
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from typing import Any

from trade_analytics.core.models import Trade

from .outcome import realize
from .scope import completed_trades


@dataclass(frozen=True)
class PerformanceMetrics:
    """Scalar aggregates for one set of completed trades.

    ``win_rate`` is a percentage.  ``avg_win`` / ``avg_loss`` are means
    over winners / losers only; ``avg_loss`` is reported as a positive
    magnitude.
    """

    total_trades: int = 0
    total_wins: int = 0
    total_losses: int = 0
    win_rate: float = 0.0
    total_pl: float = 0.0
    avg_pl: float = 0.0
    avg_r: float = 0.0
    profit_factor: float = 0.0
    avg_win: float = 0.0
    avg_loss: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        # JSON has no infinity
        if math.isinf(self.profit_factor):
            data["profit_factor"] = None
        return data


def compute_metrics(trades: Iterable[Trade]) -> PerformanceMetrics:
    """Reduce a trade set to performance metrics.

    Incomplete trades are ignored, so callers may pass unfiltered input.
    A trade with zero P/L counts towards ``total_trades`` only.
    """
    outcomes = [realize(t) for t in completed_trades(trades)]
    total = len(outcomes)
    if total == 0:
        return PerformanceMetrics()

    wins = [o.pl for o in outcomes if o.is_winner]
    losses = [o.pl for o in outcomes if o.is_loser]

    total_pl = sum(o.pl for o in outcomes)
    total_r = sum(o.rr for o in outcomes)
    gross_profit = sum(wins)
    gross_loss = abs(sum(losses))

    if gross_loss > 0:
        profit_factor = gross_profit / gross_loss
    else:
        profit_factor = math.inf if gross_profit > 0 else 0.0

    return PerformanceMetrics(
        total_trades=total,
        total_wins=len(wins),
        total_losses=len(losses),
        win_rate=len(wins) / total * 100,
        total_pl=total_pl,
        avg_pl=total_pl / total,
        avg_r=total_r / total,
        profit_factor=profit_factor,
        avg_win=gross_profit / len(wins) if wins else 0.0,
        avg_loss=gross_loss / len(losses) if losses else 0.0,
    )
