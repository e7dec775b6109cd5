"""Per-bracket-level hit rates.

Each completed trade's per-level outcome records are grouped by their
position (level 0 is the first take-profit level, and so on).  For each
level: how often it closed at take-profit vs stop-loss, and the average
R realized by that level alone (price move over the primary stop
distance, direction adjusted).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass
from typing import Any

from trade_analytics.core.enums import ClosureType
from trade_analytics.core.models import BracketLevelOutcome, Trade

from .grouping import partition
from .scope import completed_trades


@dataclass(frozen=True)
class BracketLevelMetrics:
    bracket_index: int
    total_trades: int
    tp_hit_rate: float  # percent
    sl_hit_rate: float  # percent
    avg_realized_r: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class _LevelFill:
    index: int
    trade: Trade
    outcome: BracketLevelOutcome


def level_realized_r(trade: Trade, outcome: BracketLevelOutcome) -> float:
    entry = outcome.execution_price
    if entry is None:
        entry = trade.bracket_order.entry_price
    if trade.is_long:
        price_diff = outcome.closure_price - entry
    else:
        price_diff = entry - outcome.closure_price
    stop_distance = trade.bracket_order.stop_distance
    return price_diff / stop_distance if stop_distance > 0 else 0.0


def _level_fills(trades: Iterable[Trade]) -> list[_LevelFill]:
    return [
        _LevelFill(index=i, trade=trade, outcome=outcome)
        for trade in completed_trades(trades)
        for i, outcome in enumerate(trade.bracket_order_outcomes)
    ]


def compute_bracket_metrics(trades: Iterable[Trade]) -> list[BracketLevelMetrics]:
    """Metrics per bracket level, ordered by level index.

    Levels no trade reached are absent; trades without per-level records
    contribute nothing.
    """
    levels = partition(_level_fills(trades), lambda fill: fill.index)

    metrics: list[BracketLevelMetrics] = []
    for index in sorted(levels):
        fills = levels[index]
        count = len(fills)
        tp = sum(1 for f in fills if f.outcome.closure_type == ClosureType.TAKE_PROFIT)
        sl = sum(1 for f in fills if f.outcome.closure_type == ClosureType.STOP_LOSS)
        total_r = sum(level_realized_r(f.trade, f.outcome) for f in fills)
        metrics.append(BracketLevelMetrics(
            bracket_index=index,
            total_trades=count,
            tp_hit_rate=tp / count * 100,
            sl_hit_rate=sl / count * 100,
            avg_realized_r=total_r / count,
        ))
    return metrics
