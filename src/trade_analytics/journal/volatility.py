"""Volatility-regime breakdown.

Volatility proxy: the stop-loss distance as a fraction of the entry
price, ``|entry - primary_stop| / entry``.  Wider stops imply a more
volatile market at entry.

Bucketing policy: empirical terciles of the current trade set.  The
proxies of the completed trades are sorted and the cut points are the
values at ``floor(n * 0.33)`` and ``floor(n * 0.66)``.  A proxy below the
lower cut is Low, below the upper cut is Medium, anything else is High.
Buckets are therefore relative to the trader's own history, not to an
absolute percentage scale.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable

from trade_analytics.core.enums import VolatilityBucket
from trade_analytics.core.models import Trade

from .grouping import CategoryGroup, group_trades
from .scope import completed_trades

BUCKET_ORDER = [VolatilityBucket.LOW, VolatilityBucket.MEDIUM, VolatilityBucket.HIGH]

LOW_PERCENTILE = 0.33
HIGH_PERCENTILE = 0.66


def volatility_proxy(trade: Trade) -> float:
    """Stop distance relative to entry; 0.0 when the entry price is 0."""
    entry = trade.bracket_order.entry_price
    if entry == 0:
        return 0.0
    return trade.bracket_order.stop_distance / abs(entry)


def volatility_thresholds(trades: Iterable[Trade]) -> tuple[float, float] | None:
    """Lower/upper cut points for the completed trades, or None if there are none."""
    proxies = sorted(volatility_proxy(t) for t in completed_trades(trades))
    if not proxies:
        return None
    n = len(proxies)
    return (
        proxies[math.floor(n * LOW_PERCENTILE)],
        proxies[math.floor(n * HIGH_PERCENTILE)],
    )


def classify_volatility(proxy: float, thresholds: tuple[float, float]) -> VolatilityBucket:
    low, high = thresholds
    if proxy < low:
        return VolatilityBucket.LOW
    if proxy < high:
        return VolatilityBucket.MEDIUM
    return VolatilityBucket.HIGH


def volatility_classifier(trades: Iterable[Trade]) -> Callable[[Trade], VolatilityBucket]:
    """Classifier bound to the cut points of ``trades``."""
    thresholds = volatility_thresholds(trades) or (0.0, 0.0)
    return lambda trade: classify_volatility(volatility_proxy(trade), thresholds)


def compute_volatility_metrics(
    trades: Iterable[Trade],
) -> list[CategoryGroup[VolatilityBucket]]:
    trades = list(trades)
    return group_trades(trades, volatility_classifier(trades), order=BUCKET_ORDER)
