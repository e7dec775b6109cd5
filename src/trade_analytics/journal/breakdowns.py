"""Direction, model and monthly breakdowns.

Thin instantiations of the grouping engine used by the analytics report
alongside the session/volatility/bias dimensions.
"""

from __future__ import annotations

from collections.abc import Iterable

from trade_analytics.core.clock import month_key
from trade_analytics.core.enums import Direction
from trade_analytics.core.models import Model, Trade

from .grouping import CategoryGroup, group_trades

DIRECTION_ORDER = [Direction.LONG, Direction.SHORT]


def compute_direction_metrics(trades: Iterable[Trade]) -> list[CategoryGroup[Direction]]:
    return group_trades(trades, lambda t: t.direction, order=DIRECTION_ORDER)


def compute_model_comparison(
    trades: Iterable[Trade],
    models: Iterable[Model],
) -> list[CategoryGroup[str]]:
    """Per-model performance, in model order, for models that have trades."""
    models = list(models)
    known = {m.id for m in models}
    return group_trades(
        trades,
        lambda t: t.model_id if t.model_id in known else None,
        order=[m.id for m in models],
        include_empty=False,
    )


def compute_monthly_performance(trades: Iterable[Trade]) -> list[CategoryGroup[str]]:
    """Per calendar month (``YYYY-MM``, UTC), oldest first."""
    groups = group_trades(trades, lambda t: month_key(t.created_at))
    return sorted(groups, key=lambda g: g.category)
