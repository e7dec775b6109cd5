"""Categorical grouping engine.

One generic shape behind every performance breakdown: partition the
completed trades with a classifier, then reduce each partition with
``compute_metrics``.  Session, volatility, HTF bias, hour, weekday,
direction, model and month breakdowns are all instantiations of
``group_trades``; bracket-level and tool-impact analysis reuse the
partitioning primitives directly.

A classifier maps a trade to a category.  Returning ``None`` leaves the
trade out of that one dimension (e.g. a trade whose model cannot be
resolved has no HTF bias) without affecting any other analytic.

Usage::

    groups = group_trades(trades, trade_session, order=list(Session))
    for g in groups:
        print(g.category, g.metrics.win_rate)
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from trade_analytics.core.models import Trade

from .metrics import PerformanceMetrics, compute_metrics
from .outcome import trade_rr
from .scope import completed_trades

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def partition(
    items: Iterable[T],
    classifier: Callable[[T], K | None],
) -> dict[K, list[T]]:
    """Split items by category, keeping first-seen category order."""
    groups: dict[K, list[T]] = {}
    for item in items:
        key = classifier(item)
        if key is None:
            continue
        groups.setdefault(key, []).append(item)
    return groups


def partition_many(
    items: Iterable[T],
    classifier: Callable[[T], Iterable[K]],
) -> dict[K, list[T]]:
    """Like ``partition`` but an item may belong to several categories.

    Duplicate keys from one item count that item once.
    """
    groups: dict[K, list[T]] = {}
    for item in items:
        for key in dict.fromkeys(classifier(item)):
            groups.setdefault(key, []).append(item)
    return groups


@dataclass(frozen=True)
class CategoryGroup(Generic[K]):
    """Performance of the trades falling in one category."""

    category: K
    trades: tuple[Trade, ...]
    metrics: PerformanceMetrics

    @property
    def r_values(self) -> list[float]:
        return [trade_rr(t) for t in self.trades]

    def to_dict(self) -> dict[str, Any]:
        category = self.category.value if isinstance(self.category, Enum) else self.category
        return {
            "category": category,
            **self.metrics.to_dict(),
            "r_values": self.r_values,
        }


def group_trades(
    trades: Iterable[Trade],
    classifier: Callable[[Trade], K | None],
    *,
    order: Sequence[K] | None = None,
    include_empty: bool = True,
) -> list[CategoryGroup[K]]:
    """Partition completed trades and compute metrics per category.

    Parameters
    ----------
    classifier : callable
        Pure, total function ``Trade -> category | None``.
    order : sequence | None
        Canonical category order.  Categories outside it are appended
        in first-seen order.
    include_empty : bool
        When an ``order`` is given, emit zero-metric groups for ordered
        categories that received no trades.
    """
    buckets = partition(completed_trades(trades), classifier)

    keys: list[K] = []
    for key in order or ():
        if key in buckets or include_empty:
            keys.append(key)
    keys.extend(k for k in buckets if k not in keys)

    return [
        CategoryGroup(
            category=key,
            trades=tuple(buckets.get(key, ())),
            metrics=compute_metrics(buckets.get(key, ())),
        )
        for key in keys
    ]


def _eligible(
    groups: Sequence[CategoryGroup[K]], min_trades: int
) -> list[CategoryGroup[K]]:
    return [g for g in groups if g.metrics.total_trades >= min_trades]


def best_category(
    groups: Sequence[CategoryGroup[K]],
    *,
    metric: str = "win_rate",
    min_trades: int = 3,
) -> K | None:
    """Category with the highest ``metric`` among groups with enough trades."""
    valid = _eligible(groups, min_trades)
    if not valid:
        return None
    return max(valid, key=lambda g: getattr(g.metrics, metric)).category


def worst_category(
    groups: Sequence[CategoryGroup[K]],
    *,
    metric: str = "win_rate",
    min_trades: int = 3,
) -> K | None:
    """Category with the lowest ``metric`` among groups with enough trades."""
    valid = _eligible(groups, min_trades)
    if not valid:
        return None
    return min(valid, key=lambda g: getattr(g.metrics, metric)).category
