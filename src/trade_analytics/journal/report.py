"""Full analytics report.

Runs every analytic over one trade/model snapshot and returns a single
JSON-ready dict.  The scope filter applies to everything except the
adherence comparison, which always measures against the full completed
population.

Usage::

    report = build_report(trades, models, options=FilterOptions(session="London"))
    print(report["metrics"]["win_rate"])
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Any

import numpy as np

from trade_analytics.core.config import Settings
from trade_analytics.core.models import Model, Trade

from .adherence import (
    average_adherence,
    compute_adherence_comparison,
    compute_adherence_distribution,
)
from .brackets import compute_bracket_metrics
from .breakdowns import (
    compute_direction_metrics,
    compute_model_comparison,
    compute_monthly_performance,
)
from .distributions import bin_r_values
from .equity import compute_balance_curve, compute_equity_curve, compute_max_drawdown
from .grouping import CategoryGroup, best_category, worst_category
from .htf_bias import compute_bias_metrics
from .metrics import compute_metrics
from .monte_carlo import run_monte_carlo_simulation
from .outcome import trade_rr
from .scope import FilterOptions, completed_trades, filter_trades
from .session_analysis import compute_session_metrics
from .time_buckets import compute_hour_buckets, compute_weekday_buckets, hour_label
from .tool_impact import NameResolver, compute_tool_impact
from .volatility import compute_volatility_metrics

logger = logging.getLogger(__name__)


def _groups(groups: Sequence[CategoryGroup[Any]]) -> list[dict[str, Any]]:
    return [g.to_dict() for g in groups]


def _label(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def build_report(
    trades: Iterable[Trade],
    models: Iterable[Model],
    *,
    options: FilterOptions | None = None,
    settings: Settings | None = None,
    rng: np.random.Generator | None = None,
    name_resolver: NameResolver | None = None,
) -> dict[str, Any]:
    """Compute every analytic for the scoped trades.

    Parameters
    ----------
    options : FilterOptions | None
        Scope filter.  None = all trades.
    settings : Settings | None
        Analytics and simulation defaults.  None = built-in defaults.
    rng : numpy.random.Generator | None
        Random source for the simulation.  None = seeded from
        ``settings.monte_carlo.seed`` (non-deterministic when unset).
    """
    settings = settings or Settings()
    cfg = settings.analytics
    mc_cfg = settings.monte_carlo
    options = options or FilterOptions()

    all_trades = list(trades)
    models = list(models)
    scoped = filter_trades(all_trades, options)
    logger.debug(
        "Building report: %d trades, %d in scope, %d models",
        len(all_trades), len(scoped), len(models),
    )

    curve = compute_equity_curve(scoped)
    sessions = compute_session_metrics(scoped)
    hours = compute_hour_buckets(scoped)
    weekdays = compute_weekday_buckets(scoped)

    threshold = (
        options.adherence_threshold
        if options.adherence_threshold is not None
        else cfg.adherence_threshold
    )

    if rng is None:
        rng = np.random.default_rng(mc_cfg.seed)
    simulation = run_monte_carlo_simulation(
        scoped,
        mc_cfg.runs,
        mc_cfg.trades_per_run,
        rng=rng,
        min_trades=mc_cfg.min_trades,
    )

    best_n = cfg.best_min_trades
    return {
        "scope": {
            "model_id": options.model_id,
            "session": _label(options.session),
            "adherence_threshold": options.adherence_threshold,
            "trades_in_scope": len(scoped),
            "total_trades": len(all_trades),
        },
        "metrics": compute_metrics(scoped).to_dict(),
        "equity_curve": [p.to_dict() for p in curve],
        "balance_curve": [
            p.to_dict() for p in compute_balance_curve(scoped, cfg.initial_balance)
        ],
        "max_drawdown": compute_max_drawdown(curve),
        "by_session": _groups(sessions),
        "by_volatility": _groups(compute_volatility_metrics(scoped)),
        "by_htf_bias": _groups(compute_bias_metrics(scoped, models)),
        "by_hour": [{**g.to_dict(), "label": hour_label(g.category)} for g in hours],
        "by_weekday": _groups(weekdays),
        "by_direction": _groups(compute_direction_metrics(scoped)),
        "by_model": _groups(compute_model_comparison(scoped, models)),
        "by_month": _groups(compute_monthly_performance(scoped)),
        "best_session": _label(best_category(sessions, min_trades=best_n)),
        "best_hour": best_category(hours, min_trades=best_n),
        "worst_hour": worst_category(hours, min_trades=best_n),
        "best_day": best_category(weekdays, min_trades=best_n),
        "brackets": [b.to_dict() for b in compute_bracket_metrics(scoped)],
        "tool_impact": [
            t.to_dict()
            for t in compute_tool_impact(
                scoped, models,
                min_sample=cfg.tool_min_sample,
                name_resolver=name_resolver,
            )
        ],
        "adherence": {
            "comparison": compute_adherence_comparison(all_trades, threshold).to_dict(),
            "distribution": [
                b.to_dict() for b in compute_adherence_distribution(scoped)
            ],
            "average": average_adherence(scoped),
        },
        "r_distribution": [
            b.to_dict()
            for b in bin_r_values(
                [trade_rr(t) for t in completed_trades(scoped)], cfg.histogram_bins,
            )
        ],
        "monte_carlo": simulation.to_dict(),
    }
