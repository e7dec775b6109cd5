"""Trade journal analytics: performance measurement over a trade snapshot.

Every analytic is a pure function over an explicit trade (and model)
collection.  Nothing here persists, renders, or mutates its inputs.

Key components
--------------
**Scope & outcomes**

filter_trades          Model / session / adherence scope filter
infer_session          UTC-hour session classifier (Asia / London / NY)
realize                Realized P/L and R-multiple per trade

**Aggregates**

compute_metrics        Win rate, profit factor, averages
compute_equity_curve   Relative equity curve (and balance-curve variant)
compute_max_drawdown   Peak-to-trough decline

**Breakdowns** (grouping engine instantiations)

group_trades           Generic classifier -> per-category metrics
compute_session_metrics, compute_volatility_metrics, compute_bias_metrics,
compute_hour_buckets, compute_weekday_buckets, compute_bracket_metrics,
compute_tool_impact

**Comparison & projection**

compute_adherence_comparison  High-adherence subset vs all trades
calculate_model_adherence     Checked share of a model's tool conditions
run_monte_carlo_simulation    Resampled forward R-multiple paths

**Calendar**

aggregate_trades_by_day, get_month_calendar_grid
"""

from .adherence import (
    ModelCondition,
    calculate_model_adherence,
    compute_adherence_comparison,
    map_observations_to_conditions,
)
from .brackets import compute_bracket_metrics
from .equity import compute_balance_curve, compute_equity_curve, compute_max_drawdown
from .grouping import CategoryGroup, group_trades
from .htf_bias import compute_bias_metrics, derive_htf_bias
from .metrics import PerformanceMetrics, compute_metrics
from .monte_carlo import MonteCarloResult, MonteCarloSimulator, run_monte_carlo_simulation
from .outcome import RealizedOutcome, realize
from .report import build_report
from .scope import FilterOptions, filter_trades, infer_session
from .session_analysis import compute_session_metrics
from .time_buckets import compute_hour_buckets, compute_weekday_buckets
from .tool_impact import compute_tool_impact
from .trade_calendar import aggregate_trades_by_day, get_month_calendar_grid
from .volatility import compute_volatility_metrics

__all__ = [
    "FilterOptions",
    "filter_trades",
    "infer_session",
    "RealizedOutcome",
    "realize",
    "PerformanceMetrics",
    "compute_metrics",
    "compute_equity_curve",
    "compute_balance_curve",
    "compute_max_drawdown",
    "CategoryGroup",
    "group_trades",
    "compute_session_metrics",
    "compute_volatility_metrics",
    "compute_bias_metrics",
    "derive_htf_bias",
    "compute_hour_buckets",
    "compute_weekday_buckets",
    "compute_bracket_metrics",
    "compute_tool_impact",
    "compute_adherence_comparison",
    "ModelCondition",
    "map_observations_to_conditions",
    "calculate_model_adherence",
    "MonteCarloResult",
    "MonteCarloSimulator",
    "run_monte_carlo_simulation",
    "aggregate_trades_by_day",
    "get_month_calendar_grid",
    "build_report",
]
