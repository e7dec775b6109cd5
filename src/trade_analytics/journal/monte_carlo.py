"""Monte Carlo equity simulator: forward-looking R-multiple paths.

Bootstrap-resamples the empirical R-multiple distribution of the
completed trades to answer "given my historical edge, what's the range
of possible outcomes over the next N trades?"

Each run draws ``trades_per_run`` R-multiples uniformly with replacement
and accumulates them into a path starting at 0.  The summary keeps the
worst and best runs (by final value; first run wins ties) and the
per-step mean across all runs.

The random source is a ``numpy.random.Generator``; pass a seeded one for
reproducible output.  Without one each call is non-deterministic.

Usage::

    result = run_monte_carlo_simulation(trades, runs=100, trades_per_run=200)
    if result.insufficient_data:
        ...
    print(result.min_equity, result.avg_equity, result.max_equity)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from trade_analytics.core.models import Trade

from .outcome import trade_rr
from .scope import completed_trades

logger = logging.getLogger(__name__)

DEFAULT_RUNS = 100
DEFAULT_TRADES_PER_RUN = 200
MIN_TRADES = 5


@dataclass(frozen=True)
class MonteCarloResult:
    """Simulation envelope, or an insufficient-data marker with empty paths."""

    source_trades: int
    runs: int = 0
    trades_per_run: int = 0
    insufficient_data: bool = False
    min_trades: int = MIN_TRADES
    min_path: list[float] = field(default_factory=list)
    avg_path: list[float] = field(default_factory=list)
    max_path: list[float] = field(default_factory=list)
    paths: list[list[float]] = field(default_factory=list)
    min_equity: float = 0.0
    avg_equity: float = 0.0
    max_equity: float = 0.0

    def to_dict(self, *, include_paths: bool = False) -> dict[str, Any]:
        if self.insufficient_data:
            return {
                "error": "insufficient_data",
                "min_trades": self.min_trades,
                "current_trades": self.source_trades,
            }
        data: dict[str, Any] = {
            "source_trades": self.source_trades,
            "runs": self.runs,
            "trades_per_run": self.trades_per_run,
            "min_equity": self.min_equity,
            "avg_equity": self.avg_equity,
            "max_equity": self.max_equity,
            "min_path": self.min_path,
            "avg_path": self.avg_path,
            "max_path": self.max_path,
        }
        if include_paths:
            data["paths"] = self.paths
        return data


def run_monte_carlo_simulation(
    trades: Iterable[Trade],
    runs: int = DEFAULT_RUNS,
    trades_per_run: int = DEFAULT_TRADES_PER_RUN,
    *,
    rng: np.random.Generator | None = None,
    min_trades: int = MIN_TRADES,
) -> MonteCarloResult:
    """Simulate ``runs`` forward equity paths from the trades' R-multiples.

    Raises
    ------
    ValueError
        ``runs`` < 1 or ``trades_per_run`` < 0.
    """
    if runs < 1:
        raise ValueError(f"runs must be >= 1, got {runs}")
    if trades_per_run < 0:
        raise ValueError(f"trades_per_run must be >= 0, got {trades_per_run}")

    r_values = np.asarray([trade_rr(t) for t in completed_trades(trades)], dtype=float)
    if len(r_values) < min_trades:
        logger.debug(
            "Monte Carlo skipped: %d completed trades (need %d)",
            len(r_values), min_trades,
        )
        return MonteCarloResult(
            source_trades=len(r_values),
            insufficient_data=True,
            min_trades=min_trades,
        )

    gen = rng if rng is not None else np.random.default_rng()
    draws = gen.choice(r_values, size=(runs, trades_per_run), replace=True)

    paths = np.zeros((runs, trades_per_run + 1))
    paths[:, 1:] = np.cumsum(draws, axis=1)

    finals = paths[:, -1]
    min_idx = int(np.argmin(finals))
    max_idx = int(np.argmax(finals))
    min_equity = float(finals[min_idx])
    max_equity = float(finals[max_idx])
    # Clip: the float mean of identical finals can land one ulp outside them
    avg_equity = float(np.clip(finals.mean(), min_equity, max_equity))

    return MonteCarloResult(
        source_trades=len(r_values),
        runs=runs,
        trades_per_run=trades_per_run,
        min_trades=min_trades,
        min_path=paths[min_idx].tolist(),
        avg_path=paths.mean(axis=0).tolist(),
        max_path=paths[max_idx].tolist(),
        paths=paths.tolist(),
        min_equity=min_equity,
        avg_equity=avg_equity,
        max_equity=max_equity,
    )


class MonteCarloSimulator:
    """Monte Carlo simulator with configured defaults.

    Parameters
    ----------
    runs : int
        Number of simulated paths.  Default 100.
    trades_per_run : int
        Trades drawn per path.  Default 200.
    min_trades : int
        Completed trades required before simulating.  Default 5.
    seed : int | None
        Random seed for reproducibility.  None = non-deterministic.
    """

    def __init__(
        self,
        *,
        runs: int = DEFAULT_RUNS,
        trades_per_run: int = DEFAULT_TRADES_PER_RUN,
        min_trades: int = MIN_TRADES,
        seed: int | None = None,
    ) -> None:
        self._runs = runs
        self._trades_per_run = trades_per_run
        self._min_trades = min_trades
        self._rng = np.random.default_rng(seed)

    def simulate(self, trades: Iterable[Trade]) -> MonteCarloResult:
        return run_monte_carlo_simulation(
            trades,
            self._runs,
            self._trades_per_run,
            rng=self._rng,
            min_trades=self._min_trades,
        )
