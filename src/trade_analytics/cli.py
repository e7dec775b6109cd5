"""CLI entry point for the trade analytics engine."""

from __future__ import annotations

import json
from typing import Any

import click
import numpy as np

from .core.config import Settings, load_settings
from .core.enums import ALL_MODELS, ALL_SESSIONS, Session
from .core.errors import AnalyticsError
from .observability.logger import get_logger, setup_logging, start_run

_SESSION_CHOICES = [ALL_SESSIONS] + [s.value for s in Session]


def _init(config: str | None, overrides: dict[str, Any] | None = None) -> Settings:
    try:
        settings = load_settings(config, overrides)
    except AnalyticsError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(
        level=settings.observability.log_level,
        format=settings.observability.log_format,
    )
    start_run(click.get_current_context().info_name or "trade-analytics")
    return settings


def _emit(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, default=str))


@click.group()
def main() -> None:
    """Trade performance analytics."""


@main.command()
@click.option("--trades", "trades_path", required=True, type=click.Path(), help="Trades JSON file")
@click.option("--models", "models_path", default=None, type=click.Path(), help="Models JSON file")
@click.option("--config", default=None, help="Config file path")
@click.option("--model-id", default=ALL_MODELS, help="Restrict to one model ('all' for every model)")
@click.option("--session", default=ALL_SESSIONS, type=click.Choice(_SESSION_CHOICES), help="Restrict to one session")
@click.option("--adherence", default=None, type=click.FloatRange(0.0, 1.0), help="Minimum adherence score")
@click.option("--seed", default=None, type=int, help="Monte Carlo random seed")
def report(
    trades_path: str,
    models_path: str | None,
    config: str | None,
    model_id: str,
    session: str,
    adherence: float | None,
    seed: int | None,
) -> None:
    """Print the full analytics report as JSON."""
    from .journal.report import build_report
    from .journal.scope import FilterOptions
    from .storage.json_loader import load_models, load_trades

    overrides = {"monte_carlo": {"seed": seed}} if seed is not None else None
    settings = _init(config, overrides)
    log = get_logger(__name__)

    try:
        trades = load_trades(trades_path)
        models = load_models(models_path)
    except AnalyticsError as exc:
        raise click.ClickException(str(exc)) from exc

    options = FilterOptions(model_id=model_id, session=session, adherence_threshold=adherence)
    result = build_report(trades, models, options=options, settings=settings)
    log.info("report_built", trades=len(trades), in_scope=result["scope"]["trades_in_scope"])
    _emit(result)


@main.command()
@click.option("--trades", "trades_path", required=True, type=click.Path(), help="Trades JSON file")
@click.option("--config", default=None, help="Config file path")
@click.option("--runs", default=None, type=click.IntRange(min=1), help="Number of simulated paths")
@click.option("--trades-per-run", default=None, type=click.IntRange(min=0), help="Trades per path")
@click.option("--seed", default=None, type=int, help="Random seed")
@click.option("--paths/--no-paths", "include_paths", default=False, help="Include every simulated path")
def simulate(
    trades_path: str,
    config: str | None,
    runs: int | None,
    trades_per_run: int | None,
    seed: int | None,
    include_paths: bool,
) -> None:
    """Run a Monte Carlo simulation of future R-multiple paths."""
    from .journal.monte_carlo import run_monte_carlo_simulation
    from .storage.json_loader import load_trades

    settings = _init(config)
    mc = settings.monte_carlo
    log = get_logger(__name__)

    try:
        trades = load_trades(trades_path)
    except AnalyticsError as exc:
        raise click.ClickException(str(exc)) from exc

    result = run_monte_carlo_simulation(
        trades,
        runs or mc.runs,
        trades_per_run if trades_per_run is not None else mc.trades_per_run,
        rng=np.random.default_rng(seed if seed is not None else mc.seed),
        min_trades=mc.min_trades,
    )
    log.info("simulation_complete", insufficient_data=result.insufficient_data)
    _emit(result.to_dict(include_paths=include_paths))


@main.command()
@click.option("--trades", "trades_path", required=True, type=click.Path(), help="Trades JSON file")
@click.option("--year", required=True, type=int, help="Calendar year")
@click.option("--month", required=True, type=click.IntRange(1, 12), help="Month (1-12)")
@click.option("--config", default=None, help="Config file path")
def calendar(trades_path: str, year: int, month: int, config: str | None) -> None:
    """Print the month calendar grid with per-day aggregates."""
    from .journal.trade_calendar import aggregate_trades_by_day, get_month_calendar_grid
    from .storage.json_loader import load_trades

    _init(config)

    try:
        trades = load_trades(trades_path)
    except AnalyticsError as exc:
        raise click.ClickException(str(exc)) from exc

    grid = get_month_calendar_grid(year, month, aggregate_trades_by_day(trades))
    _emit([day.to_dict() for day in grid])


if __name__ == "__main__":
    main()
