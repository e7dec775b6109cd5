"""Tests for the full analytics report."""

import json

import numpy as np
import pytest

from trade_analytics.core.config import Settings
from trade_analytics.journal.report import build_report
from trade_analytics.journal.scope import FilterOptions

from .conftest import make_level, make_model, make_tool, make_trade, ts


@pytest.fixture
def models():
    return [
        make_model("m1", narrative=[make_tool("bull_trend")], execution=[make_tool("fvg")]),
        make_model("m2", narrative=[make_tool("bear_trend")]),
    ]


@pytest.fixture
def trades():
    result = []
    for i in range(8):
        result.append(make_trade(
            f"a{i}",
            pl=100.0 if i % 2 == 0 else -50.0,
            rr=2.0 if i % 2 == 0 else -1.0,
            model_id="m1" if i < 5 else "m2",
            created_at=ts(day=i + 1, hour=10 if i < 6 else 20),
            adherence=0.9 if i % 2 == 0 else 0.4,
            levels=[make_level(110.0 if i % 2 == 0 else 95.0)],
        ))
    result.append(make_trade("open", completed=False, created_at=ts(day=20)))
    return result


class TestBuildReport:
    def test_unfiltered(self, trades, models):
        report = build_report(trades, models, rng=np.random.default_rng(3))

        assert report["scope"]["trades_in_scope"] == 9
        assert report["scope"]["total_trades"] == 9
        assert report["metrics"]["total_trades"] == 8
        assert report["metrics"]["total_pl"] == pytest.approx(200.0)
        assert len(report["equity_curve"]) == 8
        assert report["balance_curve"][-1]["equity"] == pytest.approx(10_200.0)
        assert report["max_drawdown"] == pytest.approx(50.0)

        assert [g["category"] for g in report["by_session"]] == ["Asia", "London", "NY"]
        assert len(report["by_hour"]) == 24
        assert report["by_hour"][10]["label"] == "10:00"
        assert report["by_hour"][10]["total_trades"] == 6
        assert len(report["by_weekday"]) == 7
        assert [g["category"] for g in report["by_htf_bias"]] == ["Bullish", "Bearish"]
        assert [g["category"] for g in report["by_model"]] == ["m1", "m2"]
        assert report["best_session"] == "London"
        assert report["brackets"][0]["total_trades"] == 8
        assert report["monte_carlo"]["runs"] == 100
        assert len(report["r_distribution"]) == 10

        comparison = report["adherence"]["comparison"]
        assert comparison["threshold"] == 0.8
        assert comparison["filtered_trades"] == 4
        assert report["adherence"]["average"] == pytest.approx(0.65)

    def test_scope_filter(self, trades, models):
        options = FilterOptions(model_id="m2")
        report = build_report(trades, models, options=options, rng=np.random.default_rng(3))
        assert report["scope"]["trades_in_scope"] == 3
        assert report["metrics"]["total_trades"] == 3
        assert report["monte_carlo"]["error"] == "insufficient_data"
        # comparison always measures the whole population
        assert report["adherence"]["comparison"]["all_trades"] == 8

    def test_settings_drive_defaults(self, trades, models):
        settings = Settings(
            analytics={"initial_balance": 0.0, "histogram_bins": 4},
            monte_carlo={"runs": 5, "trades_per_run": 10, "seed": 11},
        )
        report = build_report(trades, models, settings=settings)
        assert report["balance_curve"][-1]["equity"] == pytest.approx(200.0)
        assert len(report["r_distribution"]) == 4
        assert report["monte_carlo"]["runs"] == 5
        assert len(report["monte_carlo"]["avg_path"]) == 11

    def test_json_serializable(self, trades, models):
        report = build_report(trades, models, rng=np.random.default_rng(3))
        json.dumps(report)

    def test_empty_input(self):
        report = build_report([], [])
        assert report["metrics"]["total_trades"] == 0
        assert report["equity_curve"] == []
        assert report["max_drawdown"] == 0.0
        assert report["best_session"] is None
        assert report["tool_impact"] == []
        assert report["r_distribution"] == []
