"""Test the click CLI."""

import json

import pytest
from click.testing import CliRunner

from trade_analytics.cli import main
from trade_analytics.observability.logger import current_run

from ..conftest import BASE_TS

NS_PER_DAY = 86_400 * 1_000_000_000


@pytest.fixture(autouse=True)
def quiet_logs(monkeypatch):
    monkeypatch.setenv("TRADE_ANALYTICS_OBSERVABILITY__LOG_LEVEL", "WARNING")


@pytest.fixture
def trades_file(write_json, sample_trade_record):
    records = []
    for i in range(6):
        record = dict(sample_trade_record, id=f"t{i}", created_at=BASE_TS + i * NS_PER_DAY)
        if i % 3 == 2:
            record["bracket_order_outcome"] = {"final_pl_usd": -5.0, "rr": -1.0}
        records.append(record)
    return write_json("trades.json", records)


@pytest.fixture
def models_file(write_json, sample_model_record):
    return write_json("models.json", [sample_model_record])


class TestReport:
    def test_full_report(self, trades_file, models_file):
        result = CliRunner().invoke(
            main, ["report", "--trades", trades_file, "--models", models_file, "--seed", "1"]
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["metrics"]["total_trades"] == 6
        assert payload["metrics"]["total_pl"] == pytest.approx(30.0)
        assert payload["by_htf_bias"][0]["category"] == "Bullish"
        assert payload["monte_carlo"]["runs"] == 100

    def test_session_filter(self, trades_file):
        result = CliRunner().invoke(main, ["report", "--trades", trades_file, "--session", "Asia"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["scope"]["trades_in_scope"] == 0

    def test_missing_file(self, tmp_path):
        result = CliRunner().invoke(main, ["report", "--trades", str(tmp_path / "none.json")])
        assert result.exit_code != 0
        assert "Failed to load" in result.output


class TestSimulate:
    def test_simulate(self, trades_file):
        result = CliRunner().invoke(
            main,
            ["simulate", "--trades", trades_file, "--runs", "5", "--trades-per-run", "10",
             "--seed", "3", "--paths"],
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["runs"] == 5
        assert len(payload["paths"]) == 5
        assert len(payload["avg_path"]) == 11

    def test_zero_trades_per_run(self, trades_file):
        result = CliRunner().invoke(
            main, ["simulate", "--trades", trades_file, "--trades-per-run", "0", "--seed", "3"]
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["avg_path"] == [0.0]
        assert payload["max_equity"] == 0.0

    def test_insufficient_data(self, write_json, sample_trade_record):
        path = write_json("trades.json", [sample_trade_record])
        result = CliRunner().invoke(main, ["simulate", "--trades", path])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["error"] == "insufficient_data"


class TestCalendar:
    def test_month_grid(self, trades_file):
        result = CliRunner().invoke(
            main, ["calendar", "--trades", trades_file, "--year", "2024", "--month", "1"]
        )
        assert result.exit_code == 0, result.output
        grid = json.loads(result.output)
        assert len(grid) == 42
        first_of_month = next(d for d in grid if d["date"] == "2024-01-01")
        assert first_of_month["aggregates"]["trade_count"] == 1
        assert current_run()["command"] == "calendar"

    def test_invalid_month(self, trades_file):
        result = CliRunner().invoke(
            main, ["calendar", "--trades", trades_file, "--year", "2024", "--month", "13"]
        )
        assert result.exit_code != 0
