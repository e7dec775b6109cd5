"""Shared fixtures for the trade-analytics test suite."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from trade_analytics.core.clock import FixedClock

# 2024-01-01T12:00:00Z (a Monday, London session)
BASE_TS = 1_704_110_400_000_000_000


@pytest.fixture
def fixed_clock() -> FixedClock:
    """Clock pinned to 2024-06-01 UTC."""
    return FixedClock(datetime(2024, 6, 1, tzinfo=timezone.utc))


@pytest.fixture
def sample_trade_record() -> dict:
    """One completed long trade as it appears in a trades JSON file."""
    return {
        "id": "t1",
        "asset": "ES",
        "direction": "long",
        "model_id": "m1",
        "created_at": BASE_TS,
        "is_completed": True,
        "bracket_order": {
            "entry_price": 100.0,
            "primary_stop_loss": 95.0,
            "position_size": 1.0,
            "bracket_groups": [
                {"bracket_id": "b1", "take_profit_price": 110.0, "stop_loss_price": 95.0, "size": 1.0},
            ],
        },
        "bracket_order_outcome": {"final_pl_usd": 10.0, "rr": 2.0},
        "bracket_order_outcomes": [
            {"bracket_id": "b1", "closure_type": "take_profit", "closure_price": 110.0, "size": 1.0},
        ],
        "adherence_score": 0.9,
    }


@pytest.fixture
def sample_model_record() -> dict:
    return {
        "id": "m1",
        "name": "Trend pullback",
        "narrative": [{"id": "n1", "type": "trend", "properties": '{"direction": "bullish"}'}],
        "framework": [],
        "execution": [{"id": "e1", "type": "fvg", "properties": "{}"}],
    }


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON payload under tmp_path and return the file path."""

    def _write(name: str, payload) -> str:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)

    return _write
