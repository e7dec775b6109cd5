"""Shared fixtures and builders for journal analytics tests."""

import json
from datetime import datetime, timezone

import numpy as np
import pytest

from trade_analytics.core.clock import datetime_to_ns
from trade_analytics.core.enums import ClosureType, Direction
from trade_analytics.core.models import (
    BracketGroup,
    BracketLevelOutcome,
    BracketOrder,
    BracketOrderOutcome,
    Model,
    ToolConfig,
    Trade,
)


def ts(year=2024, month=1, day=1, hour=12, minute=0) -> int:
    """Nanosecond UTC timestamp.  2024-01-01 was a Monday."""
    return datetime_to_ns(datetime(year, month, day, hour, minute, tzinfo=timezone.utc))


@pytest.fixture
def rng():
    return np.random.default_rng(42)


def make_level(
    closure_price: float,
    size: float = 1.0,
    closure_type: ClosureType | None = None,
    bracket_id: str = "",
    execution_price: float | None = None,
) -> BracketLevelOutcome:
    return BracketLevelOutcome(
        bracket_id=bracket_id,
        closure_type=closure_type,
        closure_price=closure_price,
        size=size,
        execution_price=execution_price,
    )


def make_trade(
    trade_id: str = "t1",
    pl: float = 100.0,
    rr: float = 2.0,
    *,
    created_at: int | None = None,
    closed_at: int | None = None,
    completed: bool = True,
    direction: str = "long",
    model_id: str | None = "m1",
    adherence: float | None = None,
    entry: float = 100.0,
    stop: float = 95.0,
    position_size: float = 1.0,
    value_per_unit: float = 1.0,
    levels: list[BracketLevelOutcome] | None = None,
    with_summary: bool = True,
) -> Trade:
    """Build a trade.  By default a completed long winner of +100 / +2R."""
    return Trade(
        id=trade_id,
        asset="ES",
        direction=Direction(direction),
        model_id=model_id,
        created_at=created_at if created_at is not None else ts(),
        closed_at=closed_at,
        is_completed=completed,
        bracket_order=BracketOrder(
            entry_price=entry,
            primary_stop_loss=stop,
            position_size=position_size,
            bracket_groups=[
                BracketGroup(bracket_id="b1", take_profit_price=entry + 10, stop_loss_price=stop, size=position_size),
            ],
        ),
        bracket_order_outcome=BracketOrderOutcome(final_pl_usd=pl, rr=rr) if with_summary else None,
        bracket_order_outcomes=levels or [],
        adherence_score=adherence,
        value_per_unit=value_per_unit,
    )


def make_tool(tool_type: str, properties=None, tool_id: str = "") -> ToolConfig:
    """Tool config; ``properties`` may be a dict or a raw string."""
    if properties is None:
        raw = "{}"
    elif isinstance(properties, str):
        raw = properties
    else:
        raw = json.dumps(properties)
    return ToolConfig(id=tool_id or tool_type, type=tool_type, properties=raw)


def make_model(
    model_id: str = "m1",
    *,
    narrative=(),
    framework=(),
    execution=(),
    name: str = "",
) -> Model:
    return Model(
        id=model_id,
        name=name or f"Model {model_id}",
        narrative=list(narrative),
        framework=list(framework),
        execution=list(execution),
    )
