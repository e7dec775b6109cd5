"""Plan-adherence impact analysis.

Compares the completed trades that met an adherence threshold against
the full completed population.  The comparison always measures against
every completed trade, independent of any analytics scope filter.

The score itself comes from the model checklist: each tool configured on
the trade's model is one condition, ticked when the tool was observed,
and the score is the ticked fraction.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from dataclasses import asdict, dataclass
from typing import Any

from trade_analytics.core.enums import ToolZone
from trade_analytics.core.models import Model, ToolConfig, ToolProperties, Trade

from .metrics import compute_metrics
from .scope import completed_trades

# (label, inclusive lower bound, upper bound); the last band is closed
ADHERENCE_BANDS = [
    ("0-20%", 0.0, 0.2),
    ("20-40%", 0.2, 0.4),
    ("40-60%", 0.4, 0.6),
    ("60-80%", 0.6, 0.8),
    ("80-100%", 0.8, 1.0),
]


@dataclass(frozen=True)
class AdherenceComparison:
    threshold: float
    filtered_trades: int
    filtered_win_rate: float
    filtered_pl: float
    all_trades: int
    all_win_rate: float
    all_pl: float

    @property
    def win_rate_delta(self) -> float:
        return self.filtered_win_rate - self.all_win_rate

    @property
    def pl_delta(self) -> float:
        return self.filtered_pl - self.all_pl

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["win_rate_delta"] = self.win_rate_delta
        data["pl_delta"] = self.pl_delta
        return data


@dataclass(frozen=True)
class AdherenceBand:
    label: str
    trades: int
    win_rate: float
    avg_pl: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def filter_by_adherence(trades: Iterable[Trade], threshold: float) -> list[Trade]:
    """Completed trades scoring at or above ``threshold``; unscored trades excluded."""
    return [
        t for t in completed_trades(trades)
        if t.adherence_score is not None and t.adherence_score >= threshold
    ]


def compute_adherence_comparison(
    trades: Iterable[Trade],
    threshold: float,
) -> AdherenceComparison:
    completed = completed_trades(trades)
    filtered = compute_metrics(filter_by_adherence(completed, threshold))
    overall = compute_metrics(completed)
    return AdherenceComparison(
        threshold=threshold,
        filtered_trades=filtered.total_trades,
        filtered_win_rate=filtered.win_rate,
        filtered_pl=filtered.total_pl,
        all_trades=overall.total_trades,
        all_win_rate=overall.win_rate,
        all_pl=overall.total_pl,
    )


def compute_adherence_distribution(trades: Iterable[Trade]) -> list[AdherenceBand]:
    """Win rate and average P/L per 20% adherence band (scored trades only)."""
    scored = [t for t in completed_trades(trades) if t.adherence_score is not None]
    bands: list[AdherenceBand] = []
    for i, (label, low, high) in enumerate(ADHERENCE_BANDS):
        last = i == len(ADHERENCE_BANDS) - 1
        in_band = [
            t for t in scored
            if low <= t.adherence_score and (t.adherence_score < high or (last and t.adherence_score <= high))
        ]
        m = compute_metrics(in_band)
        bands.append(AdherenceBand(
            label=label, trades=m.total_trades, win_rate=m.win_rate, avg_pl=m.avg_pl,
        ))
    return bands


def average_adherence(trades: Iterable[Trade]) -> float:
    """Mean adherence score of the completed, scored trades (0.0 if none)."""
    scores = [
        t.adherence_score for t in completed_trades(trades)
        if t.adherence_score is not None
    ]
    return sum(scores) / len(scores) if scores else 0.0


# ---------------------------------------------------------------------------
# Model condition checklist
# ---------------------------------------------------------------------------

Observation = tuple[str, ToolZone]  # (tool type, zone)


@dataclass(frozen=True)
class ModelCondition:
    """One checklist line: a tool configured on a model, observed or not."""

    id: str
    description: str
    zone: ToolZone
    is_checked: bool

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["zone"] = self.zone.value
        return data


def describe_tool(tool: ToolConfig) -> str:
    """Checklist text for a tool, e.g. ``"fvg - bullish - 15m"``.

    Built from the tool type plus its ``type``, ``direction``,
    ``timeframe`` and non-regular ``structuralState`` properties.
    """
    props = ToolProperties.load(tool.properties)
    if props is None:
        return f"{tool.type} condition"

    parts = [tool.type]
    for key in ("type", "direction"):
        value = props.get(key)
        if value:
            parts.append(str(value))
    timeframe = props.get("timeframe")
    if isinstance(timeframe, dict):
        parts.append(f"{timeframe.get('value', '')}{timeframe.get('unit', '')}")
    elif timeframe:
        parts.append(str(timeframe))
    state = props.get("structuralState")
    if state and state != "Regular":
        parts.append(str(state))
    return " - ".join(parts)


def map_observations_to_conditions(
    model: Model,
    observations: Collection[Observation],
) -> list[ModelCondition]:
    """Every tool of ``model`` as a condition, checked when observed.

    Conditions follow zone order (narrative, framework, execution) and
    tool order within a zone.  A tool is observed when an observation
    names its type in the same zone.
    """
    observed = {(tool_type, ToolZone(zone)) for tool_type, zone in observations}
    return [
        ModelCondition(
            id=tool.id,
            description=describe_tool(tool),
            zone=zone,
            is_checked=(tool.type, zone) in observed,
        )
        for zone, tool in model.tools()
    ]


def calculate_model_adherence(conditions: Collection[ModelCondition]) -> float:
    """Fraction of checked conditions in [0, 1]; 0.0 with no conditions.

    The result is on the same scale as ``Trade.adherence_score``.
    """
    if not conditions:
        return 0.0
    checked = sum(1 for c in conditions if c.is_checked)
    return checked / len(conditions)
