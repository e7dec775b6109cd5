"""Tool impact: how trades perform when a model uses a given tool.

Each completed trade is attributed to every ``(tool type, zone)`` pair
configured on its model, so one trade can count toward several tools.
Tools with fewer than ``min_sample`` trades are dropped.  Where enough
trades exist *without* the tool, the with/without deltas are combined
into an ``impact_score`` (half win-rate delta, half avg-P/L delta).

Results are ranked by win rate, then average P/L, both descending.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import asdict, dataclass
from typing import Any

from trade_analytics.core.enums import ToolZone
from trade_analytics.core.models import Model, ToolConfig, Trade

from .grouping import partition_many
from .metrics import compute_metrics
from .scope import completed_trades

MIN_SAMPLE_SIZE = 3

ToolKey = tuple[str, ToolZone]
NameResolver = Callable[[str], str]


@dataclass(frozen=True)
class ToolImpact:
    tool_type: str
    zone: ToolZone
    tool_name: str
    sample_size: int
    win_rate: float
    avg_pl: float
    win_rate_without: float
    avg_pl_without: float
    impact_score: float | None  # None when too few trades lack the tool

    @property
    def tool_id(self) -> str:
        return f"{self.zone.value}-{self.tool_type}"

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["zone"] = self.zone.value
        data["tool_id"] = self.tool_id
        return data


def compute_tool_impact(
    trades: Iterable[Trade],
    models: Iterable[Model],
    *,
    min_sample: int = MIN_SAMPLE_SIZE,
    name_resolver: NameResolver | None = None,
) -> list[ToolImpact]:
    """Rank tools by the performance of the trades that used them.

    Parameters
    ----------
    name_resolver : callable | None
        Maps a tool type id to a display name.  Defaults to the tool's
        ``name`` property, then its type.
    """
    completed = completed_trades(trades)
    models_by_id = {m.id: m for m in models}
    first_tool: dict[ToolKey, ToolConfig] = {}

    def tool_keys(trade: Trade) -> list[ToolKey]:
        model = models_by_id.get(trade.model_id) if trade.model_id else None
        if model is None:
            return []
        keys = []
        for zone, tool in model.tools():
            key = (tool.type, zone)
            first_tool.setdefault(key, tool)
            keys.append(key)
        return keys

    groups = partition_many(completed, tool_keys)

    impacts: list[ToolImpact] = []
    for key, with_tool in groups.items():
        if len(with_tool) < min_sample:
            continue
        tool_type, zone = key

        with_ids = {id(t) for t in with_tool}
        without_tool = [t for t in completed if id(t) not in with_ids]

        with_stats = compute_metrics(with_tool)
        without_stats = compute_metrics(without_tool)

        impact_score = None
        if len(without_tool) >= min_sample:
            impact_score = (
                (with_stats.win_rate - without_stats.win_rate) * 0.5
                + (with_stats.avg_pl - without_stats.avg_pl) * 0.5
            )

        if name_resolver is not None:
            name = name_resolver(tool_type)
        else:
            name = first_tool[key].display_name

        impacts.append(ToolImpact(
            tool_type=tool_type,
            zone=zone,
            tool_name=name,
            sample_size=len(with_tool),
            win_rate=with_stats.win_rate,
            avg_pl=with_stats.avg_pl,
            win_rate_without=without_stats.win_rate,
            avg_pl_without=without_stats.avg_pl,
            impact_score=impact_score,
        ))

    return sorted(impacts, key=lambda i: (-i.win_rate, -i.avg_pl))
