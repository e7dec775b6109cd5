"""Core input records: trades, bracket orders, models and tool configs.

These are the records supplied by the persistence layer.  The analytics
engine treats them as immutable snapshots and never mutates them.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .enums import ClosureType, Direction, ToolZone

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Bracket orders
# ---------------------------------------------------------------------------

class BracketGroup(BaseModel):
    """One take-profit level of a bracket order."""

    model_config = ConfigDict(frozen=True)

    bracket_id: str = ""
    take_profit_price: float
    stop_loss_price: float
    size: float = 0.0


class BracketOrder(BaseModel):
    """Entry, primary stop-loss and one or more take-profit levels."""

    model_config = ConfigDict(frozen=True)

    entry_price: float
    primary_stop_loss: float
    position_size: float = 0.0
    bracket_groups: list[BracketGroup] = Field(default_factory=list)

    @property
    def stop_distance(self) -> float:
        """Absolute distance from entry to the primary stop."""
        return abs(self.entry_price - self.primary_stop_loss)


class BracketOrderOutcome(BaseModel):
    """Summary outcome recorded when the trade is closed."""

    model_config = ConfigDict(frozen=True)

    final_pl_usd: float = 0.0
    rr: float = 0.0
    final_pl_pct: float = 0.0


class BracketLevelOutcome(BaseModel):
    """Per-level fill record (one per closed bracket group)."""

    model_config = ConfigDict(frozen=True)

    bracket_id: str = ""
    closure_type: ClosureType | None = None
    closure_price: float
    size: float
    execution_price: float | None = None  # None = bracket order entry price


# ---------------------------------------------------------------------------
# Trade
# ---------------------------------------------------------------------------

class Trade(BaseModel):
    """A single trading position, open or closed."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    id: str
    asset: str = ""
    direction: Direction = Direction.LONG
    model_id: str | None = None
    created_at: int  # ns since epoch, UTC
    closed_at: int | None = None  # ns since epoch, UTC
    is_completed: bool = False

    bracket_order: BracketOrder
    bracket_order_outcome: BracketOrderOutcome | None = None
    bracket_order_outcomes: list[BracketLevelOutcome] = Field(default_factory=list)

    adherence_score: float | None = Field(default=None, ge=0.0, le=1.0)
    value_per_unit: float = 1.0

    notes: str = ""
    emotions: list[str] = Field(default_factory=list)

    @property
    def is_long(self) -> bool:
        return self.direction == Direction.LONG

    @property
    def close_timestamp(self) -> int:
        """Close time when recorded, otherwise the creation time."""
        return self.closed_at if self.closed_at is not None else self.created_at


# ---------------------------------------------------------------------------
# Models and tools
# ---------------------------------------------------------------------------

class ToolProperties:
    """Read-only, typed lookup over a tool's property map.

    Missing keys yield ``None``; the map itself is never ``None``.
    """

    __slots__ = ("_data",)

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data) if data else {}

    @classmethod
    def load(cls, raw: str | None) -> ToolProperties | None:
        """Parse a JSON object string, or None when ``raw`` is not one."""
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            logger.debug("Unparseable tool properties: %.80s", raw)
            return None
        if not isinstance(data, dict):
            return None
        return cls(data)

    @classmethod
    def parse(cls, raw: str | None) -> ToolProperties:
        """Parse a JSON object string.  Anything else yields an empty map."""
        return cls.load(raw) or cls()

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def get_str(self, key: str) -> str | None:
        value = self._data.get(key)
        return value if isinstance(value, str) else None

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return bool(self._data)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)


class ToolConfig(BaseModel):
    """A configured tool within one of a model's zones."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    type: str
    properties: str = "{}"  # JSON-encoded map, parsed on demand

    def props(self) -> ToolProperties:
        return ToolProperties.parse(self.properties)

    @property
    def display_name(self) -> str:
        name = self.props().get_str("name")
        return name or self.type or "Unknown Tool"


class Model(BaseModel):
    """A trading strategy definition built from three tool zones."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    description: str = ""
    narrative: list[ToolConfig] = Field(default_factory=list)
    framework: list[ToolConfig] = Field(default_factory=list)
    execution: list[ToolConfig] = Field(default_factory=list)

    def tools(self) -> Iterator[tuple[ToolZone, ToolConfig]]:
        """All tools as ``(zone, tool)`` pairs, narrative first."""
        for zone in ToolZone:
            for tool in getattr(self, zone.value):
                yield zone, tool
