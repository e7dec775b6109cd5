"""Higher-timeframe bias breakdown.

A model's HTF bias is read from its narrative tools, in order.  For each
tool the ``direction`` property is checked first ("bull"/"long" means
Bullish, "bear"/"short" means Bearish), then the tool type itself, where
only "bull"/"bear" count (a "short_term_*" tool says nothing).  The
first tool that matches decides; no match means Unknown.

Trades whose model cannot be resolved have no bias and are left out of
this breakdown only.  Only biases that actually occur are reported.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from trade_analytics.core.enums import HTFBias
from trade_analytics.core.models import Model, ToolConfig, Trade

from .grouping import CategoryGroup, group_trades

BIAS_ORDER = [HTFBias.BULLISH, HTFBias.BEARISH, HTFBias.UNKNOWN]

# Markers accepted in the direction property; the type name only carries bull/bear
_DIRECTION_MARKERS = (("bull", "long"), ("bear", "short"))
_TYPE_MARKERS = (("bull",), ("bear",))


def _match(text: str, markers) -> HTFBias | None:
    text = text.lower()
    bullish, bearish = markers
    if any(marker in text for marker in bullish):
        return HTFBias.BULLISH
    if any(marker in text for marker in bearish):
        return HTFBias.BEARISH
    return None


def tool_bias(tool: ToolConfig) -> HTFBias | None:
    """Bias expressed by one tool, or None if it expresses none."""
    direction = tool.props().get_str("direction")
    if direction:
        bias = _match(direction, _DIRECTION_MARKERS)
        if bias is not None:
            return bias
    return _match(tool.type, _TYPE_MARKERS)


def derive_htf_bias(model: Model | None) -> HTFBias:
    if model is None:
        return HTFBias.UNKNOWN
    for tool in model.narrative:
        bias = tool_bias(tool)
        if bias is not None:
            return bias
    return HTFBias.UNKNOWN


def bias_classifier(models: Iterable[Model]) -> Callable[[Trade], HTFBias | None]:
    """Classifier resolving each trade's model; unresolved models yield None."""
    biases = {m.id: derive_htf_bias(m) for m in models}
    return lambda trade: biases.get(trade.model_id) if trade.model_id else None


def compute_bias_metrics(
    trades: Iterable[Trade],
    models: Iterable[Model],
) -> list[CategoryGroup[HTFBias]]:
    return group_trades(
        trades, bias_classifier(models), order=BIAS_ORDER, include_empty=False,
    )
