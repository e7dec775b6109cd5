"""Outcome reducer: realized P/L and R-multiple per trade.

The summary ``bracket_order_outcome`` recorded at close time is the
authoritative source.  When only the per-level fill records are
available, P/L and R are rebuilt from them; both paths agree for a
consistently recorded trade.
"""

from __future__ import annotations

from dataclasses import dataclass

from trade_analytics.core.enums import ClosureType
from trade_analytics.core.models import BracketGroup, Trade


@dataclass(frozen=True)
class RealizedOutcome:
    """Realized result of one trade."""

    pl: float = 0.0
    rr: float = 0.0

    @property
    def is_winner(self) -> bool:
        return self.pl > 0

    @property
    def is_loser(self) -> bool:
        return self.pl < 0


_ZERO = RealizedOutcome()


def risk_amount(trade: Trade) -> float:
    """Initial risk in account currency (primary stop distance x size)."""
    order = trade.bracket_order
    return abs(order.stop_distance * order.position_size * trade.value_per_unit)


def outcome_from_levels(trade: Trade) -> RealizedOutcome:
    """Rebuild P/L and R from the per-level outcome records.

    Returns a zero outcome for an empty level list.
    """
    if not trade.bracket_order_outcomes:
        return _ZERO

    entry = trade.bracket_order.entry_price
    total_pl = 0.0
    for level in trade.bracket_order_outcomes:
        execution = level.execution_price if level.execution_price is not None else entry
        if trade.is_long:
            price_diff = level.closure_price - execution
        else:
            price_diff = execution - level.closure_price
        total_pl += price_diff * level.size * trade.value_per_unit

    max_risk = risk_amount(trade)
    rr = total_pl / max_risk if max_risk > 0 else 0.0
    return RealizedOutcome(pl=total_pl, rr=rr)


def realize(trade: Trade) -> RealizedOutcome:
    """Realized P/L and R for a trade; zero for trades still open."""
    if not trade.is_completed:
        return _ZERO
    summary = trade.bracket_order_outcome
    if summary is not None:
        return RealizedOutcome(pl=summary.final_pl_usd, rr=summary.rr)
    return outcome_from_levels(trade)


def trade_pl(trade: Trade) -> float:
    return realize(trade).pl


def trade_rr(trade: Trade) -> float:
    return realize(trade).rr


def is_winner(trade: Trade) -> bool:
    return realize(trade).is_winner


def is_loser(trade: Trade) -> bool:
    return realize(trade).is_loser


def derive_bracket_closure_price(
    trade: Trade,
    group: BracketGroup,
    closure_type: ClosureType | None,
    manual_close_price: float | None = None,
) -> float | None:
    """Closure price implied by a selected outcome type.

    ``None`` closure type (nothing selected yet) yields ``None``.
    """
    if closure_type is None:
        return None
    if closure_type == ClosureType.TAKE_PROFIT:
        return group.take_profit_price
    if closure_type == ClosureType.STOP_LOSS:
        return group.stop_loss_price
    if closure_type == ClosureType.BREAK_EVEN:
        return trade.bracket_order.entry_price
    return manual_close_price if manual_close_price is not None else 0.0
