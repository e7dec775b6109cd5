"""Trade scope filter and session classification.

Narrows a trade collection by model, session, and adherence threshold
before the analytics run.  ``infer_session`` is the single session
classifier; every session label in the package comes from it.

Usage::

    scoped = filter_trades(trades, FilterOptions(model_id="m1", session="London"))
    scoped = filter_trades(trades, adherence_threshold=0.8)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from trade_analytics.core.clock import utc_hour
from trade_analytics.core.enums import ALL_MODELS, ALL_SESSIONS, Session
from trade_analytics.core.models import Trade

# Session definitions (UTC hours, inclusive start, exclusive end)
SESSIONS = {
    Session.ASIA: (0, 8),
    Session.LONDON: (8, 16),
    Session.NY: (16, 24),
}


def infer_session(timestamp_ns: int) -> Session:
    """Classify a nanosecond UTC timestamp into a trading session."""
    hour = utc_hour(timestamp_ns)
    for session, (start_h, end_h) in SESSIONS.items():
        if start_h <= hour < end_h:
            return session
    return Session.NY


def trade_session(trade: Trade) -> Session:
    return infer_session(trade.created_at)


@dataclass(frozen=True)
class FilterOptions:
    """Analytics scope.  ``None`` (or the "all" sentinels) disables a filter."""

    model_id: str | None = None
    session: Session | str | None = None
    adherence_threshold: float | None = None


def _resolve_session(session: Session | str | None) -> Session | str | None:
    """Target session, or None for no filter.  Unknown names match no trade."""
    if session is None or session == ALL_SESSIONS:
        return None
    if isinstance(session, Session):
        return session
    return next((s for s in Session if s.value == session), session)


def filter_trades(
    trades: Iterable[Trade],
    options: FilterOptions | None = None,
    *,
    model_id: str | None = None,
    session: Session | str | None = None,
    adherence_threshold: float | None = None,
) -> list[Trade]:
    """Return the trades inside the requested scope, input order preserved.

    Keyword arguments override the matching fields of ``options``.  A
    session name outside Asia / London / NY yields an empty result.
    """
    opts = options or FilterOptions()
    model_id = model_id if model_id is not None else opts.model_id
    target_session = _resolve_session(session if session is not None else opts.session)
    threshold = (
        adherence_threshold if adherence_threshold is not None
        else opts.adherence_threshold
    )

    filtered = list(trades)

    if model_id and model_id != ALL_MODELS:
        filtered = [t for t in filtered if t.model_id == model_id]

    if target_session is not None:
        filtered = [t for t in filtered if trade_session(t) == target_session]

    if threshold is not None:
        filtered = [
            t for t in filtered
            if t.adherence_score is not None and t.adherence_score >= threshold
        ]

    return filtered


def completed_trades(trades: Iterable[Trade]) -> list[Trade]:
    """Only trades that are closed and eligible for performance analytics."""
    return [t for t in trades if t.is_completed]
