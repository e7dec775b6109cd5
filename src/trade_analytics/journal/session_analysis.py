"""Session performance breakdown (Asia / London / NY).

Answers "Am I better in the London session?".  All three sessions are
always reported, zero-filled when a session has no completed trades.
"""

from __future__ import annotations

from collections.abc import Iterable

from trade_analytics.core.enums import Session
from trade_analytics.core.models import Trade

from .grouping import CategoryGroup, group_trades
from .scope import trade_session

SESSION_ORDER = [Session.ASIA, Session.LONDON, Session.NY]


def compute_session_metrics(trades: Iterable[Trade]) -> list[CategoryGroup[Session]]:
    return group_trades(trades, trade_session, order=SESSION_ORDER)
