"""JSON input loading for trades and models.

Reads a JSON array of records and validates each one into the core
models.  Used by the CLI; the analytics functions themselves take
in-memory collections and never touch the filesystem.

Usage::

    trades = load_trades("data/trades.json")
    models = load_models("data/models.json")
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from trade_analytics.core.errors import TradeLoadError
from trade_analytics.core.models import Model, Trade

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _load_records(path: str | Path, record_type: type[M]) -> list[M]:
    filepath = Path(path)
    try:
        with open(filepath, encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as exc:
        raise TradeLoadError(str(filepath), exc.strerror or str(exc)) from exc
    except json.JSONDecodeError as exc:
        raise TradeLoadError(str(filepath), f"invalid JSON: {exc}") from exc

    if not isinstance(raw, list):
        raise TradeLoadError(str(filepath), "expected a JSON array of records")

    try:
        records = TypeAdapter(list[record_type]).validate_python(raw)
    except ValidationError as exc:
        raise TradeLoadError(
            str(filepath), f"{exc.error_count()} validation error(s): {exc}"
        ) from exc

    logger.info("Loaded %d %s records from %s", len(records), record_type.__name__, filepath.name)
    return records


def load_trades(path: str | Path) -> list[Trade]:
    return _load_records(path, Trade)


def load_models(path: str | Path | None) -> list[Model]:
    """Load models; a missing path (None) means no models."""
    if path is None:
        return []
    return _load_records(path, Model)
