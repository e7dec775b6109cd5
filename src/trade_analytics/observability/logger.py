"""Structured logging for CLI runs.

structlog renders JSON or console lines.  Each CLI invocation calls
``start_run`` which binds a fresh ``run_id`` and the command name into
structlog's context, so every line of one report, simulation or calendar
build can be correlated.
"""

from __future__ import annotations

import logging
import sys
import uuid
from typing import Any

import structlog


def start_run(command: str) -> str:
    """Bind a new run id and the command name for the current context."""
    run_id = uuid.uuid4().hex[:12]
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(run_id=run_id, command=command)
    return run_id


def current_run() -> dict[str, Any]:
    """The ``run_id`` / ``command`` bound by ``start_run`` (empty before it)."""
    return structlog.contextvars.get_contextvars()


def setup_logging(level: str = "INFO", format: str = "console") -> None:
    """Configure structlog on top of stdlib logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format: "json" for machine-readable output, "console" for humans.
    """
    renderer: Any
    if format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
