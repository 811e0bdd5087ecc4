"""Structlog configuration helpers for structured logging."""

from __future__ import annotations

import logging

import structlog


def configure_logging(level: str | int = logging.INFO, *, json_logs: bool = True) -> None:
    """Configure structlog on top of stdlib logging.

    JSON lines are emitted by default; ``json_logs=False`` switches to the
    human-readable console renderer for local development.
    """

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(level=level)
