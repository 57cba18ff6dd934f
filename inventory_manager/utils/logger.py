"""Structured logging: human-readable lines on stderr, JSON lines in the log file.

The two outputs have separate thresholds (``CONSOLE_LOG_LEVEL`` and
``LOG_LEVEL``) so the console stays quiet during normal CLI use while the
file keeps a full record of store activity.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

from inventory_manager.config import CONSOLE_LOG_LEVEL, LOG_FILE, LOG_LEVEL, VERBOSE_LOGGING

BoundLogger = structlog.stdlib.BoundLogger

_configured = False


def _level(name: str, fallback: int) -> int:
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else fallback


def resolve_levels() -> tuple[int, int]:
    """Return ``(file_level, console_level)``; verbose mode opens both to DEBUG."""
    if VERBOSE_LOGGING:
        return logging.DEBUG, logging.DEBUG
    return _level(LOG_LEVEL, logging.INFO), _level(CONSOLE_LOG_LEVEL, logging.WARNING)


def _with_renderer(handler: logging.Handler, level: int, renderer: Any, pre_chain: list) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)
    )
    return handler


def _configure_logging() -> None:
    global _configured
    if _configured:
        return

    file_level, console_level = resolve_levels()
    threshold = min(file_level, console_level)
    shared = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(threshold)
    # stderr, so log lines never land inside table output on stdout
    root.addHandler(
        _with_renderer(logging.StreamHandler(), console_level, structlog.dev.ConsoleRenderer(colors=True), shared)
    )
    root.addHandler(
        _with_renderer(
            logging.FileHandler(LOG_FILE, encoding="utf-8"),
            file_level,
            structlog.processors.JSONRenderer(),
            shared,
        )
    )
    logging.captureWarnings(True)

    structlog.configure(
        processors=shared
        + [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str = "inventory_manager", **bindings: Any) -> BoundLogger:
    """Return a structlog logger for ``name``, configuring logging on first use."""
    _configure_logging()
    logger = structlog.get_logger(name)
    return logger.bind(**bindings) if bindings else logger


def bind_context(**context: Any) -> None:
    """Attach key/values (e.g. the data file in use) to every following log entry."""
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
