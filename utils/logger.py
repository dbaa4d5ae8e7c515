"""
Structured logging module using structlog

Features
--------
• Structured key/value logging on top of the stdlib logging tree
• Console colour support
• Level taken from the LOG_LEVEL environment variable
"""
from __future__ import annotations

import logging
import os
import sys

import structlog


def _supports_colour() -> bool:
    """True if stdout seems to handle ANSI colour codes."""
    if os.getenv("NO_COLOR"):
        return False
    return sys.stdout.isatty()


def _level_from_env() -> int:
    return getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)


def init_logger(level: int | str | None = None) -> None:
    """Configure structlog with console output. Safe to call more than once."""
    if level is None:
        resolved = _level_from_env()
    elif isinstance(level, str):
        resolved = getattr(logging, level.upper(), logging.INFO)
    else:
        resolved = level

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=resolved)
    logging.getLogger().setLevel(resolved)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer(colors=_supports_colour()),
    ]

    structlog.configure(
        processors=processors,  # type: ignore[arg-type]
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    """Get a structlog logger instance."""
    return structlog.get_logger(name)
