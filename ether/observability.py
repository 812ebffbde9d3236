"""Structured logging configuration."""

import logging
import sys
from typing import TextIO

import structlog

from ether.settings import EtherSettings


def configure_logging(
    level: int = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Configure structured logging for applications using Ether.

    Sets up structlog with timestamps, log levels and context binding,
    rendering JSON or colored console output.

    Args:
        level: Logging level (default: INFO).
        output: Output stream (default: stderr).
        json_format: Whether to use JSON format (default: True).
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )


def configure_logging_from_settings(
    settings: EtherSettings | None = None,
    output: TextIO = sys.stderr,
) -> None:
    """Configure logging from ``ETHER_LOG_LEVEL`` and ``ETHER_JSON_LOGS``."""
    settings = settings or EtherSettings()
    configure_logging(
        level=settings.log_level_number, output=output, json_format=settings.json_logs
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a bound logger instance.

    Args:
        name: Optional logger name.

    Returns:
        Bound logger instance.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
