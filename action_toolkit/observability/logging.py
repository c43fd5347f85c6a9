"""Structured logging configuration."""

import logging
import sys
from typing import TextIO

import structlog

from action_toolkit.settings.app import AppSettings


def configure_logging(
    level: int | str = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Configure structured logging for an action invocation.

    Sets up structlog with JSON output and standard processors for
    timestamps, log levels, and context binding.

    Args:
        level: Logging level as an int or a name such as "debug" (default: INFO).
        output: Output stream (default: stderr).
        json_format: Whether to use JSON format (default: True).
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

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

    logging.basicConfig(
        format="%(message)s",
        stream=output,
        level=level,
    )


def configure_logging_from_settings(
    settings: AppSettings,
    output: TextIO = sys.stderr,
) -> None:
    """Configure JSON logging at the level named by ``LOG_LEVEL``."""
    configure_logging(level=settings.log_level, output=output)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a bound logger instance.

    Args:
        name: Optional logger name.

    Returns:
        Bound logger instance.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


def bind_action_context(action_name: str, activation_id: str | None = None) -> None:
    """Bind action context to all subsequent log messages.

    Args:
        action_name: Name of the running action.
        activation_id: Platform activation identifier, if known.
    """
    structlog.contextvars.bind_contextvars(
        action_name=action_name,
        activation_id=activation_id,
    )


def clear_action_context() -> None:
    """Clear action context from log messages."""
    structlog.contextvars.unbind_contextvars("action_name", "activation_id")
