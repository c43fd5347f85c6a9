"""Observability module for structured logging."""

from action_toolkit.observability.logging import (
    bind_action_context,
    clear_action_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)


__all__ = [
    "bind_action_context",
    "clear_action_context",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
]
