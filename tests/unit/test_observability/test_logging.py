"""Unit tests for structured logging configuration."""

import io
import json
from collections.abc import Iterator

import pytest
import structlog

from action_toolkit.observability.logging import (
    bind_action_context,
    clear_action_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)
from action_toolkit.settings import AppSettings


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Restore structlog defaults after each test."""
    yield
    clear_action_context()
    structlog.reset_defaults()


def _lines(buffer: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in buffer.getvalue().splitlines() if line]


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_output(self) -> None:
        """Should emit one JSON object per event with level and timestamp."""
        buffer = io.StringIO()
        configure_logging(output=buffer)

        get_logger().info("token_issued", component="auth")

        (line,) = _lines(buffer)
        assert line["event"] == "token_issued"
        assert line["level"] == "info"
        assert line["component"] == "auth"
        assert "timestamp" in line

    def test_level_name_filters(self) -> None:
        """Should accept a level name and drop lower-level events."""
        buffer = io.StringIO()
        configure_logging(level="warning", output=buffer)

        log = get_logger()
        log.info("ignored")
        log.warning("kept")

        assert [line["event"] for line in _lines(buffer)] == ["kept"]

    def test_from_settings(self) -> None:
        """Should take the level from LOG_LEVEL."""
        buffer = io.StringIO()
        settings = AppSettings(_env_file=None, LOG_LEVEL="error")  # type: ignore[call-arg]
        configure_logging_from_settings(settings, output=buffer)

        log = get_logger()
        log.warning("ignored")
        log.error("kept")

        assert [line["event"] for line in _lines(buffer)] == ["kept"]


class TestActionContext:
    """Tests for action context binding."""

    def test_bind_and_clear(self) -> None:
        """Should attach action fields until cleared."""
        buffer = io.StringIO()
        configure_logging(output=buffer)
        log = get_logger()

        bind_action_context("sync-orders", activation_id="abc123")
        log.info("first")
        clear_action_context()
        log.info("second")

        first, second = _lines(buffer)
        assert first["action_name"] == "sync-orders"
        assert first["activation_id"] == "abc123"
        assert "action_name" not in second
