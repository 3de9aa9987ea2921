# tests/unit/test_helpers.py
from __future__ import annotations

import io
from unittest.mock import MagicMock

import pytest
import structlog
from structlog.testing import capture_logs

from hollow_runner.helpers import trace


def test_trace_forwards_event() -> None:
    """Event name, level and context reach the logger."""
    with capture_logs() as logs:
        trace(structlog.get_logger(), "info", "thing.happened", key="value")
    assert logs == [{"event": "thing.happened", "log_level": "info", "key": "value"}]


def test_trace_uses_requested_level() -> None:
    log = MagicMock()
    trace(log, "debug", "ports.expose", port=80)
    log.debug.assert_called_once_with("ports.expose", port=80)
    log.info.assert_not_called()


def test_trace_swallows_logger_errors() -> None:
    """A logger that raises does not propagate."""
    log = MagicMock()
    log.info.side_effect = ValueError("sink closed")
    trace(log, "info", "thing.happened")
    log.info.assert_called_once()


def test_trace_with_closed_sink(broken_log_sink: io.StringIO) -> None:
    """Writing to the closed sink fails, tracing to it does not."""
    with pytest.raises(ValueError):
        structlog.get_logger().info("thing.happened")
    trace(structlog.get_logger(), "info", "thing.happened")
