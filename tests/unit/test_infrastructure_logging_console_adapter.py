"""Unit tests for ConsoleAdapter (structured console logging).

Tests cover:
- LoggerProtocol methods, including the ``log`` channel
- Exception details on error/critical
- Context binding
- Renderer selection (JSON vs console) and level filtering

Architecture:
- Unit tests with mocked structlog
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from warden.infrastructure.logging.console_adapter import ConsoleAdapter

STRUCTLOG = "warden.infrastructure.logging.console_adapter.structlog"


@pytest.fixture
def structlog_mock():
    with patch(STRUCTLOG) as mock_structlog:
        mock_structlog.get_logger.return_value = MagicMock()
        yield mock_structlog


@pytest.mark.unit
class TestConsoleAdapterLogging:
    """Test ConsoleAdapter logging methods."""

    def test_info_logs_message_with_context(self, structlog_mock):
        adapter = ConsoleAdapter()
        adapter.info("container_built", environment="testing")

        structlog_mock.get_logger.return_value.info.assert_called_once_with(
            "container_built", environment="testing"
        )

    def test_log_channel_emits_info_with_channel_key(self, structlog_mock):
        adapter = ConsoleAdapter()
        adapter.log("log_event", event_name="login")

        structlog_mock.get_logger.return_value.info.assert_called_once_with(
            "log_event", channel="log", event_name="login"
        )

    def test_error_includes_exception_details(self, structlog_mock):
        adapter = ConsoleAdapter()
        adapter.error("database_error", error=ConnectionError("gone"), retry=1)

        structlog_mock.get_logger.return_value.error.assert_called_once_with(
            "database_error",
            retry=1,
            error_type="ConnectionError",
            error_message="gone",
        )

    def test_critical_without_exception(self, structlog_mock):
        adapter = ConsoleAdapter()
        adapter.critical("shutdown", reason="signal")

        structlog_mock.get_logger.return_value.critical.assert_called_once_with(
            "shutdown", reason="signal"
        )

    def test_debug_and_warning_forward_context(self, structlog_mock):
        adapter = ConsoleAdapter()
        adapter.debug("event_publishing", handler_count=1)
        adapter.warning("event_handler_failed", error_type="RuntimeError")

        logger = structlog_mock.get_logger.return_value
        logger.debug.assert_called_once_with("event_publishing", handler_count=1)
        logger.warning.assert_called_once_with(
            "event_handler_failed", error_type="RuntimeError"
        )

    def test_bind_returns_new_adapter_with_bound_logger(self, structlog_mock):
        adapter = ConsoleAdapter()
        bound = adapter.bind(request_id="abc")

        assert bound is not adapter
        structlog_mock.get_logger.return_value.bind.assert_called_once_with(
            request_id="abc"
        )
        bound.info("hello")
        structlog_mock.get_logger.return_value.bind.return_value.info.assert_called_once_with(
            "hello"
        )


@pytest.mark.unit
class TestConsoleAdapterConfiguration:
    """Renderer and level selection."""

    def test_json_renderer_when_use_json(self, structlog_mock):
        ConsoleAdapter(use_json=True)

        structlog_mock.processors.JSONRenderer.assert_called_once()
        structlog_mock.dev.ConsoleRenderer.assert_not_called()

    def test_console_renderer_by_default(self, structlog_mock):
        ConsoleAdapter()

        structlog_mock.dev.ConsoleRenderer.assert_called_once()
        structlog_mock.processors.JSONRenderer.assert_not_called()

    def test_level_name_controls_filtering(self, structlog_mock):
        ConsoleAdapter(level="warning")

        structlog_mock.make_filtering_bound_logger.assert_called_once_with(
            logging.WARNING
        )

    def test_unknown_level_falls_back_to_info(self, structlog_mock):
        ConsoleAdapter(level="chatty")

        structlog_mock.make_filtering_bound_logger.assert_called_once_with(
            logging.INFO
        )
