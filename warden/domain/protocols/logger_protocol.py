"""LoggerProtocol definition for structured logging.

Structured logging port, backend-agnostic. Implementations MUST keep logs
structured (message + key-value context) and free of secrets.

Log channels:
    - DEBUG: Detailed diagnostic info
    - LOG: General-purpose channel (info severity)
    - INFO: Normal operational events
    - WARNING: Degraded behaviour
    - ERROR: Operation failed, system continues
    - CRITICAL: System-wide failure

The log listener picks the method by name from a log kind, so adding a
channel here makes the matching ``LogType`` usable.

Security:
    - NEVER log passwords or tokens
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def log(self, message: str, /, **context: Any) -> None:
        """Log on the general-purpose channel (info severity)."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Human-readable message (avoid f-strings; use context).
            error: Optional exception instance; implementation may include
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message for catastrophic failures."""
        ...

    def bind(self, **context: Any) -> "LoggerProtocol":
        """Return new logger with permanently bound context.

        Original logger instance remains unchanged.

        Example:
            request_logger = logger.bind(operation="login")
            request_logger.info("graphql_operation_started")
        """
        ...
