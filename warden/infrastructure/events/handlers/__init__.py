"""Event listeners."""

from warden.infrastructure.events.handlers.log_event_handler import LogEventHandler

__all__ = ["LogEventHandler"]
