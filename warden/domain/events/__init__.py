"""Domain events."""

from warden.domain.events.base_event import DomainEvent
from warden.domain.events.create_log_event import CreateLogEvent

__all__ = ["CreateLogEvent", "DomainEvent"]
