"""Event bus adapter and event listeners."""

from warden.infrastructure.events.in_memory_event_bus import InMemoryEventBus

__all__ = ["InMemoryEventBus"]
