"""Event bus port.

Handlers subscribe to a named channel and receive every event published
on it, in registration order.

Usage:
    event_bus.subscribe(CreateLogEvent.channel, listener.handle_create_log)
    await event_bus.publish(CreateLogEvent(...))
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from warden.domain.events.base_event import DomainEvent

EventHandler = Callable[[DomainEvent], Awaitable[None]]


class EventBusProtocol(Protocol):
    """In-process publish/subscribe for domain events."""

    def subscribe(self, channel: str, handler: EventHandler) -> None:
        """Register a handler for a channel.

        Args:
            channel: Event channel name (``CreateLogEvent.channel``).
            handler: Async callable receiving the event.
        """
        ...

    async def publish(self, event: DomainEvent) -> None:
        """Deliver an event to every handler of ``event.channel``.

        Publishing on a channel with no handlers is a no-op.
        """
        ...
