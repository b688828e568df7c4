"""In-memory event bus implementation.

Implements EventBusProtocol with a dictionary-based registry keyed by
channel name. Suitable for single-process deployments.

Architecture:
    - Dictionary-based handler registry (channel -> list of handlers)
    - Sequential delivery in registration order
    - Failure isolation by default: a failing handler is logged and the
      remaining handlers still run; the publisher never sees the error
    - Strict mode: the first handler failure propagates to the publisher
      and later handlers are skipped

Usage:
    >>> bus = InMemoryEventBus(logger=logger)
    >>> bus.subscribe(CreateLogEvent.channel, listener.handle_create_log)
    >>> await bus.publish(CreateLogEvent(...))
"""

from collections import defaultdict

from warden.domain.events.base_event import DomainEvent
from warden.domain.protocols.event_bus_protocol import EventHandler
from warden.domain.protocols.logger_protocol import LoggerProtocol


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


class InMemoryEventBus:
    """In-memory event bus with ordered, isolated delivery.

    Thread Safety:
        NOT thread-safe (single-threaded async design). The registry is
        populated during startup and only appended to afterwards.

    Attributes:
        _handlers: Channel name -> async handlers in registration order.
        _logger: Logger for handler failures and event publishing.
        _strict: Propagate handler failures instead of isolating them.

    Example:
        >>> bus = InMemoryEventBus(logger=logger)
        >>> bus.subscribe("create.log", write_log)
        >>> bus.subscribe("create.log", forward_log)
        >>> await bus.publish(event)  # write_log runs, then forward_log
    """

    def __init__(self, logger: LoggerProtocol, *, strict: bool = False) -> None:
        """Initialize event bus.

        Args:
            logger: Logger for handler failures (warning level) and event
                publishing (debug level).
            strict: When True, a handler exception is re-raised to the
                publisher after being logged.
        """
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)
        self._logger = logger
        self._strict = strict

    def subscribe(self, channel: str, handler: EventHandler) -> None:
        """Register an event handler for a channel.

        Args:
            channel: Channel name (``CreateLogEvent.channel``).
            handler: Async callable taking the event.

        Notes:
            - No duplicate detection (same handler can be registered twice)
            - Handlers run in the order they were registered
        """
        self._handlers[channel].append(handler)

    def handler_count(self, channel: str) -> int:
        """Number of handlers registered for a channel."""
        return len(self._handlers.get(channel, []))

    async def publish(self, event: DomainEvent) -> None:
        """Publish event to all handlers registered on ``event.channel``.

        Args:
            event: Domain event to publish.

        Raises:
            Exception: Only in strict mode, the first handler failure.

        Flow:
            1. Look up handlers for the event's channel
            2. If none, return immediately (no-op)
            3. Await each handler in registration order
            4. Log failures; re-raise in strict mode
        """
        handlers = list(self._handlers.get(event.channel, []))

        if not handlers:
            return

        self._logger.debug(
            "event_publishing",
            channel=event.channel,
            event_type=type(event).__name__,
            event_id=str(event.event_id),
            handler_count=len(handlers),
        )

        for handler in handlers:
            try:
                await handler(event)
            except Exception as exc:
                self._logger.warning(
                    "event_handler_failed",
                    channel=event.channel,
                    event_type=type(event).__name__,
                    event_id=str(event.event_id),
                    handler_name=_handler_name(handler),
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                    exc_info=exc,
                )
                if self._strict:
                    raise
