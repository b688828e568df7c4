"""Log listener: turns CreateLogEvent into log lines, rows and pushes.

Subscribed to the ``create.log`` channel at startup. For each event:

1. Serialize the event, dropping the ``type`` and ``write_database``
   control fields.
2. Emit the payload on the logger method named after the lower-cased log
   kind (``ERROR`` -> ``logger.error``). A kind with no matching method
   raises UnsupportedLogKindError.
3. When ``write_database`` is set, append a log record in its own
   session and publish the stored record on the ``logCreated`` topic.

Storage failures propagate to the event bus, which isolates or re-raises
them depending on its mode.
"""

from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

from warden.domain.entities import LogRecord
from warden.domain.enums import PublishTopic
from warden.domain.errors import UnsupportedLogKindError
from warden.domain.events import CreateLogEvent, DomainEvent
from warden.domain.protocols import (
    LoggerProtocol,
    LogRepository,
    SubscriptionBrokerProtocol,
)
from warden.infrastructure.persistence.database import Database
from warden.infrastructure.persistence.repositories import (
    LogRepository as SqlLogRepository,
)


class LogEventHandler:
    """Event handler for CreateLogEvent.

    Attributes:
        _logger: Structured logger receiving the payloads.
        _database: Database providing a fresh session per stored record.
        _broker: Subscription broker notified of stored records.
        _repository_factory: Builds a LogRepository for a session.

    Example:
        >>> handler = LogEventHandler(logger=logger, database=db, broker=broker)
        >>> event_bus.subscribe(CreateLogEvent.channel, handler.handle_create_log)
    """

    def __init__(
        self,
        logger: LoggerProtocol,
        database: Database,
        broker: SubscriptionBrokerProtocol,
        repository_factory: Callable[[AsyncSession], LogRepository] = SqlLogRepository,
    ) -> None:
        self._logger = logger
        self._database = database
        self._broker = broker
        self._repository_factory = repository_factory

    async def handle_create_log(self, event: DomainEvent) -> LogRecord | None:
        """Handle one log event.

        Args:
            event: CreateLogEvent published on ``create.log``.

        Returns:
            The stored record, or None when ``write_database`` is False.

        Raises:
            TypeError: If a different event type is routed here.
            UnsupportedLogKindError: If the logger has no method for the kind.
        """
        if not isinstance(event, CreateLogEvent):
            raise TypeError(f"Expected CreateLogEvent, got {type(event).__name__}")

        payload = event.to_payload()

        kind = event.type.value.lower()
        log_method = getattr(self._logger, kind, None)
        if not callable(log_method):
            raise UnsupportedLogKindError(event.type.value)
        log_method("log_event", **payload)

        if not event.write_database:
            return None

        async with self._database.get_session() as session:
            repository = self._repository_factory(session)
            record = await repository.create(
                LogRecord(
                    id=uuid7(),
                    type=event.type,
                    origin=event.origin,
                    data=payload,
                )
            )

        await self._broker.publish(PublishTopic.LOG_CREATED, record)
        return record
