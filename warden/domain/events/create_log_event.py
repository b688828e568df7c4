"""Log event published by services that want something audited.

A CreateLogEvent travels on the ``create.log`` channel. The log listener
turns it into a structured log line and, unless ``write_database`` is
False, into a persisted log record that is also pushed to subscribers.

Usage:
    await event_bus.publish(
        CreateLogEvent(
            type=LogType.ERROR,
            origin=LogOrigin.API,
            event_name="login",
            service_name="LoginUserHandler",
            message="Unauthorized",
            context={"email": email},
        )
    )
"""

from dataclasses import dataclass, fields
from typing import Any, ClassVar

from pydantic_core import to_jsonable_python

from warden.domain.enums import LogOrigin, LogType
from warden.domain.events.base_event import DomainEvent

# Fields that steer the listener and are not part of the stored payload.
_CONTROL_FIELDS = frozenset({"type", "write_database"})


@dataclass(frozen=True, kw_only=True, slots=True)
class CreateLogEvent(DomainEvent):
    """Request to record a log entry.

    Attributes:
        type: Log kind; its lower-cased value names the logger method used.
        origin: Subsystem that emitted the event.
        event_name: Operation the log refers to (``login``, ``createOne``).
        service_name: Component that emitted the event.
        description: Optional longer explanation.
        message: Optional short message.
        error_code: Optional machine-readable code.
        stack: Optional stack trace text.
        context: Optional structured context (JSON-serializable).
        write_database: Persist the record and notify subscribers.
    """

    channel: ClassVar[str] = "create.log"

    type: LogType
    origin: LogOrigin
    event_name: str
    service_name: str
    description: str | None = None
    message: str | None = None
    error_code: str | None = None
    stack: str | None = None
    context: dict[str, Any] | None = None
    write_database: bool = True

    def to_payload(self) -> dict[str, Any]:
        """Serialize to a JSON-safe dict without the control fields.

        ``type`` and ``write_database`` are excluded; unset optional fields
        are omitted. UUIDs, datetimes and enums become strings.

        Returns:
            Plain dict suitable for logging and JSON storage.
        """
        payload: dict[str, Any] = {}
        for item in fields(self):
            name = item.name
            if name in _CONTROL_FIELDS:
                continue
            value = getattr(self, name)
            if value is None:
                continue
            payload[name] = value
        return to_jsonable_python(payload)

    @classmethod
    def error(
        cls,
        *,
        event_name: str,
        service_name: str,
        message: str,
        context: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> "CreateLogEvent":
        """Build an ERROR event originating from the API.

        Example:
            >>> CreateLogEvent.error(
            ...     event_name="login",
            ...     service_name="LoginUserHandler",
            ...     message="Unauthorized",
            ... ).type
            <LogType.ERROR: 'ERROR'>
        """
        return cls(
            type=LogType.ERROR,
            origin=LogOrigin.API,
            event_name=event_name,
            service_name=service_name,
            message=message,
            error_code=error_code,
            context=context,
        )
