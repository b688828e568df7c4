"""Create log handler.

Validates caller-supplied data against the log event shape and appends a
log record. The record payload is built exactly like the log listener
builds it, so records from both paths look the same.
"""

from typing import Any

from uuid_extensions import uuid7

from warden.application.commands.log_commands import CreateLog
from warden.core.enums import ErrorCode
from warden.core.errors import DomainError, ValidationError
from warden.core.result import Failure, Result, Success
from warden.domain.entities import LogRecord
from warden.domain.enums import LogOrigin, LogType
from warden.domain.events import CreateLogEvent
from warden.domain.protocols import LogRepository

_REQUIRED_TEXT_FIELDS = ("event_name", "service_name")
_OPTIONAL_TEXT_FIELDS = ("description", "message", "error_code", "stack")


def _invalid(field: str, message: str) -> Failure[ValidationError]:
    return Failure(
        error=ValidationError(
            code=ErrorCode.VALIDATION_FAILED,
            message=message,
            field=field,
        )
    )


def parse_log_event(data: dict[str, Any]) -> Result[CreateLogEvent, ValidationError]:
    """Validate raw fields and build a CreateLogEvent.

    Args:
        data: Raw fields (``type``, ``origin``, ``event_name``, ...).

    Returns:
        Success(CreateLogEvent) or Failure(ValidationError) naming the
        first offending field.
    """
    try:
        log_type = LogType(data.get("type"))
    except ValueError:
        return _invalid("type", f"type must be one of {[t.value for t in LogType]}")

    try:
        origin = LogOrigin(data.get("origin"))
    except ValueError:
        return _invalid(
            "origin", f"origin must be one of {[o.value for o in LogOrigin]}"
        )

    for name in _REQUIRED_TEXT_FIELDS:
        value = data.get(name)
        if not isinstance(value, str) or not value.strip():
            return _invalid(name, f"{name} must be a non-empty string")

    for name in _OPTIONAL_TEXT_FIELDS:
        value = data.get(name)
        if value is not None and not isinstance(value, str):
            return _invalid(name, f"{name} must be a string")

    context = data.get("context")
    if context is not None and not isinstance(context, dict):
        return _invalid("context", "context must be an object")

    return Success(
        value=CreateLogEvent(
            type=log_type,
            origin=origin,
            event_name=data["event_name"],
            service_name=data["service_name"],
            description=data.get("description"),
            message=data.get("message"),
            error_code=data.get("error_code"),
            stack=data.get("stack"),
            context=context,
        )
    )


class CreateLogHandler:
    """Handler for CreateLog command."""

    def __init__(self, log_repo: LogRepository) -> None:
        self._log_repo = log_repo

    async def handle(self, cmd: CreateLog) -> Result[LogRecord, DomainError]:
        """Handle CreateLog command.

        Returns:
            Success(LogRecord) as stored, Failure(ValidationError) for
            malformed data.
        """
        parsed = parse_log_event(cmd.data)
        if isinstance(parsed, Failure):
            return parsed

        event = parsed.value
        record = await self._log_repo.create(
            LogRecord(
                id=uuid7(),
                type=event.type,
                origin=event.origin,
                data=event.to_payload(),
            )
        )
        return Success(value=record)
