"""Persisted log entry."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from warden.domain.enums import LogOrigin, LogType


@dataclass(frozen=True, slots=True, kw_only=True)
class LogRecord:
    """Append-only log record written by the log listener.

    Attributes:
        id: Record identifier.
        type: Log kind.
        origin: Subsystem that emitted the event.
        data: Serialized event payload.
        created_at: Storage timestamp.
    """

    id: UUID
    type: LogType
    origin: LogOrigin
    data: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
