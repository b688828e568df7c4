"""Log queries."""

from dataclasses import dataclass
from uuid import UUID

from warden.domain.enums import LogType


@dataclass(frozen=True, kw_only=True)
class GetLog:
    """Get a single log record."""

    log_id: UUID


@dataclass(frozen=True, kw_only=True)
class ListLogs:
    """List log records, newest first unless ``newest_first`` is False."""

    skip: int = 0
    take: int | None = None
    log_type: LogType | None = None
    newest_first: bool = True
