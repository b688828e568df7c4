"""LogRepository protocol. Log records are append-only."""

from typing import Protocol
from uuid import UUID

from warden.domain.entities.log_record import LogRecord
from warden.domain.enums import LogType


class LogRepository(Protocol):
    """Log record persistence port (no update, no delete)."""

    async def create(self, record: LogRecord) -> LogRecord:
        """Append a record and return it as stored."""
        ...

    async def find_by_id(self, log_id: UUID) -> LogRecord | None:
        """Find a record by ID."""
        ...

    async def find_many(
        self,
        *,
        skip: int = 0,
        take: int | None = None,
        log_type: LogType | None = None,
        newest_first: bool = True,
    ) -> list[LogRecord]:
        """List records, newest first by default."""
        ...
