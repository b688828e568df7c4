"""Log query handlers (GetLog, ListLogs)."""

from warden.application.queries.log_queries import GetLog, ListLogs
from warden.core.enums import ErrorCode
from warden.core.errors import DomainError, NotFoundError, ValidationError
from warden.core.result import Failure, Result, Success
from warden.domain.entities import LogRecord
from warden.domain.protocols import LogRepository


class GetLogHandler:
    """Handler for GetLog query."""

    def __init__(self, log_repo: LogRepository) -> None:
        self._log_repo = log_repo

    async def handle(self, query: GetLog) -> Result[LogRecord, DomainError]:
        record = await self._log_repo.find_by_id(query.log_id)
        if record is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.LOG_NOT_FOUND,
                    message="Log not found",
                    resource_type="Log",
                    resource_id=str(query.log_id),
                )
            )
        return Success(value=record)


class ListLogsHandler:
    """Handler for ListLogs query."""

    def __init__(self, log_repo: LogRepository) -> None:
        self._log_repo = log_repo

    async def handle(self, query: ListLogs) -> Result[list[LogRecord], DomainError]:
        if query.skip < 0 or (query.take is not None and query.take < 0):
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_INPUT,
                    message="skip and take must not be negative",
                    field="skip" if query.skip < 0 else "take",
                )
            )

        records = await self._log_repo.find_many(
            skip=query.skip,
            take=query.take,
            log_type=query.log_type,
            newest_first=query.newest_first,
        )
        return Success(value=records)
