"""LogRepository - SQLAlchemy implementation of the LogRepository protocol.

Append-only: there is no update or delete.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from warden.domain.entities import LogRecord
from warden.domain.enums import LogOrigin, LogType
from warden.infrastructure.persistence.models.log import LogModel


class LogRepository:
    """SQLAlchemy log record repository.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, record: LogRecord) -> LogRecord:
        """Insert a log record and return it with its stored timestamp.

        Args:
            record: Record to append.

        Returns:
            The stored record.
        """
        log_model = LogModel(
            id=record.id,
            type=record.type,
            origin=record.origin,
            data=record.data,
        )
        self.session.add(log_model)
        await self.session.commit()
        await self.session.refresh(log_model)
        return self._to_domain(log_model)

    async def find_by_id(self, log_id: UUID) -> LogRecord | None:
        """Find a log record by ID."""
        result = await self.session.execute(
            select(LogModel).where(LogModel.id == log_id)
        )
        log_model = result.scalar_one_or_none()
        return self._to_domain(log_model) if log_model is not None else None

    async def find_many(
        self,
        *,
        skip: int = 0,
        take: int | None = None,
        log_type: LogType | None = None,
        newest_first: bool = True,
    ) -> list[LogRecord]:
        """List log records.

        Args:
            skip: Number of records to skip.
            take: Maximum number of records (None for all).
            log_type: Only records of this kind.
            newest_first: Sort by creation time descending (default).

        Returns:
            Matching records. IDs are UUID v7 and break ties in creation order.
        """
        if newest_first:
            stmt = select(LogModel).order_by(
                LogModel.created_at.desc(), LogModel.id.desc()
            )
        else:
            stmt = select(LogModel).order_by(LogModel.created_at, LogModel.id)
        if log_type is not None:
            stmt = stmt.where(LogModel.type == log_type)
        if skip:
            stmt = stmt.offset(skip)
        if take is not None:
            stmt = stmt.limit(take)

        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    def _to_domain(self, log_model: LogModel) -> LogRecord:
        return LogRecord(
            id=log_model.id,
            type=LogType(log_model.type),
            origin=LogOrigin(log_model.origin),
            data=dict(log_model.data or {}),
            created_at=log_model.created_at,
        )
