"""Log database model.

Append-only: rows are inserted by the log listener and by the createLog
mutation and never updated, so LogModel extends BaseModel (no updated_at).
"""

from typing import Any

from sqlalchemy import JSON, Enum, Index
from sqlalchemy.orm import Mapped, mapped_column

from warden.domain.enums import LogOrigin, LogType
from warden.infrastructure.persistence.base import BaseModel


class LogModel(BaseModel):
    """Log record table.

    Fields:
        type: Log kind.
        origin: Subsystem that emitted the event.
        data: Serialized event payload.

    Indexes:
        - idx_logs_type_created: filter by kind, newest first
    """

    __tablename__ = "logs"

    type: Mapped[LogType] = mapped_column(
        Enum(LogType, name="log_type", native_enum=False, length=16),
        nullable=False,
    )
    origin: Mapped[LogOrigin] = mapped_column(
        Enum(LogOrigin, name="log_origin", native_enum=False, length=16),
        nullable=False,
    )
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    __table_args__ = (Index("idx_logs_type_created", "type", "created_at"),)
