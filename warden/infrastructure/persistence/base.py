"""Base model and mixins for all database entities.

This module provides:
- BaseModel: Base class for ALL models (provides id, created_at)
- TimestampMixin: Internal mixin that adds updated_at
- BaseMutableModel: Base for mutable models (combines above)

Domain entities never inherit from these; repositories map between the two.

Architecture:
    BaseModel (id, created_at)
        ├── BaseMutableModel (+ updated_at via TimestampMixin)
        │   ├── UserModel
        │   ├── UserProfileModel
        │   └── UserPasswordModel
        │
        └── LogModel (append-only, no updated_at)

SQLAlchemy's generic Uuid and JSON types keep the schema portable between
PostgreSQL (production) and SQLite (tests).
"""

from datetime import datetime
from uuid import UUID as PythonUUID

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid_extensions import uuid7


class BaseModel(DeclarativeBase):
    """Base class for all database models (mutable and immutable).

    Provides:
    - id: UUID v7 primary key (time-ordered, generated client-side)
    - created_at: Timestamp when record was created (set by the database)
    """

    __abstract__ = True

    id: Mapped[PythonUUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid7,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<{self.__class__.__name__}(id={self.id})>"


class TimestampMixin:
    """Mixin for mutable models that track updates.

    Note:
        Use BaseMutableModel rather than mixing this in manually.
    """

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class BaseMutableModel(TimestampMixin, BaseModel):
    """Base class for mutable database models (id, created_at, updated_at)."""

    __abstract__ = True
