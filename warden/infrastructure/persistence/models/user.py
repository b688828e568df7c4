"""User, profile and credential database models.

A user row owns at most one profile row and exactly one credential row.
The credential is kept in its own table so ordinary user reads never load
the password digest.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import JSON, Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from warden.domain.enums import UserType
from warden.infrastructure.persistence.base import BaseMutableModel


class UserModel(BaseMutableModel):
    """User account table.

    Fields:
        email: Unique e-mail address (stored lower-cased).
        type: Classification (GUEST, USER, ADMIN).
        roles: JSON list of role names.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    type: Mapped[UserType] = mapped_column(
        Enum(UserType, name="user_type", native_enum=False, length=16),
        nullable=False,
        default=UserType.USER,
    )
    roles: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    profile: Mapped[Optional["UserProfileModel"]] = relationship(
        back_populates="user",
        uselist=False,
        lazy="selectin",
        cascade="all, delete-orphan",
    )


class UserProfileModel(BaseMutableModel):
    """Optional personal details, one-to-one with users."""

    __tablename__ = "user_profiles"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    username: Mapped[str | None] = mapped_column(String(100), nullable=True)

    user: Mapped[UserModel] = relationship(back_populates="profile")


class UserPasswordModel(BaseMutableModel):
    """Password digest, one-to-one with users."""

    __tablename__ = "user_passwords"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    hash: Mapped[str] = mapped_column(String(255), nullable=False)
