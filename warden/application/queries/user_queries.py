"""User queries (CQRS read operations). Queries never change state."""

from dataclasses import dataclass
from uuid import UUID

from warden.domain.enums import UserType


@dataclass(frozen=True, kw_only=True)
class GetUser:
    """Get a single user by ID or email.

    Exactly one of ``user_id`` / ``email`` is expected; when both are given
    the ID wins.
    """

    user_id: UUID | None = None
    email: str | None = None


@dataclass(frozen=True, kw_only=True)
class ListUsers:
    """List users with offset pagination.

    Attributes:
        skip: Number of users to skip.
        take: Page size (None for all).
        user_type: Only users of this classification.
    """

    skip: int = 0
    take: int | None = None
    user_type: UserType | None = None
