"""User management commands (admin write operations)."""

from dataclasses import dataclass
from uuid import UUID

from warden.domain.entities import Profile
from warden.domain.enums import UserRole, UserType


@dataclass(frozen=True, kw_only=True)
class CreateUser:
    """Create a user on behalf of an administrator.

    Attributes:
        email: Account email (must be unused).
        password: Plaintext password, hashed before storage.
        user_type: Classification (default USER).
        roles: Explicit roles; when None the role policy decides.
        profile: Optional profile details.
    """

    email: str
    password: str
    user_type: UserType = UserType.USER
    roles: frozenset[UserRole] | None = None
    profile: Profile | None = None


@dataclass(frozen=True, kw_only=True)
class UpdateUser:
    """Change fields of an existing user. None means "leave unchanged".

    Attributes:
        user_id: User to update.
        email: New email.
        password: New plaintext password.
        user_type: New classification. Without explicit ``roles`` this
            recomputes the role set from the policy, replacing the old one.
        roles: Explicit replacement role set.
        profile: Replacement profile details.
    """

    user_id: UUID
    email: str | None = None
    password: str | None = None
    user_type: UserType | None = None
    roles: frozenset[UserRole] | None = None
    profile: Profile | None = None


@dataclass(frozen=True, kw_only=True)
class DeleteUser:
    """Delete a user and its dependent records."""

    user_id: UUID
