"""User domain entity.

Pure business data, no framework dependencies.

A user has a classification (``user_type``) and an independent set of
roles. Only roles are consulted for authorization; the classification
feeds the role policy when roles are not given explicitly.

The password digest lives in a separate credential record and is only
loaded when a caller asks for it (login). Everywhere else
``password_hash`` is None.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID

from warden.domain.entities.profile import Profile
from warden.domain.enums import UserRole, UserType


@dataclass(frozen=True, slots=True, kw_only=True)
class User:
    """User account.

    Attributes:
        id: Unique user identifier.
        email: Unique e-mail address.
        user_type: Classification (GUEST, USER, ADMIN).
        roles: Non-empty set of access roles.
        profile: Optional profile details.
        password_hash: Bcrypt digest, only set when explicitly loaded.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    id: UUID
    email: str
    user_type: UserType
    roles: frozenset[UserRole] = field(default_factory=frozenset)
    profile: Profile | None = None
    password_hash: str | None = field(default=None, repr=False)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def without_credentials(self) -> "User":
        """Copy of the user with the password digest dropped."""
        return replace(self, password_hash=None)
