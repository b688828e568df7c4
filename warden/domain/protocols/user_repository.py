"""UserRepository protocol for user persistence.

Port (interface) for hexagonal architecture. Infrastructure implements it
on top of SQLAlchemy; unit tests substitute AsyncMock instances.
"""

from typing import Protocol
from uuid import UUID

from warden.core.errors import ConflictError
from warden.core.result import Result
from warden.domain.entities.user import User
from warden.domain.enums import UserType


class UserRepository(Protocol):
    """User repository protocol (port).

    Every returned User carries its profile. The password digest is only
    populated when ``with_credentials=True`` is requested.

    Methods:
        find_by_id: Retrieve user by ID
        find_by_email: Retrieve user by email (case-insensitive)
        find_by_id_and_email: Retrieve user matching both keys
        find_many: Paginated listing
        exists_by_email: Cheap duplicate check
        create: Insert user, profile and credential
        update: Persist changed fields
        delete: Remove user and dependent records
    """

    async def find_by_id(
        self, user_id: UUID, *, with_credentials: bool = False
    ) -> User | None:
        """Find user by ID.

        Args:
            user_id: User's unique identifier.
            with_credentials: Also load the password digest.

        Returns:
            User if found, None otherwise.
        """
        ...

    async def find_by_email(
        self, email: str, *, with_credentials: bool = False
    ) -> User | None:
        """Find user by email address (case-insensitive).

        Args:
            email: User's email address.
            with_credentials: Also load the password digest.

        Returns:
            User if found, None otherwise.
        """
        ...

    async def find_by_id_and_email(self, user_id: UUID, email: str) -> User | None:
        """Find user whose ID and email both match."""
        ...

    async def find_many(
        self,
        *,
        skip: int = 0,
        take: int | None = None,
        user_type: UserType | None = None,
    ) -> list[User]:
        """List users ordered by creation time.

        Args:
            skip: Number of users to skip.
            take: Maximum number of users to return (None for all).
            user_type: Only users of this classification.
        """
        ...

    async def exists_by_email(self, email: str) -> bool:
        """Check whether an email is already registered."""
        ...

    async def create(
        self, user: User, *, password_hash: str
    ) -> Result[User, ConflictError]:
        """Insert a new user with its profile and credential.

        Args:
            user: User entity to persist (``password_hash`` ignored).
            password_hash: Digest stored in the credential record.

        Returns:
            Success(User) as stored, or Failure(ConflictError) when the
            email is already taken (including a concurrent insert).
        """
        ...

    async def update(
        self, user: User, *, password_hash: str | None = None
    ) -> Result[User, ConflictError]:
        """Persist changed fields of an existing user.

        Args:
            user: User entity carrying the new state.
            password_hash: Replacement digest, or None to keep the current one.

        Returns:
            Success(User) as stored, or Failure(ConflictError) when the new
            email is already taken.
        """
        ...

    async def delete(self, user_id: UUID) -> None:
        """Delete user together with its profile and credential."""
        ...
