"""UserRepository - SQLAlchemy implementation of the UserRepository protocol.

Maps between domain User entities and the users / user_profiles /
user_passwords tables. Writes commit immediately so callers can publish
notifications knowing the change is durable.
"""

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession

from warden.core.enums import ErrorCode
from warden.core.errors import ConflictError
from warden.core.result import Failure, Result, Success
from warden.domain.entities import Profile, User
from warden.domain.enums import UserRole, UserType
from warden.infrastructure.persistence.models.user import (
    UserModel,
    UserPasswordModel,
    UserProfileModel,
)


def _email_conflict(email: str) -> ConflictError:
    return ConflictError(
        code=ErrorCode.USER_ALREADY_EXISTS,
        message="User already exists",
        resource_type="User",
        conflicting_field="email",
        details={"email": email},
    )


class UserRepository:
    """SQLAlchemy implementation of UserRepository protocol.

    Emails are normalized to lower case on write and compared
    case-insensitively on read.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = UserRepository(session)
        ...     user = await repo.find_by_email("adam@miko.sk")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find_by_id(
        self, user_id: UUID, *, with_credentials: bool = False
    ) -> User | None:
        """Find user by ID.

        Args:
            user_id: User's unique identifier.
            with_credentials: Also load the password digest.

        Returns:
            Domain User entity if found, None otherwise.
        """
        stmt = select(UserModel).where(UserModel.id == user_id)
        return await self._fetch_one(stmt, with_credentials=with_credentials)

    async def find_by_email(
        self, email: str, *, with_credentials: bool = False
    ) -> User | None:
        """Find user by email address (case-insensitive).

        Args:
            email: User's email address.
            with_credentials: Also load the password digest.

        Returns:
            Domain User entity if found, None otherwise.
        """
        stmt = select(UserModel).where(UserModel.email == email.strip().lower())
        return await self._fetch_one(stmt, with_credentials=with_credentials)

    async def find_by_id_and_email(self, user_id: UUID, email: str) -> User | None:
        """Find user whose ID and email both match."""
        stmt = select(UserModel).where(
            UserModel.id == user_id,
            UserModel.email == email.strip().lower(),
        )
        return await self._fetch_one(stmt)

    async def find_many(
        self,
        *,
        skip: int = 0,
        take: int | None = None,
        user_type: UserType | None = None,
    ) -> list[User]:
        """List users ordered by creation time (oldest first).

        Args:
            skip: Number of users to skip.
            take: Maximum number of users to return (None for all).
            user_type: Only users of this classification.

        Returns:
            List of domain User entities (empty if none match).
        """
        stmt = select(UserModel).order_by(UserModel.created_at, UserModel.id)
        if user_type is not None:
            stmt = stmt.where(UserModel.type == user_type)
        if skip:
            stmt = stmt.offset(skip)
        if take is not None:
            stmt = stmt.limit(take)

        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def exists_by_email(self, email: str) -> bool:
        """Check if a user with this email exists."""
        stmt = select(func.count()).select_from(UserModel).where(
            UserModel.email == email.strip().lower()
        )
        result = await self.session.execute(stmt)
        return bool(result.scalar_one())

    async def create(
        self, user: User, *, password_hash: str
    ) -> Result[User, ConflictError]:
        """Insert user, optional profile and credential in one transaction.

        Args:
            user: Domain User entity to persist.
            password_hash: Digest for the credential record.

        Returns:
            Success(User) as stored, Failure(ConflictError) on duplicate email.

        Raises:
            NoResultFound: If the stored row cannot be read back.
        """
        email = user.email.strip().lower()
        user_model = UserModel(
            id=user.id,
            email=email,
            type=user.user_type,
            roles=sorted(role.value for role in user.roles),
        )
        if user.profile is not None:
            user_model.profile = self._profile_to_model(user.profile)

        try:
            self.session.add(user_model)
            await self.session.flush()
            self.session.add(UserPasswordModel(user_id=user.id, hash=password_hash))
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            return Failure(error=_email_conflict(email))

        return Success(value=await self._reload(user.id))

    async def update(
        self, user: User, *, password_hash: str | None = None
    ) -> Result[User, ConflictError]:
        """Persist email, classification, roles and profile of a user.

        Args:
            user: Domain User entity carrying the new state.
            password_hash: Replacement digest, or None to keep the current one.

        Returns:
            Success(User) as stored, Failure(ConflictError) if the new email
            belongs to another user.

        Raises:
            NoResultFound: If the user does not exist.
        """
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user.id)
        )
        user_model = result.scalar_one()

        email = user.email.strip().lower()
        user_model.email = email
        user_model.type = user.user_type
        user_model.roles = sorted(role.value for role in user.roles)

        if user.profile is not None:
            if user_model.profile is None:
                user_model.profile = self._profile_to_model(user.profile)
            else:
                user_model.profile.first_name = user.profile.first_name
                user_model.profile.last_name = user.profile.last_name
                user_model.profile.username = user.profile.username

        if password_hash is not None:
            credential = await self.session.execute(
                select(UserPasswordModel).where(UserPasswordModel.user_id == user.id)
            )
            credential_model = credential.scalar_one_or_none()
            if credential_model is None:
                self.session.add(UserPasswordModel(user_id=user.id, hash=password_hash))
            else:
                credential_model.hash = password_hash

        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            return Failure(error=_email_conflict(email))

        return Success(value=await self._reload(user.id))

    async def _reload(self, user_id: UUID) -> User:
        """Read back a user this session just wrote.

        Raises:
            NoResultFound: If the row is gone (deleted concurrently).
        """
        stored = await self.find_by_id(user_id)
        if stored is None:
            raise NoResultFound(f"User {user_id} not found after write")
        return stored

    async def delete(self, user_id: UUID) -> None:
        """Delete user together with its profile and credential.

        Dependent rows are removed explicitly so the result does not depend
        on the backend enforcing ON DELETE CASCADE.
        """
        await self.session.execute(
            delete(UserPasswordModel).where(UserPasswordModel.user_id == user_id)
        )
        await self.session.execute(
            delete(UserProfileModel).where(UserProfileModel.user_id == user_id)
        )
        await self.session.execute(delete(UserModel).where(UserModel.id == user_id))
        await self.session.commit()

    async def _fetch_one(self, stmt, *, with_credentials: bool = False) -> User | None:
        result = await self.session.execute(
            stmt.execution_options(populate_existing=True)
        )
        user_model = result.scalar_one_or_none()

        if user_model is None:
            return None

        password_hash = None
        if with_credentials:
            credential = await self.session.execute(
                select(UserPasswordModel.hash).where(
                    UserPasswordModel.user_id == user_model.id
                )
            )
            password_hash = credential.scalar_one_or_none()

        return self._to_domain(user_model, password_hash=password_hash)

    def _to_domain(
        self, user_model: UserModel, *, password_hash: str | None = None
    ) -> User:
        """Convert database model to domain entity.

        Role names unknown to this version are dropped.
        """
        known = {role.value for role in UserRole}
        profile = None
        if user_model.profile is not None:
            profile = Profile(
                first_name=user_model.profile.first_name,
                last_name=user_model.profile.last_name,
                username=user_model.profile.username,
            )

        return User(
            id=user_model.id,
            email=user_model.email,
            user_type=UserType(user_model.type),
            roles=frozenset(UserRole(r) for r in user_model.roles or [] if r in known),
            profile=profile,
            password_hash=password_hash,
            created_at=user_model.created_at,
            updated_at=user_model.updated_at,
        )

    def _profile_to_model(self, profile: Profile) -> UserProfileModel:
        return UserProfileModel(
            first_name=profile.first_name,
            last_name=profile.last_name,
            username=profile.username,
        )
