"""Integration tests for the SQLAlchemy UserRepository (SQLite via aiosqlite).

Tests cover:
- Create with profile and credential, conflict on duplicate email
- Lookups by id, email, id+email; credentials only when requested
- Pagination and classification filter
- Update (profile upsert, password replacement, email conflict)
- Delete removes user, profile and credential
- Writes fail loudly when the row cannot be read back
"""

from dataclasses import replace
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import NoResultFound
from uuid_extensions import uuid7

from warden.core.enums import ErrorCode
from warden.core.result import Failure, Success
from warden.domain.entities import Profile
from warden.domain.enums import UserRole, UserType
from warden.infrastructure.persistence.models import (
    UserPasswordModel,
    UserProfileModel,
)
from warden.infrastructure.persistence.repositories import UserRepository


async def _create(database, user, password_hash="hashed"):
    async with database.get_session() as session:
        return await UserRepository(session).create(user, password_hash=password_hash)


@pytest.mark.integration
class TestUserRepositoryCreate:
    """Insert paths."""

    async def test_create_and_find_by_id(self, database, make_user):
        # Arrange
        profile = Profile(first_name="Ada", last_name="Lovelace", username="ada")
        user = make_user(email="Ada@Example.com", profile=profile)

        # Act
        result = await _create(database, user)

        # Assert
        assert isinstance(result, Success)
        assert result.value.email == "ada@example.com"
        assert result.value.created_at is not None

        async with database.get_session() as session:
            found = await UserRepository(session).find_by_id(user.id)
        assert found is not None
        assert found.profile == profile
        assert found.roles == user.roles
        assert found.password_hash is None

    async def test_duplicate_email_conflicts(self, database, make_user):
        await _create(database, make_user(email="dup@example.com"))

        result = await _create(database, make_user(email="DUP@example.com"))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.USER_ALREADY_EXISTS

    async def test_credentials_loaded_only_on_request(self, database, make_user):
        user = make_user(email="cred@example.com")
        await _create(database, user, password_hash="digest")

        async with database.get_session() as session:
            repo = UserRepository(session)
            plain = await repo.find_by_email("cred@example.com")
            with_hash = await repo.find_by_email(
                "CRED@example.com", with_credentials=True
            )

        assert plain.password_hash is None
        assert with_hash.password_hash == "digest"


@pytest.mark.integration
class TestUserRepositoryQueries:
    """Lookups and listing."""

    async def test_find_by_id_and_email_requires_both(self, database, make_user):
        user = make_user(email="pair@example.com")
        await _create(database, user)

        async with database.get_session() as session:
            repo = UserRepository(session)
            match = await repo.find_by_id_and_email(user.id, "pair@example.com")
            wrong_email = await repo.find_by_id_and_email(user.id, "other@example.com")
            wrong_id = await repo.find_by_id_and_email(uuid7(), "pair@example.com")

        assert match is not None
        assert wrong_email is None
        assert wrong_id is None

    async def test_exists_by_email(self, database, make_user):
        await _create(database, make_user(email="here@example.com"))

        async with database.get_session() as session:
            repo = UserRepository(session)
            assert await repo.exists_by_email("HERE@example.com")
            assert not await repo.exists_by_email("gone@example.com")

    async def test_find_many_paginates_and_filters(self, database, make_user):
        for i in range(4):
            await _create(database, make_user(email=f"u{i}@example.com"))
        await _create(database, make_user(email="admin@example.com", user_type=UserType.ADMIN))

        async with database.get_session() as session:
            repo = UserRepository(session)
            everyone = await repo.find_many()
            page = await repo.find_many(skip=1, take=2)
            admins = await repo.find_many(user_type=UserType.ADMIN)

        assert len(everyone) == 5
        assert [u.email for u in page] == [u.email for u in everyone[1:3]]
        assert [u.email for u in admins] == ["admin@example.com"]

    async def test_find_many_empty(self, database):
        async with database.get_session() as session:
            assert await UserRepository(session).find_many() == []


@pytest.mark.integration
class TestUserRepositoryUpdateDelete:
    """Mutations of existing rows."""

    async def test_update_fields_profile_and_password(self, database, make_user):
        # Arrange
        user = make_user(email="old@example.com")
        await _create(database, user, password_hash="old-digest")
        changed = replace(
            user,
            email="new@example.com",
            user_type=UserType.ADMIN,
            roles=frozenset({UserRole.ROLE_ADMIN}),
            profile=Profile(username="newbie"),
        )

        # Act
        async with database.get_session() as session:
            result = await UserRepository(session).update(
                changed, password_hash="new-digest"
            )

        # Assert
        assert isinstance(result, Success)
        assert result.value.email == "new@example.com"
        assert result.value.user_type == UserType.ADMIN
        assert result.value.roles == frozenset({UserRole.ROLE_ADMIN})
        assert result.value.profile == Profile(username="newbie")

        async with database.get_session() as session:
            stored = await UserRepository(session).find_by_id(
                user.id, with_credentials=True
            )
        assert stored.password_hash == "new-digest"

    async def test_update_to_taken_email_conflicts(self, database, make_user):
        first = make_user(email="first@example.com")
        second = make_user(email="second@example.com")
        await _create(database, first)
        await _create(database, second)

        async with database.get_session() as session:
            result = await UserRepository(session).update(
                replace(second, email="first@example.com")
            )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.USER_ALREADY_EXISTS

    async def test_delete_removes_dependent_rows(self, database, make_user):
        user = make_user(email="bye@example.com", profile=Profile(first_name="B"))
        await _create(database, user)

        async with database.get_session() as session:
            await UserRepository(session).delete(user.id)

        async with database.get_session() as session:
            assert await UserRepository(session).find_by_id(user.id) is None
            profiles = await session.execute(
                select(func.count()).select_from(UserProfileModel)
            )
            passwords = await session.execute(
                select(func.count()).select_from(UserPasswordModel)
            )
            assert profiles.scalar_one() == 0
            assert passwords.scalar_one() == 0

    async def test_update_raises_when_row_cannot_be_read_back(
        self, database, make_user
    ):
        user = make_user(email="gone@example.com")
        await _create(database, user)

        async with database.get_session() as session:
            repo = UserRepository(session)
            with patch.object(repo, "find_by_id", AsyncMock(return_value=None)):
                with pytest.raises(NoResultFound):
                    await repo.update(replace(user, user_type=UserType.ADMIN))
