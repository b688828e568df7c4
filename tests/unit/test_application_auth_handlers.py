"""Unit tests for login, register and logout handlers.

Tests cover:
- Login success (token over id/email/type/roles, digest stripped)
- Login failure: unknown email and wrong password are indistinguishable,
  both publish an ERROR log event
- Registration: USER classification with policy roles, conflict paths
- Logout: id + email must still match a stored account

Architecture:
- Unit tests for application handlers (mocked dependencies)
- AsyncMock for repositories and the event bus, Mock for sync services
"""

from unittest.mock import AsyncMock, Mock

import pytest
from uuid_extensions import uuid7

from warden.application.commands import LoginUser, LogoutUser, RegisterUser
from warden.application.commands.handlers import (
    LoginUserHandler,
    LogoutUserHandler,
    RegisterUserHandler,
)
from warden.application.dtos import AuthPayload
from warden.core.enums import ErrorCode
from warden.core.errors import AuthenticationError, ConflictError, NotFoundError
from warden.core.result import Failure, Success
from warden.domain.entities import Profile
from warden.domain.enums import LogType, UserRole, UserType
from warden.domain.events import CreateLogEvent


@pytest.fixture
def token_service() -> Mock:
    service = Mock()
    service.issue.return_value = "signed.jwt.token"
    return service


@pytest.mark.unit
class TestLoginUserHandler:
    """Login flow."""

    async def test_login_success_returns_token_and_user(self, make_user, token_service):
        # Arrange
        user = make_user(password_hash="hashed")
        user_repo = AsyncMock()
        user_repo.find_by_email.return_value = user
        password_service = Mock()
        password_service.verify_password.return_value = True
        event_bus = AsyncMock()

        handler = LoginUserHandler(
            user_repo=user_repo,
            password_service=password_service,
            token_service=token_service,
            event_bus=event_bus,
        )

        # Act
        result = await handler.handle(LoginUser(email=user.email, password="123456"))

        # Assert
        assert isinstance(result, Success)
        assert isinstance(result.value, AuthPayload)
        assert result.value.access_token == "signed.jwt.token"
        assert result.value.user.password_hash is None
        user_repo.find_by_email.assert_awaited_once_with(
            user.email, with_credentials=True
        )
        password_service.verify_password.assert_called_once_with("123456", "hashed")
        token_service.issue.assert_called_once_with(
            user_id=user.id,
            email=user.email,
            user_type=user.user_type,
            roles=user.roles,
        )
        event_bus.publish.assert_not_awaited()

    async def test_wrong_password_is_unauthorized(self, make_user, token_service):
        # Arrange
        user = make_user(password_hash="hashed")
        user_repo = AsyncMock()
        user_repo.find_by_email.return_value = user
        password_service = Mock()
        password_service.verify_password.return_value = False
        event_bus = AsyncMock()

        handler = LoginUserHandler(
            user_repo=user_repo,
            password_service=password_service,
            token_service=token_service,
            event_bus=event_bus,
        )

        # Act
        result = await handler.handle(LoginUser(email=user.email, password="wrong"))

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, AuthenticationError)
        assert result.error.code == ErrorCode.INVALID_CREDENTIALS
        assert result.error.message == "Unauthorized"
        token_service.issue.assert_not_called()

        event = event_bus.publish.await_args.args[0]
        assert isinstance(event, CreateLogEvent)
        assert event.type == LogType.ERROR
        assert event.event_name == "login"
        assert event.context == {
            "email": user.email,
            "user_id": str(user.id),
            "is_password_valid": False,
        }

    async def test_unknown_email_gives_same_failure(self, token_service):
        # Arrange
        user_repo = AsyncMock()
        user_repo.find_by_email.return_value = None
        password_service = Mock()
        password_service.verify_password.return_value = False
        event_bus = AsyncMock()

        handler = LoginUserHandler(
            user_repo=user_repo,
            password_service=password_service,
            token_service=token_service,
            event_bus=event_bus,
        )

        # Act
        result = await handler.handle(
            LoginUser(email="ghost@example.com", password="123456")
        )

        # Assert: same code and message as a wrong password
        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_CREDENTIALS
        assert result.error.message == "Unauthorized"
        # Password is still checked (against an empty digest).
        password_service.verify_password.assert_called_once_with("123456", "")
        event = event_bus.publish.await_args.args[0]
        assert event.context["user_id"] is None


@pytest.mark.unit
class TestRegisterUserHandler:
    """Self-registration."""

    def _handler(self, user_repo, token_service, event_bus=None):
        password_service = Mock()
        password_service.hash_password.return_value = "hashed"
        return RegisterUserHandler(
            user_repo=user_repo,
            password_service=password_service,
            token_service=token_service,
            event_bus=event_bus or AsyncMock(),
        )

    async def test_registers_user_with_policy_roles(self, token_service):
        # Arrange
        user_repo = AsyncMock()
        user_repo.exists_by_email.return_value = False
        user_repo.create.side_effect = lambda user, password_hash: Success(value=user)
        handler = self._handler(user_repo, token_service)
        profile = Profile(first_name="Ada", last_name="Lovelace", username="ada")

        # Act
        result = await handler.handle(
            RegisterUser(email=" Ada@Example.com ", password="123456", profile=profile)
        )

        # Assert
        assert isinstance(result, Success)
        user = result.value.user
        assert user.email == "ada@example.com"
        assert user.user_type == UserType.USER
        assert user.roles == frozenset({UserRole.ROLE_GUEST, UserRole.ROLE_USER})
        assert user.profile == profile
        assert result.value.access_token == "signed.jwt.token"
        assert user_repo.create.await_args.kwargs["password_hash"] == "hashed"

    async def test_existing_email_conflicts_and_logs(self, token_service):
        # Arrange
        user_repo = AsyncMock()
        user_repo.exists_by_email.return_value = True
        event_bus = AsyncMock()
        handler = self._handler(user_repo, token_service, event_bus)

        # Act
        result = await handler.handle(
            RegisterUser(email="taken@example.com", password="123456")
        )

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, ConflictError)
        assert result.error.code == ErrorCode.USER_ALREADY_EXISTS
        user_repo.create.assert_not_awaited()
        event = event_bus.publish.await_args.args[0]
        assert event.event_name == "register"
        assert event.message == "User already exists"

    async def test_race_on_unique_constraint_is_same_conflict(self, token_service):
        user_repo = AsyncMock()
        user_repo.exists_by_email.return_value = False
        user_repo.create.return_value = Failure(
            error=ConflictError(
                code=ErrorCode.USER_ALREADY_EXISTS,
                message="User already exists",
                resource_type="User",
            )
        )
        handler = self._handler(user_repo, token_service)

        result = await handler.handle(
            RegisterUser(email="race@example.com", password="123456")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.USER_ALREADY_EXISTS
        token_service.issue.assert_not_called()


@pytest.mark.unit
class TestLogoutUserHandler:
    """Logout confirms the token subject."""

    async def test_returns_matching_user(self, make_user):
        user = make_user()
        user_repo = AsyncMock()
        user_repo.find_by_id_and_email.return_value = user
        handler = LogoutUserHandler(user_repo=user_repo)

        result = await handler.handle(LogoutUser(user_id=user.id, email=user.email))

        assert isinstance(result, Success)
        assert result.value is user
        user_repo.find_by_id_and_email.assert_awaited_once_with(user.id, user.email)

    async def test_missing_user_is_not_found(self):
        user_repo = AsyncMock()
        user_repo.find_by_id_and_email.return_value = None
        handler = LogoutUserHandler(user_repo=user_repo)

        result = await handler.handle(
            LogoutUser(user_id=uuid7(), email="gone@example.com")
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, NotFoundError)
        assert result.error.code == ErrorCode.USER_NOT_FOUND
