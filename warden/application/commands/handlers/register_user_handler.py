"""Register user handler.

Flow:
1. Reject an email that is already registered (ERROR log event + conflict)
2. Derive roles from the policy for classification USER
3. Hash password
4. Store user, profile and credential
5. Issue an access token

A concurrent registration with the same email that slips past step 1 is
caught by the unique constraint and reported as the same conflict.
"""

from uuid_extensions import uuid7

from warden.application.commands.auth_commands import RegisterUser
from warden.application.dtos import AuthPayload
from warden.core.enums import ErrorCode
from warden.core.errors import ConflictError, DomainError
from warden.core.result import Failure, Result, Success
from warden.domain.entities import User
from warden.domain.enums import UserType
from warden.domain.events import CreateLogEvent
from warden.domain.protocols import (
    EventBusProtocol,
    PasswordHashingProtocol,
    TokenServiceProtocol,
    UserRepository,
)
from warden.domain.services import roles_for_type


class RegisterUserHandler:
    """Handler for user registration command."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        token_service: TokenServiceProtocol,
        event_bus: EventBusProtocol,
    ) -> None:
        """Initialize registration handler with dependencies.

        Args:
            user_repo: User repository for persistence.
            password_service: Password hashing service.
            token_service: Access token issuer.
            event_bus: Event bus for log events.
        """
        self._user_repo = user_repo
        self._password_service = password_service
        self._token_service = token_service
        self._event_bus = event_bus

    async def handle(self, cmd: RegisterUser) -> Result[AuthPayload, DomainError]:
        """Handle user registration command.

        Args:
            cmd: RegisterUser command.

        Returns:
            Success(AuthPayload) for the new account.
            Failure(ConflictError) with code USER_ALREADY_EXISTS.
        """
        if await self._user_repo.exists_by_email(cmd.email):
            return await self._conflict(cmd.email)

        user = User(
            id=uuid7(),
            email=cmd.email.strip().lower(),
            user_type=UserType.USER,
            roles=roles_for_type(UserType.USER),
            profile=cmd.profile,
        )
        password_hash = self._password_service.hash_password(cmd.password)

        result = await self._user_repo.create(user, password_hash=password_hash)
        if isinstance(result, Failure):
            return await self._conflict(cmd.email)
        stored = result.value

        access_token = self._token_service.issue(
            user_id=stored.id,
            email=stored.email,
            user_type=stored.user_type,
            roles=stored.roles,
        )
        return Success(value=AuthPayload(access_token=access_token, user=stored))

    async def _conflict(self, email: str) -> Failure[ConflictError]:
        await self._event_bus.publish(
            CreateLogEvent.error(
                event_name="register",
                service_name=type(self).__name__,
                message="User already exists",
                context={"email": email},
            )
        )
        return Failure(
            error=ConflictError(
                code=ErrorCode.USER_ALREADY_EXISTS,
                message="User already exists",
                resource_type="User",
                conflicting_field="email",
            )
        )
