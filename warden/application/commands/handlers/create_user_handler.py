"""Create user handler (admin).

Flow:
1. Reject a taken email (ERROR log event + conflict)
2. Roles: explicit set if given, otherwise policy(user_type)
3. Hash password, store user with profile and credential
"""

from uuid_extensions import uuid7

from warden.application.commands.user_commands import CreateUser
from warden.core.enums import ErrorCode
from warden.core.errors import ConflictError, DomainError, ValidationError
from warden.core.result import Failure, Result, Success
from warden.domain.entities import User
from warden.domain.events import CreateLogEvent
from warden.domain.protocols import (
    EventBusProtocol,
    PasswordHashingProtocol,
    UserRepository,
)
from warden.domain.services import roles_for_type


class CreateUserHandler:
    """Handler for CreateUser command."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        event_bus: EventBusProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service
        self._event_bus = event_bus

    async def handle(self, cmd: CreateUser) -> Result[User, DomainError]:
        """Handle CreateUser command.

        Args:
            cmd: CreateUser command.

        Returns:
            Success(User) as stored.
            Failure(ConflictError) if the email is taken.
            Failure(ValidationError) if an explicit, empty role set is given.
        """
        if cmd.roles is not None and not cmd.roles:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message="A user must hold at least one role",
                    field="roles",
                )
            )

        if await self._user_repo.exists_by_email(cmd.email):
            return await self._conflict(cmd.email)

        user = User(
            id=uuid7(),
            email=cmd.email.strip().lower(),
            user_type=cmd.user_type,
            roles=cmd.roles if cmd.roles is not None else roles_for_type(cmd.user_type),
            profile=cmd.profile,
        )
        password_hash = self._password_service.hash_password(cmd.password)

        result = await self._user_repo.create(user, password_hash=password_hash)
        if isinstance(result, Failure):
            return await self._conflict(cmd.email)
        return Success(value=result.value)

    async def _conflict(self, email: str) -> Failure[ConflictError]:
        await self._event_bus.publish(
            CreateLogEvent.error(
                event_name="createOne",
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
