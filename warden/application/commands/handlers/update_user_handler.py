"""Update user handler (admin).

Role rules:
- explicit ``roles``: stored as given
- ``user_type`` changed without ``roles``: roles recomputed from the
  policy and REPLACE the stored set (an ADMIN demoted to GUEST ends up
  with exactly {ROLE_GUEST})
- neither: roles untouched
"""

from dataclasses import replace

from warden.application.commands.user_commands import UpdateUser
from warden.core.enums import ErrorCode
from warden.core.errors import ConflictError, DomainError, NotFoundError, ValidationError
from warden.core.result import Failure, Result, Success
from warden.domain.entities import User
from warden.domain.events import CreateLogEvent
from warden.domain.protocols import (
    EventBusProtocol,
    PasswordHashingProtocol,
    UserRepository,
)
from warden.domain.services import roles_for_type


class UpdateUserHandler:
    """Handler for UpdateUser command."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        event_bus: EventBusProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service
        self._event_bus = event_bus

    async def handle(self, cmd: UpdateUser) -> Result[User, DomainError]:
        """Handle UpdateUser command.

        Returns:
            Success(User) with the stored state.
            Failure(NotFoundError) for an unknown user.
            Failure(ConflictError) if the new email belongs to someone else.
            Failure(ValidationError) for an explicit, empty role set.
        """
        if cmd.roles is not None and not cmd.roles:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message="A user must hold at least one role",
                    field="roles",
                )
            )

        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found",
                    resource_type="User",
                    resource_id=str(cmd.user_id),
                )
            )

        email = user.email
        if cmd.email is not None:
            email = cmd.email.strip().lower()
            if email != user.email and await self._user_repo.exists_by_email(email):
                return await self._conflict(email)

        user_type = cmd.user_type if cmd.user_type is not None else user.user_type
        if cmd.roles is not None:
            roles = cmd.roles
        elif cmd.user_type is not None:
            roles = roles_for_type(cmd.user_type)
        else:
            roles = user.roles

        updated = replace(
            user,
            email=email,
            user_type=user_type,
            roles=roles,
            profile=cmd.profile if cmd.profile is not None else user.profile,
        )
        password_hash = (
            self._password_service.hash_password(cmd.password)
            if cmd.password is not None
            else None
        )

        result = await self._user_repo.update(updated, password_hash=password_hash)
        if isinstance(result, Failure):
            return await self._conflict(email)
        return Success(value=result.value)

    async def _conflict(self, email: str) -> Failure[ConflictError]:
        await self._event_bus.publish(
            CreateLogEvent.error(
                event_name="updateOne",
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
