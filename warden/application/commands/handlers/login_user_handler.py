"""Login user handler.

Flow:
1. Load user (with password digest) by email
2. Verify password (against an empty digest when the user is unknown)
3. On failure: publish an ERROR log event and return a generic
   Unauthorized failure; unknown email and wrong password are
   indistinguishable to the caller
4. On success: issue an access token over {id, email, type, roles}

Architecture:
- Application layer ONLY imports from domain/core (entities, protocols, events)
- Repositories and services are injected via protocols
"""

from warden.application.commands.auth_commands import LoginUser
from warden.application.dtos import AuthPayload
from warden.core.enums import ErrorCode
from warden.core.errors import AuthenticationError, DomainError
from warden.core.result import Failure, Result, Success
from warden.domain.events import CreateLogEvent
from warden.domain.protocols import (
    EventBusProtocol,
    PasswordHashingProtocol,
    TokenServiceProtocol,
    UserRepository,
)


class LoginUserHandler:
    """Handler for the login command.

    Returns the same failure for an unknown email and for a wrong password
    to prevent account enumeration.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        token_service: TokenServiceProtocol,
        event_bus: EventBusProtocol,
    ) -> None:
        """Initialize login handler with dependencies.

        Args:
            user_repo: User repository for persistence.
            password_service: Password hashing/verification service.
            token_service: Access token issuer.
            event_bus: Event bus for log events.
        """
        self._user_repo = user_repo
        self._password_service = password_service
        self._token_service = token_service
        self._event_bus = event_bus

    async def handle(self, cmd: LoginUser) -> Result[AuthPayload, DomainError]:
        """Handle login command.

        Args:
            cmd: LoginUser command (email and password).

        Returns:
            Success(AuthPayload) with access token and user.
            Failure(AuthenticationError) with code INVALID_CREDENTIALS.

        Side Effects:
            Publishes an ERROR CreateLogEvent on failure.
        """
        user = await self._user_repo.find_by_email(cmd.email, with_credentials=True)

        digest = user.password_hash if user is not None and user.password_hash else ""
        is_password_valid = self._password_service.verify_password(cmd.password, digest)

        if user is None or not is_password_valid:
            await self._event_bus.publish(
                CreateLogEvent.error(
                    event_name="login",
                    service_name=type(self).__name__,
                    message="Unauthorized",
                    context={
                        "email": cmd.email,
                        "user_id": str(user.id) if user is not None else None,
                        "is_password_valid": is_password_valid,
                    },
                )
            )
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.INVALID_CREDENTIALS,
                    message="Unauthorized",
                )
            )

        access_token = self._token_service.issue(
            user_id=user.id,
            email=user.email,
            user_type=user.user_type,
            roles=user.roles,
        )
        return Success(
            value=AuthPayload(access_token=access_token, user=user.without_credentials())
        )
