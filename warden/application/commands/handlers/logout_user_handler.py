"""Logout user handler.

Tokens are stateless, so logout revokes nothing: it confirms the token's
subject still exists (matching both id and email) and hands the user back
for the ``userLogout`` notification.
"""

from warden.application.commands.auth_commands import LogoutUser
from warden.core.enums import ErrorCode
from warden.core.errors import DomainError, NotFoundError
from warden.core.result import Failure, Result, Success
from warden.domain.entities import User
from warden.domain.protocols import UserRepository


class LogoutUserHandler:
    """Handler for logout command."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def handle(self, cmd: LogoutUser) -> Result[User, DomainError]:
        """Handle logout command.

        Returns:
            Success(User) for an existing account.
            Failure(NotFoundError) when the account is gone or the email changed.
        """
        user = await self._user_repo.find_by_id_and_email(cmd.user_id, cmd.email)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found",
                    resource_type="User",
                    resource_id=str(cmd.user_id),
                )
            )
        return Success(value=user)
