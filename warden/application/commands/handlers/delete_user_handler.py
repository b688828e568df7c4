"""Delete user handler (admin)."""

from warden.application.commands.user_commands import DeleteUser
from warden.core.enums import ErrorCode
from warden.core.errors import DomainError, NotFoundError
from warden.core.result import Failure, Result, Success
from warden.domain.entities import User
from warden.domain.protocols import UserRepository


class DeleteUserHandler:
    """Handler for DeleteUser command.

    Returns the user as it was before deletion so the caller can notify
    ``userDeleted`` subscribers.
    """

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def handle(self, cmd: DeleteUser) -> Result[User, DomainError]:
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

        await self._user_repo.delete(cmd.user_id)
        return Success(value=user)
