"""GetUser query handler.

Queries are side-effect free: no events, no writes.
"""

from warden.application.queries.user_queries import GetUser
from warden.core.enums import ErrorCode
from warden.core.errors import DomainError, NotFoundError, ValidationError
from warden.core.result import Failure, Result, Success
from warden.domain.entities import User
from warden.domain.protocols import UserRepository


class GetUserHandler:
    """Handler for GetUser query (find-unique-or-fail)."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def handle(self, query: GetUser) -> Result[User, DomainError]:
        """Handle GetUser query.

        Returns:
            Success(User) with profile attached.
            Failure(ValidationError) if neither id nor email is given.
            Failure(NotFoundError) if no user matches.
        """
        if query.user_id is not None:
            user = await self._user_repo.find_by_id(query.user_id)
            lookup = str(query.user_id)
        elif query.email is not None:
            user = await self._user_repo.find_by_email(query.email)
            lookup = query.email
        else:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_INPUT,
                    message="Either id or email is required",
                    field="where",
                )
            )

        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found",
                    resource_type="User",
                    resource_id=lookup,
                )
            )
        return Success(value=user)
