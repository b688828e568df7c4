"""ListUsers query handler."""

from warden.application.queries.user_queries import ListUsers
from warden.core.enums import ErrorCode
from warden.core.errors import DomainError, ValidationError
from warden.core.result import Failure, Result, Success
from warden.domain.entities import User
from warden.domain.protocols import UserRepository


class ListUsersHandler:
    """Handler for ListUsers query (find-many)."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def handle(self, query: ListUsers) -> Result[list[User], DomainError]:
        """Handle ListUsers query.

        Returns:
            Success(list[User]) (possibly empty), or Failure(ValidationError)
            for negative pagination values.
        """
        if query.skip < 0 or (query.take is not None and query.take < 0):
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_INPUT,
                    message="skip and take must not be negative",
                    field="skip" if query.skip < 0 else "take",
                )
            )

        users = await self._user_repo.find_many(
            skip=query.skip,
            take=query.take,
            user_type=query.user_type,
        )
        return Success(value=users)
