"""Domain failure -> GraphQL error translation.

Every DomainError leaves the API as a GraphQLError whose
``extensions.code`` is one of:

    UNAUTHENTICATED        AuthenticationError
    FORBIDDEN              AuthorizationError
    NOT_FOUND              NotFoundError
    CONFLICT               ConflictError
    BAD_USER_INPUT         ValidationError
    THROTTLED              RateLimitError
    INTERNAL_SERVER_ERROR  anything else, and storage faults

Storage faults never expose driver messages.
"""

from typing import Any, TypeVar

from graphql import GraphQLError

from warden.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from warden.core.result import Failure, Result, Success

T = TypeVar("T")

DATABASE_UNAVAILABLE_MESSAGE = "Database has closed the connection."

_CATEGORIES: tuple[tuple[type[DomainError], str], ...] = (
    (AuthenticationError, "UNAUTHENTICATED"),
    (AuthorizationError, "FORBIDDEN"),
    (NotFoundError, "NOT_FOUND"),
    (ConflictError, "CONFLICT"),
    (ValidationError, "BAD_USER_INPUT"),
    (RateLimitError, "THROTTLED"),
)


def error_category(error: DomainError) -> str:
    """Public error category for a domain error."""
    for error_type, category in _CATEGORIES:
        if isinstance(error, error_type):
            return category
    return "INTERNAL_SERVER_ERROR"


def to_graphql_error(error: DomainError) -> GraphQLError:
    """Build the GraphQLError clients receive for a domain failure.

    Args:
        error: Failure returned by a handler or guard.

    Returns:
        GraphQLError with ``code`` and ``reason`` extensions (plus
        ``field`` / ``retryAfter`` where relevant). ``reason`` is the
        ErrorCode value, e.g. ``token_invalid``.
    """
    extensions: dict[str, Any] = {
        "code": error_category(error),
        "reason": error.code.value,
    }
    if isinstance(error, ValidationError) and error.field:
        extensions["field"] = error.field
    if isinstance(error, RateLimitError):
        extensions["retryAfter"] = error.retry_after
    return GraphQLError(error.message, extensions=extensions)


def database_unavailable_error() -> GraphQLError:
    """Generic error for storage faults (connection lost, driver errors)."""
    return GraphQLError(
        DATABASE_UNAVAILABLE_MESSAGE,
        extensions={"code": "INTERNAL_SERVER_ERROR"},
    )


def unwrap(result: Result[T, DomainError]) -> T:
    """Return a Success value or raise the translated GraphQL error.

    Raises:
        GraphQLError: For any Failure.
    """
    match result:
        case Success(value=value):
            return value
        case Failure(error=error):
            raise to_graphql_error(error)
    raise TypeError(f"Not a Result: {result!r}")
