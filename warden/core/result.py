"""Result types for railway-oriented programming.

Operations that can fail in an expected way (unknown user, duplicate email,
missing role) return a Result instead of raising. Callers branch on it with
structural pattern matching.

Usage:
    def find(user_id: UUID) -> Result[User, NotFoundError]:
        user = storage.get(user_id)
        if user is None:
            return Failure(error=NotFoundError(...))
        return Success(value=user)

    match find(user_id):
        case Success(value=user):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


Result = Success[T] | Failure[E]
