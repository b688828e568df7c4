"""Error classes shared by every layer.

Error Types:
- ValidationError: Input validation failures
- NotFoundError: Resource not found
- ConflictError: Resource conflicts (duplicate email)
- AuthenticationError: Missing, invalid or expired credentials
- AuthorizationError: Authenticated but lacking a required role
- RateLimitError: Caller exceeded an admission-control window

Usage:
    from warden.core.errors import NotFoundError
    from warden.core.enums import ErrorCode
    from warden.core.result import Failure

    return Failure(error=NotFoundError(
        code=ErrorCode.USER_NOT_FOUND,
        message="User not found",
        resource_type="User",
        resource_id=str(user_id),
    ))
"""

from dataclasses import dataclass

from warden.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (User, Log).
        resource_id: Identifier that was looked up.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Resource conflict (duplicate unique key).

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field that has conflict (email).
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (bad credentials, missing or invalid token)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Authorization failure (authenticated but not permitted).

    Attributes:
        required_permission: Role that was required.
    """

    required_permission: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitError(DomainError):
    """Request rejected by admission control.

    Attributes:
        retry_after: Seconds until the exceeded window resets.
        tier: Name of the throttle tier that rejected the call.
    """

    retry_after: float = 0.0
    tier: str | None = None
