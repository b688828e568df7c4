"""Machine-readable error codes.

Codes follow the ENTITY_ACTION_REASON naming convention and travel inside
DomainError values. The GraphQL layer maps each error class to a public
error category; the code itself is exposed as extra detail.
"""

from enum import Enum


class ErrorCode(Enum):
    """Machine-readable error codes."""

    # Validation errors
    INVALID_EMAIL = "invalid_email"
    INVALID_INPUT = "invalid_input"
    VALIDATION_FAILED = "validation_failed"

    # Resource errors
    USER_NOT_FOUND = "user_not_found"
    LOG_NOT_FOUND = "log_not_found"

    # Conflict errors
    USER_ALREADY_EXISTS = "user_already_exists"

    # Authentication errors
    INVALID_CREDENTIALS = "invalid_credentials"
    TOKEN_MISSING = "token_missing"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_INVALID = "token_invalid"

    # Authorization errors
    PERMISSION_DENIED = "permission_denied"

    # Rate limit errors
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
