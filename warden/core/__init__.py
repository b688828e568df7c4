"""Core shared kernel.

Result types, the error taxonomy and application settings. The core
package has no dependencies on other application layers.
"""

from warden.core.enums import ErrorCode
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

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "DomainError",
    "ErrorCode",
    "Failure",
    "NotFoundError",
    "RateLimitError",
    "Result",
    "Success",
    "ValidationError",
]
