"""Domain-specific errors."""

from warden.domain.errors.authentication_error import AuthenticationError
from warden.domain.errors.log_errors import UnsupportedLogKindError

__all__ = ["AuthenticationError", "UnsupportedLogKindError"]
