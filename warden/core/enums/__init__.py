"""Core enums package.

Usage:
    from warden.core.enums import ErrorCode, Environment
"""

from warden.core.enums.environment import Environment
from warden.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
