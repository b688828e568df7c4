"""Domain enums.

Usage:
    from warden.domain.enums import UserRole, UserType, LogType
"""

from warden.domain.enums.log_origin import LogOrigin
from warden.domain.enums.log_type import LogType
from warden.domain.enums.publish_topic import PublishTopic
from warden.domain.enums.user_role import UserRole
from warden.domain.enums.user_type import UserType

__all__ = [
    "LogOrigin",
    "LogType",
    "PublishTopic",
    "UserRole",
    "UserType",
]
