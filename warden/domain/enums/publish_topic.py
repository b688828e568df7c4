"""Subscription broker topics.

Values match the GraphQL subscription field names clients listen on.
"""

from enum import Enum


class PublishTopic(str, Enum):
    """Named channels on the subscription broker."""

    USER_CREATED = "userCreated"
    USER_UPDATED = "userUpdated"
    USER_DELETED = "userDeleted"
    USER_LOGOUT = "userLogout"
    LOG_CREATED = "logCreated"
