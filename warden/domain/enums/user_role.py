"""Access roles.

A user holds a set of roles; guards check that every role an operation
requires is present. Roles are independent of the user's classification
(UserType) although the role policy derives default roles from it.

Usage:
    from warden.domain.enums import UserRole

    if UserRole.ROLE_ADMIN in user.roles:
        ...
"""

from enum import Enum


class UserRole(str, Enum):
    """Permission labels checked by the authorization guard.

    String Enum:
        Values are stored verbatim in the database and in token claims.
    """

    ROLE_GUEST = "ROLE_GUEST"
    ROLE_USER = "ROLE_USER"
    ROLE_ADMIN = "ROLE_ADMIN"
