"""Default role assignment per user classification.

Each classification maps to a cumulative set of roles:

    GUEST -> {ROLE_GUEST}
    USER  -> {ROLE_GUEST, ROLE_USER}
    ADMIN -> {ROLE_GUEST, ROLE_USER, ROLE_ADMIN}

The policy is applied when a user is created without explicit roles and
when an update changes the classification without explicit roles. In the
second case the computed set replaces the stored roles, it is never merged
into them.
"""

from types import MappingProxyType

from warden.domain.enums import UserRole, UserType

_ROLES_BY_TYPE: MappingProxyType[UserType, frozenset[UserRole]] = MappingProxyType(
    {
        UserType.GUEST: frozenset({UserRole.ROLE_GUEST}),
        UserType.USER: frozenset({UserRole.ROLE_GUEST, UserRole.ROLE_USER}),
        UserType.ADMIN: frozenset(
            {UserRole.ROLE_GUEST, UserRole.ROLE_USER, UserRole.ROLE_ADMIN}
        ),
    }
)


def roles_for_type(user_type: UserType) -> frozenset[UserRole]:
    """Return the default role set for a classification.

    Args:
        user_type: Account classification.

    Returns:
        Immutable role set; every classification includes ROLE_GUEST.

    Example:
        >>> sorted(r.value for r in roles_for_type(UserType.USER))
        ['ROLE_GUEST', 'ROLE_USER']
    """
    return _ROLES_BY_TYPE[UserType(user_type)]
