"""User classification (GUEST, USER, ADMIN)."""

from enum import Enum


class UserType(str, Enum):
    """Coarse classification of an account.

    The classification only drives default role assignment; authorization
    decisions always look at roles.
    """

    GUEST = "GUEST"
    USER = "USER"
    ADMIN = "ADMIN"
