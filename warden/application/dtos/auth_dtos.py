"""Authentication DTOs."""

from dataclasses import dataclass

from warden.domain.entities import User


@dataclass(frozen=True, kw_only=True)
class AuthPayload:
    """Result of login and registration.

    Attributes:
        access_token: Signed JWT.
        user: Authenticated user (without password digest).
    """

    access_token: str
    user: User
