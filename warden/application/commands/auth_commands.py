"""Authentication commands (CQRS write operations).

Commands represent user intent to change system state.
All commands are immutable (frozen=True) and use keyword-only arguments.
"""

from dataclasses import dataclass
from uuid import UUID

from warden.domain.entities import Profile


@dataclass(frozen=True, kw_only=True)
class LoginUser:
    """Exchange email and password for an access token.

    Attributes:
        email: Account email.
        password: Plaintext password (never stored, never logged).

    Example:
        >>> command = LoginUser(email="adam@miko.sk", password="123456")
        >>> result = await handler.handle(command)
    """

    email: str
    password: str


@dataclass(frozen=True, kw_only=True)
class RegisterUser:
    """Self-service account creation.

    New accounts are always classified USER and receive the policy roles
    for that classification.

    Attributes:
        email: Account email.
        password: Plaintext password, hashed before storage.
        profile: Optional profile details.
    """

    email: str
    password: str
    profile: Profile | None = None


@dataclass(frozen=True, kw_only=True)
class LogoutUser:
    """Announce that the token holder logged out.

    Tokens are stateless; logout only confirms the account still exists
    and notifies ``userLogout`` subscribers.

    Attributes:
        user_id: Subject of the caller's token.
        email: Email claim of the caller's token.
    """

    user_id: UUID
    email: str
