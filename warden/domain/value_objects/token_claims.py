"""Decoded access-token claims."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from warden.domain.enums import UserRole, UserType


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenClaims:
    """Identity asserted by a signed access token.

    Attributes:
        user_id: Subject (``sub`` claim).
        email: User e-mail at issue time.
        user_type: Classification at issue time.
        roles: Roles at issue time. Role changes made after issuance are
            not reflected until a new token is issued.
        issued_at: ``iat`` claim.
        expires_at: ``exp`` claim.
    """

    user_id: UUID
    email: str
    user_type: UserType
    roles: frozenset[UserRole]
    issued_at: datetime
    expires_at: datetime

    def has_roles(self, *required: UserRole) -> bool:
        """True when every required role is present (False for no roles)."""
        if not required:
            return False
        return all(role in self.roles for role in required)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "TokenClaims":
        """Build claims from a decoded JWT payload.

        Unknown role strings are ignored rather than rejected so that a
        token carrying a retired role still authenticates.

        Raises:
            KeyError: If a required claim is missing.
            ValueError: If a claim has the wrong format.
        """
        known = {role.value for role in UserRole}
        return cls(
            user_id=UUID(str(payload["sub"])),
            email=str(payload["email"]),
            user_type=UserType(payload["type"]),
            roles=frozenset(
                UserRole(role) for role in payload.get("roles", []) if role in known
            ),
            issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=UTC),
            expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
        )
