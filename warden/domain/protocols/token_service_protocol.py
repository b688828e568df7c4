"""Access token port."""

from collections.abc import Iterable
from typing import Protocol
from uuid import UUID

from warden.core.result import Result
from warden.domain.enums import UserRole, UserType
from warden.domain.value_objects import TokenClaims


class TokenServiceProtocol(Protocol):
    """Issue and verify signed access tokens.

    Implementations:
        - JWTService (HS256)
    """

    def issue(
        self,
        *,
        user_id: UUID,
        email: str,
        user_type: UserType,
        roles: Iterable[UserRole],
    ) -> str:
        """Sign a token carrying the user's identity and roles."""
        ...

    def verify(self, token: str) -> Result[TokenClaims, str]:
        """Check signature and expiry.

        Returns:
            Success(TokenClaims) for a valid token, otherwise
            Failure with an AuthenticationError reason string.
        """
        ...

    def decode_unverified(self, token: str) -> TokenClaims | None:
        """Read claims WITHOUT checking signature or expiry.

        Only the reduced-trust subscription role check may use this.
        """
        ...
