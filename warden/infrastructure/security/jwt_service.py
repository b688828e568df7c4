"""JWT token service (adapter).

Implements TokenServiceProtocol using PyJWT with HMAC-SHA256.

Claims:
    sub    user id
    email  user email at issue time
    type   user classification
    roles  list of role names
    iat    issued at (epoch seconds)
    exp    expiry (epoch seconds, 7 days after iat by default)
    jti    unique token id (UUID v7)

Security:
    - 256-bit secret key minimum
    - Stateless validation (no revocation list; logout does not
      invalidate outstanding tokens)
"""

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from uuid_extensions import uuid7

from warden.core.result import Failure, Result, Success
from warden.domain.enums import UserRole, UserType
from warden.domain.errors import AuthenticationError
from warden.domain.value_objects import TokenClaims

DEFAULT_EXPIRATION_MINUTES = 60 * 24 * 7


class JWTService:
    """JWT token issuing and validation service.

    Usage:
        token_service = JWTService(secret_key=settings.secret_key)

        token = token_service.issue(
            user_id=user.id,
            email=user.email,
            user_type=user.user_type,
            roles=user.roles,
        )

        match token_service.verify(token):
            case Success(value=claims):
                ...
            case Failure(error=reason):
                ...
    """

    def __init__(
        self,
        secret_key: str,
        expiration_minutes: int = DEFAULT_EXPIRATION_MINUTES,
        algorithm: str = "HS256",
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: Secret key for HMAC signing, at least 32 characters.
            expiration_minutes: Token lifetime in minutes (default: 7 days).
            algorithm: HMAC algorithm name (default: HS256).

        Raises:
            ValueError: If secret_key is too short (< 32 bytes).
        """
        if len(secret_key) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expiration_minutes = expiration_minutes
        self._algorithm = algorithm

    def issue(
        self,
        *,
        user_id: UUID,
        email: str,
        user_type: UserType,
        roles: Iterable[UserRole],
    ) -> str:
        """Sign an access token for a user.

        Args:
            user_id: User's unique identifier.
            email: User's email address.
            user_type: User classification.
            roles: Roles to embed; stored sorted for stable tokens.

        Returns:
            JWT access token string (header.payload.signature).
        """
        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=self._expiration_minutes)

        payload = {
            "sub": str(user_id),
            "email": email,
            "type": UserType(user_type).value,
            "roles": sorted(UserRole(role).value for role in roles),
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": str(uuid7()),
        }

        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def verify(self, token: str) -> Result[TokenClaims, str]:
        """Validate signature and expiry, then extract claims.

        Args:
            token: JWT access token string.

        Returns:
            Success(TokenClaims) if valid.
            Failure(AuthenticationError.EXPIRED_TOKEN) past ``exp``.
            Failure(AuthenticationError.INVALID_TOKEN) for anything else
            (bad signature, malformed token, missing claims).
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except ExpiredSignatureError:
            return Failure(error=AuthenticationError.EXPIRED_TOKEN)
        except InvalidTokenError:
            return Failure(error=AuthenticationError.INVALID_TOKEN)

        try:
            return Success(value=TokenClaims.from_payload(payload))
        except (KeyError, ValueError, TypeError):
            return Failure(error=AuthenticationError.INVALID_TOKEN)

    def decode_unverified(self, token: str) -> TokenClaims | None:
        """Read claims without checking signature or expiry.

        Warning:
            A forged token passes this check. Only the reduced-trust
            subscription role guard uses it; never grant data access based
            on its result alone.

        Returns:
            Claims if the token is structurally a JWT with the expected
            claims, None otherwise.
        """
        try:
            payload = jwt.decode(
                token,
                options={"verify_signature": False, "verify_exp": False},
            )
            return TokenClaims.from_payload(payload)
        except (InvalidTokenError, KeyError, ValueError, TypeError):
            return None
