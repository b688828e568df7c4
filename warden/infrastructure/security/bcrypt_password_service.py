"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol with bcrypt. Every hash uses a fresh
random salt; the cost factor defaults to 10 and follows the
``BCRYPT_ROUNDS`` setting.

Performance:
    Cost factor is logarithmic: each +1 doubles computation time.
    - 4  = ~1ms (tests only)
    - 10 = ~60ms (default)
    - 12 = ~250ms
"""

import bcrypt

# bcrypt itself rejects anything outside this range.
MIN_COST_FACTOR = 4
MAX_COST_FACTOR = 31


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        password_service = BcryptPasswordService(cost_factor=settings.bcrypt_rounds)

        password_hash = password_service.hash_password("123456")
        is_valid = password_service.verify_password("123456", password_hash)
    """

    def __init__(self, cost_factor: int = 10) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor (default: 10).

        Raises:
            ValueError: If the cost factor is outside what bcrypt accepts.
        """
        if not MIN_COST_FACTOR <= cost_factor <= MAX_COST_FACTOR:
            msg = (
                f"Cost factor must be between {MIN_COST_FACTOR} "
                f"and {MAX_COST_FACTOR}"
            )
            raise ValueError(msg)

        self._cost_factor = cost_factor

    @property
    def cost_factor(self) -> int:
        """Configured bcrypt cost factor."""
        return self._cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password using bcrypt.

        Args:
            password: Plaintext password to hash.

        Returns:
            Hashed password string (``$2b$<cost>$<salt><hash>``, 60 chars).

        Example:
            >>> service = BcryptPasswordService()
            >>> service.hash_password("123456") != service.hash_password("123456")
            True
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        password_hash = bcrypt.hashpw(password.encode("utf-8"), salt)
        return password_hash.decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Args:
            password: Plaintext password to verify.
            password_hash: Digest from the credential record.

        Returns:
            True if password matches hash, False otherwise (including
            malformed or empty digests).

        Note:
            bcrypt.checkpw compares in constant time.
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except (ValueError, AttributeError):
            return False
