"""Password hashing port."""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing and verification interface.

    Implementations:
        - BcryptPasswordService
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password with a fresh random salt."""
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a digest.

        Note:
            - Constant-time comparison
            - Returns False for malformed digests (no exceptions)
        """
        ...
