"""Repository adapters."""

from warden.infrastructure.persistence.repositories.log_repository import (
    LogRepository,
)
from warden.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = ["LogRepository", "UserRepository"]
