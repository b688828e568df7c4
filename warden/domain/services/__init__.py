"""Pure domain services."""

from warden.domain.services.role_policy import roles_for_type

__all__ = ["roles_for_type"]
