"""Data transfer objects returned by handlers."""

from warden.application.dtos.auth_dtos import AuthPayload

__all__ = ["AuthPayload"]
