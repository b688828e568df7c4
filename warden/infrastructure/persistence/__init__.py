"""SQLAlchemy persistence adapters."""

from warden.infrastructure.persistence.database import Database

__all__ = ["Database"]
