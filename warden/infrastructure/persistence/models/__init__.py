"""Database models. Importing this package registers every table on
BaseModel.metadata (used by Alembic and ``Database.create_all``)."""

from warden.infrastructure.persistence.models.log import LogModel
from warden.infrastructure.persistence.models.user import (
    UserModel,
    UserPasswordModel,
    UserProfileModel,
)

__all__ = ["LogModel", "UserModel", "UserPasswordModel", "UserProfileModel"]
