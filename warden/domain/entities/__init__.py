"""Domain entities."""

from warden.domain.entities.log_record import LogRecord
from warden.domain.entities.profile import Profile
from warden.domain.entities.user import User

__all__ = ["LogRecord", "Profile", "User"]
