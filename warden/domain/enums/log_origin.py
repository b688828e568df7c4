"""Origin tags for log events."""

from enum import Enum


class LogOrigin(str, Enum):
    """Subsystem that emitted a log event."""

    API = "API"
