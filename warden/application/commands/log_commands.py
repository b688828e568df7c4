"""Log commands."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, kw_only=True)
class CreateLog:
    """Store a log record submitted through the API.

    ``data`` must have the shape of a log event: ``type``, ``origin``,
    ``event_name`` and ``service_name`` are required; ``description``,
    ``message``, ``error_code``, ``stack`` and ``context`` are optional.

    Attributes:
        data: Raw log event fields as received.
    """

    data: dict[str, Any] = field(default_factory=dict)
