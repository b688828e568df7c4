"""Base domain event class.

Domain events are immutable records published on the event bus. The bus
routes them by ``channel``, a class-level name every concrete event
declares (for example ``"create.log"``).

Usage:
    >>> @dataclass(frozen=True, kw_only=True, slots=True)
    ... class UserTouched(DomainEvent):
    ...     channel: ClassVar[str] = "user.touched"
    ...     user_id: UUID
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import ClassVar
from uuid import UUID

from uuid_extensions import uuid7


@dataclass(frozen=True, kw_only=True, slots=True)
class DomainEvent:
    """Base class for all domain events.

    All domain events MUST:
        1. Inherit from this base class
        2. Be frozen dataclasses (immutable after creation)
        3. Use kw_only=True
        4. Override ``channel`` with the name listeners subscribe to

    Attributes:
        event_id: Unique identifier for this event instance (UUID v7, so
            identifiers sort by creation time).
        occurred_at: Timestamp when the event occurred (UTC).
    """

    channel: ClassVar[str] = "domain.event"

    event_id: UUID = field(default_factory=uuid7)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
