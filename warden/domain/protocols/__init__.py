"""Domain protocols (ports).

Infrastructure adapters implement these structurally; nothing inherits
from them.
"""

from warden.domain.protocols.event_bus_protocol import EventBusProtocol, EventHandler
from warden.domain.protocols.log_repository import LogRepository
from warden.domain.protocols.logger_protocol import LoggerProtocol
from warden.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from warden.domain.protocols.rate_limit_protocol import RateLimitProtocol
from warden.domain.protocols.subscription_broker_protocol import (
    SubscriptionBrokerProtocol,
    TopicSubscriptionProtocol,
)
from warden.domain.protocols.token_service_protocol import TokenServiceProtocol
from warden.domain.protocols.user_repository import UserRepository

__all__ = [
    "EventBusProtocol",
    "EventHandler",
    "LogRepository",
    "LoggerProtocol",
    "PasswordHashingProtocol",
    "RateLimitProtocol",
    "SubscriptionBrokerProtocol",
    "TokenServiceProtocol",
    "TopicSubscriptionProtocol",
    "UserRepository",
]
