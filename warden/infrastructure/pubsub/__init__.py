"""Subscription broker adapters."""

from warden.infrastructure.pubsub.in_memory_broker import (
    InMemorySubscriptionBroker,
    TopicSubscription,
)

__all__ = ["InMemorySubscriptionBroker", "TopicSubscription"]
