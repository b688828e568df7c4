"""Subscription broker port.

Fans payloads published on a topic out to every subscriber attached at
that moment. Nothing is retained for subscribers that attach later.
"""

from collections.abc import AsyncIterator
from typing import Any, Protocol

from warden.domain.enums import PublishTopic


class TopicSubscriptionProtocol(Protocol):
    """Handle for one subscriber on one topic."""

    def __aiter__(self) -> AsyncIterator[Any]: ...

    async def __anext__(self) -> Any: ...

    async def close(self) -> None:
        """Detach from the topic; later publishes are not delivered."""
        ...


class SubscriptionBrokerProtocol(Protocol):
    """Topic-based publish/subscribe for real-time clients."""

    async def publish(self, topic: PublishTopic, payload: Any) -> None:
        """Deliver ``payload`` to every current subscriber of ``topic``."""
        ...

    def subscribe(self, topic: PublishTopic) -> TopicSubscriptionProtocol:
        """Attach a new subscriber to ``topic``.

        Registration is immediate: payloads published after this call
        returns are delivered even if iteration has not started.
        """
        ...
