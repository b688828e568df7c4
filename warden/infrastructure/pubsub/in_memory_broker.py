"""In-memory subscription broker.

Fans out payloads to GraphQL subscription streams. Each subscriber owns an
unbounded asyncio.Queue registered at subscribe time, so:

- a payload published after ``subscribe()`` returns is always delivered,
  even if the consumer has not started iterating yet;
- every subscriber sees its topic's payloads in publish order;
- publishing to a topic with no subscribers drops the payload (no replay);
- a slow consumer only grows its own queue and never blocks publishers.

Closing a subscription (explicitly, via ``async with`` or when the GraphQL
transport closes the generator on disconnect) detaches its queue.
"""

import asyncio
from collections import defaultdict
from typing import Any

from warden.domain.enums import PublishTopic
from warden.domain.protocols.logger_protocol import LoggerProtocol

_CLOSED = object()


class TopicSubscription:
    """One subscriber's stream on one topic.

    Usage:
        async with broker.subscribe(PublishTopic.USER_CREATED) as stream:
            async for user in stream:
                ...
    """

    def __init__(self, broker: "InMemorySubscriptionBroker", topic: PublishTopic) -> None:
        self._broker = broker
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._closed = False
        self.topic = topic

    @property
    def closed(self) -> bool:
        """True once the subscription has been detached."""
        return self._closed

    @property
    def pending(self) -> int:
        """Payloads delivered but not yet consumed."""
        return self._queue.qsize()

    def deliver(self, payload: Any) -> None:
        """Enqueue a payload (no-op after close)."""
        if not self._closed:
            self._queue.put_nowait(payload)

    def __aiter__(self) -> "TopicSubscription":
        return self

    async def __anext__(self) -> Any:
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        return item

    async def close(self) -> None:
        """Detach from the broker and end iteration."""
        if self._closed:
            return
        self._closed = True
        self._broker.detach(self)
        # Wake a consumer blocked in __anext__.
        self._queue.put_nowait(_CLOSED)

    async def __aenter__(self) -> "TopicSubscription":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


class InMemorySubscriptionBroker:
    """Topic -> subscriber queues registry.

    Thread Safety:
        NOT thread-safe; all calls happen on the event loop thread.
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._subscribers: dict[PublishTopic, list[TopicSubscription]] = defaultdict(
            list
        )
        self._logger = logger

    def subscribe(self, topic: PublishTopic) -> TopicSubscription:
        """Attach a new subscriber to a topic.

        Args:
            topic: Topic to listen on.

        Returns:
            TopicSubscription, already registered.
        """
        subscription = TopicSubscription(self, PublishTopic(topic))
        self._subscribers[subscription.topic].append(subscription)
        self._logger.debug(
            "subscription_attached",
            topic=subscription.topic.value,
            subscriber_count=len(self._subscribers[subscription.topic]),
        )
        return subscription

    def detach(self, subscription: TopicSubscription) -> None:
        """Remove a subscription from its topic (idempotent)."""
        subscribers = self._subscribers.get(subscription.topic, [])
        if subscription in subscribers:
            subscribers.remove(subscription)
            self._logger.debug(
                "subscription_detached",
                topic=subscription.topic.value,
                subscriber_count=len(subscribers),
            )

    def subscriber_count(self, topic: PublishTopic) -> int:
        """Number of subscribers currently attached to a topic."""
        return len(self._subscribers.get(PublishTopic(topic), []))

    async def publish(self, topic: PublishTopic, payload: Any) -> None:
        """Deliver a payload to every current subscriber of a topic.

        Args:
            topic: Topic to publish on.
            payload: Value handed to subscribers as-is.
        """
        subscribers = list(self._subscribers.get(PublishTopic(topic), []))
        if not subscribers:
            return

        for subscription in subscribers:
            subscription.deliver(payload)

        self._logger.debug(
            "topic_published",
            topic=PublishTopic(topic).value,
            subscriber_count=len(subscribers),
        )
