"""Unit tests for InMemorySubscriptionBroker.

Tests cover:
- Eager registration: payloads published before iteration starts arrive
- Publish order per subscriber
- Fan-out to several subscribers, topic isolation
- No replay for late subscribers
- Close / context manager detaches and ends iteration
"""

import asyncio

import pytest

from warden.domain.enums import PublishTopic
from warden.infrastructure.pubsub import InMemorySubscriptionBroker


@pytest.fixture
def broker(mock_logger) -> InMemorySubscriptionBroker:
    return InMemorySubscriptionBroker(logger=mock_logger)


@pytest.mark.unit
class TestSubscriptionBroker:
    """Delivery semantics."""

    async def test_payload_published_before_iteration_is_delivered(self, broker):
        # Arrange
        stream = broker.subscribe(PublishTopic.USER_CREATED)

        # Act
        await broker.publish(PublishTopic.USER_CREATED, "alice")
        received = await anext(stream)

        # Assert
        assert received == "alice"
        await stream.close()

    async def test_payloads_arrive_in_publish_order(self, broker):
        stream = broker.subscribe(PublishTopic.LOG_CREATED)

        for item in ("a", "b", "c"):
            await broker.publish(PublishTopic.LOG_CREATED, item)

        assert [await anext(stream) for _ in range(3)] == ["a", "b", "c"]
        await stream.close()

    async def test_every_subscriber_gets_each_payload(self, broker):
        first = broker.subscribe(PublishTopic.USER_UPDATED)
        second = broker.subscribe(PublishTopic.USER_UPDATED)

        await broker.publish(PublishTopic.USER_UPDATED, 42)

        assert await anext(first) == 42
        assert await anext(second) == 42
        await first.close()
        await second.close()

    async def test_topics_are_isolated(self, broker):
        deleted = broker.subscribe(PublishTopic.USER_DELETED)

        await broker.publish(PublishTopic.USER_CREATED, "bob")

        assert deleted.pending == 0
        await deleted.close()

    async def test_no_replay_for_late_subscribers(self, broker):
        await broker.publish(PublishTopic.USER_LOGOUT, "early")

        stream = broker.subscribe(PublishTopic.USER_LOGOUT)

        assert stream.pending == 0
        await stream.close()

    async def test_publish_without_subscribers_is_noop(self, broker):
        await broker.publish(PublishTopic.USER_CREATED, "nobody")

        assert broker.subscriber_count(PublishTopic.USER_CREATED) == 0

    async def test_context_manager_detaches(self, broker):
        async with broker.subscribe(PublishTopic.USER_CREATED) as stream:
            assert broker.subscriber_count(PublishTopic.USER_CREATED) == 1

        assert stream.closed
        assert broker.subscriber_count(PublishTopic.USER_CREATED) == 0

    async def test_close_wakes_blocked_consumer(self, broker):
        stream = broker.subscribe(PublishTopic.LOG_CREATED)

        async def consume():
            return [item async for item in stream]

        task = asyncio.create_task(consume())
        await asyncio.sleep(0)
        await stream.close()

        assert await asyncio.wait_for(task, timeout=1) == []

    async def test_delivery_after_close_is_dropped(self, broker):
        stream = broker.subscribe(PublishTopic.LOG_CREATED)
        await stream.close()

        stream.deliver("late")

        with pytest.raises(StopAsyncIteration):
            await anext(stream)
