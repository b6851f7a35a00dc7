"""In-process push channel.

Fans published payloads out to one ``asyncio.Queue`` per subscriber. It
serves a single API process, which is enough for the SSE notification
stream and for tests; a multi-process deployment would swap in a broker
backed implementation of the same interface.
"""

import asyncio
from collections import defaultdict

import logfire

from forum.adapter.error import PushChannelError
from forum.domain.service.push_channel import (
    Payload,
    PushChannel,
    Subscription,
    SubscriptionClosed,
)

# Marks the end of a subscription's queue
_CLOSED = object()


class InMemorySubscription(Subscription):
    """Subscription backed by a bounded queue."""

    def __init__(self, channel: "InMemoryPushChannel", topic: str, maxsize: int) -> None:
        self.topic = topic
        self._channel = channel
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=maxsize)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _deliver(self, payload: Payload) -> None:
        try:
            self._queue.put_nowait(payload)
        except asyncio.QueueFull as e:
            raise PushChannelError(f"Subscriber on {self.topic} is not keeping up") from e

    async def receive(self) -> Payload:
        if self._closed and self._queue.empty():
            raise SubscriptionClosed(self.topic)
        item = await self._queue.get()
        if item is _CLOSED:
            raise SubscriptionClosed(self.topic)
        return item  # type: ignore[return-value]

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._channel._remove(self)
        # Wake a pending receive(); drop the oldest item if the queue is full
        if self._queue.full():
            self._queue.get_nowait()
        self._queue.put_nowait(_CLOSED)


class InMemoryPushChannel(PushChannel):
    """Topic-based fan-out to in-process subscribers."""

    def __init__(self, subscriber_queue_size: int = 100) -> None:
        self._subscribers: dict[str, list[InMemorySubscription]] = defaultdict(list)
        self._queue_size = subscriber_queue_size

    async def publish(self, topic: str, payload: Payload) -> int:
        delivered = 0
        for subscription in list(self._subscribers.get(topic, ())):
            try:
                subscription._deliver(payload)
                delivered += 1
            except PushChannelError as e:
                # A stalled subscriber must not block everyone else
                logfire.warn("Dropping slow subscriber", topic=topic, error=str(e))
                await subscription.close()
        logfire.debug("Published push payload", topic=topic, delivered=delivered)
        return delivered

    def subscribe(self, topic: str) -> InMemorySubscription:
        subscription = InMemorySubscription(self, topic, self._queue_size)
        self._subscribers[topic].append(subscription)
        logfire.debug("Push subscription opened", topic=topic)
        return subscription

    def subscriber_count(self, topic: str) -> int:
        return len(self._subscribers.get(topic, ()))

    def _remove(self, subscription: InMemorySubscription) -> None:
        subscribers = self._subscribers.get(subscription.topic)
        if not subscribers:
            return
        if subscription in subscribers:
            subscribers.remove(subscription)
        if not subscribers:
            del self._subscribers[subscription.topic]
        logfire.debug("Push subscription closed", topic=subscription.topic)
