"""Realtime push channel interface.

The push channel is an external collaborator: it fans out newly created
notifications (and optionally comments) to live subscribers. Topics are
plain strings built with the helpers below.
"""

from abc import ABC, abstractmethod
from typing import Any

from forum.domain.value import PostId, UserId

Payload = dict[str, Any]


def notifications_topic(user_id: UserId) -> str:
    """Topic carrying new notifications for one user."""
    return f"notifications:{user_id}"


def comments_topic(post_id: PostId) -> str:
    """Topic carrying new comments on one post."""
    return f"comments:{post_id}"


class SubscriptionClosed(Exception):
    """Raised when receiving from a closed subscription."""

    pass


class Subscription(ABC):
    """Live, ordered feed of payloads published to one topic.

    Iterating yields payloads until the subscription is closed.
    """

    topic: str

    @abstractmethod
    async def receive(self) -> Payload:
        """Wait for the next payload.

        Raises:
            SubscriptionClosed: If the subscription was closed
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Stop delivery and release the subscription."""
        pass

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> Payload:
        try:
            return await self.receive()
        except SubscriptionClosed:
            raise StopAsyncIteration

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


class PushChannel(ABC):
    """Generic publish/subscribe interface."""

    @abstractmethod
    async def publish(self, topic: str, payload: Payload) -> int:
        """Deliver a payload to every current subscriber of ``topic``.

        Returns:
            Number of subscribers the payload was delivered to
        """
        pass

    @abstractmethod
    def subscribe(self, topic: str) -> Subscription:
        """Open a subscription; payloads published afterwards are delivered."""
        pass
