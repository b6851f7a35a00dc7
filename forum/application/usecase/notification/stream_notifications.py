"""Stream notifications use case."""

import asyncio

import logfire
from pydantic import BaseModel

from forum.domain.error import UnauthenticatedError
from forum.domain.model import Notification
from forum.domain.service import PushChannel, Subscription, notifications_topic
from forum.domain.value import Viewer

from .common import NotificationItem


class StreamNotificationsRequest(BaseModel):
    """Stream notifications request."""

    viewer: Viewer | None = None


class NotificationStream:
    """Live notifications for one viewer.

    Wraps a push subscription; close it when the client goes away.
    """

    def __init__(self, subscription: Subscription) -> None:
        self.subscription = subscription

    async def next_item(self, timeout: float) -> NotificationItem | None:
        """Wait for the next notification.

        Returns:
            The notification, or None if nothing arrived within ``timeout``

        Raises:
            SubscriptionClosed: If the stream was closed
        """
        try:
            async with asyncio.timeout(timeout):
                payload = await self.subscription.receive()
        except TimeoutError:
            return None
        return NotificationItem.from_notification(Notification.model_validate(payload))

    async def close(self) -> None:
        await self.subscription.close()


class StreamNotificationsUseCase:
    """Use case for subscribing to the viewer's new notifications."""

    def __init__(self, push_channel: PushChannel) -> None:
        """Initialize stream notifications use case.

        Args:
            push_channel: Realtime channel notifications are published on
        """
        self.push_channel = push_channel

    async def execute(self, request: StreamNotificationsRequest) -> NotificationStream:
        """Open a live notification stream.

        Raises:
            UnauthenticatedError: If no viewer is signed in
        """
        if request.viewer is None:
            raise UnauthenticatedError("stream notifications")

        topic = notifications_topic(request.viewer.user_id)
        logfire.info("Notification stream opened", user_id=str(request.viewer.user_id))
        return NotificationStream(self.push_channel.subscribe(topic))
