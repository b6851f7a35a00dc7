"""Notification center view model.

Keeps a ``NotificationFeed`` in sync with the API: batch fetches replace
the feed, the live stream pushes into it and read flags are updated
locally before the server is told.
"""

import asyncio
import contextlib
from uuid import UUID

import logfire

from forum.domain.error import DomainError
from forum.domain.model import Notification
from forum.domain.service import NotificationFeed
from forum.domain.value import NotificationId

from .api import ForumClient
from .generation import Generation


class NotificationCenter:
    """Live notification state for the signed-in user."""

    def __init__(self, client: ForumClient, feed: NotificationFeed | None = None) -> None:
        """Initialize notification center.

        Args:
            client: Forum API client (authenticated)
            feed: Feed to drive, a new one by default
        """
        self.client = client
        self.feed = feed or NotificationFeed()
        self.error: DomainError | None = None
        self._loads = Generation()
        self._listener: asyncio.Task[None] | None = None

    @property
    def notifications(self) -> tuple[Notification, ...]:
        return self.feed.notifications

    @property
    def unread_count(self) -> int:
        return self.feed.unread_count

    async def open(self) -> None:
        """Start listening, then fetch.

        The stream is opened first so nothing published during the fetch
        is missed; the feed buffers those pushes until the fetch lands.
        """
        self.start_listening()
        await self.refresh()

    async def close(self) -> None:
        """Stop listening and ignore fetches still in flight."""
        self._loads.close()
        if self._listener is not None:
            self._listener.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._listener
            self._listener = None

    async def refresh(self) -> bool:
        """Replace the feed with the latest batch from the API.

        Returns:
            True if the batch was applied
        """
        token = self._loads.next()
        try:
            response = await self.client.get_notifications()
        except DomainError as e:
            if self._loads.is_current(token):
                self._fail(e)
            return False
        if not self._loads.is_current(token):
            return False

        self.feed.load(item.to_notification() for item in response.notifications)
        self.error = None
        return True

    async def mark_read(self, notification_id: NotificationId | UUID | str) -> bool:
        """Mark one notification read locally, then on the server."""
        notification_id = NotificationId(UUID(str(notification_id)))
        self.feed.mark_read(notification_id)
        try:
            await self.client.mark_read(notification_id)
        except DomainError as e:
            self._fail(e)
            return False
        return True

    async def mark_all_read(self) -> bool:
        """Mark everything read locally, then on the server."""
        self.feed.mark_all_read()
        try:
            await self.client.mark_all_read()
        except DomainError as e:
            self._fail(e)
            return False
        return True

    def start_listening(self) -> asyncio.Task[None]:
        """Consume the live stream in a background task."""
        if self._listener is None or self._listener.done():
            self._listener = asyncio.create_task(self.listen())
        return self._listener

    async def listen(self) -> None:
        """Push every streamed notification into the feed until the stream ends."""
        try:
            async for item in self.client.stream_notifications():
                if self.feed.receive_push(item.to_notification()):
                    logfire.debug(
                        "Notification received", notification_id=item.notification_id
                    )
        except DomainError as e:
            self._fail(e)

    def _fail(self, error: DomainError) -> None:
        self.error = error
        logfire.warn("Notification center request failed", error=str(error))
