"""Notification domain service."""

from datetime import datetime
from functools import partial
from uuid import uuid4

import logfire

from forum.config import NotificationSettings
from forum.domain.error import NotFoundError
from forum.domain.model.notification import Notification
from forum.domain.repository import NotificationRepository
from forum.domain.value import NotificationId, NotificationType, UserId

from .base import Service
from .push_channel import PushChannel, notifications_topic
from .store import StoreCalls


class NotificationService(Service):
    """Store-facing notification operations.

    Reads and read-flag writes go to the repository. Newly created
    notifications are published on the recipient's push topic once the
    request's transaction has committed.
    """

    def __init__(
        self,
        notification_repository: NotificationRepository,
        push_channel: PushChannel,
        store: StoreCalls,
        settings: NotificationSettings,
    ) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Notification repository
            push_channel: Realtime channel for new notifications
            store: Guarded store access and the request's transaction
            settings: Notification settings (feed size)
        """
        self.notification_repository = notification_repository
        self.push_channel = push_channel
        self.store = store
        self.settings = settings

    async def fetch(self, user_id: UserId) -> list[Notification]:
        """Fetch the user's latest notifications, newest first."""
        with logfire.span("notification_service.fetch", user_id=str(user_id)):
            notifications = await self.store(
                "find_notifications",
                lambda: self.notification_repository.find_by_user(
                    user_id, limit=self.settings.feed_limit
                ),
            )
            logfire.info(
                "Notifications fetched", user_id=str(user_id), count=len(notifications)
            )
            return notifications

    async def mark_read(
        self, user_id: UserId, notification_id: NotificationId
    ) -> None:
        """Mark one of the user's notifications as read. Idempotent.

        Raises:
            NotFoundError: If the notification does not exist or belongs to
                another user
        """
        with logfire.span(
            "notification_service.mark_read",
            user_id=str(user_id),
            notification_id=str(notification_id),
        ):
            found = await self.store(
                "mark_read",
                lambda: self.notification_repository.mark_read(
                    notification_id, user_id
                ),
            )
            if not found:
                logfire.warn(
                    "Notification not found",
                    user_id=str(user_id),
                    notification_id=str(notification_id),
                )
                raise NotFoundError("Notification", str(notification_id))
            logfire.info("Notification marked read", notification_id=str(notification_id))

    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark all of the user's notifications as read.

        Returns:
            Number of notifications that were unread
        """
        with logfire.span("notification_service.mark_all_read", user_id=str(user_id)):
            changed = await self.store(
                "mark_all_read",
                lambda: self.notification_repository.mark_all_read(user_id),
            )
            logfire.info(
                "All notifications marked read", user_id=str(user_id), changed=changed
            )
            return changed

    async def notify(
        self,
        user_id: UserId,
        message: str,
        type: NotificationType = NotificationType.OTHER,
        link: str | None = None,
    ) -> Notification:
        """Create a notification and push it to the recipient's live feed.

        The push is sent after the request commits and dropped if it rolls
        back. A push with no live subscriber is not an error; the record is
        still fetched on the next load.

        Args:
            user_id: Recipient
            message: Notification text
            type: What triggered the notification
            link: Optional deep link

        Returns:
            Saved notification
        """
        with logfire.span(
            "notification_service.notify", user_id=str(user_id), type=type.value
        ):
            notification = Notification(
                id=NotificationId(uuid4()),
                user_id=user_id,
                type=type,
                message=message,
                link=link,
                created_at=datetime.now(),
            )
            saved = await self.store(
                "save_notification",
                lambda: self.notification_repository.save(notification),
                retry=False,
            )
            self.store.transaction.after_commit(
                partial(
                    self.push_channel.publish,
                    notifications_topic(user_id),
                    saved.model_dump(mode="json"),
                )
            )
            logfire.info(
                "Notification created",
                notification_id=str(saved.id),
                user_id=str(user_id),
            )
            return saved
