"""In-memory notification repository for testing."""

from typing import Optional

from forum.domain.model.notification import Notification
from forum.domain.repository.notification import NotificationRepository
from forum.domain.value import NotificationId, UserId


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self) -> None:
        self._notifications: dict[NotificationId, Notification] = {}

    async def find_by_id(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Find a notification by ID."""
        return self._notifications.get(notification_id)

    async def find_by_user(self, user_id: UserId, limit: int = 50) -> list[Notification]:
        """Find a user's most recent notifications, newest first."""
        notifications = [
            n for n in self._notifications.values() if n.user_id == user_id
        ]
        notifications.sort(key=lambda n: n.created_at, reverse=True)
        return notifications[:limit]

    async def save(self, notification: Notification) -> Notification:
        """Save a notification."""
        self._notifications[notification.id] = notification
        return notification

    async def mark_read(self, notification_id: NotificationId, user_id: UserId) -> bool:
        """Mark one notification as read."""
        notification = self._notifications.get(notification_id)
        if notification is None or notification.user_id != user_id:
            return False
        if not notification.read:
            self._notifications[notification_id] = notification.model_copy(
                update={"read": True}
            )
        return True

    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark all unread notifications as read."""
        changed = 0
        for key, notification in list(self._notifications.items()):
            if notification.user_id == user_id and not notification.read:
                self._notifications[key] = notification.model_copy(
                    update={"read": True}
                )
                changed += 1
        return changed
