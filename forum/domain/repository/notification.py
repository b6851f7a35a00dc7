"""Notification repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from forum.domain.model.notification import Notification
from forum.domain.value import NotificationId, UserId


class NotificationRepository(ABC):
    """Repository for Notification entity."""

    @abstractmethod
    async def find_by_id(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Find a notification by ID."""
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId, limit: int = 50) -> List[Notification]:
        """Find a user's most recent notifications, newest first.

        Args:
            user_id: Recipient
            limit: Maximum number of notifications to return

        Returns:
            Notifications ordered by created_at descending
        """
        pass

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        """Save a notification."""
        pass

    @abstractmethod
    async def mark_read(self, notification_id: NotificationId, user_id: UserId) -> bool:
        """Mark one of the user's notifications as read.

        Returns:
            True if the notification exists and belongs to the user
        """
        pass

    @abstractmethod
    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark all of the user's unread notifications as read.

        Returns:
            Number of notifications that changed
        """
        pass
