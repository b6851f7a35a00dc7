"""Response items shared by the notification use cases."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from forum.domain.model import Notification
from forum.domain.value import NotificationId, NotificationType, UserId


class NotificationItem(BaseModel):
    """Notification as returned to clients and pushed on the live stream."""

    notification_id: str
    user_id: str
    type: NotificationType
    message: str
    read: bool
    link: str | None
    created_at: datetime

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationItem":
        return cls(
            notification_id=str(notification.id),
            user_id=str(notification.user_id),
            type=notification.type,
            message=notification.message,
            read=notification.read,
            link=notification.link,
            created_at=notification.created_at,
        )

    def to_notification(self) -> Notification:
        """Domain record for this item (client-side feeds)."""
        return Notification(
            id=NotificationId(UUID(self.notification_id)),
            user_id=UserId(UUID(self.user_id)),
            type=self.type,
            message=self.message,
            read=self.read,
            link=self.link,
            created_at=self.created_at,
        )
