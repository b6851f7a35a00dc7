"""Notification entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import NotificationId, NotificationType, UserId


class Notification(DomainModel):
    """Notification delivered to a single user.

    Created server-side when something happens to the user's content.
    Clients only ever flip ``read``; they never delete notifications.
    """

    id: NotificationId
    user_id: UserId
    type: NotificationType = NotificationType.OTHER
    message: str = Field(min_length=1, max_length=1000)
    read: bool = False
    link: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
