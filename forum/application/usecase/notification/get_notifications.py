"""Get notifications use case."""

from pydantic import BaseModel

from forum.domain.error import UnauthenticatedError
from forum.domain.service import NotificationService
from forum.domain.value import Viewer

from .common import NotificationItem


class GetNotificationsRequest(BaseModel):
    """Get notifications request."""

    viewer: Viewer | None = None


class GetNotificationsResponse(BaseModel):
    """Get notifications response."""

    notifications: list[NotificationItem]
    unread_count: int


class GetNotificationsUseCase:
    """Use case for fetching the viewer's latest notifications."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize get notifications use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(self, request: GetNotificationsRequest) -> GetNotificationsResponse:
        """Execute fetch flow; newest first.

        Raises:
            UnauthenticatedError: If no viewer is signed in
        """
        if request.viewer is None:
            raise UnauthenticatedError("read notifications")

        notifications = await self.notification_service.fetch(request.viewer.user_id)
        return GetNotificationsResponse(
            notifications=[
                NotificationItem.from_notification(n) for n in notifications
            ],
            unread_count=sum(1 for n in notifications if not n.read),
        )
