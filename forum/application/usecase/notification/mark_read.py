"""Mark notification read use cases."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.error import UnauthenticatedError
from forum.domain.service import NotificationService
from forum.domain.value import NotificationId, Viewer


class MarkReadRequest(BaseModel):
    """Mark one notification read request."""

    notification_id: str  # UUID string
    viewer: Viewer | None = None


class MarkAllReadRequest(BaseModel):
    """Mark all notifications read request."""

    viewer: Viewer | None = None


class MarkReadResponse(BaseModel):
    """Mark read response."""

    updated: int


class MarkReadUseCase:
    """Use case for marking one notification as read. Idempotent."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize mark read use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(self, request: MarkReadRequest) -> MarkReadResponse:
        """Execute mark read flow.

        Raises:
            UnauthenticatedError: If no viewer is signed in
            NotFoundError: If the notification is not the viewer's
        """
        if request.viewer is None:
            raise UnauthenticatedError("update notifications")

        await self.notification_service.mark_read(
            request.viewer.user_id, NotificationId(UUID(request.notification_id))
        )
        return MarkReadResponse(updated=1)


class MarkAllReadUseCase:
    """Use case for marking all of the viewer's notifications as read."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize mark all read use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(self, request: MarkAllReadRequest) -> MarkReadResponse:
        """Execute mark all read flow.

        Raises:
            UnauthenticatedError: If no viewer is signed in
        """
        if request.viewer is None:
            raise UnauthenticatedError("update notifications")

        updated = await self.notification_service.mark_all_read(
            request.viewer.user_id
        )
        return MarkReadResponse(updated=updated)
