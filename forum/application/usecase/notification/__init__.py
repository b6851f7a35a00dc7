"""Notification use cases."""

from .common import NotificationItem
from .get_notifications import (
    GetNotificationsRequest,
    GetNotificationsResponse,
    GetNotificationsUseCase,
)
from .mark_read import (
    MarkAllReadRequest,
    MarkAllReadUseCase,
    MarkReadRequest,
    MarkReadResponse,
    MarkReadUseCase,
)
from .stream_notifications import (
    NotificationStream,
    StreamNotificationsRequest,
    StreamNotificationsUseCase,
)

__all__ = [
    "NotificationItem",
    "GetNotificationsRequest",
    "GetNotificationsResponse",
    "GetNotificationsUseCase",
    "MarkAllReadRequest",
    "MarkAllReadUseCase",
    "MarkReadRequest",
    "MarkReadResponse",
    "MarkReadUseCase",
    "NotificationStream",
    "StreamNotificationsRequest",
    "StreamNotificationsUseCase",
]
