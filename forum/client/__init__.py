"""Client for the forum API and the view models built on it."""

from .api import ForumClient, error_for_response
from .generation import Generation
from .notification_center import NotificationCenter
from .thread_view import ThreadView

__all__ = [
    "ForumClient",
    "Generation",
    "NotificationCenter",
    "ThreadView",
    "error_for_response",
]
