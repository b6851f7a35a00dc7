"""Realtime push channel provider."""

from dishka import Scope, provide

from forum.adapter.push import InMemoryPushChannel
from forum.config import NotificationSettings
from forum.domain.service import PushChannel
from forum.util.di.base import ProviderBase


class PushChannelProvider(ProviderBase):
    """Push channel provider - concrete, shared by the whole process.

    Subscribers (live notification streams) and publishers (request
    handlers) must see the same channel instance, so it is APP-scoped.
    """

    @provide(scope=Scope.APP)
    def get_push_channel(self, settings: NotificationSettings) -> PushChannel:
        """Provide the in-process push channel."""
        return InMemoryPushChannel(subscriber_queue_size=settings.stream_queue_size)
