"""Unit tests for NotificationCenter."""

import asyncio
from uuid import uuid4

import pytest

from forum.application.usecase.notification import (
    GetNotificationsResponse,
    MarkReadResponse,
    NotificationItem,
)
from forum.client import NotificationCenter
from forum.domain.error import StoreUnavailableError
from forum.domain.value import UserId
from tests.conftest import at, make_notification

USER = UserId(uuid4())


def item(t: int, read: bool = False) -> NotificationItem:
    return NotificationItem.from_notification(
        make_notification(USER, created_at=at(t), read=read)
    )


class FakeForumClient:
    """Serves a fixed batch and a stream fed by the test."""

    def __init__(self, batch: list[NotificationItem]) -> None:
        self.batch = batch
        self.gate: asyncio.Event | None = None
        self.stream: asyncio.Queue[NotificationItem | None] = asyncio.Queue()
        self.marked: list[str] = []
        self.fail_mark = False

    async def get_notifications(self):
        batch = list(self.batch)
        if self.gate is not None:
            await self.gate.wait()
        return GetNotificationsResponse(
            notifications=batch,
            unread_count=sum(1 for n in batch if not n.read),
        )

    async def mark_read(self, notification_id):
        if self.fail_mark:
            raise StoreUnavailableError("mark_read")
        self.marked.append(str(notification_id))
        return MarkReadResponse(updated=1)

    async def mark_all_read(self):
        self.marked.append("*")
        return MarkReadResponse(updated=len(self.batch))

    async def stream_notifications(self):
        while (pushed := await self.stream.get()) is not None:
            yield pushed


class TestNotificationCenter:
    """Tests for NotificationCenter."""

    @pytest.mark.asyncio
    async def test_refresh_loads_feed(self):
        client = FakeForumClient([item(1), item(2, read=True)])
        center = NotificationCenter(client)  # type: ignore[arg-type]

        assert await center.refresh()

        assert center.unread_count == 1
        assert len(center.notifications) == 2

    @pytest.mark.asyncio
    async def test_push_during_open_is_not_lost_or_doubled(self):
        # Arrange
        client = FakeForumClient([item(1)])
        center = NotificationCenter(client)  # type: ignore[arg-type]
        early = item(5)
        center.start_listening()
        await client.stream.put(early)
        await asyncio.sleep(0.01)

        # Act
        client.batch = [item(1), early]
        await center.refresh()

        # Assert
        assert [str(n.id) for n in center.notifications][0] == early.notification_id
        assert len(center.notifications) == 2
        assert center.unread_count == 2
        await center.close()

    @pytest.mark.asyncio
    async def test_live_push_after_load(self):
        client = FakeForumClient([item(1)])
        center = NotificationCenter(client)  # type: ignore[arg-type]
        await center.open()

        pushed = item(9)
        await client.stream.put(pushed)
        await client.stream.put(pushed)
        await asyncio.sleep(0.01)

        assert center.unread_count == 2
        assert str(center.notifications[0].id) == pushed.notification_id
        await center.close()

    @pytest.mark.asyncio
    async def test_mark_read_updates_locally_and_remotely(self):
        first = item(1)
        client = FakeForumClient([first, item(2)])
        center = NotificationCenter(client)  # type: ignore[arg-type]
        await center.refresh()

        assert await center.mark_read(first.notification_id)
        assert await center.mark_read(first.notification_id)

        assert center.unread_count == 1
        assert client.marked == [first.notification_id, first.notification_id]

    @pytest.mark.asyncio
    async def test_mark_read_survives_older_refresh(self):
        """A batch fetched before mark_read lands afterwards."""
        # Arrange
        first = item(1)
        client = FakeForumClient([first, item(2)])
        center = NotificationCenter(client)  # type: ignore[arg-type]
        await center.refresh()
        client.gate = asyncio.Event()
        refresh = asyncio.create_task(center.refresh())
        await asyncio.sleep(0)

        # Act
        assert await center.mark_read(first.notification_id)
        client.gate.set()
        assert await refresh

        # Assert
        read = {str(n.id): n.read for n in center.notifications}
        assert read[first.notification_id]
        assert center.unread_count == 1

    @pytest.mark.asyncio
    async def test_mark_all_read(self):
        client = FakeForumClient([item(1), item(2)])
        center = NotificationCenter(client)  # type: ignore[arg-type]
        await center.refresh()

        assert await center.mark_all_read()

        assert center.unread_count == 0
        assert client.marked == ["*"]

    @pytest.mark.asyncio
    async def test_failed_mark_read_is_reported(self):
        first = item(1)
        client = FakeForumClient([first])
        client.fail_mark = True
        center = NotificationCenter(client)  # type: ignore[arg-type]
        await center.refresh()

        assert await center.mark_read(first.notification_id) is False
        assert isinstance(center.error, StoreUnavailableError)

    @pytest.mark.asyncio
    async def test_stream_end_finishes_listener(self):
        client = FakeForumClient([])
        center = NotificationCenter(client)  # type: ignore[arg-type]
        listener = center.start_listening()

        await client.stream.put(None)
        await asyncio.wait_for(listener, timeout=1.0)

        assert listener.done()
        await center.close()
