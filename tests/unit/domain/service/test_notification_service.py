"""Unit tests for NotificationService."""

from uuid import uuid4

import pytest

from forum.domain.error import NotFoundError
from forum.domain.repository import NotificationRepository, Transaction
from forum.domain.service import (
    NotificationService,
    PushChannel,
    notifications_topic,
)
from forum.domain.value import NotificationId, NotificationType, UserId
from tests.conftest import at, make_notification, received_nothing
from tests.di import build_test_container
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class TestNotificationService:
    """Tests for store-facing notification operations."""

    @pytest.mark.asyncio
    async def test_fetch_newest_first(self, unit_env):
        service = await unit_env.get(NotificationService)
        repo = await unit_env.get(NotificationRepository)
        user = UserId(uuid4())
        older = await repo.save(make_notification(user, created_at=at(1)))
        newer = await repo.save(make_notification(user, created_at=at(2)))
        await repo.save(make_notification(UserId(uuid4())))

        records = await service.fetch(user)

        assert [n.id for n in records] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_mark_read_is_idempotent(self, unit_env):
        service = await unit_env.get(NotificationService)
        repo = await unit_env.get(NotificationRepository)
        user = UserId(uuid4())
        record = await repo.save(make_notification(user))

        await service.mark_read(user, record.id)
        await service.mark_read(user, record.id)

        assert (await repo.find_by_id(record.id)).read

    @pytest.mark.asyncio
    async def test_mark_read_of_someone_elses_notification_fails(self, unit_env):
        service = await unit_env.get(NotificationService)
        repo = await unit_env.get(NotificationRepository)
        record = await repo.save(make_notification(UserId(uuid4())))

        with pytest.raises(NotFoundError):
            await service.mark_read(UserId(uuid4()), record.id)
        with pytest.raises(NotFoundError):
            await service.mark_read(UserId(uuid4()), NotificationId(uuid4()))

    @pytest.mark.asyncio
    async def test_mark_all_read_counts_changes(self, unit_env):
        service = await unit_env.get(NotificationService)
        repo = await unit_env.get(NotificationRepository)
        user = UserId(uuid4())
        await repo.save(make_notification(user))
        await repo.save(make_notification(user, read=True))
        await repo.save(make_notification(user))

        assert await service.mark_all_read(user) == 2
        assert await service.mark_all_read(user) == 0

    @pytest.mark.asyncio
    async def test_notify_pushes_after_commit(self):
        container = build_test_container()
        push_channel = await container.get(PushChannel)
        user = UserId(uuid4())
        subscription = push_channel.subscribe(notifications_topic(user))

        async with container() as request:
            service = await request.get(NotificationService)
            saved = await service.notify(
                user, "bob replied", type=NotificationType.COMMENT, link="/posts/1"
            )
            assert await received_nothing(subscription)

        payload = await subscription.receive()
        assert payload["id"] == str(saved.id)
        assert payload["message"] == "bob replied"
        assert payload["type"] == "comment"
        await subscription.close()
        await container.close()

    @pytest.mark.asyncio
    async def test_rolled_back_notification_is_not_pushed(self):
        container = build_test_container()
        push_channel = await container.get(PushChannel)
        user = UserId(uuid4())
        subscription = push_channel.subscribe(notifications_topic(user))

        with pytest.raises(RuntimeError):
            async with container() as request:
                service = await request.get(NotificationService)
                transaction = await request.get(Transaction)
                await service.notify(user, "bob replied")
                raise RuntimeError("handler failed")

        assert transaction.rolled_back
        assert await received_nothing(subscription)
        await subscription.close()
        await container.close()
