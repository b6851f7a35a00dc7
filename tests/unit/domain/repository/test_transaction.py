"""Unit tests for request transaction completion."""

import pytest
from sqlalchemy.exc import OperationalError

from forum.adapter.push import InMemoryPushChannel
from forum.persistence.repository.inmemory import InMemoryTransaction
from tests.conftest import received_nothing


class FailingCommit(InMemoryTransaction):
    async def _commit(self) -> None:
        raise OperationalError("COMMIT", {}, ConnectionResetError("connection reset"))


@pytest.fixture
def channel() -> InMemoryPushChannel:
    return InMemoryPushChannel()


class TestComplete:
    """Tests for commit, rollback and after-commit work."""

    @pytest.mark.asyncio
    async def test_commit_then_publish(self, channel):
        # Arrange
        transaction = InMemoryTransaction()
        subscription = channel.subscribe("notifications:1")
        transaction.after_commit(lambda: channel.publish("notifications:1", {"id": 1}))

        # Act
        committed = await transaction.complete()

        # Assert
        assert committed
        assert transaction.committed
        assert await subscription.receive() == {"id": 1}

    @pytest.mark.asyncio
    async def test_error_rolls_back_and_drops_pushes(self, channel):
        transaction = InMemoryTransaction()
        subscription = channel.subscribe("notifications:1")
        transaction.after_commit(lambda: channel.publish("notifications:1", {"id": 1}))

        committed = await transaction.complete(RuntimeError("handler failed"))

        assert not committed
        assert transaction.rolled_back
        assert await received_nothing(subscription)

    @pytest.mark.asyncio
    async def test_failed_commit_drops_pushes(self, channel):
        transaction = FailingCommit()
        subscription = channel.subscribe("notifications:1")
        transaction.after_commit(lambda: channel.publish("notifications:1", {"id": 1}))

        with pytest.raises(OperationalError):
            await transaction.complete()

        assert await received_nothing(subscription)

    @pytest.mark.asyncio
    async def test_rollback_only_wins_over_success(self, channel):
        transaction = InMemoryTransaction()
        subscription = channel.subscribe("notifications:1")
        transaction.after_commit(lambda: channel.publish("notifications:1", {"id": 1}))
        transaction.set_rollback_only()

        assert not await transaction.complete()

        assert transaction.rolled_back
        assert not transaction.committed
        assert await received_nothing(subscription)

    @pytest.mark.asyncio
    async def test_callbacks_run_once(self, channel):
        transaction = InMemoryTransaction()
        calls = []

        async def record():
            calls.append(1)

        transaction.after_commit(record)
        await transaction.complete()
        await transaction.complete()

        assert calls == [1]
