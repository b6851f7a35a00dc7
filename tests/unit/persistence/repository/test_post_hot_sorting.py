"""Unit tests for post sort orders in the in-memory repository."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from forum.domain.model.post import Post
from forum.domain.value import CommunityName, Handle, PostId, PostSortOrder, UserId
from forum.persistence.repository.inmemory.post import InMemoryPostRepository


def _post(title: str, vote_score: int, age: timedelta) -> Post:
    return Post(
        id=PostId(uuid4()),
        community=CommunityName("biology"),
        author_id=UserId(uuid4()),
        author_handle=Handle("author"),
        title=title,
        vote_score=vote_score,
        created_at=datetime.now() - age,
    )


class TestPostHotSorting:
    """Unit tests for HOT ordering (score first, recency breaks ties)."""

    @pytest.mark.asyncio
    async def test_hot_sort_breaks_ties_by_recency(self):
        """Equal scores: the newer post ranks first."""
        # Arrange
        repo = InMemoryPostRepository()
        old_post = await repo.save(_post("Old", 2, timedelta(days=7)))
        new_post = await repo.save(_post("New", 2, timedelta(hours=1)))

        # Act
        posts = await repo.find_all(sort=PostSortOrder.HOT)

        # Assert
        assert [p.id for p in posts] == [new_post.id, old_post.id]

    @pytest.mark.asyncio
    async def test_hot_sort_has_no_time_decay(self):
        """An old high-scoring post stays above a fresh low-scoring one."""
        repo = InMemoryPostRepository()
        old_popular = await repo.save(_post("Old popular", 50, timedelta(days=30)))
        fresh = await repo.save(_post("Fresh", 1, timedelta(minutes=5)))

        posts = await repo.find_all(sort=PostSortOrder.HOT)

        assert [p.id for p in posts] == [old_popular.id, fresh.id]

    @pytest.mark.asyncio
    async def test_deleted_posts_are_excluded(self):
        repo = InMemoryPostRepository()
        kept = await repo.save(_post("Kept", 0, timedelta(hours=1)))
        deleted = _post("Deleted", 9, timedelta(hours=1))
        await repo.save(deleted.model_copy(update={"deleted_at": datetime.now()}))

        for sort in PostSortOrder:
            posts = await repo.find_all(sort=sort)
            assert [p.id for p in posts] == [kept.id]
