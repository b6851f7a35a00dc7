"""Integration tests for the post and comment repositories."""

import pytest
import pytest_asyncio

from forum.domain.repository import CommentRepository, PostRepository, UserRepository
from forum.domain.value import CommunityName, Handle, PostSortOrder
from tests.conftest import at, make_comment, make_post, make_user

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def author(integration_env):
    users = await integration_env.get(UserRepository)
    return await users.save(make_user("author"))


class TestPostRepositoryIntegration:
    """Integration tests for PostgresPostRepository."""

    @pytest.mark.asyncio
    async def test_hot_ranks_by_score_then_recency(self, integration_env, author):
        # Arrange
        posts = await integration_env.get(PostRepository)
        low = await posts.save(make_post(author, "low", vote_score=1, created_at=at(30)))
        old = await posts.save(make_post(author, "old", vote_score=5, created_at=at(10)))
        new = await posts.save(make_post(author, "new", vote_score=5, created_at=at(20)))
        await posts.save(make_post(author, "gone", vote_score=99, deleted=True))

        # Act
        hot = await posts.find_all(sort=PostSortOrder.HOT)
        latest = await posts.find_all(sort=PostSortOrder.NEW)

        # Assert
        assert [p.id for p in hot] == [new.id, old.id, low.id]
        assert [p.id for p in latest] == [low.id, new.id, old.id]

    @pytest.mark.asyncio
    async def test_community_filter_and_pagination(self, integration_env, author):
        posts = await integration_env.get(PostRepository)
        for t in range(3):
            await posts.save(make_post(author, f"s{t}", created_at=at(t)))
        await posts.save(make_post(author, "other", community="biology"))

        science = await posts.find_all(
            sort=PostSortOrder.NEW, community=CommunityName("science"), limit=2, offset=1
        )

        assert [p.title for p in science] == ["s1", "s0"]

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive(self, integration_env, author):
        posts = await integration_env.get(PostRepository)
        await posts.save(make_post(author, "CRISPR screening results"))
        await posts.save(make_post(author, "Unrelated"))

        results = await posts.search("crispr")

        assert [p.title for p in results] == ["CRISPR screening results"]

    @pytest.mark.asyncio
    async def test_counters(self, integration_env, author):
        posts = await integration_env.get(PostRepository)
        post = await posts.save(make_post(author))

        await posts.set_vote_score(post.id, 7)
        await posts.increment_comment_count(post.id)
        await posts.increment_comment_count(post.id)

        saved = await posts.find_by_id(post.id)
        assert (saved.vote_score, saved.comment_count) == (7, 2)
        by_author = await posts.find_by_author_handle(Handle("author"))
        assert [p.id for p in by_author] == [post.id]


class TestCommentRepositoryIntegration:
    """Integration tests for PostgresCommentRepository."""

    @pytest.mark.asyncio
    async def test_find_by_post_skips_deleted(self, integration_env, author):
        posts = await integration_env.get(PostRepository)
        comments = await integration_env.get(CommentRepository)
        post = await posts.save(make_post(author))
        root = await comments.save(make_comment(post.id, author, created_at=at(1)))
        reply = await comments.save(
            make_comment(post.id, author, parent_id=root.id, created_at=at(2))
        )
        await comments.save(make_comment(post.id, author, created_at=at(3), deleted=True))

        visible = await comments.find_by_post(post.id)
        everything = await comments.find_by_post(post.id, include_deleted=True)

        assert [c.id for c in visible] == [root.id, reply.id]
        assert visible[1].parent_id == root.id
        assert len(everything) == 3
