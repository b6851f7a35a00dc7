"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from forum.domain.error import NotFoundError, ValidationError
from forum.domain.repository import CommentRepository, PostRepository, UserRepository
from forum.domain.service import CommentService, count_nodes
from forum.domain.value import CommentId, CommentOrder
from tests.conftest import at, make_comment, make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _seed(unit_env):
    user_repo = await unit_env.get(UserRepository)
    post_repo = await unit_env.get(PostRepository)
    author = await user_repo.save(make_user("author"))
    post = await post_repo.save(make_post(author))
    return author, post


class TestCreateComment:
    """Tests for create_comment."""

    @pytest.mark.asyncio
    async def test_create_top_level_comment(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        author, post = await _seed(unit_env)

        comment = await comment_service.create_comment(
            post_id=post.id,
            author_id=author.id,
            author_handle=author.handle,
            content="Nice result",
        )

        assert comment.parent_id is None
        assert await comment_service.get_comment_by_id(comment.id) == comment

    @pytest.mark.asyncio
    async def test_reply_to_existing_comment(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        author, post = await _seed(unit_env)
        parent = await comment_service.create_comment(
            post.id, author.id, author.handle, "Parent"
        )

        reply = await comment_service.create_comment(
            post.id, author.id, author.handle, "Reply", parent_id=parent.id
        )

        assert reply.parent_id == parent.id

    @pytest.mark.asyncio
    async def test_reply_to_missing_parent_fails(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        author, post = await _seed(unit_env)

        with pytest.raises(NotFoundError):
            await comment_service.create_comment(
                post.id,
                author.id,
                author.handle,
                "Reply",
                parent_id=CommentId(uuid4()),
            )

    @pytest.mark.asyncio
    async def test_reply_across_posts_fails(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        author, post = await _seed(unit_env)
        other_post = await post_repo.save(make_post(author, title="Other"))
        parent = await comment_service.create_comment(
            other_post.id, author.id, author.handle, "Elsewhere"
        )

        with pytest.raises(ValidationError):
            await comment_service.create_comment(
                post.id, author.id, author.handle, "Reply", parent_id=parent.id
            )


class TestCommentTree:
    """Tests for get_comment_tree."""

    @pytest.mark.asyncio
    async def test_tree_excludes_deleted_and_keeps_orphans(self, unit_env):
        """Replies to a deleted comment surface as roots."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        _, post = await _seed(unit_env)
        deleted = await comment_repo.save(
            make_comment(post.id, created_at=at(1), deleted=True)
        )
        orphan = await comment_repo.save(
            make_comment(post.id, parent_id=deleted.id, created_at=at(2))
        )
        root = await comment_repo.save(make_comment(post.id, created_at=at(3)))

        forest = await comment_service.get_comment_tree(
            post.id, order=CommentOrder.NEWEST_FIRST
        )

        assert [node.id for node in forest] == [root.id, orphan.id]
        assert count_nodes(forest) == 2
