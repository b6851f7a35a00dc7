"""In-memory post repository for testing."""

from typing import Optional

from forum.domain.model.post import Post
from forum.domain.repository.post import PostRepository
from forum.domain.value import CommunityName, Handle, PostId, PostSortOrder


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_all(
        self,
        sort: PostSortOrder = PostSortOrder.HOT,
        community: Optional[CommunityName] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts with filtering and pagination."""
        posts = [p for p in self._posts.values() if p.deleted_at is None]

        if community is not None:
            posts = [p for p in posts if p.community == community]

        if sort == PostSortOrder.NEW:
            posts.sort(key=lambda p: (p.created_at, str(p.id)), reverse=True)
        else:
            posts.sort(
                key=lambda p: (p.vote_score, p.created_at, str(p.id)), reverse=True
            )

        return posts[offset : offset + limit]

    async def find_by_author_handle(
        self, handle: Handle, limit: int = 20, offset: int = 0
    ) -> list[Post]:
        """Find posts by author handle, newest first."""
        posts = [
            p
            for p in self._posts.values()
            if p.author_handle == handle and p.deleted_at is None
        ]
        posts.sort(key=lambda p: p.created_at, reverse=True)
        return posts[offset : offset + limit]

    async def search(self, query: str, limit: int = 20) -> list[Post]:
        """Case-insensitive substring search over title and content."""
        needle = query.lower()
        posts = [
            p
            for p in self._posts.values()
            if p.deleted_at is None
            and (needle in p.title.lower() or needle in p.content.lower())
        ]
        posts.sort(key=lambda p: p.created_at, reverse=True)
        return posts[:limit]

    async def save(self, post: Post) -> Post:
        """Save a post."""
        self._posts[post.id] = post
        return post

    async def set_vote_score(self, post_id: PostId, score: int) -> None:
        """Overwrite the cached vote score."""
        post = self._posts.get(post_id)
        if post:
            self._posts[post_id] = post.model_copy(update={"vote_score": score})

    async def increment_comment_count(self, post_id: PostId) -> None:
        """Increment the comment count by 1."""
        post = self._posts.get(post_id)
        if post:
            self._posts[post_id] = post.model_copy(
                update={"comment_count": post.comment_count + 1}
            )
