"""Post domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from forum.domain.error import NotFoundError
from forum.domain.model.post import Post
from forum.domain.repository import CommunityRepository, PostRepository
from forum.domain.value import CommunityName, Handle, PostId, PostSortOrder, UserId

from .base import Service
from .store import StoreCalls


class PostService(Service):
    """Domain service for post operations."""

    def __init__(
        self,
        post_repository: PostRepository,
        community_repository: CommunityRepository,
        store: StoreCalls,
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            community_repository: Community repository (submission target lookup)
            store: Guarded store access
        """
        self.post_repository = post_repository
        self.community_repository = community_repository
        self.store = store

    async def create_post(
        self,
        community: CommunityName,
        author_id: UserId,
        author_handle: Handle,
        title: str,
        content: str = "",
    ) -> Post:
        """Submit a new post to a community.

        Args:
            community: Target community name
            author_id: Author user ID
            author_handle: Author handle
            title: Post title
            content: Post body

        Returns:
            Created post

        Raises:
            NotFoundError: If the community does not exist
        """
        with logfire.span(
            "post_service.create_post",
            community=community.root,
            author_id=str(author_id),
            title=title,
        ):
            target = await self.store(
                "find_community",
                lambda: self.community_repository.find_by_name(community),
            )
            if not target:
                logfire.warn("Post to unknown community", community=community.root)
                raise NotFoundError("Community", community.root)

            post = Post(
                id=PostId(uuid4()),
                community=target.name,
                author_id=author_id,
                author_handle=author_handle,
                title=title,
                content=content,
                created_at=datetime.now(),
            )
            saved = await self.store(
                "save_post", lambda: self.post_repository.save(post), retry=False
            )
            logfire.info(
                "Post created",
                post_id=str(saved.id),
                community=saved.community.root,
                author_handle=author_handle.root,
            )
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found and not deleted, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.store(
                "find_post", lambda: self.post_repository.find_by_id(post_id)
            )

            if post and not post.is_deleted:
                logfire.info("Post found", post_id=str(post_id), title=post.title)
                return post

            logfire.warn("Post not found", post_id=str(post_id))
            return None

    async def list_posts(
        self,
        sort: PostSortOrder = PostSortOrder.HOT,
        community: CommunityName | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Post]:
        """List posts.

        HOT ranks by score with recency as tiebreaker; there is no time decay.

        Args:
            sort: Sort order
            community: Restrict to one community
            limit: Page size
            offset: Page offset

        Returns:
            Posts in the requested order
        """
        with logfire.span(
            "post_service.list_posts",
            sort=sort.value,
            community=community.root if community else None,
            limit=limit,
            offset=offset,
        ):
            posts = await self.store(
                "list_posts",
                lambda: self.post_repository.find_all(
                    sort=sort, community=community, limit=limit, offset=offset
                ),
            )
            logfire.info("Posts listed", count=len(posts))
            return posts

    async def list_posts_by_author(
        self, handle: Handle, limit: int = 20, offset: int = 0
    ) -> list[Post]:
        """List a user's posts, newest first."""
        with logfire.span("post_service.list_posts_by_author", handle=handle.root):
            posts = await self.store(
                "list_author_posts",
                lambda: self.post_repository.find_by_author_handle(
                    handle, limit=limit, offset=offset
                ),
            )
            logfire.info("Author posts listed", handle=handle.root, count=len(posts))
            return posts

    async def search_posts(self, query: str, limit: int = 20) -> list[Post]:
        """Search titles and bodies.

        Args:
            query: Search text; blank queries match nothing
            limit: Maximum number of results

        Returns:
            Matching posts, newest first
        """
        query = query.strip()
        with logfire.span("post_service.search_posts", query=query, limit=limit):
            if not query:
                return []
            posts = await self.store(
                "search_posts", lambda: self.post_repository.search(query, limit=limit)
            )
            logfire.info("Posts searched", query=query, count=len(posts))
            return posts

    async def increment_comment_count(self, post_id: PostId) -> None:
        """Atomically increment a post's comment count.

        Args:
            post_id: Post ID
        """
        with logfire.span(
            "post_service.increment_comment_count", post_id=str(post_id)
        ):
            await self.store(
                "increment_comment_count",
                lambda: self.post_repository.increment_comment_count(post_id),
                retry=False,
            )
            logfire.info("Comment count incremented", post_id=str(post_id))
