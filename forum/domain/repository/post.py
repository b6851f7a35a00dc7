"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from forum.domain.model.post import Post
from forum.domain.value import CommunityName, Handle, PostId, PostSortOrder


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        sort: PostSortOrder = PostSortOrder.HOT,
        community: Optional[CommunityName] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Post]:
        """Find non-deleted posts with filtering and pagination.

        Args:
            sort: NEW orders by created_at descending; TOP and HOT order by
                vote_score descending with recency as tiebreaker
            community: Only posts in this community
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts
        """
        pass

    @abstractmethod
    async def find_by_author_handle(
        self, handle: Handle, limit: int = 20, offset: int = 0
    ) -> List[Post]:
        """Find non-deleted posts by author handle, newest first."""
        pass

    @abstractmethod
    async def search(self, query: str, limit: int = 20) -> List[Post]:
        """Case-insensitive substring search over title and content.

        Results are ordered newest first.
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def set_vote_score(self, post_id: PostId, score: int) -> None:
        """Overwrite the cached vote score with a recomputed value."""
        pass

    @abstractmethod
    async def increment_comment_count(self, post_id: PostId) -> None:
        """Atomically increment the post's comment count by one."""
        pass
