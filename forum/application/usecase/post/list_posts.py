"""List posts use case."""

import logfire
from pydantic import BaseModel, Field

from forum.domain.model import Post
from forum.domain.service import PostService, VoteLedger
from forum.domain.value import CommunityName, PostSortOrder, VotableType, Viewer

from .common import PostItem


class ListPostsRequest(BaseModel):
    """List posts request."""

    sort: PostSortOrder = PostSortOrder.HOT
    community: CommunityName | None = None
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    viewer: Viewer | None = None


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostItem]
    limit: int
    offset: int


async def with_user_votes(
    vote_ledger: VoteLedger, posts: list[Post], viewer: Viewer | None
) -> list[PostItem]:
    """Attach the viewer's vote to each post with one batch lookup."""
    votes = await vote_ledger.get_user_votes(
        viewer.user_id if viewer else None,
        VotableType.POST,
        [post.id for post in posts],
    )
    return [PostItem.from_post(post, votes.get(post.id)) for post in posts]


class ListPostsUseCase:
    """Use case for listing posts with sorting, filtering and pagination."""

    def __init__(self, post_service: PostService, vote_ledger: VoteLedger) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            vote_ledger: Vote ledger (viewer's votes)
        """
        self.post_service = post_service
        self.vote_ledger = vote_ledger

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Args:
            request: List posts request with filters and pagination

        Returns:
            Page of posts with the viewer's votes
        """
        with logfire.span(
            "list_posts.execute",
            sort=request.sort.value,
            community=request.community.root if request.community else None,
            limit=request.limit,
            offset=request.offset,
        ):
            posts = await self.post_service.list_posts(
                sort=request.sort,
                community=request.community,
                limit=request.limit,
                offset=request.offset,
            )
            items = await with_user_votes(self.vote_ledger, posts, request.viewer)
            return ListPostsResponse(
                posts=items, limit=request.limit, offset=request.offset
            )
