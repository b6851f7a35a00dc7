"""Search posts use case."""

from pydantic import BaseModel, Field

from forum.domain.service import PostService, VoteLedger
from forum.domain.value import Viewer

from .common import PostItem
from .list_posts import with_user_votes


class SearchPostsRequest(BaseModel):
    """Search posts request."""

    query: str = Field(max_length=200)
    limit: int = Field(default=20, ge=1, le=100)
    viewer: Viewer | None = None


class SearchPostsResponse(BaseModel):
    """Search posts response."""

    query: str
    posts: list[PostItem]


class SearchPostsUseCase:
    """Use case for searching post titles and bodies."""

    def __init__(self, post_service: PostService, vote_ledger: VoteLedger) -> None:
        """Initialize search posts use case.

        Args:
            post_service: Post domain service
            vote_ledger: Vote ledger (viewer's votes)
        """
        self.post_service = post_service
        self.vote_ledger = vote_ledger

    async def execute(self, request: SearchPostsRequest) -> SearchPostsResponse:
        """Execute search flow. Results are newest first."""
        posts = await self.post_service.search_posts(request.query, limit=request.limit)
        items = await with_user_votes(self.vote_ledger, posts, request.viewer)
        return SearchPostsResponse(query=request.query, posts=items)
