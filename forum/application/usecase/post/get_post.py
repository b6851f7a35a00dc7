"""Get post use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.error import NotFoundError
from forum.domain.service import PostService, VoteLedger
from forum.domain.value import PostId, VotableType, Viewer

from .common import PostItem


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string
    viewer: Viewer | None = None


class GetPostUseCase:
    """Use case for retrieving a single post with the viewer's vote."""

    def __init__(self, post_service: PostService, vote_ledger: VoteLedger) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            vote_ledger: Vote ledger (viewer's vote lookup)
        """
        self.post_service = post_service
        self.vote_ledger = vote_ledger

    async def execute(self, request: GetPostRequest) -> PostItem:
        """Execute get post flow.

        Raises:
            NotFoundError: If the post does not exist or was deleted
        """
        post_id = PostId(UUID(request.post_id))
        post = await self.post_service.get_post_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", request.post_id)

        votes = await self.vote_ledger.get_user_votes(
            request.viewer.user_id if request.viewer else None,
            VotableType.POST,
            [post.id],
        )
        return PostItem.from_post(post, votes.get(post.id))
