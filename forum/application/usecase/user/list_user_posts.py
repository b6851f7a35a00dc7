"""List user posts use case."""

from pydantic import BaseModel, Field

from forum.application.usecase.post.common import PostItem
from forum.application.usecase.post.list_posts import with_user_votes
from forum.domain.error import NotFoundError
from forum.domain.service import PostService, UserService, VoteLedger
from forum.domain.value import Handle, Viewer


class ListUserPostsRequest(BaseModel):
    """List user posts request."""

    handle: Handle
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    viewer: Viewer | None = None


class ListUserPostsResponse(BaseModel):
    """List user posts response."""

    handle: str
    posts: list[PostItem]


class ListUserPostsUseCase:
    """Use case for the posts tab of a profile page, newest first."""

    def __init__(
        self,
        user_service: UserService,
        post_service: PostService,
        vote_ledger: VoteLedger,
    ) -> None:
        """Initialize list user posts use case.

        Args:
            user_service: User domain service
            post_service: Post domain service
            vote_ledger: Vote ledger (viewer's votes)
        """
        self.user_service = user_service
        self.post_service = post_service
        self.vote_ledger = vote_ledger

    async def execute(self, request: ListUserPostsRequest) -> ListUserPostsResponse:
        """Execute list user posts flow.

        Raises:
            NotFoundError: If no user has this handle
        """
        user = await self.user_service.get_user_by_handle(request.handle)
        if not user:
            raise NotFoundError("User", request.handle.root)

        posts = await self.post_service.list_posts_by_author(
            user.handle, limit=request.limit, offset=request.offset
        )
        items = await with_user_votes(self.vote_ledger, posts, request.viewer)
        return ListUserPostsResponse(handle=user.handle.root, posts=items)
