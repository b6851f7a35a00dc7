"""Create post use case."""

import logfire
from pydantic import BaseModel

from forum.domain.error import UnauthenticatedError
from forum.domain.service import PostService, UserService
from forum.domain.value import CommunityName, Viewer

from .common import PostItem


class CreatePostRequest(BaseModel):
    """Create post request."""

    community: CommunityName
    title: str
    content: str = ""
    viewer: Viewer | None = None


class CreatePostUseCase:
    """Use case for submitting a post to a community."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: CreatePostRequest) -> PostItem:
        """Execute create post flow.

        Args:
            request: Create post request

        Returns:
            Created post

        Raises:
            UnauthenticatedError: If no viewer is signed in
            NotFoundError: If the community does not exist
        """
        if request.viewer is None:
            raise UnauthenticatedError("create a post")

        with logfire.span(
            "create_post.execute",
            community=request.community.root,
            author=request.viewer.handle.root,
        ):
            author = await self.user_service.ensure_profile(request.viewer)
            post = await self.post_service.create_post(
                community=request.community,
                author_id=author.id,
                author_handle=author.handle,
                title=request.title,
                content=request.content,
            )
            return PostItem.from_post(post)
