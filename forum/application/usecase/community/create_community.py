"""Create community use case."""

from pydantic import BaseModel, Field

from forum.domain.error import UnauthenticatedError
from forum.domain.service import CommunityService, UserService
from forum.domain.value import CommunityName, CommunityVisibility, Viewer

from .list_communities import CommunityItem


class CreateCommunityRequest(BaseModel):
    """Create community request."""

    name: CommunityName
    description: str = Field(default="", max_length=500)
    visibility: CommunityVisibility = CommunityVisibility.PUBLIC
    viewer: Viewer | None = None


class CreateCommunityUseCase:
    """Use case for creating a community."""

    def __init__(
        self, community_service: CommunityService, user_service: UserService
    ) -> None:
        """Initialize create community use case.

        Args:
            community_service: Community domain service
            user_service: User domain service
        """
        self.community_service = community_service
        self.user_service = user_service

    async def execute(self, request: CreateCommunityRequest) -> CommunityItem:
        """Execute create community flow.

        Raises:
            UnauthenticatedError: If no viewer is signed in
            ConflictingWriteError: If the name is already taken
        """
        if request.viewer is None:
            raise UnauthenticatedError("create a community")

        creator = await self.user_service.ensure_profile(request.viewer)
        community = await self.community_service.create_community(
            name=request.name,
            created_by=creator.id,
            description=request.description,
            visibility=request.visibility,
        )
        return CommunityItem.from_community(community)
