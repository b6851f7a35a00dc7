"""List communities use case."""

from datetime import datetime

from pydantic import BaseModel

from forum.domain.model import Community
from forum.domain.service import CommunityService
from forum.domain.value import CommunityVisibility


class CommunityItem(BaseModel):
    """Community as returned to clients."""

    community_id: str
    name: str
    description: str
    visibility: CommunityVisibility
    created_by: str
    created_at: datetime

    @classmethod
    def from_community(cls, community: Community) -> "CommunityItem":
        return cls(
            community_id=str(community.id),
            name=community.name.root,
            description=community.description,
            visibility=community.visibility,
            created_by=str(community.created_by),
            created_at=community.created_at,
        )


class ListCommunitiesResponse(BaseModel):
    """List communities response."""

    communities: list[CommunityItem]


class ListCommunitiesUseCase:
    """Use case for listing communities, newest first."""

    def __init__(self, community_service: CommunityService) -> None:
        """Initialize list communities use case.

        Args:
            community_service: Community domain service
        """
        self.community_service = community_service

    async def execute(self) -> ListCommunitiesResponse:
        """Execute list communities flow."""
        communities = await self.community_service.list_communities()
        return ListCommunitiesResponse(
            communities=[CommunityItem.from_community(c) for c in communities]
        )
