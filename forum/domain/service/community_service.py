"""Community domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from forum.domain.model.community import Community
from forum.domain.repository import CommunityRepository
from forum.domain.value import CommunityId, CommunityName, CommunityVisibility, UserId

from .base import Service
from .store import StoreCalls


class CommunityService(Service):
    """Domain service for community operations."""

    def __init__(
        self, community_repository: CommunityRepository, store: StoreCalls
    ) -> None:
        """Initialize community service.

        Args:
            community_repository: Community repository
            store: Guarded store access
        """
        self.community_repository = community_repository
        self.store = store

    async def list_communities(self) -> list[Community]:
        """List all communities, newest first."""
        with logfire.span("community_service.list_communities"):
            communities = await self.store(
                "list_communities", self.community_repository.find_all
            )
            logfire.info("Communities listed", count=len(communities))
            return communities

    async def get_by_name(self, name: CommunityName) -> Community | None:
        """Get a community by name (case-insensitive)."""
        with logfire.span("community_service.get_by_name", name=name.root):
            return await self.store(
                "find_community", lambda: self.community_repository.find_by_name(name)
            )

    async def create_community(
        self,
        name: CommunityName,
        created_by: UserId,
        description: str = "",
        visibility: CommunityVisibility = CommunityVisibility.PUBLIC,
    ) -> Community:
        """Create a community.

        Args:
            name: Unique community name
            created_by: Creator's user ID
            description: Short description
            visibility: Who can see the community

        Returns:
            Created community

        Raises:
            ConflictingWriteError: If the name is already taken
        """
        with logfire.span(
            "community_service.create_community",
            name=name.root,
            created_by=str(created_by),
        ):
            community = Community(
                id=CommunityId(uuid4()),
                name=name,
                description=description,
                visibility=visibility,
                created_by=created_by,
                created_at=datetime.now(),
            )
            saved = await self.store(
                "save_community",
                lambda: self.community_repository.save(community),
                retry=False,
            )
            logfire.info(
                "Community created", community_id=str(saved.id), name=name.root
            )
            return saved
