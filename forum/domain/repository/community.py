"""Community repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from forum.domain.model.community import Community
from forum.domain.value import CommunityName


class CommunityRepository(ABC):
    """Repository for Community entity."""

    @abstractmethod
    async def find_all(self) -> List[Community]:
        """List all communities, newest first."""
        pass

    @abstractmethod
    async def find_by_name(self, name: CommunityName) -> Optional[Community]:
        """Find a community by name (case-insensitive)."""
        pass

    @abstractmethod
    async def save(self, community: Community) -> Community:
        """Save a community.

        Raises:
            ConflictingWriteError: If the name is already taken
        """
        pass
