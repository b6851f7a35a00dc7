"""In-memory community repository for testing."""

from typing import Optional

from forum.domain.error import ConflictingWriteError
from forum.domain.model.community import Community
from forum.domain.repository.community import CommunityRepository
from forum.domain.value import CommunityName


class InMemoryCommunityRepository(CommunityRepository):
    """In-memory implementation of CommunityRepository for testing."""

    def __init__(self) -> None:
        # Keyed by lower-cased name
        self._communities: dict[str, Community] = {}

    async def find_all(self) -> list[Community]:
        """List all communities, newest first."""
        return sorted(
            self._communities.values(), key=lambda c: c.created_at, reverse=True
        )

    async def find_by_name(self, name: CommunityName) -> Optional[Community]:
        """Find a community by name (case-insensitive)."""
        return self._communities.get(name.root.lower())

    async def save(self, community: Community) -> Community:
        """Insert a community."""
        key = community.name.root.lower()
        if key in self._communities:
            raise ConflictingWriteError(
                f"Community name already taken: {community.name.root}"
            )
        self._communities[key] = community
        return community
