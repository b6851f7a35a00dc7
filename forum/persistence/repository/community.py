"""PostgreSQL implementation of Community repository."""

from typing import List, Optional

from sqlalchemy import desc, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.error import ConflictingWriteError
from forum.domain.model import Community
from forum.domain.repository import CommunityRepository
from forum.domain.value import CommunityName
from forum.persistence.mappers import community_to_dict, row_to_community
from forum.persistence.tables import communities_table


class PostgresCommunityRepository(CommunityRepository):
    """PostgreSQL implementation of CommunityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_all(self) -> List[Community]:
        """List all communities, newest first."""
        stmt = select(communities_table).order_by(desc(communities_table.c.created_at))
        result = await self.session.execute(stmt)
        return [row_to_community(row._asdict()) for row in result.fetchall()]

    async def find_by_name(self, name: CommunityName) -> Optional[Community]:
        """Find a community by name (case-insensitive)."""
        stmt = select(communities_table).where(
            func.lower(communities_table.c.name) == name.root.lower()
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_community(row._asdict()) if row else None

    async def save(self, community: Community) -> Community:
        """Insert a community."""
        stmt = communities_table.insert().values(**community_to_dict(community))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise ConflictingWriteError(
                f"Community name already taken: {community.name.root}"
            ) from e
        return community
