"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional, Sequence
from uuid import UUID

import logfire
from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.error import ConflictingWriteError
from forum.domain.model import Vote
from forum.domain.repository import VoteRepository, VoteTally
from forum.domain.value import UserId, VotableType, VoteDirection
from forum.persistence.mappers import row_to_vote, vote_to_dict
from forum.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository.

    The ``unique_vote`` constraint enforces one vote per user and item.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _match(self, user_id: UserId, votable_type: VotableType, votable_id: UUID):
        return and_(
            votes_table.c.user_id == user_id,
            votes_table.c.votable_type == votable_type.value,
            votes_table.c.votable_id == votable_id,
        )

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item."""
        stmt = select(votes_table).where(
            self._match(user_id, votable_type, votable_id)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id.in_(votable_ids),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def insert(self, vote: Vote) -> Vote:
        """Insert a vote.

        Runs inside a savepoint so a duplicate leaves the request's
        transaction usable for the retry.
        """
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            logfire.warn(
                "Duplicate vote insert",
                user_id=str(vote.user_id),
                votable_id=str(vote.votable_id),
            )
            raise ConflictingWriteError() from e
        return vote

    async def update_direction(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
        expected: VoteDirection,
        direction: VoteDirection,
    ) -> Vote:
        """Flip a vote while it still has the expected direction."""
        stmt = (
            update(votes_table)
            .where(self._match(user_id, votable_type, votable_id))
            .where(votes_table.c.direction == expected.value)
            .values(direction=direction.value)
            .returning(votes_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            raise ConflictingWriteError()
        await self.session.flush()
        return row_to_vote(row._asdict())

    async def delete(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
        expected: VoteDirection,
    ) -> None:
        """Delete a vote while it still has the expected direction."""
        stmt = (
            delete(votes_table)
            .where(self._match(user_id, votable_type, votable_id))
            .where(votes_table.c.direction == expected.value)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise ConflictingWriteError()
        await self.session.flush()

    async def tally(self, votable_type: VotableType, votable_id: UUID) -> VoteTally:
        """Count up and down votes on an item."""
        stmt = (
            select(votes_table.c.direction, func.count())
            .where(
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id == votable_id,
            )
            .group_by(votes_table.c.direction)
        )
        result = await self.session.execute(stmt)
        counts = {direction: count for direction, count in result.fetchall()}
        return VoteTally(
            up=counts.get(VoteDirection.UP.value, 0),
            down=counts.get(VoteDirection.DOWN.value, 0),
        )
