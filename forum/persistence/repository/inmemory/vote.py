"""In-memory vote repository for testing."""

from typing import Optional, Sequence
from uuid import UUID

from forum.domain.error import ConflictingWriteError
from forum.domain.model.vote import Vote
from forum.domain.repository.vote import VoteRepository, VoteTally
from forum.domain.value import UserId, VotableType, VoteDirection

VoteKey = tuple[UUID, VotableType, UUID]


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing.

    Votes are keyed by (user, type, item), mirroring the unique constraint.
    """

    def __init__(self) -> None:
        self._votes: dict[VoteKey, Vote] = {}

    @staticmethod
    def _key(user_id: UserId, votable_type: VotableType, votable_id: UUID) -> VoteKey:
        return (UUID(str(user_id)), votable_type, UUID(str(votable_id)))

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a vote by user and votable item."""
        return self._votes.get(self._key(user_id, votable_type, votable_id))

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> list[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        keys = [self._key(user_id, votable_type, vid) for vid in votable_ids]
        return [self._votes[key] for key in keys if key in self._votes]

    async def insert(self, vote: Vote) -> Vote:
        """Insert a vote.

        Raises:
            ConflictingWriteError: If vote already exists (duplicate)
        """
        key = self._key(vote.user_id, vote.votable_type, vote.votable_id)
        if key in self._votes:
            raise ConflictingWriteError()
        self._votes[key] = vote
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
        key = self._key(user_id, votable_type, votable_id)
        vote = self._votes.get(key)
        if vote is None or vote.direction != expected:
            raise ConflictingWriteError()
        updated = vote.model_copy(update={"direction": direction})
        self._votes[key] = updated
        return updated

    async def delete(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
        expected: VoteDirection,
    ) -> None:
        """Delete a vote while it still has the expected direction."""
        key = self._key(user_id, votable_type, votable_id)
        vote = self._votes.get(key)
        if vote is None or vote.direction != expected:
            raise ConflictingWriteError()
        del self._votes[key]

    async def tally(self, votable_type: VotableType, votable_id: UUID) -> VoteTally:
        """Count up and down votes on an item."""
        target = UUID(str(votable_id))
        up = down = 0
        for (_, vtype, vid), vote in self._votes.items():
            if vtype != votable_type or vid != target:
                continue
            if vote.direction == VoteDirection.UP:
                up += 1
            else:
                down += 1
        return VoteTally(up=up, down=down)
