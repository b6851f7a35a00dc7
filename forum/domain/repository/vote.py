"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, NamedTuple, Optional, Sequence
from uuid import UUID

from forum.domain.model.vote import Vote
from forum.domain.value import UserId, VotableType, VoteDirection


class VoteTally(NamedTuple):
    """Authoritative vote counts for one item."""

    up: int
    down: int

    @property
    def score(self) -> int:
        return self.up - self.down


class VoteRepository(ABC):
    """Repository for Vote entity.

    Implementations must enforce one vote per (user, votable_type,
    votable_id) and report a violated precondition by raising
    ``ConflictingWriteError``.
    """

    @abstractmethod
    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item.

        Args:
            user_id: The user's ID
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query).

        Args:
            user_id: The user's ID
            votable_type: Type of items (post or comment)
            votable_ids: Item IDs to check

        Returns:
            Votes by the user on the specified items
        """
        pass

    @abstractmethod
    async def insert(self, vote: Vote) -> Vote:
        """Insert a new vote.

        Raises:
            ConflictingWriteError: If a vote already exists for this
                user/votable combination
        """
        pass

    @abstractmethod
    async def update_direction(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
        expected: VoteDirection,
        direction: VoteDirection,
    ) -> Vote:
        """Flip an existing vote in place.

        The update only applies while the stored direction still equals
        ``expected``.

        Raises:
            ConflictingWriteError: If no vote with the expected direction
                exists any more
        """
        pass

    @abstractmethod
    async def delete(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
        expected: VoteDirection,
    ) -> None:
        """Delete a user's vote on an item.

        Raises:
            ConflictingWriteError: If no vote with the expected direction
                exists any more
        """
        pass

    @abstractmethod
    async def tally(self, votable_type: VotableType, votable_id: UUID) -> VoteTally:
        """Count up and down votes on an item.

        Args:
            votable_type: Type of item (post or comment)
            votable_id: ID of the item

        Returns:
            Up and down counts
        """
        pass
