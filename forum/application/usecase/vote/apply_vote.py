"""Apply vote use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import VoteLedger
from forum.domain.value import VotableType, VoteDirection, VoteTransition, Viewer


class ApplyVoteRequest(BaseModel):
    """Apply vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    direction: VoteDirection
    viewer: Viewer | None = None  # None when not signed in


class ApplyVoteResponse(BaseModel):
    """Apply vote response."""

    votable_type: VotableType
    votable_id: str
    transition: VoteTransition
    user_vote: VoteDirection | None  # Viewer's vote after the action
    vote_score: int


class ApplyVoteUseCase:
    """Use case for voting up or down on a post or comment.

    Clicking the same direction twice retracts the vote; clicking the
    opposite direction flips it.
    """

    def __init__(self, vote_ledger: VoteLedger) -> None:
        """Initialize apply vote use case.

        Args:
            vote_ledger: Vote ledger domain service
        """
        self.vote_ledger = vote_ledger

    async def execute(self, request: ApplyVoteRequest) -> ApplyVoteResponse:
        """Execute vote flow.

        Args:
            request: Apply vote request

        Returns:
            Transition, the viewer's resulting vote and the confirmed score

        Raises:
            UnauthenticatedError: If no viewer is signed in
            SubjectNotFoundError: If the item does not exist
            StoreUnavailableError: If the store kept failing
            ConflictingWriteError: If the vote lost a race twice
        """
        outcome = await self.vote_ledger.apply_vote(
            voter_id=request.viewer.user_id if request.viewer else None,
            votable_type=request.votable_type,
            subject_id=UUID(request.votable_id),
            direction=request.direction,
        )
        return ApplyVoteResponse(
            votable_type=request.votable_type,
            votable_id=request.votable_id,
            transition=outcome.transition,
            user_vote=outcome.current,
            vote_score=outcome.new_score,
        )
