"""Vote ledger domain service.

Resolves a voter's up/down action on a post or comment into exactly one
persisted transition and refreshes the subject's cached score from the
authoritative tally.

    no vote        + up   -> INSERT  (score +1)
    up             + up   -> RETRACT (score -1)
    down           + up   -> FLIP    (score +2)

The read-decide-write sequence runs under a lock keyed by
(voter, votable_type, subject) so double clicks never interleave.
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID, uuid4

import logfire
from pydantic import BaseModel

from forum.config import VotingSettings
from forum.domain.error import (
    ConflictingWriteError,
    SubjectNotFoundError,
    UnauthenticatedError,
)
from forum.domain.model import Comment, Post, Vote
from forum.domain.repository import (
    CommentRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from forum.domain.value import (
    CommentId,
    PostId,
    UserId,
    VotableType,
    VoteDirection,
    VoteId,
    VoteTransition,
)
from forum.util.concurrency import KeyedLock

from .base import Service
from .store import StoreCalls

VoteKey = tuple[UserId, VotableType, UUID]


class VoteLocks(KeyedLock[VoteKey]):
    """Process-wide registry of per (voter, subject) vote locks."""

    pass


class VoteOutcome(BaseModel):
    """Result of applying a vote action."""

    transition: VoteTransition
    previous: VoteDirection | None
    current: VoteDirection | None  # None once the vote was retracted
    new_score: int


def resolve_transition(
    existing: VoteDirection | None, requested: VoteDirection
) -> VoteTransition:
    """Decide the transition for a vote action.

    Args:
        existing: Direction of the voter's current vote, None if no vote
        requested: Direction the voter clicked

    Returns:
        INSERT, RETRACT or FLIP
    """
    if existing is None:
        return VoteTransition.INSERT
    if existing == requested:
        return VoteTransition.RETRACT
    return VoteTransition.FLIP


def score_delta(existing: VoteDirection | None, requested: VoteDirection) -> int:
    """Change in score caused by a vote action from a single voter."""
    transition = resolve_transition(existing, requested)
    if transition == VoteTransition.INSERT:
        return requested.weight
    if transition == VoteTransition.RETRACT:
        return -requested.weight
    return 2 * requested.weight


def preview_score(
    current_score: int, existing: VoteDirection | None, requested: VoteDirection
) -> int:
    """Optimistic score for instant UI feedback.

    Only a preview: the confirmed score comes from ``VoteLedger.apply_vote``.
    """
    return current_score + score_delta(existing, requested)


class VoteLedger(Service):
    """Domain service that owns the one-vote-per-voter invariant."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
        store: StoreCalls,
        locks: VoteLocks,
        settings: VotingSettings,
    ) -> None:
        """Initialize vote ledger.

        Args:
            vote_repository: Vote repository
            post_repository: Post repository (subject lookup and score cache)
            comment_repository: Comment repository (subject lookup and score cache)
            user_repository: User repository (author karma)
            store: Guarded store access (timeouts, retries, error conversion)
            locks: Shared per-pair lock registry
            settings: Voting settings (conflict retry budget)
        """
        self.vote_repository = vote_repository
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.user_repository = user_repository
        self.store = store
        self.locks = locks
        self.settings = settings

    async def apply_vote(
        self,
        voter_id: UserId | None,
        votable_type: VotableType,
        subject_id: UUID,
        direction: VoteDirection,
    ) -> VoteOutcome:
        """Apply a vote action and return the resulting transition and score.

        Args:
            voter_id: Signed-in voter, None if unauthenticated
            votable_type: Post or comment
            subject_id: ID of the post or comment
            direction: Requested vote direction

        Returns:
            Outcome with the transition and the recomputed score

        Raises:
            UnauthenticatedError: If no voter is signed in
            SubjectNotFoundError: If the subject does not exist or was deleted
            StoreUnavailableError: If the store kept failing
            ConflictingWriteError: If the retry after a lost race lost again
        """
        if voter_id is None:
            logfire.info("Vote attempted without authentication")
            raise UnauthenticatedError("vote")

        subject_uuid = UUID(str(subject_id))
        key: VoteKey = (voter_id, votable_type, subject_uuid)

        with logfire.span(
            "vote_ledger.apply_vote",
            voter_id=str(voter_id),
            votable_type=votable_type.value,
            subject_id=str(subject_uuid),
            direction=direction.value,
        ):
            async with self.locks.hold(key):
                attempts = self.settings.conflict_retries + 1
                for attempt in range(1, attempts + 1):
                    try:
                        return await self._apply_once(
                            voter_id, votable_type, subject_uuid, direction
                        )
                    except ConflictingWriteError:
                        if attempt >= attempts:
                            logfire.warn(
                                "Vote write conflicted again, giving up",
                                voter_id=str(voter_id),
                                subject_id=str(subject_uuid),
                                attempts=attempt,
                            )
                            raise
                        logfire.info(
                            "Vote write conflicted, retrying",
                            voter_id=str(voter_id),
                            subject_id=str(subject_uuid),
                            attempt=attempt,
                        )
            raise AssertionError("unreachable")  # pragma: no cover

    async def _apply_once(
        self,
        voter_id: UserId,
        votable_type: VotableType,
        subject_id: UUID,
        direction: VoteDirection,
    ) -> VoteOutcome:
        """One read-decide-write pass."""
        subject = await self.store(
            "find_subject", lambda: self._find_subject(votable_type, subject_id)
        )
        if subject is None or subject.is_deleted:
            logfire.warn(
                "Vote on missing subject",
                votable_type=votable_type.value,
                subject_id=str(subject_id),
            )
            raise SubjectNotFoundError(votable_type.value.capitalize(), str(subject_id))

        existing = await self.store(
            "find_vote",
            lambda: self.vote_repository.find_by_user_and_votable(
                voter_id, votable_type, subject_id
            ),
        )
        previous = existing.direction if existing else None
        transition = resolve_transition(previous, direction)

        # Vote writes are not idempotent, so they are never retried here
        if transition == VoteTransition.INSERT:
            vote = Vote(
                id=VoteId(uuid4()),
                user_id=voter_id,
                votable_type=votable_type,
                votable_id=subject_id,
                direction=direction,
                created_at=datetime.now(),
            )
            await self.store(
                "insert_vote", lambda: self.vote_repository.insert(vote), retry=False
            )
            current: VoteDirection | None = direction
        elif transition == VoteTransition.RETRACT:
            assert previous is not None
            await self.store(
                "delete_vote",
                lambda: self.vote_repository.delete(
                    voter_id, votable_type, subject_id, expected=previous
                ),
                retry=False,
            )
            current = None
        else:
            assert previous is not None
            await self.store(
                "flip_vote",
                lambda: self.vote_repository.update_direction(
                    voter_id,
                    votable_type,
                    subject_id,
                    expected=previous,
                    direction=direction,
                ),
                retry=False,
            )
            current = direction

        new_score = await self._refresh_score(votable_type, subject_id)

        # Karma follows this voter's own contribution, not the tally
        karma_delta = score_delta(previous, direction)
        await self.store(
            "adjust_karma",
            lambda: self.user_repository.adjust_karma(subject.author_id, karma_delta),
            retry=False,
        )

        logfire.info(
            "Vote applied",
            voter_id=str(voter_id),
            votable_type=votable_type.value,
            subject_id=str(subject_id),
            transition=transition.value,
            new_score=new_score,
        )
        return VoteOutcome(
            transition=transition,
            previous=previous,
            current=current,
            new_score=new_score,
        )

    async def _refresh_score(self, votable_type: VotableType, subject_id: UUID) -> int:
        """Recompute the cached score from the vote tally and store it."""
        tally = await self.store(
            "tally", lambda: self.vote_repository.tally(votable_type, subject_id)
        )
        if votable_type == VotableType.POST:
            await self.store(
                "set_vote_score",
                lambda: self.post_repository.set_vote_score(
                    PostId(subject_id), tally.score
                ),
            )
        else:
            await self.store(
                "set_vote_score",
                lambda: self.comment_repository.set_vote_score(
                    CommentId(subject_id), tally.score
                ),
            )
        return tally.score

    async def _find_subject(
        self, votable_type: VotableType, subject_id: UUID
    ) -> Post | Comment | None:
        if votable_type == VotableType.POST:
            return await self.post_repository.find_by_id(PostId(subject_id))
        return await self.comment_repository.find_by_id(CommentId(subject_id))

    async def get_user_votes(
        self,
        voter_id: UserId | None,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> dict[UUID, VoteDirection | None]:
        """Look up the viewer's vote direction for several items.

        Args:
            voter_id: Viewer, None if unauthenticated
            votable_type: Type of the items
            votable_ids: Item IDs

        Returns:
            Mapping of item ID to the viewer's direction (None if no vote)
        """
        ids = [UUID(str(vid)) for vid in votable_ids]
        if voter_id is None or not ids:
            return {vid: None for vid in ids}

        votes = await self.store(
            "find_votes",
            lambda: self.vote_repository.find_by_user_and_votables(
                voter_id, votable_type, ids
            ),
        )
        by_id = {UUID(str(vote.votable_id)): vote.direction for vote in votes}
        return {vid: by_id.get(vid) for vid in ids}
