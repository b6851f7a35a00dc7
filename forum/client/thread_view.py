"""Post page view model.

Holds a post, its comment thread and the viewer's votes. Votes are shown
optimistically and then replaced by the server-confirmed score. Votes on
one item are sent one at a time, in click order, so the server sees the
same sequence the viewer made. Responses that arrive after a newer
request, or after the view was closed, are dropped.
"""

import asyncio
from uuid import UUID

import logfire

from forum.application.usecase.comment import CommentItem
from forum.application.usecase.post import PostItem
from forum.application.usecase.vote import ApplyVoteResponse
from forum.domain.error import (
    DomainError,
    NotFoundError,
    SubjectNotFoundError,
    UnauthenticatedError,
)
from forum.domain.service import preview_score
from forum.domain.value import CommentOrder, VotableType, VoteDirection
from forum.util.concurrency import KeyedLock

from .api import ForumClient
from .generation import Generation

VotableItem = PostItem | CommentItem
ItemKey = tuple[VotableType, str]


class ThreadView:
    """State of one open post page."""

    def __init__(
        self,
        client: ForumClient,
        post_id: UUID | str,
        order: CommentOrder | None = None,
        max_depth: int | None = None,
    ) -> None:
        """Initialize thread view.

        Args:
            client: Forum API client
            post_id: Post shown by this view
            order: Sibling order of the thread (server default if None)
            max_depth: Cut the thread below this depth
        """
        self.client = client
        self.post_id = str(post_id)
        self.order = order
        self.max_depth = max_depth

        self.post: PostItem | None = None
        self.comments: list[CommentItem] = []
        self.total_comments = 0
        self.error: DomainError | None = None
        self.login_required = False

        self._loads = Generation()
        self._votes: dict[ItemKey, Generation] = {}
        self._vote_locks: KeyedLock[ItemKey] = KeyedLock()
        # Last server-confirmed (score, user_vote) of items with votes pending
        self._confirmed: dict[ItemKey, tuple[int, VoteDirection | None]] = {}

    @property
    def closed(self) -> bool:
        return self._loads.closed

    def close(self) -> None:
        """Stop applying responses; requests in flight finish unobserved."""
        self._loads.close()
        for generation in self._votes.values():
            generation.close()
        logfire.debug("Thread view closed", post_id=self.post_id)

    async def load(self) -> bool:
        """Fetch the post and its thread.

        Returns:
            True if the response was applied, False if it failed or was stale
        """
        if self.closed:
            return False
        token = self._loads.next()
        try:
            post, tree = await asyncio.gather(
                self.client.get_post(self.post_id),
                self.client.get_comment_tree(
                    self.post_id, order=self.order, max_depth=self.max_depth
                ),
            )
        except DomainError as e:
            if self._loads.is_current(token):
                if isinstance(e, NotFoundError):
                    self._clear()
                self._fail(e)
            return False

        if not self._loads.is_current(token):
            logfire.debug(
                "Dropped stale thread response", post_id=self.post_id, generation=token
            )
            return False

        self.post = post
        self.comments = tree.comments
        self.total_comments = tree.total
        self.error = None
        return True

    async def vote(
        self, votable_type: VotableType, votable_id: UUID | str, direction: VoteDirection
    ) -> ApplyVoteResponse | None:
        """Vote on the post or one of its comments.

        The score changes immediately. The request waits for earlier votes
        on the same item to finish, and the newest confirmation replaces the
        preview. If the newest vote fails, the item returns to the last
        state the server confirmed and the error is recorded on ``error``.

        Returns:
            Server confirmation, or None if the vote failed, the view was
            closed or a newer vote on the same item superseded it
        """
        if self.closed:
            return None
        key: ItemKey = (votable_type, str(votable_id))
        item = self._find(*key)
        if item is None:
            self._fail(SubjectNotFoundError(votable_type.value, key[1]))
            return None

        generation = self._votes.setdefault(key, Generation())
        token = generation.next()
        self._confirmed.setdefault(key, (item.vote_score, item.user_vote))
        item.vote_score = preview_score(item.vote_score, item.user_vote, direction)
        item.user_vote = None if item.user_vote == direction else direction

        async with self._vote_locks.hold(key):
            if self.closed:
                return None
            try:
                response = await self.client.vote(votable_type, key[1], direction)
            except DomainError as e:
                if generation.is_current(token):
                    self._settle_failed_vote(key, item, e)
                return None

        if not generation.is_current(token):
            # A newer click on this item is queued behind us
            self._confirmed[key] = (response.vote_score, response.user_vote)
            logfire.debug(
                "Dropped superseded vote confirmation",
                votable_type=votable_type.value,
                votable_id=key[1],
            )
            return None

        self._confirmed.pop(key, None)
        # A reload may have replaced the item while the vote was in flight
        current = self._find(*key)
        if current is not None:
            current.vote_score = response.vote_score
            current.user_vote = response.user_vote
        return response

    def _settle_failed_vote(
        self, key: ItemKey, item: VotableItem, error: DomainError
    ) -> None:
        confirmed = self._confirmed.pop(key, None)
        if confirmed is not None and self._find(*key) is item:
            item.vote_score, item.user_vote = confirmed
        if isinstance(error, SubjectNotFoundError):
            self._forget(*key)
        self._fail(error)

    async def reply(
        self, content: str, parent_id: UUID | str | None = None
    ) -> bool:
        """Post a comment or reply, then reload the thread.

        Returns:
            True if the comment was created
        """
        if self.closed:
            return False
        try:
            await self.client.create_comment(self.post_id, content, parent_id=parent_id)
        except DomainError as e:
            if not self.closed:
                self._fail(e)
            return False
        await self.load()
        return True

    def _find(self, votable_type: VotableType, votable_id: str) -> VotableItem | None:
        if votable_type == VotableType.POST:
            if self.post is not None and self.post.post_id == votable_id:
                return self.post
            return None

        stack = list(self.comments)
        while stack:
            item = stack.pop()
            if item.comment_id == votable_id:
                return item
            stack.extend(item.replies)
        return None

    def _forget(self, votable_type: VotableType, votable_id: str) -> None:
        """Drop a subject the server no longer has."""
        if votable_type == VotableType.POST:
            self._clear()
            return

        def prune(items: list[CommentItem]) -> list[CommentItem]:
            kept = [item for item in items if item.comment_id != votable_id]
            for item in kept:
                item.replies = prune(item.replies)
            return kept

        self.comments = prune(self.comments)

    def _clear(self) -> None:
        self.post = None
        self.comments = []
        self.total_comments = 0

    def _fail(self, error: DomainError) -> None:
        if isinstance(error, UnauthenticatedError):
            self.login_required = True
        self.error = error
        logfire.warn("Thread view request failed", post_id=self.post_id, error=str(error))
