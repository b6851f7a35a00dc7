"""Get comment tree use case."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from forum.config import CommentSettings
from forum.domain.error import NotFoundError
from forum.domain.service import (
    CommentNode,
    CommentService,
    PostService,
    VoteLedger,
    count_nodes,
    walk,
)
from forum.domain.value import CommentOrder, PostId, VotableType, VoteDirection, Viewer


class CommentItem(BaseModel):
    """Comment with its replies, in display order."""

    comment_id: str
    post_id: str
    parent_id: str | None
    author_id: str
    author_handle: str
    content: str
    vote_score: int
    created_at: datetime
    depth: int
    user_vote: VoteDirection | None = None
    replies: list["CommentItem"] = Field(default_factory=list)
    hidden_replies: int = 0  # Replies cut off by max_depth


class GetCommentTreeRequest(BaseModel):
    """Get comment tree request."""

    post_id: str  # UUID string
    order: CommentOrder | None = None  # Configured default when None
    max_depth: int | None = Field(default=None, ge=0)
    viewer: Viewer | None = None


class GetCommentTreeResponse(BaseModel):
    """Get comment tree response."""

    post_id: str
    order: CommentOrder
    comments: list[CommentItem]
    total: int


class GetCommentTreeUseCase:
    """Use case for reading a post's comments as a threaded forest."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        vote_ledger: VoteLedger,
        settings: CommentSettings,
    ) -> None:
        """Initialize get comment tree use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
            vote_ledger: Vote ledger (viewer's votes)
            settings: Comment settings (default order)
        """
        self.comment_service = comment_service
        self.post_service = post_service
        self.vote_ledger = vote_ledger
        self.settings = settings

    async def execute(self, request: GetCommentTreeRequest) -> GetCommentTreeResponse:
        """Execute get comment tree flow.

        Orphans (replies to deleted comments) appear as top-level comments.

        Raises:
            NotFoundError: If the post does not exist or was deleted
        """
        post_id = PostId(UUID(request.post_id))
        post = await self.post_service.get_post_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", request.post_id)

        order = request.order or self.settings.default_order
        forest = await self.comment_service.get_comment_tree(post_id, order=order)

        votes = await self.vote_ledger.get_user_votes(
            request.viewer.user_id if request.viewer else None,
            VotableType.COMMENT,
            [node.id for node, _ in walk(forest)],
        )

        return GetCommentTreeResponse(
            post_id=request.post_id,
            order=order,
            comments=self._to_items(forest, votes, request.max_depth),
            total=count_nodes(forest),
        )

    @staticmethod
    def _to_items(
        forest: list[CommentNode],
        votes: dict[UUID, VoteDirection | None],
        max_depth: int | None,
    ) -> list[CommentItem]:
        # Built iteratively as plain dicts, validated once at the end
        items: dict[int, dict[str, Any]] = {}
        roots: list[dict[str, Any]] = []
        for node, depth in walk(forest, max_depth=max_depth):
            comment = node.comment
            item: dict[str, Any] = {
                "comment_id": str(comment.id),
                "post_id": str(comment.post_id),
                "parent_id": str(comment.parent_id) if comment.parent_id else None,
                "author_id": str(comment.author_id),
                "author_handle": comment.author_handle.root,
                "content": comment.content,
                "vote_score": comment.vote_score,
                "created_at": comment.created_at,
                "depth": depth,
                "user_vote": votes.get(comment.id),
                "replies": [],
                "hidden_replies": 0,
            }
            if max_depth is not None and depth == max_depth:
                item["hidden_replies"] = count_nodes(node.children)
            items[id(node)] = item
            if depth == 0:
                roots.append(item)
            else:
                items[id(node.parent)]["replies"].append(item)
        return [CommentItem.model_validate(item) for item in roots]
