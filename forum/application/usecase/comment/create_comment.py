"""Create comment use case."""

from datetime import datetime
from functools import partial
from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.domain.error import NotFoundError, UnauthenticatedError
from forum.domain.model import Comment, Post, User
from forum.domain.repository import Transaction
from forum.domain.service import (
    CommentService,
    NotificationService,
    PostService,
    PushChannel,
    UserService,
    comments_topic,
)
from forum.domain.value import CommentId, NotificationType, PostId, Viewer


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    content: str
    parent_id: str | None = None  # UUID string for replies
    viewer: Viewer | None = None


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment_id: str
    post_id: str
    parent_id: str | None
    author_id: str
    author_handle: str
    content: str
    vote_score: int
    created_at: datetime


class CreateCommentUseCase:
    """Use case for commenting on a post or replying to a comment.

    The author of the post (for top-level comments) or of the parent
    comment (for replies) is notified, unless they wrote the comment.
    """

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
        notification_service: NotificationService,
        push_channel: PushChannel,
        transaction: Transaction,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
            user_service: User domain service
            notification_service: Notification domain service
            push_channel: Realtime channel for live comment updates
            transaction: The request's transaction
        """
        self.comment_service = comment_service
        self.post_service = post_service
        self.user_service = user_service
        self.notification_service = notification_service
        self.push_channel = push_channel
        self.transaction = transaction

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            Created comment

        Raises:
            UnauthenticatedError: If no viewer is signed in
            NotFoundError: If the post or parent comment does not exist
            ValidationError: If the parent belongs to another post
        """
        if request.viewer is None:
            raise UnauthenticatedError("comment")

        post_id = PostId(UUID(request.post_id))
        parent_id = CommentId(UUID(request.parent_id)) if request.parent_id else None

        with logfire.span(
            "create_comment.execute",
            post_id=request.post_id,
            parent_id=request.parent_id,
            author=request.viewer.handle.root,
        ):
            post = await self.post_service.get_post_by_id(post_id)
            if post is None:
                raise NotFoundError("Post", request.post_id)

            author = await self.user_service.ensure_profile(request.viewer)
            comment = await self.comment_service.create_comment(
                post_id=post_id,
                author_id=author.id,
                author_handle=author.handle,
                content=request.content,
                parent_id=parent_id,
            )
            await self.post_service.increment_comment_count(post_id)

            response = CreateCommentResponse(
                comment_id=str(comment.id),
                post_id=str(comment.post_id),
                parent_id=str(comment.parent_id) if comment.parent_id else None,
                author_id=str(comment.author_id),
                author_handle=comment.author_handle.root,
                content=comment.content,
                vote_score=comment.vote_score,
                created_at=comment.created_at,
            )

            await self._notify_recipient(post, comment, author)
            self.transaction.after_commit(
                partial(
                    self.push_channel.publish,
                    comments_topic(post_id),
                    response.model_dump(mode="json"),
                )
            )
            return response

    async def _notify_recipient(self, post: Post, comment: Comment, author: User) -> None:
        if comment.parent_id is not None:
            parent = await self.comment_service.get_comment_by_id(comment.parent_id)
            recipient = parent.author_id if parent else None
            message = f"{author.handle.root} replied to your comment"
        else:
            recipient = post.author_id
            message = f"{author.handle.root} commented on your post: {post.title}"

        if recipient is None or recipient == author.id:
            return

        await self.notification_service.notify(
            user_id=recipient,
            message=message[:1000],
            type=NotificationType.COMMENT,
            link=f"/posts/{post.id}#comment-{comment.id}",
        )
