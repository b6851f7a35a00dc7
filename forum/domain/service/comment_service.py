"""Comment domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from forum.domain.error import NotFoundError, ValidationError
from forum.domain.model.comment import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, CommentOrder, Handle, PostId, UserId

from .base import Service
from .comment_tree import CommentNode, CommentTreeBuilder
from .store import StoreCalls


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        tree_builder: CommentTreeBuilder,
        store: StoreCalls,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            tree_builder: Builds comment forests from flat comment lists
            store: Guarded store access
        """
        self.comment_repository = comment_repository
        self.tree_builder = tree_builder
        self.store = store

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        author_handle: Handle,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or reply to another comment.

        The caller is responsible for checking that the post exists.

        Args:
            post_id: Post ID
            author_id: Author user ID
            author_handle: Author handle
            content: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            NotFoundError: If the parent comment does not exist
            ValidationError: If the parent belongs to another post
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            author_handle=author_handle.root,
            parent_id=str(parent_id) if parent_id else None,
        ):
            if parent_id:
                parent = await self.store(
                    "find_comment",
                    lambda: self.comment_repository.find_by_id(parent_id),
                )
                if not parent or parent.is_deleted:
                    logfire.error(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise NotFoundError("Comment", str(parent_id))
                if parent.post_id != post_id:
                    logfire.error(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ValidationError("Parent comment does not belong to this post")

            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                author_handle=author_handle,
                content=content,
                parent_id=parent_id,
                created_at=datetime.now(),
            )

            saved = await self.store(
                "save_comment",
                lambda: self.comment_repository.save(comment),
                retry=False,
            )
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                author_handle=author_handle.root,
                is_reply=parent_id is not None,
            )
            return saved

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.store(
                "find_comment", lambda: self.comment_repository.find_by_id(comment_id)
            )
            if comment:
                logfire.info("Comment found", comment_id=str(comment_id))
            else:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def get_comments_for_post(
        self, post_id: PostId, include_deleted: bool = False
    ) -> list[Comment]:
        """Get the flat list of comments on a post, oldest first."""
        with logfire.span(
            "comment_service.get_comments_for_post",
            post_id=str(post_id),
            include_deleted=include_deleted,
        ):
            comments = await self.store(
                "find_comments",
                lambda: self.comment_repository.find_by_post(
                    post_id=post_id,
                    include_deleted=include_deleted,
                ),
            )
            logfire.info(
                "Comments retrieved for post",
                post_id=str(post_id),
                count=len(comments),
            )
            return comments

    async def get_comment_tree(
        self, post_id: PostId, order: CommentOrder = CommentOrder.OLDEST_FIRST
    ) -> list[CommentNode]:
        """Fetch a post's comments and assemble them into a forest.

        Args:
            post_id: Post ID
            order: Sibling order at every level

        Returns:
            Root comment nodes
        """
        with logfire.span(
            "comment_service.get_comment_tree", post_id=str(post_id), order=order.value
        ):
            comments = await self.get_comments_for_post(post_id)
            forest = self.tree_builder.build(comments, order=order)
            logfire.info(
                "Comment tree built",
                post_id=str(post_id),
                comments=len(comments),
                roots=len(forest),
            )
            return forest
