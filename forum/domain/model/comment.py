"""Comment entity.

Comments are stored flat with an optional parent reference; the thread
shape is assembled by ``CommentTreeBuilder`` at read time.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import CommentId, Handle, PostId, UserId


class Comment(DomainModel):
    """Comment on a post or reply to another comment.

    ``parent_id`` may reference a comment that no longer exists; such
    comments are shown as top-level orphans rather than dropped.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    author_handle: Handle
    content: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    vote_score: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
