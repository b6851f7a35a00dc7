"""Post aggregate root."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import CommunityName, Handle, PostId, UserId


class Post(DomainModel):
    """A post submitted to a community.

    ``vote_score`` is a cached aggregate (ups minus downs), refreshed from
    the vote tally whenever a vote on this post is applied. It can go
    negative.
    """

    id: PostId
    community: CommunityName
    author_id: UserId
    author_handle: Handle
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(default="", max_length=40000)
    vote_score: int = 0
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
