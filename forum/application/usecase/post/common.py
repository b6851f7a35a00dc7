"""Response items shared by the post use cases."""

from datetime import datetime

from pydantic import BaseModel

from forum.domain.model import Post
from forum.domain.value import VoteDirection


class PostItem(BaseModel):
    """Post as returned to clients."""

    post_id: str
    community: str
    title: str
    content: str
    author_id: str
    author_handle: str
    vote_score: int
    comment_count: int
    created_at: datetime
    user_vote: VoteDirection | None = None  # Viewer's vote, None if none

    @classmethod
    def from_post(
        cls, post: Post, user_vote: VoteDirection | None = None
    ) -> "PostItem":
        return cls(
            post_id=str(post.id),
            community=post.community.root,
            title=post.title,
            content=post.content,
            author_id=str(post.author_id),
            author_handle=post.author_handle.root,
            vote_score=post.vote_score,
            comment_count=post.comment_count,
            created_at=post.created_at,
            user_vote=user_vote,
        )
