"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

import logfire
from sqlalchemy import asc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, PostId
from forum.persistence.mappers import comment_to_dict, row_to_comment
from forum.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(
        self, post_id: PostId, include_deleted: bool = False
    ) -> List[Comment]:
        """Find all comments on a post, oldest first."""
        with logfire.span(
            "comment_repository.find_by_post",
            post_id=str(post_id),
            include_deleted=include_deleted,
        ):
            stmt = select(comments_table).where(comments_table.c.post_id == post_id)
            if not include_deleted:
                stmt = stmt.where(comments_table.c.deleted_at.is_(None))
            stmt = stmt.order_by(asc(comments_table.c.created_at))

            result = await self.session.execute(stmt)
            return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        comment_dict = comment_to_dict(comment)
        existing = await self.find_by_id(comment.id)
        if existing:
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = comments_table.insert().values(**comment_dict)
        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def set_vote_score(self, comment_id: CommentId, score: int) -> None:
        """Overwrite the cached vote score."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(vote_score=score)
        )
        await self.session.execute(stmt)
        await self.session.flush()
