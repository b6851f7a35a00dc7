"""PostgreSQL implementation of Post repository."""

from typing import List, Optional

import logfire
from sqlalchemy import desc, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Post
from forum.domain.repository import PostRepository
from forum.domain.value import CommunityName, Handle, PostId, PostSortOrder
from forum.persistence.mappers import post_to_dict, row_to_post
from forum.persistence.tables import posts_table


def _escape_like(query: str) -> str:
    return query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            return row_to_post(row._asdict())

    async def find_all(
        self,
        sort: PostSortOrder = PostSortOrder.HOT,
        community: Optional[CommunityName] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts with filtering and pagination."""
        with logfire.span(
            "post_repository.find_all",
            sort=sort.value,
            community=community.root if community else None,
            limit=limit,
            offset=offset,
        ):
            stmt = select(posts_table).where(posts_table.c.deleted_at.is_(None))

            if community:
                stmt = stmt.where(posts_table.c.community == community.root)

            if sort == PostSortOrder.NEW:
                stmt = stmt.order_by(
                    desc(posts_table.c.created_at), desc(posts_table.c.id)
                )
            else:
                # TOP and HOT both rank by score; no time decay
                stmt = stmt.order_by(
                    desc(posts_table.c.vote_score),
                    desc(posts_table.c.created_at),
                    desc(posts_table.c.id),
                )

            stmt = stmt.limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            posts = [row_to_post(row._asdict()) for row in result.fetchall()]
            logfire.info("Found posts", count=len(posts))
            return posts

    async def find_by_author_handle(
        self, handle: Handle, limit: int = 20, offset: int = 0
    ) -> List[Post]:
        """Find posts by author handle, newest first."""
        stmt = (
            select(posts_table)
            .where(
                posts_table.c.author_handle == handle.root,
                posts_table.c.deleted_at.is_(None),
            )
            .order_by(desc(posts_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_post(row._asdict()) for row in result.fetchall()]

    async def search(self, query: str, limit: int = 20) -> List[Post]:
        """Case-insensitive substring search over title and content."""
        with logfire.span("post_repository.search", query=query, limit=limit):
            pattern = f"%{_escape_like(query)}%"
            stmt = (
                select(posts_table)
                .where(
                    posts_table.c.deleted_at.is_(None),
                    or_(
                        posts_table.c.title.ilike(pattern, escape="\\"),
                        posts_table.c.content.ilike(pattern, escape="\\"),
                    ),
                )
                .order_by(desc(posts_table.c.created_at))
                .limit(limit)
            )
            result = await self.session.execute(stmt)
            return [row_to_post(row._asdict()) for row in result.fetchall()]

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        with logfire.span("post_repository.save", post_id=str(post.id)):
            post_dict = post_to_dict(post)
            existing = await self.find_by_id(post.id)

            if existing:
                stmt = (
                    posts_table.update()
                    .where(posts_table.c.id == post.id)
                    .values(**post_dict)
                )
            else:
                logfire.info(
                    "Inserting new post",
                    post_id=str(post.id),
                    community=post.community.root,
                    author=post.author_handle.root,
                )
                stmt = posts_table.insert().values(**post_dict)

            await self.session.execute(stmt)
            await self.session.flush()
            return post

    async def set_vote_score(self, post_id: PostId, score: int) -> None:
        """Overwrite the cached vote score."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(vote_score=score)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def increment_comment_count(self, post_id: PostId) -> None:
        """Atomically increment the comment count by 1."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(comment_count=posts_table.c.comment_count + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()
