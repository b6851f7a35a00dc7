"""PostgreSQL implementation of Notification repository."""

from typing import List, Optional

from sqlalchemy import desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Notification
from forum.domain.repository import NotificationRepository
from forum.domain.value import NotificationId, UserId
from forum.persistence.mappers import notification_to_dict, row_to_notification
from forum.persistence.tables import notifications_table


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of NotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Find a notification by ID."""
        stmt = select(notifications_table).where(
            notifications_table.c.id == notification_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_notification(row._asdict()) if row else None

    async def find_by_user(self, user_id: UserId, limit: int = 50) -> List[Notification]:
        """Find a user's most recent notifications, newest first."""
        stmt = (
            select(notifications_table)
            .where(notifications_table.c.user_id == user_id)
            .order_by(desc(notifications_table.c.created_at))
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_notification(row._asdict()) for row in result.fetchall()]

    async def save(self, notification: Notification) -> Notification:
        """Insert a notification."""
        stmt = notifications_table.insert().values(
            **notification_to_dict(notification)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return notification

    async def mark_read(self, notification_id: NotificationId, user_id: UserId) -> bool:
        """Mark one notification as read."""
        stmt = (
            update(notifications_table)
            .where(
                notifications_table.c.id == notification_id,
                notifications_table.c.user_id == user_id,
            )
            .values(read=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark all unread notifications as read."""
        stmt = (
            update(notifications_table)
            .where(
                notifications_table.c.user_id == user_id,
                notifications_table.c.read.is_(False),
            )
            .values(read=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
