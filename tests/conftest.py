"""Test configuration and fixtures."""

import asyncio
from datetime import datetime, timedelta
from uuid import uuid4

from forum.config import AuthSettings, Settings
from forum.domain.model import Comment, Community, Notification, Post, User
from forum.domain.service import Subscription
from forum.domain.value import (
    CommentId,
    CommunityId,
    CommunityName,
    Handle,
    NotificationId,
    NotificationType,
    PostId,
    UserId,
    Viewer,
)
from forum.util.jwt import create_token

BASE_TIME = datetime(2025, 1, 1, 12, 0, 0)


def at(seconds: int) -> datetime:
    """Timestamp ``seconds`` after a fixed base time."""
    return BASE_TIME + timedelta(seconds=seconds)


def make_user(handle: str = "alice", karma: int = 0) -> User:
    """Build a user profile."""
    return User(
        id=UserId(uuid4()), handle=Handle(handle), karma=karma, created_at=BASE_TIME
    )


def make_viewer(user: User) -> Viewer:
    """Viewer for a user profile."""
    return Viewer(user_id=user.id, handle=user.handle)


def make_community(creator: User, name: str = "science") -> Community:
    """Build a community."""
    return Community(
        id=CommunityId(uuid4()),
        name=CommunityName(name),
        created_by=creator.id,
        created_at=BASE_TIME,
    )


def make_post(
    author: User,
    title: str = "Test Post",
    community: str = "science",
    vote_score: int = 0,
    created_at: datetime | None = None,
    deleted: bool = False,
) -> Post:
    """Build a post by ``author``."""
    return Post(
        id=PostId(uuid4()),
        community=CommunityName(community),
        author_id=author.id,
        author_handle=author.handle,
        title=title,
        content="Test content",
        vote_score=vote_score,
        created_at=created_at or BASE_TIME,
        deleted_at=BASE_TIME if deleted else None,
    )


def make_comment(
    post_id: PostId,
    author: User | None = None,
    parent_id: CommentId | None = None,
    created_at: datetime | None = None,
    comment_id: CommentId | None = None,
    content: str = "A comment",
    deleted: bool = False,
) -> Comment:
    """Build a comment on ``post_id``."""
    author = author or make_user("commenter")
    return Comment(
        id=comment_id or CommentId(uuid4()),
        post_id=post_id,
        author_id=author.id,
        author_handle=author.handle,
        content=content,
        parent_id=parent_id,
        created_at=created_at or BASE_TIME,
        deleted_at=BASE_TIME if deleted else None,
    )


def make_notification(
    user_id: UserId,
    created_at: datetime | None = None,
    read: bool = False,
    message: str = "Someone replied",
    notification_id: NotificationId | None = None,
) -> Notification:
    """Build a notification for ``user_id``."""
    return Notification(
        id=notification_id or NotificationId(uuid4()),
        user_id=user_id,
        type=NotificationType.COMMENT,
        message=message,
        read=read,
        created_at=created_at or BASE_TIME,
    )


def auth_headers(user: User, settings: AuthSettings | None = None) -> dict[str, str]:
    """Bearer header for ``user``, signed with the configured secret by default."""
    token = create_token(str(user.id), user.handle.root, settings or Settings().auth)
    return {"Authorization": f"Bearer {token}"}


async def received_nothing(subscription: Subscription, wait: float = 0.02) -> bool:
    """True if no payload arrives on ``subscription`` within ``wait`` seconds."""
    try:
        await asyncio.wait_for(subscription.receive(), wait)
    except TimeoutError:
        return True
    return False
