"""Domain value objects for the forum."""

from forum.domain.value.identifiers import (
    CommentId,
    CommunityId,
    NotificationId,
    PostId,
    UserId,
    VoteId,
)
from forum.domain.value.types import (
    CommentOrder,
    CommunityName,
    CommunityVisibility,
    Handle,
    NotificationType,
    PostSortOrder,
    VotableType,
    VoteDirection,
    VoteTransition,
    Viewer,
)

__all__ = [
    # Identifiers
    "UserId",
    "CommunityId",
    "PostId",
    "CommentId",
    "VoteId",
    "NotificationId",
    # Types
    "CommentOrder",
    "CommunityName",
    "CommunityVisibility",
    "Handle",
    "NotificationType",
    "PostSortOrder",
    "VotableType",
    "VoteDirection",
    "VoteTransition",
    "Viewer",
]
