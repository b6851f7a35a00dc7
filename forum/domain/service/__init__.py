"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .comment_tree import CommentNode, CommentTreeBuilder, count_nodes, walk
from .community_service import CommunityService
from .jwt_service import JWTService
from .notification_feed import NotificationFeed
from .notification_service import NotificationService
from .post_service import PostService
from .push_channel import (
    PushChannel,
    Subscription,
    SubscriptionClosed,
    comments_topic,
    notifications_topic,
)
from .store import TRANSIENT_ERRORS, StoreCalls
from .user_service import UserService
from .vote_ledger import (
    VoteLedger,
    VoteLocks,
    VoteOutcome,
    preview_score,
    resolve_transition,
    score_delta,
)

__all__ = [
    "CommentNode",
    "CommentService",
    "CommentTreeBuilder",
    "CommunityService",
    "JWTService",
    "NotificationFeed",
    "NotificationService",
    "PostService",
    "PushChannel",
    "Service",
    "StoreCalls",
    "Subscription",
    "SubscriptionClosed",
    "TRANSIENT_ERRORS",
    "UserService",
    "VoteLedger",
    "VoteLocks",
    "VoteOutcome",
    "comments_topic",
    "count_nodes",
    "notifications_topic",
    "preview_score",
    "resolve_transition",
    "score_delta",
    "walk",
]
