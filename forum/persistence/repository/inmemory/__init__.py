"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .community import InMemoryCommunityRepository
from .notification import InMemoryNotificationRepository
from .post import InMemoryPostRepository
from .transaction import InMemoryTransaction
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryCommunityRepository",
    "InMemoryNotificationRepository",
    "InMemoryPostRepository",
    "InMemoryTransaction",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
