"""Repository interfaces for the forum domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from forum.domain.repository.comment import CommentRepository
from forum.domain.repository.community import CommunityRepository
from forum.domain.repository.notification import NotificationRepository
from forum.domain.repository.post import PostRepository
from forum.domain.repository.transaction import Transaction
from forum.domain.repository.user import UserRepository
from forum.domain.repository.vote import VoteRepository, VoteTally

__all__ = [
    "UserRepository",
    "CommunityRepository",
    "PostRepository",
    "CommentRepository",
    "VoteRepository",
    "VoteTally",
    "NotificationRepository",
    "Transaction",
]
