"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from forum.domain.model.user import User
from forum.domain.value import Handle, UserId


class UserRepository(ABC):
    """Repository for User profiles."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        pass

    @abstractmethod
    async def find_by_handle(self, handle: Handle) -> Optional[User]:
        """Find a user by handle."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        pass

    @abstractmethod
    async def adjust_karma(self, user_id: UserId, delta: int) -> None:
        """Atomically add ``delta`` (may be negative) to a user's karma.

        Missing users are ignored.
        """
        pass
