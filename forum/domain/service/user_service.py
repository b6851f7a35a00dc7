"""User domain service."""

from datetime import datetime

import logfire

from forum.domain.error import NotFoundError
from forum.domain.model import User
from forum.domain.repository import UserRepository
from forum.domain.value import Handle, UserId, Viewer

from .base import Service
from .store import StoreCalls

# Sentinel distinguishing "leave unchanged" from "clear" in profile updates
_UNSET = object()


class UserService(Service):
    """Domain service for user profile operations."""

    def __init__(self, user_repository: UserRepository, store: StoreCalls) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            store: Guarded store access
        """
        self.user_repository = user_repository
        self.store = store

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.store(
                "find_user", lambda: self.user_repository.find_by_id(user_id)
            )
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            logfire.info("User found", user_id=str(user_id), handle=user.handle.root)
            return user

    async def get_user_by_handle(self, handle: Handle) -> User | None:
        """Get user by handle.

        Args:
            handle: User handle

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.get_user_by_handle", handle=handle.root):
            user = await self.store(
                "find_user_by_handle",
                lambda: self.user_repository.find_by_handle(handle),
            )
            if user:
                logfire.info("User found", handle=handle.root, user_id=str(user.id))
            else:
                logfire.warn("User not found", handle=handle.root)
            return user

    async def ensure_profile(self, viewer: Viewer) -> User:
        """Return the viewer's profile, creating it on first use.

        Accounts live with the auth provider, so the forum-side profile is
        created lazily the first time a signed-in user acts.
        """
        with logfire.span("user_service.ensure_profile", user_id=str(viewer.user_id)):
            user = await self.store(
                "find_user", lambda: self.user_repository.find_by_id(viewer.user_id)
            )
            if user:
                return user

            profile = User(
                id=viewer.user_id, handle=viewer.handle, created_at=datetime.now()
            )
            user = await self.store(
                "save_user", lambda: self.user_repository.save(profile), retry=False
            )
            logfire.info(
                "User profile created",
                user_id=str(user.id),
                handle=user.handle.root,
            )
            return user

    async def update_profile(
        self,
        user_id: UserId,
        bio: str | None | object = _UNSET,
        avatar_url: str | None | object = _UNSET,
    ) -> User:
        """Update profile fields. Omitted fields are left unchanged.

        Args:
            user_id: User ID
            bio: New bio (None clears it)
            avatar_url: New avatar URL (None clears it)

        Returns:
            Updated user

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.update_profile", user_id=str(user_id)):
            user = await self.get_by_id(user_id)

            changes: dict[str, object] = {}
            if bio is not _UNSET:
                changes["bio"] = bio
            if avatar_url is not _UNSET:
                changes["avatar_url"] = avatar_url
            if not changes:
                return user

            updated = User.model_validate({**user.model_dump(), **changes})
            saved = await self.store(
                "save_user", lambda: self.user_repository.save(updated), retry=False
            )
            logfire.info(
                "User profile updated",
                user_id=str(user_id),
                fields=sorted(changes),
            )
            return saved
