"""Get user profile use case."""

from datetime import datetime

from pydantic import BaseModel

from forum.domain.error import NotFoundError
from forum.domain.model import User
from forum.domain.service import UserService
from forum.domain.value import Handle


class GetUserProfileRequest(BaseModel):
    """Get user profile request."""

    handle: Handle


class UserProfileResponse(BaseModel):
    """Public user profile."""

    user_id: str
    handle: str
    bio: str | None
    avatar_url: str | None
    karma: int
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserProfileResponse":
        return cls(
            user_id=str(user.id),
            handle=user.handle.root,
            bio=user.bio,
            avatar_url=user.avatar_url,
            karma=user.karma,
            created_at=user.created_at,
        )


class GetUserProfileUseCase:
    """Use case for getting a user's public profile by handle."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get user profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: GetUserProfileRequest) -> UserProfileResponse:
        """Execute get user profile flow.

        Raises:
            NotFoundError: If no user has this handle
        """
        user = await self.user_service.get_user_by_handle(request.handle)
        if not user:
            raise NotFoundError("User", request.handle.root)
        return UserProfileResponse.from_user(user)
