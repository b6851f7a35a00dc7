"""Update user profile use case."""

from pydantic import BaseModel, Field

from forum.domain.error import UnauthenticatedError
from forum.domain.service import UserService
from forum.domain.value import Viewer

from .get_user_profile import UserProfileResponse


class UpdateUserProfileRequest(BaseModel):
    """Update user profile request.

    Only fields that were explicitly set are changed; an explicit None
    clears the field.
    """

    viewer: Viewer | None = None
    bio: str | None = Field(default=None, max_length=500)
    avatar_url: str | None = None


class UpdateUserProfileUseCase:
    """Use case for updating the viewer's own profile.

    Handle and karma cannot be changed here.
    """

    def __init__(self, user_service: UserService) -> None:
        """Initialize update user profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: UpdateUserProfileRequest) -> UserProfileResponse:
        """Execute update flow.

        Raises:
            UnauthenticatedError: If no viewer is signed in
        """
        if request.viewer is None:
            raise UnauthenticatedError("update your profile")

        user = await self.user_service.ensure_profile(request.viewer)
        changes = {
            field: getattr(request, field)
            for field in ("bio", "avatar_url")
            if field in request.model_fields_set
        }
        updated = await self.user_service.update_profile(user.id, **changes)
        return UserProfileResponse.from_user(updated)
