"""User use cases."""

from .get_user_profile import (
    GetUserProfileRequest,
    GetUserProfileUseCase,
    UserProfileResponse,
)
from .list_user_posts import (
    ListUserPostsRequest,
    ListUserPostsResponse,
    ListUserPostsUseCase,
)
from .update_user_profile import UpdateUserProfileRequest, UpdateUserProfileUseCase

__all__ = [
    "GetUserProfileRequest",
    "GetUserProfileUseCase",
    "UserProfileResponse",
    "ListUserPostsRequest",
    "ListUserPostsResponse",
    "ListUserPostsUseCase",
    "UpdateUserProfileRequest",
    "UpdateUserProfileUseCase",
]
