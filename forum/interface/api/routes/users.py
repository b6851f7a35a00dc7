"""User profile routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query
from pydantic import BaseModel, Field

from forum.application.usecase.user import (
    GetUserProfileRequest,
    GetUserProfileUseCase,
    ListUserPostsRequest,
    ListUserPostsResponse,
    ListUserPostsUseCase,
    UpdateUserProfileRequest,
    UpdateUserProfileUseCase,
    UserProfileResponse,
)
from forum.config import PostSettings
from forum.domain.service import JWTService
from forum.interface.api.auth import resolve_viewer
from forum.interface.api.routes.common import page_limit

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class UpdateUserProfileAPIRequest(BaseModel):
    """API request for updating user profile.

    Omitted fields are left unchanged; an explicit null clears the field.
    """

    bio: str | None = Field(None, max_length=500)
    avatar_url: str | None = None


@router.patch("/me", response_model=UserProfileResponse)
async def update_my_profile(
    request: UpdateUserProfileAPIRequest,
    update_user_profile_use_case: FromDishka[UpdateUserProfileUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> UserProfileResponse:
    """Update the caller's own profile.

    Requires authentication.
    """
    viewer = resolve_viewer(jwt_service, authorization, auth_token)
    return await update_user_profile_use_case.execute(
        UpdateUserProfileRequest(
            viewer=viewer, **request.model_dump(exclude_unset=True)
        )
    )


@router.get("/{handle}", response_model=UserProfileResponse)
async def get_user_profile(
    handle: str,
    get_user_profile_use_case: FromDishka[GetUserProfileUseCase],
) -> UserProfileResponse:
    """Get user profile by handle.

    Example:
        GET /users/alice

        Response:
        {
            "user_id": "123e4567-e89b-12d3-a456-426614174000",
            "handle": "alice",
            "bio": null,
            "avatar_url": null,
            "karma": 42,
            "created_at": "2025-01-15T12:34:56Z"
        }
    """
    return await get_user_profile_use_case.execute(
        GetUserProfileRequest(handle=handle)
    )


@router.get("/{handle}/posts", response_model=ListUserPostsResponse)
async def list_user_posts(
    handle: str,
    list_user_posts_use_case: FromDishka[ListUserPostsUseCase],
    jwt_service: FromDishka[JWTService],
    post_settings: FromDishka[PostSettings],
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ListUserPostsResponse:
    """List a user's posts, newest first."""
    viewer = resolve_viewer(jwt_service, authorization, auth_token)
    return await list_user_posts_use_case.execute(
        ListUserPostsRequest(
            handle=handle,
            limit=page_limit(limit, post_settings),
            offset=offset,
            viewer=viewer,
        )
    )
