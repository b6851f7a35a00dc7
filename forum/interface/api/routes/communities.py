"""Community routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from forum.application.usecase.community import (
    CommunityItem,
    CreateCommunityRequest,
    CreateCommunityUseCase,
    ListCommunitiesResponse,
    ListCommunitiesUseCase,
)
from forum.domain.service import JWTService
from forum.domain.value import CommunityVisibility
from forum.interface.api.auth import resolve_viewer

router = APIRouter(prefix="/communities", tags=["communities"], route_class=DishkaRoute)


class CreateCommunityAPIRequest(BaseModel):
    """API request for creating a community."""

    name: str
    description: str = Field(default="", max_length=500)
    visibility: CommunityVisibility = CommunityVisibility.PUBLIC


@router.get("", response_model=ListCommunitiesResponse)
async def list_communities(
    list_communities_use_case: FromDishka[ListCommunitiesUseCase],
) -> ListCommunitiesResponse:
    """List all communities, newest first."""
    return await list_communities_use_case.execute()


@router.post("", response_model=CommunityItem, status_code=status.HTTP_201_CREATED)
async def create_community(
    request: CreateCommunityAPIRequest,
    create_community_use_case: FromDishka[CreateCommunityUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> CommunityItem:
    """Create a community.

    Requires authentication. Names are unique regardless of case.
    """
    viewer = resolve_viewer(jwt_service, authorization, auth_token)
    return await create_community_use_case.execute(
        CreateCommunityRequest(
            name=request.name,
            description=request.description,
            visibility=request.visibility,
            viewer=viewer,
        )
    )
