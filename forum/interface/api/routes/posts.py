"""Post routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query, status
from pydantic import BaseModel, Field

from forum.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    PostItem,
    SearchPostsRequest,
    SearchPostsResponse,
    SearchPostsUseCase,
)
from forum.config import PostSettings
from forum.domain.service import JWTService
from forum.domain.value import CommunityName, PostSortOrder
from forum.interface.api.auth import resolve_viewer
from forum.interface.api.routes.common import page_limit

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    community: str
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(default="", max_length=40000)


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    jwt_service: FromDishka[JWTService],
    post_settings: FromDishka[PostSettings],
    sort: PostSortOrder = PostSortOrder.HOT,
    community: str | None = None,
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ListPostsResponse:
    """List posts.

    The caller's own vote is included on each post when signed in.

    Args:
        sort: new, top or hot
        community: Only posts in this community
        limit: Page size (clamped to the configured maximum)
        offset: Number of posts to skip

    Returns:
        A page of posts
    """
    viewer = resolve_viewer(jwt_service, authorization, auth_token)
    return await list_posts_use_case.execute(
        ListPostsRequest(
            sort=sort,
            community=CommunityName(community) if community else None,
            limit=page_limit(limit, post_settings),
            offset=offset,
            viewer=viewer,
        )
    )


@router.get("/search", response_model=SearchPostsResponse)
async def search_posts(
    search_posts_use_case: FromDishka[SearchPostsUseCase],
    jwt_service: FromDishka[JWTService],
    post_settings: FromDishka[PostSettings],
    q: str = Query(default="", max_length=200),
    limit: int | None = Query(default=None, ge=1),
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> SearchPostsResponse:
    """Search post titles and content.

    A blank query returns no results.
    """
    viewer = resolve_viewer(jwt_service, authorization, auth_token)
    return await search_posts_use_case.execute(
        SearchPostsRequest(
            query=q, limit=page_limit(limit, post_settings), viewer=viewer
        )
    )


@router.post("", response_model=PostItem, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> PostItem:
    """Create a new post.

    Requires authentication.

    Args:
        request: Post creation data
        create_post_use_case: Create post use case from DI
        jwt_service: JWT service for token verification (injected)
        authorization: Bearer token header
        auth_token: JWT token from cookie

    Returns:
        Created post
    """
    viewer = resolve_viewer(jwt_service, authorization, auth_token)
    return await create_post_use_case.execute(
        CreatePostRequest(
            community=request.community,
            title=request.title,
            content=request.content,
            viewer=viewer,
        )
    )


@router.get("/{post_id}", response_model=PostItem)
async def get_post(
    post_id: UUID,
    get_post_use_case: FromDishka[GetPostUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> PostItem:
    """Get a single post.

    Deleted posts are reported as not found.
    """
    viewer = resolve_viewer(jwt_service, authorization, auth_token)
    return await get_post_use_case.execute(
        GetPostRequest(post_id=str(post_id), viewer=viewer)
    )
