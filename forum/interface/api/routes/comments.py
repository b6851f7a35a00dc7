"""Comment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query, status
from pydantic import BaseModel, Field

from forum.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    GetCommentTreeRequest,
    GetCommentTreeResponse,
    GetCommentTreeUseCase,
)
from forum.domain.service import JWTService
from forum.domain.value import CommentOrder
from forum.interface.api.auth import resolve_viewer

router = APIRouter(prefix="/posts", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str = Field(min_length=1, max_length=10000)
    parent_id: UUID | None = None  # Set for replies


@router.get("/{post_id}/comments", response_model=GetCommentTreeResponse)
async def get_comments(
    post_id: UUID,
    get_comment_tree_use_case: FromDishka[GetCommentTreeUseCase],
    jwt_service: FromDishka[JWTService],
    order: CommentOrder | None = None,
    max_depth: int | None = Query(default=None, ge=0),
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> GetCommentTreeResponse:
    """Get the comment thread of a post.

    Args:
        post_id: Post UUID
        order: oldest or newest sibling order (configured default if omitted)
        max_depth: Cut the thread below this depth

    Returns:
        Nested comment forest with the caller's votes
    """
    viewer = resolve_viewer(jwt_service, authorization, auth_token)
    return await get_comment_tree_use_case.execute(
        GetCommentTreeRequest(
            post_id=str(post_id), order=order, max_depth=max_depth, viewer=viewer
        )
    )


@router.post(
    "/{post_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: UUID,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Comment on a post, or reply to a comment.

    Requires authentication. The post author (or the parent comment's
    author, for replies) is notified.
    """
    viewer = resolve_viewer(jwt_service, authorization, auth_token)
    return await create_comment_use_case.execute(
        CreateCommentRequest(
            post_id=str(post_id),
            content=request.content,
            parent_id=str(request.parent_id) if request.parent_id else None,
            viewer=viewer,
        )
    )
