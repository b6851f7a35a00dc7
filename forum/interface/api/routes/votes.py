"""Vote routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header
from pydantic import BaseModel

from forum.application.usecase.vote import (
    ApplyVoteRequest,
    ApplyVoteResponse,
    ApplyVoteUseCase,
)
from forum.domain.service import JWTService
from forum.domain.value import VotableType, VoteDirection
from forum.interface.api.auth import resolve_viewer

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(BaseModel):
    """API request for voting.

    Voting in the direction already held retracts the vote.
    """

    direction: VoteDirection


@router.post("/posts/{post_id}/vote", response_model=ApplyVoteResponse)
async def vote_on_post(
    post_id: UUID,
    request: VoteAPIRequest,
    apply_vote_use_case: FromDishka[ApplyVoteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ApplyVoteResponse:
    """Vote on a post.

    Requires authentication.

    Args:
        post_id: Post UUID
        request: Vote direction
        apply_vote_use_case: Apply vote use case from DI
        jwt_service: JWT service for token verification (injected)

    Returns:
        Transition, the caller's resulting vote and the confirmed score
    """
    viewer = resolve_viewer(jwt_service, authorization, auth_token)
    return await apply_vote_use_case.execute(
        ApplyVoteRequest(
            votable_type=VotableType.POST,
            votable_id=str(post_id),
            direction=request.direction,
            viewer=viewer,
        )
    )


@router.post("/comments/{comment_id}/vote", response_model=ApplyVoteResponse)
async def vote_on_comment(
    comment_id: UUID,
    request: VoteAPIRequest,
    apply_vote_use_case: FromDishka[ApplyVoteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ApplyVoteResponse:
    """Vote on a comment.

    Requires authentication.
    """
    viewer = resolve_viewer(jwt_service, authorization, auth_token)
    return await apply_vote_use_case.execute(
        ApplyVoteRequest(
            votable_type=VotableType.COMMENT,
            votable_id=str(comment_id),
            direction=request.direction,
            viewer=viewer,
        )
    )
