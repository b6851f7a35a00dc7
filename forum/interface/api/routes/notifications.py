"""Notification routes."""

from collections.abc import AsyncIterator
from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Request
from fastapi.responses import StreamingResponse

from forum.application.usecase.notification import (
    GetNotificationsRequest,
    GetNotificationsResponse,
    GetNotificationsUseCase,
    MarkAllReadRequest,
    MarkAllReadUseCase,
    MarkReadRequest,
    MarkReadResponse,
    MarkReadUseCase,
    NotificationStream,
    StreamNotificationsRequest,
    StreamNotificationsUseCase,
)
from forum.config import NotificationSettings
from forum.domain.service import JWTService, SubscriptionClosed
from forum.interface.api.auth import resolve_viewer

router = APIRouter(
    prefix="/notifications", tags=["notifications"], route_class=DishkaRoute
)


@router.get("", response_model=GetNotificationsResponse)
async def get_notifications(
    get_notifications_use_case: FromDishka[GetNotificationsUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> GetNotificationsResponse:
    """Get the caller's latest notifications, newest first.

    Requires authentication.
    """
    viewer = resolve_viewer(jwt_service, authorization, auth_token)
    return await get_notifications_use_case.execute(
        GetNotificationsRequest(viewer=viewer)
    )


@router.post("/read-all", response_model=MarkReadResponse)
async def mark_all_read(
    mark_all_read_use_case: FromDishka[MarkAllReadUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> MarkReadResponse:
    """Mark every notification of the caller as read."""
    viewer = resolve_viewer(jwt_service, authorization, auth_token)
    return await mark_all_read_use_case.execute(MarkAllReadRequest(viewer=viewer))


@router.post("/{notification_id}/read", response_model=MarkReadResponse)
async def mark_read(
    notification_id: UUID,
    mark_read_use_case: FromDishka[MarkReadUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> MarkReadResponse:
    """Mark one notification as read. Marking twice is not an error."""
    viewer = resolve_viewer(jwt_service, authorization, auth_token)
    return await mark_read_use_case.execute(
        MarkReadRequest(notification_id=str(notification_id), viewer=viewer)
    )


async def _event_stream(
    request: Request, stream: NotificationStream, keepalive_seconds: float
) -> AsyncIterator[str]:
    """Render notifications as server-sent events.

    Idle periods produce a comment line so proxies keep the connection open.
    """
    try:
        while not await request.is_disconnected():
            item = await stream.next_item(timeout=keepalive_seconds)
            if item is None:
                yield ": keepalive\n\n"
                continue
            yield f"event: notification\ndata: {item.model_dump_json()}\n\n"
    except SubscriptionClosed:
        logfire.info("Notification stream closed by channel")
    finally:
        await stream.close()


@router.get("/stream")
async def stream_notifications(
    request: Request,
    stream_notifications_use_case: FromDishka[StreamNotificationsUseCase],
    jwt_service: FromDishka[JWTService],
    settings: FromDishka[NotificationSettings],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> StreamingResponse:
    """Stream new notifications as server-sent events.

    Requires authentication. Each event is a ``notification`` carrying the
    same JSON shape as the items of ``GET /notifications``.
    """
    viewer = resolve_viewer(jwt_service, authorization, auth_token)
    stream = await stream_notifications_use_case.execute(
        StreamNotificationsRequest(viewer=viewer)
    )
    return StreamingResponse(
        _event_stream(request, stream, settings.stream_keepalive_seconds),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
