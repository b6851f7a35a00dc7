"""Async HTTP client for the forum API.

Responses are parsed into the same pydantic models the API serves, and
error statuses are mapped back onto the domain error taxonomy so callers
handle a client-side failure exactly like a server-side one.
"""

from collections.abc import AsyncIterator
from typing import Any, TypeVar
from uuid import UUID

import httpx
import logfire
from pydantic import BaseModel

from forum.application.usecase.comment import (
    CreateCommentResponse,
    GetCommentTreeResponse,
)
from forum.application.usecase.community import (
    CommunityItem,
    ListCommunitiesResponse,
)
from forum.application.usecase.notification import (
    GetNotificationsResponse,
    MarkReadResponse,
    NotificationItem,
)
from forum.application.usecase.post import (
    ListPostsResponse,
    PostItem,
    SearchPostsResponse,
)
from forum.application.usecase.user import ListUserPostsResponse, UserProfileResponse
from forum.application.usecase.vote import ApplyVoteResponse
from forum.domain.error import (
    ConflictingWriteError,
    DomainError,
    NotFoundError,
    StoreUnavailableError,
    SubjectNotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from forum.domain.value import (
    CommentOrder,
    CommunityVisibility,
    PostSortOrder,
    VotableType,
    VoteDirection,
)

M = TypeVar("M", bound=BaseModel)

# Statuses worth one automatic retry on idempotent requests
_TRANSIENT_STATUSES = {502, 503, 504}


def _detail(response: httpx.Response) -> str:
    try:
        detail = response.json().get("detail")
    except ValueError:
        return response.text
    return detail if isinstance(detail, str) else str(detail)


def error_for_response(response: httpx.Response, operation: str) -> DomainError:
    """Translate an error response into a domain error.

    Args:
        response: Response with a 4xx or 5xx status
        operation: Name of the client call, used in messages

    Returns:
        The matching domain error (not raised)
    """
    status = response.status_code
    detail = _detail(response)
    if status == 401:
        return UnauthenticatedError(operation)
    if status == 404:
        # Votes address a subject; everything else addresses a resource
        if operation.startswith("vote"):
            return SubjectNotFoundError("Subject", response.request.url.path)
        return NotFoundError("Resource", response.request.url.path)
    if status == 409:
        return ConflictingWriteError(detail)
    if status in (400, 422):
        return ValidationError(detail)
    if status >= 500:
        return StoreUnavailableError(operation)
    return DomainError(detail)


class ForumClient:
    """Client for the forum HTTP API.

    Usage:
        async with ForumClient("https://api.forum.example", token=token) as client:
            page = await client.list_posts(sort=PostSortOrder.NEW)
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize forum client.

        Args:
            base_url: API base URL
            token: Bearer token of the signed-in user, None for anonymous
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests)
        """
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "ForumClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request and map failures onto domain errors.

        GET requests are retried once after a transport error or a
        transient status.

        Raises:
            DomainError: Subclass matching the failure
        """
        attempts = 2 if method == "GET" else 1
        attempt = 1
        while True:
            try:
                response = await self._http.request(method, path, **kwargs)
            except httpx.TransportError as e:
                logfire.warn(
                    "Forum API unreachable",
                    operation=operation,
                    attempt=attempt,
                    error=str(e),
                )
                if attempt >= attempts:
                    raise StoreUnavailableError(operation, e) from e
            else:
                if response.status_code in _TRANSIENT_STATUSES and attempt < attempts:
                    logfire.warn(
                        "Forum API transient failure, retrying",
                        operation=operation,
                        status_code=response.status_code,
                    )
                elif response.is_error:
                    logfire.warn(
                        "Forum API request failed",
                        operation=operation,
                        status_code=response.status_code,
                    )
                    raise error_for_response(response, operation)
                else:
                    return response
            attempt += 1

    async def _get(self, path: str, model: type[M], operation: str, **kwargs: Any) -> M:
        return await self._send("GET", path, model, operation, **kwargs)

    async def _send(
        self, method: str, path: str, model: type[M], operation: str, **kwargs: Any
    ) -> M:
        response = await self._request(method, path, operation, **kwargs)
        return model.model_validate(response.json())

    # Posts

    async def list_posts(
        self,
        sort: PostSortOrder = PostSortOrder.HOT,
        community: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> ListPostsResponse:
        params: dict[str, Any] = {"sort": sort.value, "offset": offset}
        if community:
            params["community"] = community
        if limit is not None:
            params["limit"] = limit
        return await self._get("/posts", ListPostsResponse, "list_posts", params=params)

    async def search_posts(self, query: str) -> SearchPostsResponse:
        return await self._get(
            "/posts/search", SearchPostsResponse, "search_posts", params={"q": query}
        )

    async def get_post(self, post_id: UUID | str) -> PostItem:
        return await self._get(f"/posts/{post_id}", PostItem, "get_post")

    async def create_post(self, community: str, title: str, content: str = "") -> PostItem:
        return await self._send(
            "POST",
            "/posts",
            PostItem,
            "create_post",
            json={"community": community, "title": title, "content": content},
        )

    # Comments

    async def get_comment_tree(
        self,
        post_id: UUID | str,
        order: CommentOrder | None = None,
        max_depth: int | None = None,
    ) -> GetCommentTreeResponse:
        params: dict[str, Any] = {}
        if order is not None:
            params["order"] = order.value
        if max_depth is not None:
            params["max_depth"] = max_depth
        return await self._get(
            f"/posts/{post_id}/comments",
            GetCommentTreeResponse,
            "get_comment_tree",
            params=params,
        )

    async def create_comment(
        self,
        post_id: UUID | str,
        content: str,
        parent_id: UUID | str | None = None,
    ) -> CreateCommentResponse:
        body: dict[str, Any] = {"content": content}
        if parent_id is not None:
            body["parent_id"] = str(parent_id)
        return await self._send(
            "POST",
            f"/posts/{post_id}/comments",
            CreateCommentResponse,
            "create_comment",
            json=body,
        )

    # Votes

    async def vote(
        self,
        votable_type: VotableType,
        votable_id: UUID | str,
        direction: VoteDirection,
    ) -> ApplyVoteResponse:
        """Apply a vote; voting the same direction twice retracts it."""
        collection = "posts" if votable_type == VotableType.POST else "comments"
        return await self._send(
            "POST",
            f"/{collection}/{votable_id}/vote",
            ApplyVoteResponse,
            f"vote_{votable_type.value}",
            json={"direction": direction.value},
        )

    # Notifications

    async def get_notifications(self) -> GetNotificationsResponse:
        return await self._get(
            "/notifications", GetNotificationsResponse, "get_notifications"
        )

    async def mark_read(self, notification_id: UUID | str) -> MarkReadResponse:
        return await self._send(
            "POST",
            f"/notifications/{notification_id}/read",
            MarkReadResponse,
            "mark_read",
        )

    async def mark_all_read(self) -> MarkReadResponse:
        return await self._send(
            "POST", "/notifications/read-all", MarkReadResponse, "mark_all_read"
        )

    async def stream_notifications(self) -> AsyncIterator[NotificationItem]:
        """Yield notifications from the server-sent event stream.

        Keep-alive comments are skipped. The iterator ends when the server
        closes the stream.

        Raises:
            DomainError: If the stream could not be opened
        """
        try:
            async with self._http.stream(
                "GET",
                "/notifications/stream",
                headers={"Accept": "text/event-stream"},
                timeout=httpx.Timeout(self._http.timeout.connect, read=None),
            ) as response:
                if response.is_error:
                    await response.aread()
                    raise error_for_response(response, "stream_notifications")

                event, data = None, []
                async for line in response.aiter_lines():
                    if line == "":
                        if event == "notification" and data:
                            yield NotificationItem.model_validate_json("\n".join(data))
                        event, data = None, []
                    elif line.startswith(":"):
                        continue
                    elif line.startswith("event:"):
                        event = line[len("event:") :].strip()
                    elif line.startswith("data:"):
                        data.append(line[len("data:") :].strip())
        except httpx.TransportError as e:
            logfire.warn("Notification stream dropped", error=str(e))
            raise StoreUnavailableError("stream_notifications", e) from e

    # Users and communities

    async def get_user_profile(self, handle: str) -> UserProfileResponse:
        return await self._get(f"/users/{handle}", UserProfileResponse, "get_user_profile")

    async def list_user_posts(self, handle: str) -> ListUserPostsResponse:
        return await self._get(
            f"/users/{handle}/posts", ListUserPostsResponse, "list_user_posts"
        )

    async def update_profile(self, **changes: str | None) -> UserProfileResponse:
        """Update the signed-in user's profile; pass None to clear a field."""
        return await self._send(
            "PATCH", "/users/me", UserProfileResponse, "update_profile", json=changes
        )

    async def list_communities(self) -> ListCommunitiesResponse:
        return await self._get(
            "/communities", ListCommunitiesResponse, "list_communities"
        )

    async def create_community(
        self,
        name: str,
        description: str = "",
        visibility: CommunityVisibility = CommunityVisibility.PUBLIC,
    ) -> CommunityItem:
        return await self._send(
            "POST",
            "/communities",
            CommunityItem,
            "create_community",
            json={
                "name": name,
                "description": description,
                "visibility": visibility.value,
            },
        )
