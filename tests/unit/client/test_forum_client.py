"""Unit tests for ForumClient."""

import json
from uuid import uuid4

import httpx
import pytest

from forum.application.usecase.notification import NotificationItem
from forum.client import ForumClient
from forum.domain.error import (
    ConflictingWriteError,
    NotFoundError,
    StoreUnavailableError,
    SubjectNotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from forum.domain.value import UserId, VotableType, VoteDirection
from forum.interface.api.app import create_app
from tests.conftest import at, auth_headers, make_notification, make_user
from tests.di import build_test_container


def _client(handler, token: str | None = None) -> ForumClient:
    return ForumClient(
        "http://forum.test", token=token, transport=httpx.MockTransport(handler)
    )


def _post_json(**overrides) -> dict:
    body = {
        "post_id": str(uuid4()),
        "community": "science",
        "title": "Title",
        "content": "",
        "author_id": str(uuid4()),
        "author_handle": "alice",
        "vote_score": 0,
        "comment_count": 0,
        "created_at": "2025-01-01T12:00:00",
        "user_vote": None,
    }
    body.update(overrides)
    return body


class TestErrorMapping:
    """Error statuses come back as domain errors."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status,error",
        [
            (401, UnauthenticatedError),
            (404, NotFoundError),
            (409, ConflictingWriteError),
            (400, ValidationError),
            (422, ValidationError),
        ],
    )
    async def test_status_maps_to_domain_error(self, status, error):
        client = _client(lambda request: httpx.Response(status, json={"detail": "x"}))

        with pytest.raises(error):
            await client.create_post("science", "Title")
        await client.aclose()

    @pytest.mark.asyncio
    async def test_vote_404_is_subject_not_found(self):
        client = _client(lambda request: httpx.Response(404, json={"detail": "gone"}))

        with pytest.raises(SubjectNotFoundError):
            await client.vote(VotableType.COMMENT, uuid4(), VoteDirection.UP)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_get_retries_once_on_transient_status(self):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) == 1:
                return httpx.Response(503, json={"detail": "busy"})
            return httpx.Response(200, json=_post_json(title="Second try"))

        async with _client(handler) as client:
            post = await client.get_post(uuid4())

        assert post.title == "Second try"
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_post_is_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503, json={"detail": "busy"})

        async with _client(handler) as client:
            with pytest.raises(StoreUnavailableError):
                await client.vote(VotableType.POST, uuid4(), VoteDirection.UP)

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_unreachable_server(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(StoreUnavailableError):
                await client.list_posts()

        assert len(calls) == 2


class TestRequests:
    """Request shapes."""

    @pytest.mark.asyncio
    async def test_bearer_token_and_vote_body(self):
        seen = {}
        subject = uuid4()

        def handler(request):
            seen["auth"] = request.headers.get("Authorization")
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "votable_type": "comment",
                    "votable_id": str(subject),
                    "transition": "insert",
                    "user_vote": "down",
                    "vote_score": -1,
                },
            )

        async with _client(handler, token="tok") as client:
            response = await client.vote(
                VotableType.COMMENT, subject, VoteDirection.DOWN
            )

        assert seen == {
            "auth": "Bearer tok",
            "path": f"/comments/{subject}/vote",
            "body": {"direction": "down"},
        }
        assert response.vote_score == -1

    @pytest.mark.asyncio
    async def test_stream_parses_events_and_skips_keepalives(self):
        user_id = UserId(uuid4())
        first = NotificationItem.from_notification(
            make_notification(user_id, created_at=at(1), message="one")
        )
        second = NotificationItem.from_notification(
            make_notification(user_id, created_at=at(2), message="two")
        )
        body = (
            ": keepalive\n\n"
            f"event: notification\ndata: {first.model_dump_json()}\n\n"
            ": keepalive\n\n"
            f"event: notification\ndata: {second.model_dump_json()}\n\n"
        )

        def handler(request):
            assert request.url.path == "/notifications/stream"
            return httpx.Response(
                200, text=body, headers={"Content-Type": "text/event-stream"}
            )

        async with _client(handler, token="tok") as client:
            items = [item async for item in client.stream_notifications()]

        assert [item.message for item in items] == ["one", "two"]

    @pytest.mark.asyncio
    async def test_stream_requires_auth(self):
        def handler(request):
            return httpx.Response(401, json={"detail": "Authentication required"})

        async with _client(handler) as client:
            with pytest.raises(UnauthenticatedError):
                async for _ in client.stream_notifications():
                    pass


class TestAgainstApp:
    """Round trips through the real application."""

    @pytest.mark.asyncio
    async def test_post_vote_and_thread(self):
        # Arrange
        app = create_app(container=build_test_container())
        alice, bob = make_user("alice"), make_user("bob")

        def client_for(user) -> ForumClient:
            token = auth_headers(user)["Authorization"].removeprefix("Bearer ")
            return ForumClient(
                "http://forum.test",
                token=token,
                transport=httpx.ASGITransport(app=app),
            )

        async with client_for(alice) as as_alice, client_for(bob) as as_bob:
            # Act
            await as_alice.create_community("science")
            post = await as_alice.create_post("science", "Gravity", "Data inside")
            vote = await as_bob.vote(VotableType.POST, post.post_id, VoteDirection.UP)
            comment = await as_bob.create_comment(post.post_id, "Nice")
            tree = await as_alice.get_comment_tree(post.post_id)
            inbox = await as_alice.get_notifications()

            # Assert
            assert vote.vote_score == 1
            assert tree.comments[0].comment_id == comment.comment_id
            assert inbox.unread_count == 1
            with pytest.raises(ConflictingWriteError):
                await as_bob.create_community("Science")
