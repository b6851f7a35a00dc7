"""End-to-end tests for the post, comment and vote endpoints."""

from uuid import uuid4

from tests.conftest import auth_headers, make_user

ALICE = make_user("alice")
BOB = make_user("bob")


def _create_community(client, name="science", user=ALICE):
    response = client.post(
        "/communities", json={"name": name}, headers=auth_headers(user)
    )
    assert response.status_code == 201
    return response.json()


def _create_post(client, title="Pendulum data", user=ALICE):
    response = client.post(
        "/posts",
        json={"community": "science", "title": title, "content": "Body"},
        headers=auth_headers(user),
    )
    assert response.status_code == 201
    return response.json()


class TestPostEndpoints:
    """End-to-end tests for posts."""

    def test_create_get_and_list(self, client):
        # Arrange
        _create_community(client)

        # Act
        post = _create_post(client)
        fetched = client.get(f"/posts/{post['post_id']}")
        listed = client.get("/posts", params={"sort": "new"})

        # Assert
        assert fetched.status_code == 200
        assert fetched.json()["title"] == "Pendulum data"
        assert [p["post_id"] for p in listed.json()["posts"]] == [post["post_id"]]

    def test_create_post_without_auth(self, client):
        response = client.post(
            "/posts", json={"community": "science", "title": "Anon"}
        )

        assert response.status_code == 401

    def test_create_post_in_unknown_community(self, client):
        response = client.post(
            "/posts",
            json={"community": "nowhere", "title": "Lost"},
            headers=auth_headers(ALICE),
        )

        assert response.status_code == 404

    def test_create_post_with_invalid_community_name(self, client):
        response = client.post(
            "/posts",
            json={"community": "no spaces", "title": "Bad"},
            headers=auth_headers(ALICE),
        )

        assert response.status_code == 400

    def test_get_missing_post(self, client):
        assert client.get(f"/posts/{uuid4()}").status_code == 404

    def test_search(self, client):
        _create_community(client)
        hit = _create_post(client, title="Quantum dots")
        _create_post(client, title="Soil samples")

        response = client.get("/posts/search", params={"q": "quantum"})

        assert response.status_code == 200
        assert [p["post_id"] for p in response.json()["posts"]] == [hit["post_id"]]


class TestVoteEndpoints:
    """End-to-end tests for voting."""

    def test_vote_toggle_and_flip(self, client):
        # Arrange
        _create_community(client)
        post = _create_post(client)
        url = f"/posts/{post['post_id']}/vote"
        bob = auth_headers(BOB)

        # Act
        up = client.post(url, json={"direction": "up"}, headers=bob)
        down = client.post(url, json={"direction": "down"}, headers=bob)
        retract = client.post(url, json={"direction": "down"}, headers=bob)

        # Assert
        assert (up.json()["transition"], up.json()["vote_score"]) == ("insert", 1)
        assert (down.json()["transition"], down.json()["vote_score"]) == ("flip", -1)
        assert retract.json()["transition"] == "retract"
        assert retract.json()["user_vote"] is None
        assert retract.json()["vote_score"] == 0

    def test_post_shows_viewer_vote(self, client):
        _create_community(client)
        post = _create_post(client)
        client.post(
            f"/posts/{post['post_id']}/vote",
            json={"direction": "up"},
            headers=auth_headers(BOB),
        )

        as_bob = client.get(f"/posts/{post['post_id']}", headers=auth_headers(BOB))
        anonymous = client.get(f"/posts/{post['post_id']}")

        assert as_bob.json()["user_vote"] == "up"
        assert anonymous.json()["user_vote"] is None
        assert anonymous.json()["vote_score"] == 1

    def test_vote_without_auth(self, client):
        response = client.post(f"/posts/{uuid4()}/vote", json={"direction": "up"})

        assert response.status_code == 401

    def test_vote_on_missing_comment(self, client):
        response = client.post(
            f"/comments/{uuid4()}/vote",
            json={"direction": "up"},
            headers=auth_headers(BOB),
        )

        assert response.status_code == 404

    def test_invalid_direction(self, client):
        response = client.post(
            f"/posts/{uuid4()}/vote",
            json={"direction": "sideways"},
            headers=auth_headers(BOB),
        )

        assert response.status_code == 422


class TestCommentEndpoints:
    """End-to-end tests for comments."""

    def test_threaded_comments_and_notifications(self, client):
        # Arrange
        _create_community(client)
        post = _create_post(client)
        comments_url = f"/posts/{post['post_id']}/comments"

        # Act
        top = client.post(
            comments_url, json={"content": "Question"}, headers=auth_headers(BOB)
        ).json()
        reply = client.post(
            comments_url,
            json={"content": "Answer", "parent_id": top["comment_id"]},
            headers=auth_headers(ALICE),
        ).json()
        tree = client.get(comments_url).json()

        # Assert
        assert tree["total"] == 2
        assert tree["comments"][0]["comment_id"] == top["comment_id"]
        assert tree["comments"][0]["replies"][0]["comment_id"] == reply["comment_id"]
        assert client.get(f"/posts/{post['post_id']}").json()["comment_count"] == 2

        alice_feed = client.get("/notifications", headers=auth_headers(ALICE)).json()
        bob_feed = client.get("/notifications", headers=auth_headers(BOB)).json()
        assert [n["message"] for n in alice_feed["notifications"]] == [
            "bob commented on your post: Pendulum data"
        ]
        assert [n["message"] for n in bob_feed["notifications"]] == [
            "alice replied to your comment"
        ]

    def test_max_depth(self, client):
        _create_community(client)
        post = _create_post(client)
        comments_url = f"/posts/{post['post_id']}/comments"
        top = client.post(
            comments_url, json={"content": "Top"}, headers=auth_headers(BOB)
        ).json()
        client.post(
            comments_url,
            json={"content": "Reply", "parent_id": top["comment_id"]},
            headers=auth_headers(BOB),
        )

        tree = client.get(comments_url, params={"max_depth": 0}).json()

        assert tree["comments"][0]["replies"] == []
        assert tree["comments"][0]["hidden_replies"] == 1

    def test_comment_on_missing_post(self, client):
        response = client.post(
            f"/posts/{uuid4()}/comments",
            json={"content": "Hello"},
            headers=auth_headers(BOB),
        )

        assert response.status_code == 404
