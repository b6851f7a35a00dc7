"""Unit tests for the user profile use cases."""

import pytest

from forum.application.usecase.user import (
    GetUserProfileRequest,
    GetUserProfileUseCase,
    ListUserPostsRequest,
    ListUserPostsUseCase,
    UpdateUserProfileRequest,
    UpdateUserProfileUseCase,
)
from forum.application.usecase.vote import ApplyVoteRequest, ApplyVoteUseCase
from forum.domain.error import NotFoundError, UnauthenticatedError
from forum.domain.repository import PostRepository, UserRepository
from forum.domain.value import Handle, VotableType, VoteDirection
from tests.conftest import at, make_post, make_user, make_viewer
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetUserProfileUseCase:
    """Tests for GetUserProfileUseCase."""

    @pytest.mark.asyncio
    async def test_profile_reflects_karma_from_votes(self, unit_env):
        """Upvotes on a user's post raise their karma."""
        # Arrange
        get_profile = await unit_env.get(GetUserProfileUseCase)
        apply_vote = await unit_env.get(ApplyVoteUseCase)
        user_repo = await unit_env.get(UserRepository)
        post_repo = await unit_env.get(PostRepository)
        author = await user_repo.save(make_user("author"))
        post = await post_repo.save(make_post(author))
        for handle in ("v1", "v2"):
            voter = make_viewer(await user_repo.save(make_user(handle)))
            await apply_vote.execute(
                ApplyVoteRequest(
                    votable_type=VotableType.POST,
                    votable_id=str(post.id),
                    direction=VoteDirection.UP,
                    viewer=voter,
                )
            )

        # Act
        profile = await get_profile.execute(
            GetUserProfileRequest(handle=Handle("author"))
        )

        # Assert
        assert profile.user_id == str(author.id)
        assert profile.karma == 2

    @pytest.mark.asyncio
    async def test_unknown_handle(self, unit_env):
        get_profile = await unit_env.get(GetUserProfileUseCase)

        with pytest.raises(NotFoundError):
            await get_profile.execute(GetUserProfileRequest(handle=Handle("ghost")))


class TestListUserPostsUseCase:
    """Tests for ListUserPostsUseCase."""

    @pytest.mark.asyncio
    async def test_lists_only_that_users_posts_newest_first(self, unit_env):
        use_case = await unit_env.get(ListUserPostsUseCase)
        user_repo = await unit_env.get(UserRepository)
        post_repo = await unit_env.get(PostRepository)
        author = await user_repo.save(make_user("author"))
        other = await user_repo.save(make_user("other"))
        older = await post_repo.save(make_post(author, created_at=at(1)))
        newer = await post_repo.save(make_post(author, created_at=at(2)))
        await post_repo.save(make_post(other))

        response = await use_case.execute(ListUserPostsRequest(handle=Handle("author")))

        assert response.handle == "author"
        assert [p.post_id for p in response.posts] == [str(newer.id), str(older.id)]

    @pytest.mark.asyncio
    async def test_unknown_handle(self, unit_env):
        use_case = await unit_env.get(ListUserPostsUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(ListUserPostsRequest(handle=Handle("ghost")))


class TestUpdateUserProfileUseCase:
    """Tests for UpdateUserProfileUseCase."""

    @pytest.mark.asyncio
    async def test_only_set_fields_change(self, unit_env):
        # Arrange
        use_case = await unit_env.get(UpdateUserProfileUseCase)
        viewer = make_viewer(make_user("alice"))
        await use_case.execute(
            UpdateUserProfileRequest(
                viewer=viewer, bio="Chemist", avatar_url="https://example.org/a.png"
            )
        )

        # Act
        response = await use_case.execute(
            UpdateUserProfileRequest(viewer=viewer, avatar_url=None)
        )

        # Assert
        assert response.bio == "Chemist"
        assert response.avatar_url is None

    @pytest.mark.asyncio
    async def test_requires_viewer(self, unit_env):
        use_case = await unit_env.get(UpdateUserProfileUseCase)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(UpdateUserProfileRequest(bio="Anon"))
