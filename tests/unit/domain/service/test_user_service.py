"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from forum.domain.error import NotFoundError
from forum.domain.repository import UserRepository
from forum.domain.service import UserService
from forum.domain.value import Handle, UserId
from tests.conftest import make_user, make_viewer
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class TestUserService:
    """Tests for profile lookups and updates."""

    @pytest.mark.asyncio
    async def test_get_by_id_missing_raises(self, unit_env):
        user_service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError):
            await user_service.get_by_id(UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_get_user_by_handle(self, unit_env):
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice"))

        assert await user_service.get_user_by_handle(Handle("alice")) == user
        assert await user_service.get_user_by_handle(Handle("bob")) is None

    @pytest.mark.asyncio
    async def test_ensure_profile_creates_once(self, unit_env):
        user_service = await unit_env.get(UserService)
        viewer = make_viewer(make_user("carol"))

        first = await user_service.ensure_profile(viewer)
        second = await user_service.ensure_profile(viewer)

        assert first.id == viewer.user_id
        assert first.karma == 0
        assert second == first

    @pytest.mark.asyncio
    async def test_update_profile_changes_only_given_fields(self, unit_env):
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("dave"))

        await user_service.update_profile(user.id, bio="Physicist")
        updated = await user_service.update_profile(
            user.id, avatar_url="https://example.org/a.png"
        )

        assert updated.bio == "Physicist"
        assert updated.avatar_url == "https://example.org/a.png"

    @pytest.mark.asyncio
    async def test_update_profile_none_clears_field(self, unit_env):
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("erin"))
        await user_service.update_profile(user.id, bio="Temporary")

        updated = await user_service.update_profile(user.id, bio=None)

        assert updated.bio is None

    @pytest.mark.asyncio
    async def test_update_keeps_karma(self, unit_env):
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("frank"))
        await user_repo.adjust_karma(user.id, 7)

        updated = await user_service.update_profile(user.id, bio="Still here")

        assert updated.karma == 7
