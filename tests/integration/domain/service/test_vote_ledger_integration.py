"""Integration test for VoteLedger with a real database."""

import pytest

from forum.domain.repository import PostRepository, UserRepository
from forum.domain.service import VoteLedger
from forum.domain.value import VotableType, VoteDirection, VoteTransition
from tests.conftest import make_post, make_user

pytestmark = pytest.mark.integration


class TestVoteLedgerIntegration:
    """Vote transitions through PostgreSQL."""

    @pytest.mark.asyncio
    async def test_insert_flip_retract(self, integration_env):
        """Score cache and author karma follow every transition."""
        # Arrange
        users = await integration_env.get(UserRepository)
        posts = await integration_env.get(PostRepository)
        ledger = await integration_env.get(VoteLedger)
        author = await users.save(make_user("author"))
        voter = await users.save(make_user("voter"))
        post = await posts.save(make_post(author))

        # Act
        outcomes = [
            await ledger.apply_vote(voter.id, VotableType.POST, post.id, direction)
            for direction in (VoteDirection.UP, VoteDirection.DOWN, VoteDirection.DOWN)
        ]

        # Assert
        assert [(o.transition, o.new_score) for o in outcomes] == [
            (VoteTransition.INSERT, 1),
            (VoteTransition.FLIP, -1),
            (VoteTransition.RETRACT, 0),
        ]
        assert (await posts.find_by_id(post.id)).vote_score == 0
        assert (await users.find_by_id(author.id)).karma == 0
