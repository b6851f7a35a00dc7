"""Integration tests for PostgresVoteRepository.

These tests verify the compare-and-set writes and the ``unique_vote``
constraint against a real database.
"""

from uuid import uuid4

import pytest
import pytest_asyncio

from forum.domain.error import ConflictingWriteError
from forum.domain.model import Vote
from forum.domain.repository import PostRepository, UserRepository, VoteRepository
from forum.domain.value import VotableType, VoteDirection, VoteId
from tests.conftest import make_post, make_user

pytestmark = pytest.mark.integration


def make_vote(user, post, direction=VoteDirection.UP) -> Vote:
    return Vote(
        id=VoteId(uuid4()),
        user_id=user.id,
        votable_type=VotableType.POST,
        votable_id=post.id,
        direction=direction,
    )


@pytest_asyncio.fixture
async def voter_and_post(integration_env):
    users = await integration_env.get(UserRepository)
    posts = await integration_env.get(PostRepository)
    author, voter = make_user("author"), make_user("voter")
    await users.save(author)
    await users.save(voter)
    post = await posts.save(make_post(author))
    return voter, post


class TestVoteRepositoryIntegration:
    """Integration tests for PostgresVoteRepository."""

    @pytest.mark.asyncio
    async def test_insert_and_find(self, integration_env, voter_and_post):
        # Arrange
        votes = await integration_env.get(VoteRepository)
        voter, post = voter_and_post

        # Act
        await votes.insert(make_vote(voter, post))
        found = await votes.find_by_user_and_votable(
            voter.id, VotableType.POST, post.id
        )

        # Assert
        assert found is not None
        assert found.direction == VoteDirection.UP

    @pytest.mark.asyncio
    async def test_duplicate_insert_conflicts_and_session_survives(
        self, integration_env, voter_and_post
    ):
        """The savepoint keeps the transaction usable after the conflict."""
        votes = await integration_env.get(VoteRepository)
        voter, post = voter_and_post
        await votes.insert(make_vote(voter, post))

        with pytest.raises(ConflictingWriteError):
            await votes.insert(make_vote(voter, post, VoteDirection.DOWN))

        tally = await votes.tally(VotableType.POST, post.id)
        assert (tally.up, tally.down) == (1, 0)

    @pytest.mark.asyncio
    async def test_flip_requires_expected_direction(
        self, integration_env, voter_and_post
    ):
        votes = await integration_env.get(VoteRepository)
        voter, post = voter_and_post
        await votes.insert(make_vote(voter, post))

        with pytest.raises(ConflictingWriteError):
            await votes.update_direction(
                voter.id, VotableType.POST, post.id, VoteDirection.DOWN, VoteDirection.UP
            )
        flipped = await votes.update_direction(
            voter.id, VotableType.POST, post.id, VoteDirection.UP, VoteDirection.DOWN
        )

        assert flipped.direction == VoteDirection.DOWN
        tally = await votes.tally(VotableType.POST, post.id)
        assert tally.score == -1

    @pytest.mark.asyncio
    async def test_delete_requires_existing_vote(self, integration_env, voter_and_post):
        votes = await integration_env.get(VoteRepository)
        voter, post = voter_and_post

        with pytest.raises(ConflictingWriteError):
            await votes.delete(voter.id, VotableType.POST, post.id, VoteDirection.UP)

        await votes.insert(make_vote(voter, post))
        await votes.delete(voter.id, VotableType.POST, post.id, VoteDirection.UP)

        assert (
            await votes.find_by_user_and_votable(voter.id, VotableType.POST, post.id)
            is None
        )

    @pytest.mark.asyncio
    async def test_batch_lookup(self, integration_env, voter_and_post):
        votes = await integration_env.get(VoteRepository)
        voter, post = voter_and_post
        await votes.insert(make_vote(voter, post))

        found = await votes.find_by_user_and_votables(
            voter.id, VotableType.POST, [post.id, uuid4()]
        )

        assert [vote.votable_id for vote in found] == [post.id]
        assert await votes.find_by_user_and_votables(voter.id, VotableType.POST, []) == []
