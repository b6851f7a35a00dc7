"""Fixtures for tests against a real PostgreSQL database.

Assumes postgres is running with migrations applied
(``python scripts/run_migrations.py``).
"""

import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from tests.harness import create_env_fixture

# Real PostgreSQL, everything else as in unit tests
integration_env = create_env_fixture(unmock={"persistence"})


@pytest_asyncio.fixture(autouse=True)
async def clean_database(integration_env):
    """Truncate all tables before each test."""
    session = await integration_env.get(AsyncSession)
    await session.execute(
        text(
            "TRUNCATE TABLE notifications, votes, comments, posts, communities, users"
            " CASCADE"
        )
    )
    await session.commit()

    yield
