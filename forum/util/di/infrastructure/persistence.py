"""Persistence infrastructure providers."""

from collections.abc import AsyncGenerator, AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from forum.config import DatabaseSettings
from forum.domain.repository import (
    CommentRepository,
    CommunityRepository,
    NotificationRepository,
    PostRepository,
    Transaction,
    UserRepository,
    VoteRepository,
)
from forum.persistence.database import create_engine, create_session_factory
from forum.persistence.repository import (
    PostgresCommentRepository,
    PostgresCommunityRepository,
    PostgresNotificationRepository,
    PostgresPostRepository,
    PostgresUserRepository,
    PostgresVoteRepository,
)
from forum.persistence.transaction import PostgresTransaction
from forum.util.di.base import ProviderBase
from forum.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base: repositories and the request transaction."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL repositories sharing one session per request."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(self, database: DatabaseSettings) -> AsyncIterator[AsyncEngine]:
        """Provide the engine; its pool is disposed when the app shuts down."""
        engine = create_engine(database)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()
        logfire.info("Database engine disposed")

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide the request's session; closed when the request ends."""
        async with session_factory() as session:
            yield session

    @provide(scope=Scope.REQUEST)
    async def get_transaction(
        self, session: AsyncSession
    ) -> AsyncGenerator[Transaction, BaseException | None]:
        """Provide the request's transaction.

        Completed when the request scope closes: committed, or rolled back
        if the scope closed with an exception or a service marked it
        rollback-only. Pushes queued with ``after_commit`` go out after a
        successful commit.
        """
        transaction = PostgresTransaction(session)
        error = yield transaction
        await transaction.complete(error)

    users = provide(
        PostgresUserRepository, provides=UserRepository, scope=Scope.REQUEST
    )
    communities = provide(
        PostgresCommunityRepository, provides=CommunityRepository, scope=Scope.REQUEST
    )
    posts = provide(
        PostgresPostRepository, provides=PostRepository, scope=Scope.REQUEST
    )
    comments = provide(
        PostgresCommentRepository, provides=CommentRepository, scope=Scope.REQUEST
    )
    votes = provide(
        PostgresVoteRepository, provides=VoteRepository, scope=Scope.REQUEST
    )
    notifications = provide(
        PostgresNotificationRepository,
        provides=NotificationRepository,
        scope=Scope.REQUEST,
    )
