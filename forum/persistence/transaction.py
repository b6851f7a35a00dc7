"""PostgreSQL request transaction."""

from contextlib import AbstractAsyncContextManager

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.repository import Transaction


class PostgresTransaction(Transaction):
    """Transaction of the request's ``AsyncSession``.

    Savepoints map to ``SAVEPOINT`` via ``begin_nested``, so a failed
    statement inside one does not abort the whole transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize transaction.

        Args:
            session: The request's session
        """
        super().__init__()
        self.session = session

    def savepoint(self) -> AbstractAsyncContextManager[object]:
        return self.session.begin_nested()

    async def _commit(self) -> None:
        await self.session.commit()
        logfire.debug("Session committed")

    async def _rollback(self) -> None:
        await self.session.rollback()
