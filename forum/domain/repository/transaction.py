"""Request transaction interface."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from contextlib import AbstractAsyncContextManager

import logfire

AfterCommit = Callable[[], Awaitable[object]]


class Transaction(ABC):
    """The store transaction shared by the repositories of one request.

    Writes become visible when the transaction commits at the end of the
    request. Work registered with ``after_commit`` (live pushes) runs only
    once the commit succeeded and is dropped on rollback.
    """

    def __init__(self) -> None:
        self._after_commit: list[AfterCommit] = []
        self.rollback_only = False

    @abstractmethod
    def savepoint(self) -> AbstractAsyncContextManager[object]:
        """Scope whose writes are undone if it exits with an error.

        The enclosing transaction stays usable afterwards.
        """

    @abstractmethod
    async def _commit(self) -> None:
        pass

    @abstractmethod
    async def _rollback(self) -> None:
        pass

    def after_commit(self, callback: AfterCommit) -> None:
        """Run ``callback`` after a successful commit."""
        self._after_commit.append(callback)

    def set_rollback_only(self) -> None:
        """Roll back at the end of the request even if it succeeds."""
        self.rollback_only = True

    async def complete(self, error: BaseException | None = None) -> bool:
        """Commit, or roll back after an error, then run after-commit work.

        Args:
            error: Exception the request ended with, if any

        Returns:
            True if the transaction committed

        Raises:
            Exception: Whatever the commit raised; after-commit work is
                dropped in that case
        """
        callbacks, self._after_commit = self._after_commit, []
        if error is not None or self.rollback_only:
            logfire.warn(
                "Transaction rolled back",
                error=str(error) if error else None,
                dropped_callbacks=len(callbacks),
            )
            await self._rollback()
            return False

        await self._commit()
        for callback in callbacks:
            await callback()
        return True
