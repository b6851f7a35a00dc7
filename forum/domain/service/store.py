"""Guarded repository calls for domain services.

Every store access made by a domain service goes through ``StoreCalls``,
so raw SQLAlchemy errors never leave the domain layer:

    IntegrityError                       -> ConflictingWriteError
    DBAPIError, TimeoutError, OSError    -> retried, then StoreUnavailableError
    any other SQLAlchemyError            -> StoreUnavailableError

A retried read runs inside a savepoint so that the failed attempt is
rolled back and the request's transaction is still usable for the next
one.
"""

import asyncio
from collections.abc import Awaitable, Callable
from contextlib import AbstractAsyncContextManager, nullcontext
from typing import TypeVar

import logfire
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError

from forum.config import StoreSettings
from forum.domain.error import ConflictingWriteError, StoreUnavailableError
from forum.domain.repository import Transaction

T = TypeVar("T")

# Worth another attempt; covers dropped connections, query cancellation
# and DNS failures. IntegrityError is handled before these.
TRANSIENT_ERRORS = (DBAPIError, TimeoutError, OSError)


class StoreCalls:
    """Runs repository calls with a timeout, retries and error conversion."""

    def __init__(self, transaction: Transaction, settings: StoreSettings) -> None:
        """Initialize store calls.

        Args:
            transaction: The request's transaction (savepoints, rollback)
            settings: Timeout and retry budget
        """
        self.transaction = transaction
        self.settings = settings

    async def __call__(
        self,
        operation: str,
        call: Callable[[], Awaitable[T]],
        retry: bool = True,
    ) -> T:
        """Run one store call.

        Pass ``retry=False`` for writes that must not be repeated.

        Args:
            operation: Name used in logs and errors
            call: Factory producing the awaitable (called once per attempt)
            retry: Whether a transient failure may be retried

        Returns:
            Whatever the call returned

        Raises:
            StoreUnavailableError: If the store kept failing
            ConflictingWriteError: If the call violated a constraint
        """
        attempts = self.settings.unavailable_retries + 1 if retry else 1
        for attempt in range(1, attempts + 1):
            isolated = attempts > 1
            try:
                async with self._scope(isolated):
                    async with asyncio.timeout(self.settings.timeout_seconds):
                        return await call()
            except IntegrityError as e:
                if not isolated:
                    self.transaction.set_rollback_only()
                logfire.warn("Store write conflicted", operation=operation, error=str(e))
                raise ConflictingWriteError() from e
            except TRANSIENT_ERRORS as e:
                if attempt >= attempts:
                    self._give_up(operation, e)
                    raise StoreUnavailableError(operation, e) from e
                logfire.warn(
                    "Transient store failure, retrying",
                    operation=operation,
                    attempt=attempt,
                    error=str(e),
                )
            except SQLAlchemyError as e:
                # e.g. PendingRollbackError once the connection was lost
                self._give_up(operation, e)
                raise StoreUnavailableError(operation, e) from e
        raise AssertionError("unreachable")  # pragma: no cover

    def _scope(self, isolated: bool) -> AbstractAsyncContextManager[object]:
        return self.transaction.savepoint() if isolated else nullcontext()

    def _give_up(self, operation: str, error: Exception) -> None:
        self.transaction.set_rollback_only()
        logfire.error("Store unavailable", operation=operation, error=str(error))
