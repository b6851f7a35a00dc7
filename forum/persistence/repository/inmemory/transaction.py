"""In-memory transaction for testing."""

from contextlib import AbstractAsyncContextManager, nullcontext

from forum.domain.repository.transaction import Transaction


class InMemoryTransaction(Transaction):
    """Transaction over the in-memory repositories.

    Writes apply immediately and are not undone by a rollback; only the
    outcome is recorded, so tests can check what the request decided.
    """

    def __init__(self) -> None:
        super().__init__()
        self.committed = False
        self.rolled_back = False

    def savepoint(self) -> AbstractAsyncContextManager[object]:
        return nullcontext()

    async def _commit(self) -> None:
        self.committed = True

    async def _rollback(self) -> None:
        self.rolled_back = True
