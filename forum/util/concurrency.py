"""Async concurrency helpers."""

from collections.abc import AsyncIterator, Hashable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
import asyncio
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)


@dataclass
class _KeyedEntry:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    holders: int = 0  # tasks holding or waiting for the lock


class KeyedLock(Generic[K]):
    """Mutual exclusion per key.

    Tasks acquiring the same key run one at a time in arrival order; tasks
    on different keys never wait for each other. Entries are dropped as soon
    as nobody holds or waits on them, so the registry stays small.

    Usage:
        locks: KeyedLock[tuple[str, str]] = KeyedLock()

        async with locks.hold(("alice", "post-1")):
            ...  # read-decide-write
    """

    def __init__(self) -> None:
        self._entries: dict[K, _KeyedEntry] = {}

    @asynccontextmanager
    async def hold(self, key: K) -> AsyncIterator[None]:
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = _KeyedEntry()
        entry.holders += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.holders -= 1
            if entry.holders == 0 and self._entries.get(key) is entry:
                del self._entries[key]

    def is_held(self, key: K) -> bool:
        """Whether some task currently holds or waits on ``key``."""
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
