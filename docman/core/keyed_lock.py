"""
Per-key asyncio mutual exclusion.

Serialises coroutines that share a key (job id) while letting different
keys proceed in parallel. Locks are dropped once no coroutine holds or
waits on them, so the registry does not grow with every id ever seen.

Dependencies: asyncio (stdlib)
System role: Same-job serialisation for orchestrator and worker
"""

import asyncio
from collections.abc import AsyncIterator, Hashable
from contextlib import asynccontextmanager


class KeyedLock:
    """Registry of asyncio locks keyed by job id."""

    def __init__(self) -> None:
        self._locks: dict[Hashable, asyncio.Lock] = {}
        self._users: dict[Hashable, int] = {}

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        """
        Hold the lock for a key for the duration of the block.

        Args:
            key: Job id (any hashable)

        Usage:
            async with locks.hold(job_id):
                ...
        """
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]

    def locked(self, key: Hashable) -> bool:
        """Return True when some coroutine currently holds the key."""
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        return len(self._locks)
