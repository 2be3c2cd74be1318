import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Dict, TypeVar

# Per-key locks for serializing updates of the same remote resource.

logger = logging.getLogger(__name__)

T = TypeVar("T")


class KeyedLock:
    """
    One asyncio.Lock per key, created on first use and dropped once nobody
    holds or waits on it, so the table is empty whenever the gate is idle.
    """

    def __init__(self) -> None:
        self._locks: Dict[str, asyncio.Lock] = {}
        self._users: Dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    def locked(self, key: str) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    def _get_lock(self, key: str) -> asyncio.Lock:
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        self._users[key] = self._users.get(key, 0) + 1
        return self._locks[key]

    def _put_lock(self, key: str) -> None:
        users = self._users[key] - 1
        if users:
            self._users[key] = users
        else:
            del self._users[key]
            del self._locks[key]

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        if not key:
            raise ValueError("lock key must be a non-empty string")

        lock = self._get_lock(key)
        try:
            if lock.locked():
                logger.debug("Waiting for lock on %s", key)
            async with lock:
                yield
        finally:
            self._put_lock(key)

    async def run_exclusive(self, key: str, critical_section: Callable[[], Awaitable[T]]) -> T:
        """Run critical_section while holding key; errors propagate after release."""
        async with self.hold(key):
            return await critical_section()
