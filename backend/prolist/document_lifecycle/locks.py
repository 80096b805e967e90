"""Per-document mutual exclusion for read-modify-write operations."""

import asyncio
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager

from prolist.exceptions import ConcurrentModification
from prolist.models.document import DocumentKey

LockKey = tuple[str, DocumentKey]


class KeyedLockRegistry:
    """asyncio locks keyed by (shipment id, document key).

    Acquisition is bounded by `timeout`; a caller that cannot get the lock
    in time gets ConcurrentModification instead of waiting forever. A lock
    is dropped once no holder or waiter refers to it.
    """

    def __init__(self, timeout: float = 5.0):
        self.timeout = timeout
        self._locks: dict[LockKey, asyncio.Lock] = {}
        self._users: dict[LockKey, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    def _checkout(self, key: LockKey) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        self._users[key] = self._users.get(key, 0) + 1
        return lock

    def _checkin(self, key: LockKey) -> None:
        remaining = self._users[key] - 1
        if remaining:
            self._users[key] = remaining
        else:
            del self._users[key]
            del self._locks[key]

    async def _acquire(self, key: LockKey) -> None:
        lock = self._checkout(key)
        try:
            await asyncio.wait_for(lock.acquire(), timeout=self.timeout)
        except TimeoutError as e:
            self._checkin(key)
            raise ConcurrentModification(
                f"Timed out waiting for {key[1].value} on shipment {key[0]}"
            ) from e
        except BaseException:
            self._checkin(key)
            raise

    def _release(self, key: LockKey) -> None:
        self._locks[key].release()
        self._checkin(key)

    @asynccontextmanager
    async def hold(self, shipment_id: str, doc_key: DocumentKey) -> AsyncIterator[None]:
        key = (shipment_id, doc_key)
        await self._acquire(key)
        try:
            yield
        finally:
            self._release(key)

    @asynccontextmanager
    async def hold_many(
        self, shipment_id: str, doc_keys: Iterable[DocumentKey]
    ) -> AsyncIterator[None]:
        """Hold several keys of one shipment; acquired in sorted order."""
        acquired: list[LockKey] = []
        try:
            for doc_key in sorted(set(doc_keys), key=lambda k: k.value):
                key = (shipment_id, doc_key)
                await self._acquire(key)
                acquired.append(key)
            yield
        finally:
            for key in reversed(acquired):
                self._release(key)

    def is_locked(self, shipment_id: str, doc_key: DocumentKey) -> bool:
        lock = self._locks.get((shipment_id, doc_key))
        return lock is not None and lock.locked()
