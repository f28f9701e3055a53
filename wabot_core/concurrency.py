#!/usr/bin/env python
"""
concurrency.py - Provides application-level concurrency utilities.
Defines a keyed lock so that operations on the same record (a config file path,
an identity, ...) are serialized while unrelated keys proceed in parallel.
"""
import asyncio
from collections.abc import AsyncIterator, Hashable
from contextlib import asynccontextmanager


class KeyedLock:
    """
    KeyedLock - one asyncio.Lock per key, created on first use.

    Locks are never evicted; the key space is expected to be small (one per
    config document).
    """

    def __init__(self) -> None:
        self._locks: dict[Hashable, asyncio.Lock] = {}

    def lock_for(self, key: Hashable) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks.setdefault(key, asyncio.Lock())
        return lock

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        """
        hold - Async context manager that acquires the lock specific to *key*.

        Args:
            key: Any hashable used to select the lock.

        Yields:
            None: The caller executes while holding the lock.
        """
        async with self.lock_for(key):
            yield

    def __len__(self) -> int:
        return len(self._locks)


# End of core/concurrency.py
