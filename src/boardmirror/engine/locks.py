"""Per-board serialization of replica mutations."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class BoardLocks:
    """Registry of one :class:`asyncio.Lock` per board id.

    Operations on the same board run one at a time; different boards never
    wait on each other.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def lock_for(self, board_id: str) -> asyncio.Lock:
        lock = self._locks.get(board_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[board_id] = lock
        return lock

    @asynccontextmanager
    async def hold(self, board_id: str) -> AsyncIterator[None]:
        async with self.lock_for(board_id):
            yield
