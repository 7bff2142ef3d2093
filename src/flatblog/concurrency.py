"""Write lock for the post store."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Protocol, runtime_checkable


@runtime_checkable
class WriteLock(Protocol):
    """Protocol for serializing writers of a shared resource."""

    def acquire(self) -> AbstractAsyncContextManager[None]: ...

    async def aclose(self) -> None: ...


class MemoryLock:
    """Single asyncio lock serializing the store's writers within one process."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[None]:
        async with self._lock:
            yield

    def locked(self) -> bool:
        return self._lock.locked()

    async def aclose(self) -> None:
        pass
