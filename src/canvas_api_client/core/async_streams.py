"""Bounded close-once item stream for asyncio workers."""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import AsyncIterator
from types import TracebackType
from typing import Generic, TypeVar

T = TypeVar("T")


class AsyncItemStream(Generic[T]):
    """Async counterpart of ItemStream with the same close/cancel/fail contract."""

    def __init__(self, maxsize: int = 64) -> None:
        if maxsize < 1:
            raise ValueError("maxsize must be >= 1")
        self._maxsize = maxsize
        self._items: deque[T] = deque()
        self._changed = asyncio.Event()
        self._closed = False
        self._cancelled = False
        self._error: BaseException | None = None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def _notify(self) -> None:
        # Waiters hold the previous event; swapping wakes all of them at once.
        changed, self._changed = self._changed, asyncio.Event()
        changed.set()

    async def send(self, item: T) -> bool:
        while not self._closed and len(self._items) >= self._maxsize:
            await self._changed.wait()
        if self._closed:
            return False
        self._items.append(item)
        self._notify()
        return True

    def close(self) -> bool:
        return self._finish(discard=False)

    def cancel(self) -> bool:
        return self._finish(discard=True)

    def fail(self, error: BaseException) -> bool:
        return self._finish(discard=True, error=error)

    def _finish(self, *, discard: bool, error: BaseException | None = None) -> bool:
        if self._closed:
            return False
        self._closed = True
        self._cancelled = discard
        self._error = error
        if discard:
            self._items.clear()
        self._notify()
        return True

    async def __aiter__(self) -> AsyncIterator[T]:
        # Closing the iterator early (break, error, garbage collection) cancels the stream.
        try:
            while True:
                try:
                    item = await self.__anext__()
                except StopAsyncIteration:
                    return
                yield item
        finally:
            self.cancel()

    async def __anext__(self) -> T:
        while not self._items and not self._closed:
            await self._changed.wait()
        if self._items:
            item = self._items.popleft()
            self._notify()
            return item
        error, self._error = self._error, None
        if error is not None:
            raise error
        raise StopAsyncIteration

    async def __aenter__(self) -> "AsyncItemStream[T]":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.cancel()
        return False


__all__ = [
    "AsyncItemStream",
]
