"""Bounded close-once item stream shared between worker threads and a consumer."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Iterator
from types import TracebackType
from typing import Generic, TypeVar

T = TypeVar("T")


class ItemStream(Generic[T]):
    """Fan-in channel for paginated items.

    ``close`` lets buffered items drain to the consumer. ``cancel`` and
    ``fail`` discard them and release blocked senders. Only the first of the
    three has an effect; later sends return ``False``. Abandoning a ``for``
    loop over the stream counts as ``cancel``.
    """

    def __init__(self, maxsize: int = 64) -> None:
        if maxsize < 1:
            raise ValueError("maxsize must be >= 1")
        self._maxsize = maxsize
        self._items: deque[T] = deque()
        self._cond = threading.Condition()
        self._closed = False
        self._cancelled = False
        self._error: BaseException | None = None

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    @property
    def cancelled(self) -> bool:
        with self._cond:
            return self._cancelled

    def send(self, item: T) -> bool:
        with self._cond:
            while not self._closed and len(self._items) >= self._maxsize:
                self._cond.wait()
            if self._closed:
                return False
            self._items.append(item)
            self._cond.notify_all()
            return True

    def close(self) -> bool:
        return self._finish(discard=False)

    def cancel(self) -> bool:
        return self._finish(discard=True)

    def fail(self, error: BaseException) -> bool:
        return self._finish(discard=True, error=error)

    def _finish(self, *, discard: bool, error: BaseException | None = None) -> bool:
        with self._cond:
            if self._closed:
                return False
            self._closed = True
            self._cancelled = discard
            self._error = error
            if discard:
                self._items.clear()
            self._cond.notify_all()
            return True

    def __iter__(self) -> Iterator[T]:
        """Yield items until the stream closes.

        Leaving the loop early (``break``, an exception, or dropping the
        iterator) cancels the stream so blocked senders are released.
        """
        try:
            while True:
                try:
                    item = self.__next__()
                except StopIteration:
                    return
                yield item
        finally:
            self.cancel()

    def __next__(self) -> T:
        with self._cond:
            while not self._items and not self._closed:
                self._cond.wait()
            if self._items:
                item = self._items.popleft()
                self._cond.notify_all()
                return item
            error, self._error = self._error, None
        if error is not None:
            raise error
        raise StopIteration

    def __enter__(self) -> "ItemStream[T]":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.cancel()
        return False


__all__ = [
    "ItemStream",
]
