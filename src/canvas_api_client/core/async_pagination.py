"""Async concurrent pagination over Link-header collections."""

from __future__ import annotations

import asyncio
import logging
from typing import Generic, Protocol, TypeVar

from .async_streams import AsyncItemStream
from .decoding import PageDecoder
from .errors import PaginationError
from .links import parse_link_header
from .models import Page, PaginationRequest
from .pagination_shared import (
    ErrorPolicy,
    PolicyDecision,
    RunState,
    apply_policy,
    raise_error,
    resolve_policy,
)

logger = logging.getLogger("canvas_api_client")

T = TypeVar("T")

# Strong references so pending run tasks are not garbage collected.
_BACKGROUND_TASKS: set[asyncio.Task[None]] = set()


class AsyncPageFetcher(Protocol):
    async def fetch_page(self, request: PaginationRequest, page_number: int) -> Page: ...


class AsyncPaginationRun(Generic[T]):
    """Live state of one async pagination run."""

    def __init__(self, output: AsyncItemStream[T]) -> None:
        self.output = output
        self.errors: asyncio.Queue[Exception | None] = asyncio.Queue()
        self.total_pages: int | None = None
        self.state = RunState.DISCOVERING
        self.pages_in_flight = 0
        self._cancelled = asyncio.Event()
        self._drained = asyncio.Event()
        self._finished = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set() or self.output.cancelled

    def cancel(self) -> None:
        self._cancelled.set()

    def report(self, error: Exception) -> None:
        self.errors.put_nowait(error)

    async def wait(self) -> None:
        await self._finished.wait()

    def _begin(self, units: int) -> None:
        self.pages_in_flight = units
        self.state = RunState.FETCHING

    def _complete_unit(self) -> None:
        self.pages_in_flight -= 1
        if self.pages_in_flight > 0:
            return
        self.state = RunState.DRAINING
        self._drained.set()

    def _close(self) -> None:
        self.state = RunState.CLOSED
        self.errors.put_nowait(None)
        self._finished.set()


class AsyncPaginator(Generic[T]):
    """Async counterpart of Paginator; instances are single use."""

    def __init__(
        self,
        transport: AsyncPageFetcher,
        request: PaginationRequest,
        decoder: PageDecoder[T],
        *,
        max_workers: int = 8,
        buffer_size: int = 64,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self._transport = transport
        self._request = request
        self._decoder = decoder
        self._max_workers = max_workers
        self._buffer_size = buffer_size
        self.run: AsyncPaginationRun[T] | None = None

    async def start(self) -> AsyncPaginationRun[T]:
        if self.run is not None:
            raise PaginationError("paginator cannot be reused for a second run")
        run: AsyncPaginationRun[T] = AsyncPaginationRun(AsyncItemStream(self._buffer_size))
        self.run = run

        logger.debug("pagination discovering path=%s", self._request.base_path)
        try:
            first = await self._transport.fetch_page(self._request, 1)
            links = parse_link_header(first.link_header)
        except Exception as exc:
            logger.error(
                "pagination discovery failed path=%s error=%s",
                self._request.base_path,
                exc.__class__.__name__,
            )
            run.report(exc)
            run._close()
            return run

        total_pages = links.total_pages
        run.total_pages = total_pages
        if total_pages == 0:
            logger.info("pagination empty path=%s", self._request.base_path)
            run._close()
            return run

        logger.info(
            "pagination fetching path=%s total_pages=%s per_page=%s",
            self._request.base_path,
            total_pages,
            self._request.per_page,
        )
        run._begin(total_pages)
        limiter = asyncio.Semaphore(self._max_workers)
        self._spawn(self._decode_unit(run, first))
        for page_number in range(2, total_pages + 1):
            self._spawn(self._fetch_unit(run, page_number, limiter))
        self._spawn(self._coordinate(run))
        return run

    async def stream(self, policy: ErrorPolicy | None = None) -> AsyncItemStream[T]:
        """Start the run and the error-policy adapter; return the item stream."""

        run = await self.start()
        self._spawn(handle_errors(run, resolve_policy(policy)))
        return run.output

    @staticmethod
    def _spawn(coro) -> None:
        task = asyncio.create_task(coro)
        _BACKGROUND_TASKS.add(task)
        task.add_done_callback(_BACKGROUND_TASKS.discard)

    async def _fetch_unit(
        self,
        run: AsyncPaginationRun[T],
        page_number: int,
        limiter: asyncio.Semaphore,
    ) -> None:
        try:
            async with limiter:
                if run.cancelled:
                    logger.debug("page skipped after cancel page=%s", page_number)
                    return
                page = await self._transport.fetch_page(self._request, page_number)
            await self._dispatch(run, page)
        except Exception as exc:
            run.report(exc)
        finally:
            run._complete_unit()

    async def _decode_unit(self, run: AsyncPaginationRun[T], page: Page) -> None:
        try:
            await self._dispatch(run, page)
        except Exception as exc:
            run.report(exc)
        finally:
            run._complete_unit()

    async def _dispatch(self, run: AsyncPaginationRun[T], page: Page) -> None:
        if run.cancelled:
            return
        count = 0
        for item in self._decoder(page):
            if not await run.output.send(item):
                logger.debug("output closed; dropping rest of page page=%s", page.number)
                return
            count += 1
        logger.debug("page dispatched page=%s items=%s", page.number, count)

    @staticmethod
    async def _coordinate(run: AsyncPaginationRun[T]) -> None:
        await run._drained.wait()
        logger.debug("pagination drained total_pages=%s", run.total_pages)
        run._close()


async def handle_errors(run: AsyncPaginationRun[T], policy: ErrorPolicy) -> None:
    """Consume the error channel and close the output stream exactly once."""

    while True:
        error = await run.errors.get()
        if error is None:
            run.output.close()
            return
        decision, detail = apply_policy(policy, error)
        if decision is PolicyDecision.CONTINUE:
            continue
        run.cancel()
        if decision is PolicyDecision.FAIL and detail is not None:
            run.output.fail(detail)
        else:
            run.output.cancel()
        return


async def apaginate(
    transport: AsyncPageFetcher,
    request: PaginationRequest,
    decoder: PageDecoder[T],
    *,
    policy: ErrorPolicy | None = None,
    max_workers: int = 8,
    buffer_size: int = 64,
) -> AsyncItemStream[T]:
    paginator = AsyncPaginator(
        transport,
        request,
        decoder,
        max_workers=max_workers,
        buffer_size=buffer_size,
    )
    return await paginator.stream(policy)


async def acollect(
    transport: AsyncPageFetcher,
    request: PaginationRequest,
    decoder: PageDecoder[T],
    *,
    max_workers: int = 8,
    buffer_size: int = 64,
) -> list[T]:
    """Gather every item, raising the first error."""

    stream = await apaginate(
        transport,
        request,
        decoder,
        policy=raise_error,
        max_workers=max_workers,
        buffer_size=buffer_size,
    )
    return [item async for item in stream]


__all__ = [
    "AsyncPageFetcher",
    "AsyncPaginationRun",
    "AsyncPaginator",
    "handle_errors",
    "apaginate",
    "acollect",
]
