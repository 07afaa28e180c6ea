"""Concurrent pagination over Link-header collections.

Page 1 is fetched in the caller because only its ``Link`` header tells how
many pages exist. Its body is then decoded on the worker pool while pages
2..N are fetched concurrently. Items keep the server order inside a page;
across pages the order is whatever completes first.

Errors travel on ``PaginationRun.errors``; a terminal ``None`` marks the end
of the run. :func:`handle_errors` applies the caller's policy to that
channel and is the only place that closes the output stream.
"""

from __future__ import annotations

import logging
import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Generic, Protocol, TypeVar

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
from .streams import ItemStream

logger = logging.getLogger("canvas_api_client")

T = TypeVar("T")


class PageFetcher(Protocol):
    def fetch_page(self, request: PaginationRequest, page_number: int) -> Page: ...


class PaginationRun(Generic[T]):
    """Live state of one pagination run."""

    def __init__(self, output: ItemStream[T]) -> None:
        self.output = output
        self.errors: queue.Queue[Exception | None] = queue.Queue()
        self.total_pages: int | None = None
        self._state = RunState.DISCOVERING
        self._pages_in_flight = 0
        self._lock = threading.Lock()
        self._cancelled = threading.Event()
        self._drained = threading.Event()
        self._finished = threading.Event()

    @property
    def state(self) -> RunState:
        with self._lock:
            return self._state

    @property
    def pages_in_flight(self) -> int:
        with self._lock:
            return self._pages_in_flight

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set() or self.output.cancelled

    def cancel(self) -> None:
        self._cancelled.set()

    def report(self, error: Exception) -> None:
        self.errors.put(error)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until every unit of work has completed."""
        return self._finished.wait(timeout)

    def _begin(self, units: int) -> None:
        with self._lock:
            self._pages_in_flight = units
            self._state = RunState.FETCHING

    def _complete_unit(self) -> None:
        with self._lock:
            self._pages_in_flight -= 1
            if self._pages_in_flight > 0:
                return
            self._state = RunState.DRAINING
        self._drained.set()

    def _wait_drained(self) -> None:
        self._drained.wait()

    def _close(self) -> None:
        with self._lock:
            self._state = RunState.CLOSED
        self.errors.put(None)
        self._finished.set()


class Paginator(Generic[T]):
    """Runs one pagination of ``request``; instances are single use."""

    def __init__(
        self,
        transport: PageFetcher,
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
        self.run: PaginationRun[T] | None = None

    def start(self) -> PaginationRun[T]:
        if self.run is not None:
            raise PaginationError("paginator cannot be reused for a second run")
        run: PaginationRun[T] = PaginationRun(ItemStream(self._buffer_size))
        self.run = run

        logger.debug("pagination discovering path=%s", self._request.base_path)
        try:
            first = self._transport.fetch_page(self._request, 1)
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
        executor = ThreadPoolExecutor(
            max_workers=min(self._max_workers, total_pages),
            thread_name_prefix="canvas-page",
        )
        executor.submit(self._decode_unit, run, first)
        for page_number in range(2, total_pages + 1):
            executor.submit(self._fetch_unit, run, page_number)

        coordinator = threading.Thread(
            target=self._coordinate,
            args=(run, executor),
            name="canvas-page-coordinator",
            daemon=True,
        )
        coordinator.start()
        return run

    def stream(self, policy: ErrorPolicy | None = None) -> ItemStream[T]:
        """Start the run and the error-policy adapter; return the item stream."""

        run = self.start()
        adapter = threading.Thread(
            target=handle_errors,
            args=(run, resolve_policy(policy)),
            name="canvas-page-errors",
            daemon=True,
        )
        adapter.start()
        return run.output

    def _fetch_unit(self, run: PaginationRun[T], page_number: int) -> None:
        try:
            if run.cancelled:
                logger.debug("page skipped after cancel page=%s", page_number)
                return
            page = self._transport.fetch_page(self._request, page_number)
            self._dispatch(run, page)
        except Exception as exc:
            run.report(exc)
        finally:
            run._complete_unit()

    def _decode_unit(self, run: PaginationRun[T], page: Page) -> None:
        try:
            self._dispatch(run, page)
        except Exception as exc:
            run.report(exc)
        finally:
            run._complete_unit()

    def _dispatch(self, run: PaginationRun[T], page: Page) -> None:
        if run.cancelled:
            return
        count = 0
        for item in self._decoder(page):
            if not run.output.send(item):
                logger.debug("output closed; dropping rest of page page=%s", page.number)
                return
            count += 1
        logger.debug("page dispatched page=%s items=%s", page.number, count)

    @staticmethod
    def _coordinate(run: PaginationRun[T], executor: ThreadPoolExecutor) -> None:
        run._wait_drained()
        executor.shutdown(wait=True)
        logger.debug("pagination drained total_pages=%s", run.total_pages)
        run._close()


def handle_errors(run: PaginationRun[T], policy: ErrorPolicy) -> None:
    """Consume the error channel and close the output stream exactly once."""

    while True:
        error = run.errors.get()
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


def paginate(
    transport: PageFetcher,
    request: PaginationRequest,
    decoder: PageDecoder[T],
    *,
    policy: ErrorPolicy | None = None,
    max_workers: int = 8,
    buffer_size: int = 64,
) -> ItemStream[T]:
    paginator = Paginator(
        transport,
        request,
        decoder,
        max_workers=max_workers,
        buffer_size=buffer_size,
    )
    return paginator.stream(policy)


def collect(
    transport: PageFetcher,
    request: PaginationRequest,
    decoder: PageDecoder[T],
    *,
    max_workers: int = 8,
    buffer_size: int = 64,
) -> list[T]:
    """Gather every item, raising the first error."""

    stream = paginate(
        transport,
        request,
        decoder,
        policy=raise_error,
        max_workers=max_workers,
        buffer_size=buffer_size,
    )
    return list(stream)


__all__ = [
    "PageFetcher",
    "PaginationRun",
    "Paginator",
    "handle_errors",
    "paginate",
    "collect",
]
