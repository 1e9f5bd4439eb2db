"""Batched, concurrent enumeration of an action log."""

from __future__ import annotations

import asyncio
import inspect
from time import perf_counter

from ...core.exceptions import ChainError, InvalidRange
from ...models import Row
from .definitions import DEFAULT_CONCURRENCY, DEFAULT_PAGE_SIZE, PageCallback
from .sequence import SequenceScanner
from .telemetry import log_batch_dispatched, log_scan_complete, log_window_retry


class BatchDispatcher:
    """Walks an action log in batches of concurrent windows.

    Each batch requests ``concurrency`` consecutive windows of ``page_size``
    actions. Pages are handed to the callback in sequence order, and only
    while every earlier page of the batch was full: the first short page is
    the end of the log, so it is delivered and the scan stops. Pages that
    arrive after it are discarded.
    """

    def __init__(
        self,
        scanner: SequenceScanner,
        *,
        retry_delay: float = 0.0,
        scan_id: str = "actions",
    ) -> None:
        """Initialize the dispatcher.

        Args:
            scanner: Scanner used for every window
            retry_delay: Seconds to wait before re-issuing a failed window
            scan_id: Identifier used in logs
        """
        self._scanner = scanner
        self._retry_delay = retry_delay
        self._scan_id = scan_id

    async def scan_all_batches(
        self,
        on_page: PageCallback | None,
        start_pos: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> bool:
        """Deliver every action from ``start_pos`` to the end of the log.

        Args:
            on_page: Called with each page of actions; may be a coroutine function
            start_pos: First sequence number
            page_size: Actions per window
            concurrency: Windows per batch

        Returns:
            True once the log is exhausted; False if no callback was given
        """
        if on_page is None:
            return False
        if page_size < 1:
            raise InvalidRange(f"page_size ({page_size}) must be at least 1")
        if concurrency < 1:
            raise InvalidRange(f"concurrency ({concurrency}) must be at least 1")

        offset = page_size - 1
        next_pos = start_pos
        batch_index = 0
        delivered = 0
        windows = 0
        start = perf_counter()

        while True:
            positions = [next_pos + i * page_size for i in range(concurrency)]
            next_pos += concurrency * page_size
            log_batch_dispatched(scan_id=self._scan_id, batch_index=batch_index, positions=positions)

            results = await asyncio.gather(*(self._fetch_window(pos, offset) for pos in positions))
            windows += len(positions)

            pages = [page for page in results if page]
            if not pages:
                break

            all_full = True
            for page in pages:
                result = on_page(page)
                if inspect.isawaitable(result):
                    await result
                delivered += len(page)
                if len(page) < page_size:
                    all_full = False
                    break

            if not all_full:
                break
            batch_index += 1

        log_scan_complete(
            scan_id=self._scan_id,
            rows=delivered,
            requests=windows,
            latency_ms=(perf_counter() - start) * 1000.0,
        )
        return True

    async def _fetch_window(self, pos: int, offset: int) -> list[Row]:
        while True:
            try:
                return await self._scanner.scan_window(pos, offset)
            except ChainError as e:
                log_window_retry(
                    scan_id=self._scan_id,
                    pos=pos,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                if self._retry_delay:
                    await asyncio.sleep(self._retry_delay)
