"""Range partitioning for complete table scans.

A ``get_table_rows`` request returns at most one page of rows and flags the
rest as ``more``. RangePartitioner turns that into a complete scan of a key
range: any sub-range whose page comes back truncated is bisected and both
halves are queried concurrently, until every sub-range fits in one page.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass, field
from time import perf_counter

from ...core.exceptions import TransportError
from ...models import Row
from .definitions import DEFAULT_POLL_INTERVAL, KeyRange, RangeReader
from .telemetry import log_range_bisected, log_scan_complete, log_scan_error, log_scan_started


@dataclass
class _ScanState:
    """State owned by a single ``scan`` call."""

    rows: list[Row] = field(default_factory=list)
    in_flight: set[asyncio.Task[None]] = field(default_factory=set)
    error: BaseException | None = None
    requests: int = 0


class RangePartitioner:
    """Enumerates every row of a numeric-keyed table range.

    Concurrency is unbounded: each bisection spawns two queries. Callers
    that expect deep truncation can seed ``hints`` with key boundaries to
    start from a balanced partition.

    Example:
        >>> partitioner = RangePartitioner(read_range)
        >>> rows = await partitioner.scan(KeyRange.of(0, None))
    """

    def __init__(
        self,
        read_range: RangeReader,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        scan_id: str = "table",
    ) -> None:
        """Initialize the partitioner.

        Args:
            read_range: Async callable ``(lower, upper, limit) -> TablePage``
            poll_interval: Seconds between checks for outstanding queries
            scan_id: Identifier used in logs
        """
        self._read_range = read_range
        self._poll_interval = poll_interval
        self._scan_id = scan_id

    async def scan(self, key_range: KeyRange, hints: Iterable[int | str] = ()) -> list[Row]:
        """Return every row in ``key_range``, in no particular order.

        Args:
            key_range: Inclusive key range to enumerate
            hints: Optional key boundaries to pre-partition the range

        Returns:
            All rows in the range, each exactly once

        Raises:
            ChainError: The first error raised by any sub-query; the scan is
                aborted and no partial result is returned
        """
        state = _ScanState()
        partitions = key_range.partition(hints)
        log_scan_started(scan_id=self._scan_id, key_range=key_range, partitions=len(partitions))

        start = perf_counter()
        for sub_range in partitions:
            self._spawn(sub_range, state)

        try:
            # Sub-queries keep spawning children, so there is no fixed set to join
            while state.in_flight and state.error is None:
                await asyncio.sleep(self._poll_interval)
        finally:
            pending = [task for task in state.in_flight if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        if state.error is not None:
            log_scan_error(
                scan_id=self._scan_id,
                error_type=type(state.error).__name__,
                error_message=str(state.error),
            )
            raise state.error

        log_scan_complete(
            scan_id=self._scan_id,
            rows=len(state.rows),
            requests=state.requests,
            latency_ms=(perf_counter() - start) * 1000.0,
        )
        return state.rows

    def _spawn(self, key_range: KeyRange, state: _ScanState) -> None:
        if key_range.is_empty or state.error is not None:
            return
        task = asyncio.create_task(self._query(key_range, state))
        state.in_flight.add(task)
        task.add_done_callback(state.in_flight.discard)

    async def _query(self, key_range: KeyRange, state: _ScanState) -> None:
        try:
            page = await self._read_range(str(key_range.lower), str(key_range.upper), -1)
            state.requests += 1
            if state.error is not None:
                return

            if not page.more:
                state.rows.extend(page.rows)
                return

            if key_range.lower == key_range.upper:
                raise TransportError(
                    f"Node truncated the single-key range [{key_range.lower}] of {self._scan_id}"
                )

            log_range_bisected(
                scan_id=self._scan_id, key_range=key_range, rows_seen=len(page.rows)
            )
            low, high = key_range.bisect()
            self._spawn(low, state)
            self._spawn(high, state)
        except Exception as e:
            # Surfaced by scan(); the first failure wins
            if state.error is None:
                state.error = e
