"""Cursor pagination over truncated table reads.

When a page comes back truncated, the primary key of its last row becomes the
next request's lower bound. Lower bounds are inclusive, so every continuation
starts with the row that ended the previous page; that repeat is dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ...core.exceptions import MissingCursorKey, TransportError
from ...models import Row
from .definitions import DEFAULT_CURSOR_LIMIT, RangeReader
from .telemetry import log_cursor_advanced, log_scan_complete

logger = logging.getLogger(__name__)


def field_accessor(primary_key: str) -> Callable[[Row], Any]:
    """Accessor reading ``primary_key`` from a row (None when absent)."""

    def _get(row: Row) -> Any:
        return row.get(primary_key)

    return _get


class CursorPaginator:
    """Reads a table to completion by following the primary-key cursor."""

    def __init__(
        self,
        read_range: RangeReader,
        primary_key_of: Callable[[Row], Any],
        *,
        primary_key: str = "id",
        scan_id: str = "table",
    ) -> None:
        """Initialize the paginator.

        Args:
            read_range: Async callable ``(lower, upper, limit) -> TablePage``
            primary_key_of: Returns the cursor value of a row, or None
            primary_key: Name of the cursor field, for diagnostics
            scan_id: Identifier used in logs
        """
        self._read_range = read_range
        self._primary_key_of = primary_key_of
        self._primary_key = primary_key
        self._scan_id = scan_id

    async def scan_all(
        self,
        *,
        lower_bound: Any = 0,
        upper_bound: Any = -1,
        limit: int = DEFAULT_CURSOR_LIMIT,
    ) -> list[Row]:
        """Collect up to ``limit`` rows from ``lower_bound`` on.

        Args:
            lower_bound: First key (inclusive)
            upper_bound: Last key (-1 for none)
            limit: Maximum rows to return; ``<= 0`` means no limit

        Returns:
            Rows in encounter order, without the repeated cursor rows

        Raises:
            MissingCursorKey: A truncated page has a row without the primary key
            TransportError: The node keeps truncating without advancing the cursor
        """
        rows: list[Row] = []
        lower = lower_bound
        remaining = limit
        cursor: Any = None
        requests = 0

        while True:
            # -1 asks the node for as many rows as fit in one page
            page = await self._read_range(lower, upper_bound, remaining if remaining > 0 else -1)
            requests += 1
            page_rows = page.rows

            if cursor is not None and page_rows and self._primary_key_of(page_rows[0]) == cursor:
                rows.extend(page_rows[1:])
            else:
                rows.extend(page_rows)

            filled = remaining > 0 and len(page_rows) >= remaining
            if not page.more or filled:
                break

            first = self._primary_key_of(page_rows[0]) if page_rows else None
            last = self._primary_key_of(page_rows[-1]) if page_rows else None
            if first is None or last is None:
                offending = None
                if page_rows:
                    offending = page_rows[-1] if last is None else page_rows[0]
                logger.error(
                    f"Cannot continue {self._scan_id}: primary key {self._primary_key!r} "
                    f"missing from truncated page (row: {offending!r})"
                )
                raise MissingCursorKey(
                    f"Primary key {self._primary_key!r} not found in {self._scan_id}",
                    primary_key=self._primary_key,
                    row=offending,
                )

            if last == cursor:
                raise TransportError(
                    f"Cursor for {self._scan_id} did not advance past {cursor!r}"
                )

            cursor = last
            lower = last
            if remaining > 0:
                remaining = remaining - len(page_rows) + 1
            log_cursor_advanced(
                scan_id=self._scan_id, cursor=cursor, rows_total=len(rows), limit=remaining
            )

        if limit > 0:
            rows = rows[:limit]
        log_scan_complete(scan_id=self._scan_id, rows=len(rows), requests=requests)
        return rows
