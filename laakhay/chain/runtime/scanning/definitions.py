"""Scan metadata definitions and policy structures.

This module defines the data structures shared by the scanners: the key
range being enumerated, the reader callables the scanners drive, and the
policy knobs (polling, timeouts, batch shape).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any

from ...core.exceptions import InvalidRange
from ...models import ActionPage, Row, TablePage

MAX_KEY = 2**64 - 1

DEFAULT_POLL_INTERVAL = 0.05
DEFAULT_FETCH_TIMEOUT = 60.0
DEFAULT_PAGE_SIZE = 100
DEFAULT_CONCURRENCY = 10
DEFAULT_CURSOR_LIMIT = 9_999_999

# Bounds are keys (int) or anything the node accepts as a bound (decimal
# strings, account names); limit -1 asks for as many rows as fit in one page.
RangeReader = Callable[[Any, Any, int], Awaitable[TablePage]]
# (pos, offset) -> actions with sequence numbers in [pos, pos + offset]
SequenceReader = Callable[[int, int], Awaitable[ActionPage]]
PageCallback = Callable[[list[Row]], Any]


def _to_key(value: int | str) -> int:
    try:
        key = int(value)
    except (TypeError, ValueError) as e:
        raise InvalidRange(f"Key {value!r} is not an unsigned integer") from e
    if key < 0:
        raise InvalidRange(f"Key {value!r} is negative")
    return key


@dataclass(frozen=True)
class KeyRange:
    """Inclusive range of uint64 table keys.

    Attributes:
        lower: First key of the range
        upper: Last key of the range; the range is empty when lower > upper
    """

    lower: int
    upper: int

    @classmethod
    def of(cls, lower: int | str | None = 0, upper: int | str | None = None) -> KeyRange:
        """Build a range from caller bounds.

        ``lower=None`` means 0. ``upper=None`` (or the legacy ``-1``) means no
        upper bound and maps to MAX_KEY.

        Examples:
            >>> KeyRange.of(0, 10)
            KeyRange(lower=0, upper=10)
            >>> KeyRange.of(None, -1).upper == MAX_KEY
            True
        """
        low = 0 if lower is None else _to_key(lower)
        if upper is None or upper == -1 or upper == "-1":
            high = MAX_KEY
        else:
            high = _to_key(upper)
        return cls(low, high)

    @property
    def is_empty(self) -> bool:
        return self.lower > self.upper

    def bisect(self) -> tuple[KeyRange, KeyRange]:
        """Split into two adjacent halves that together cover the range.

        The split point rounds up, so a two-key range splits into two
        single-key ranges and every split makes progress.
        """
        if self.upper <= self.lower:
            raise InvalidRange(f"Cannot bisect range [{self.lower}, {self.upper}]")
        mid = self.lower + (self.upper - self.lower + 1) // 2
        return KeyRange(self.lower, mid - 1), KeyRange(mid, self.upper)

    def partition(self, hints: Iterable[int | str]) -> list[KeyRange]:
        """Cut the range into contiguous sub-ranges starting at each hint.

        Hints outside ``(lower, upper]`` are ignored; duplicates collapse.
        Sub-ranges share no keys.
        """
        bounds = sorted({k for k in (_to_key(h) for h in hints) if self.lower < k <= self.upper})
        ranges: list[KeyRange] = []
        lower = self.lower
        for bound in bounds:
            ranges.append(KeyRange(lower, bound - 1))
            lower = bound
        ranges.append(KeyRange(lower, self.upper))
        return ranges


@dataclass(frozen=True)
class ScanPolicy:
    """Tuning knobs for the scanners.

    Attributes:
        poll_interval: Seconds between in-flight checks of a range scan
        fetch_timeout: Per-request timeout for history windows (seconds)
        page_size: Actions per history window in batch scans
        concurrency: Windows per batch in batch scans
        retry_delay: Pause before re-issuing a failed window (0 = immediately)
        cursor_limit: Default row limit for cursor pagination
    """

    poll_interval: float = DEFAULT_POLL_INTERVAL
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    page_size: int = DEFAULT_PAGE_SIZE
    concurrency: int = DEFAULT_CONCURRENCY
    retry_delay: float = 0.0
    cursor_limit: int = DEFAULT_CURSOR_LIMIT

    def __post_init__(self) -> None:
        """Validate policy configuration."""
        if self.poll_interval <= 0:
            raise ValueError("ScanPolicy poll_interval must be positive")
        if self.fetch_timeout <= 0:
            raise ValueError("ScanPolicy fetch_timeout must be positive")
        if self.page_size < 1:
            raise ValueError("ScanPolicy page_size must be at least 1")
        if self.concurrency < 1:
            raise ValueError("ScanPolicy concurrency must be at least 1")
        if self.retry_delay < 0:
            raise ValueError("ScanPolicy retry_delay cannot be negative")
