"""Shared fixtures for unit tests: in-memory nodes the scanners can drive."""

from __future__ import annotations

from typing import Any

import pytest

from laakhay.chain.core.exceptions import TransportError, TransportTimeout
from laakhay.chain.models import ActionPage, TablePage


def _bound(value: Any, default: int) -> int:
    if value is None or value == "" or value == -1 or value == "-1":
        return default
    return int(value)


class FakeTable:
    """Table keyed by ``id`` that truncates every answer to ``page_cap`` rows."""

    def __init__(self, rows: list[dict[str, Any]], page_cap: int = 4) -> None:
        self.rows = sorted(rows, key=lambda r: r.get("id", 0))
        self.page_cap = page_cap
        self.calls: list[tuple[Any, Any, int]] = []
        self.error: Exception | None = None

    async def read(self, lower: Any, upper: Any, limit: int) -> TablePage:
        self.calls.append((lower, upper, limit))
        if self.error is not None:
            raise self.error
        lo = _bound(lower, 0)
        hi = _bound(upper, 2**64 - 1)
        matching = [r for r in self.rows if lo <= r.get("id", 0) <= hi]
        # Like nodeos: -1 is one full page, 0 is zero rows
        n = self.page_cap if limit < 0 else min(limit, self.page_cap)
        return TablePage(rows=matching[:n], more=len(matching) > n)


class FakeActionLog:
    """Account action log answering at most ``max_per_call`` actions per request."""

    def __init__(self, count: int, max_per_call: int = 1000) -> None:
        self.actions = [{"account_action_seq": i, "block_num": 1000 + i} for i in range(count)]
        self.max_per_call = max_per_call
        self.calls: list[tuple[int, int]] = []
        self.timeouts = 0
        self.failures: dict[int, int] = {}

    async def read(self, pos: int, offset: int) -> ActionPage:
        self.calls.append((pos, offset))
        if self.timeouts > 0:
            self.timeouts -= 1
            raise TransportTimeout("read timed out", timeout=1.0)
        if self.failures.get(pos, 0) > 0:
            self.failures[pos] -= 1
            raise TransportError(f"node failed at {pos}", status_code=502)
        window = self.actions[pos : pos + offset + 1]
        return ActionPage(actions=window[: self.max_per_call])


@pytest.fixture
def make_table():
    """Factory for FakeTable with ``count`` rows keyed 0..count-1."""

    def _make(count: int = 10, page_cap: int = 4, step: int = 1) -> FakeTable:
        return FakeTable([{"id": i * step, "value": f"row-{i}"} for i in range(count)], page_cap)

    return _make


@pytest.fixture
def make_action_log():
    """Factory for FakeActionLog."""

    def _make(count: int = 25, max_per_call: int = 1000) -> FakeActionLog:
        return FakeActionLog(count, max_per_call)

    return _make
