"""Bounded history of submitted write payloads."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from typing import Any


class StoryBoard:
    """Fixed-capacity FIFO; pushing onto a full board evicts the oldest entry.

    Purely diagnostic: nothing on the read path consults it.
    """

    def __init__(self, capacity: int = 1000) -> None:
        if capacity < 1:
            raise ValueError("StoryBoard capacity must be at least 1")
        self._entries: deque[Any] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    def push(self, entry: Any) -> None:
        self._entries.append(entry)

    def to_list(self) -> list[Any]:
        """Entries from oldest to newest."""
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._entries)
