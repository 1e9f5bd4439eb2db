"""Complete enumeration over bounded, truncating RPC reads.

Architecture:
    The scanning layer turns single-page reads into complete scans:
    - definitions.py: KeyRange, ScanPolicy, reader callable types
    - partitioner.py: RangePartitioner (bisect truncated key ranges)
    - cursor.py: CursorPaginator (follow the primary-key cursor)
    - sequence.py: SequenceScanner (one window of an action log)
    - dispatcher.py: BatchDispatcher (concurrent windows to end of log)
    - telemetry.py: Structured logging

Usage:
    Scanners take reader callables rather than a connector, so any backend
    that can answer a bounded range or window query can be scanned.
"""

from __future__ import annotations

from .cursor import CursorPaginator, field_accessor
from .definitions import (
    MAX_KEY,
    KeyRange,
    PageCallback,
    RangeReader,
    ScanPolicy,
    SequenceReader,
)
from .dispatcher import BatchDispatcher
from .partitioner import RangePartitioner
from .sequence import SequenceScanner

__all__ = [
    "MAX_KEY",
    "KeyRange",
    "ScanPolicy",
    "RangeReader",
    "SequenceReader",
    "PageCallback",
    "RangePartitioner",
    "CursorPaginator",
    "SequenceScanner",
    "BatchDispatcher",
    "field_accessor",
]
