"""Structured logging for scan operations.

This module provides telemetry hooks for the scanners, emitting structured
log records (event name as message, details in ``extra``).
"""

from __future__ import annotations

import logging

from .definitions import KeyRange

logger = logging.getLogger(__name__)


def log_scan_started(*, scan_id: str, key_range: KeyRange, partitions: int) -> None:
    """Log the start of a range scan.

    Args:
        scan_id: Identifier of the scanned table
        key_range: Full range being scanned
        partitions: Number of sub-ranges seeded from hints
    """
    logger.info(
        "scan_started",
        extra={
            "scan_id": scan_id,
            "lower": str(key_range.lower),
            "upper": str(key_range.upper),
            "partitions": partitions,
        },
    )


def log_range_bisected(*, scan_id: str, key_range: KeyRange, rows_seen: int) -> None:
    """Log a truncated sub-range being split in two."""
    logger.debug(
        "range_bisected",
        extra={
            "scan_id": scan_id,
            "lower": str(key_range.lower),
            "upper": str(key_range.upper),
            "rows_seen": rows_seen,
        },
    )


def log_cursor_advanced(*, scan_id: str, cursor: object, rows_total: int, limit: int) -> None:
    """Log a cursor continuation after a truncated page."""
    logger.info(
        "cursor_advanced",
        extra={
            "scan_id": scan_id,
            "cursor": str(cursor),
            "rows_total": rows_total,
            "limit": limit,
        },
    )


def log_truncation_advisory(*, scan_id: str, rows: int, limit: int) -> None:
    """Log a truncated single-shot read that was returned as-is."""
    logger.warning(
        "truncation_not_followed",
        extra={"scan_id": scan_id, "rows": rows, "limit": limit},
    )


def log_window_timeout(*, scan_id: str, pos: int, end_pos: int, attempt: int) -> None:
    """Log a history window request that timed out and will be retried."""
    logger.warning(
        "window_timeout",
        extra={"scan_id": scan_id, "pos": pos, "end_pos": end_pos, "attempt": attempt},
    )


def log_window_retry(
    *,
    scan_id: str,
    pos: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a failed batch window that will be re-issued.

    Args:
        scan_id: Identifier of the scanned log
        pos: First sequence number of the window
        error_type: Type of error (e.g., "TransportError")
        error_message: Error message
    """
    logger.error(
        "window_retry",
        extra={
            "scan_id": scan_id,
            "pos": pos,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_batch_dispatched(*, scan_id: str, batch_index: int, positions: list[int]) -> None:
    """Log a batch of windows being dispatched."""
    logger.debug(
        "batch_dispatched",
        extra={"scan_id": scan_id, "batch_index": batch_index, "positions": positions},
    )


def log_scan_complete(
    *,
    scan_id: str,
    rows: int,
    requests: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a scan.

    Args:
        scan_id: Identifier of the scanned table or log
        rows: Number of rows or actions collected/delivered
        requests: Number of remote requests (or windows) issued
        latency_ms: Total latency in milliseconds (optional)
    """
    logger.info(
        "scan_complete",
        extra={
            "scan_id": scan_id,
            "rows": rows,
            "requests": requests,
            "latency_ms": latency_ms,
        },
    )


def log_scan_error(*, scan_id: str, error_type: str, error_message: str) -> None:
    """Log a scan aborted by an unrecoverable error."""
    logger.error(
        "scan_error",
        extra={
            "scan_id": scan_id,
            "error_type": error_type,
            "error_message": error_message,
        },
    )
