"""Windowed reads of an account's sequence-numbered action log."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from ...core.exceptions import InvalidRange, MalformedResponseError, TransportTimeout
from ...models import Row, action_seq
from .definitions import DEFAULT_FETCH_TIMEOUT, SequenceReader
from .telemetry import log_window_timeout

logger = logging.getLogger(__name__)


class SequenceScanner:
    """Reads one contiguous window of the action log.

    A window ``[start_pos, start_pos + offset]`` may take several requests
    when the node returns fewer actions than asked for; the scanner keeps
    asking from the sequence after the last one received until the window is
    covered or the log ends.

    Timeouts are retried forever, immediately and with the same request.
    Any other error propagates to the caller.
    """

    def __init__(
        self,
        read_window: SequenceReader,
        *,
        sequence_of: Callable[[Row], int] = action_seq,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        scan_id: str = "actions",
    ) -> None:
        self._read_window = read_window
        self._sequence_of = sequence_of
        self._timeout = timeout
        self._scan_id = scan_id

    async def scan_window(
        self,
        start_pos: int = 0,
        offset: int = 0,
        timeout: float | None = None,
    ) -> list[Row]:
        """Return the actions with sequence numbers in ``[start_pos, start_pos + offset]``.

        Args:
            start_pos: First sequence number (0-based)
            offset: Window size minus one; 0 asks for a single action
            timeout: Per-request timeout in seconds (defaults to the scanner's)

        Returns:
            Actions in ascending sequence order; shorter than ``offset + 1``
            when the log ends inside the window

        Raises:
            InvalidRange: If ``offset`` is negative
            MalformedResponseError: If the node answers without an action list
        """
        if offset < 0:
            raise InvalidRange(f"Window offset ({offset}) must not be negative")

        timeout = self._timeout if timeout is None else timeout
        pos = start_pos
        end_pos = start_pos + offset
        actions: list[Row] = []
        attempt = 0
        logger.debug(f"{self._scan_id}: window [{start_pos}, {end_pos}] started")

        while True:
            try:
                page = await asyncio.wait_for(self._read_window(pos, end_pos - pos), timeout)
            except (TimeoutError, TransportTimeout):
                attempt += 1
                log_window_timeout(scan_id=self._scan_id, pos=pos, end_pos=end_pos, attempt=attempt)
                continue

            if page is None:
                raise MalformedResponseError(
                    f"No actions returned for {self._scan_id} (pos: {pos}, offset: {offset})"
                )

            received = page.actions
            max_seq = self._sequence_of(received[-1]) if received else pos - 1
            if max_seq < pos:
                break

            actions.extend(received)
            if max_seq >= end_pos:
                break
            pos = max_seq + 1

        logger.debug(f"{self._scan_id}: window [{start_pos}, {end_pos}] got {len(actions)} actions")
        return actions
