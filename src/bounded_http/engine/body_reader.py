# src/bounded_http/engine/body_reader.py
"""Bounded response body reader.

Drains a response body chunk by chunk and fails the moment either limit is
crossed, instead of truncating silently or hanging:

- size: cumulative bytes > max_size raises ResponseTooLargeError
- time: elapsed ms since the attempt STARTED > max_time_ms raises
  ConnectionTimeoutError (the budget is attempt-wide, not read-phase-only)

Bytes read before a failure are discarded; no partial body ever reaches the
caller.
"""

from __future__ import annotations

from collections.abc import Iterable

from bounded_http.contracts.enums import AttemptState
from bounded_http.contracts.errors import ConnectionTimeoutError, ResponseTooLargeError
from bounded_http.engine.clock import DEFAULT_CLOCK, Clock, budget_exceeded


def read_bounded_body(
    chunks: Iterable[bytes],
    *,
    max_size: int,
    max_time_ms: int,
    started_at: float,
    clock: Clock = DEFAULT_CLOCK,
) -> bytes:
    """Read a byte stream under size and time limits.

    Args:
        chunks: Response body chunks as received on the wire
        max_size: Maximum cumulative body size in bytes
        max_time_ms: Attempt-wide time budget in milliseconds (0 = unlimited)
        started_at: clock.monotonic() value taken when the attempt began
        clock: Clock used for elapsed-time checks

    Returns:
        The complete body

    Raises:
        ResponseTooLargeError: If the body grows past max_size
        ConnectionTimeoutError: If the attempt outlives max_time_ms
    """
    buffer = bytearray()
    total = 0

    for chunk in chunks:
        if not chunk:
            continue

        total += len(chunk)
        if total > max_size:
            raise ResponseTooLargeError(state=AttemptState.READING_BODY)

        buffer.extend(chunk)

        if budget_exceeded(clock, started_at, max_time_ms):
            raise ConnectionTimeoutError(state=AttemptState.READING_BODY)

    return bytes(buffer)
