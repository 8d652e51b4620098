# src/bounded_http/engine/clock.py
"""Time source for the max_connection_time budget.

Every attempt in a redirect chain records clock.monotonic() when it enters
Validating. The engine then compares elapsed milliseconds against
max_connection_time twice: once the response head arrives, and after each
body chunk. elapsed_ms() and budget_exceeded() hold that arithmetic so the
sender and the body reader agree on it.

RequestSender uses SystemClock unless given another Clock. Tests pass a
MockClock and advance it from inside a fake transport, which makes
"the server stalled for two seconds" a deterministic one-liner.
"""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Source of attempt start times and elapsed-time checks."""

    def monotonic(self) -> float:
        """Seconds on a clock that never goes backwards (time.monotonic())."""
        ...


class SystemClock:
    def monotonic(self) -> float:
        return time.monotonic()


class MockClock:
    """Manually advanced clock for connection-time tests.

    Example:
        clock = MockClock()
        transport = FakeTransport([...], on_send=lambda wire: clock.advance(2.0))
        RequestSender(transport, clock=clock)  # every attempt "takes" 2000ms
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start

    def monotonic(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        """Move time forward.

        Raises:
            ValueError: If seconds is negative (monotonic time cannot rewind)
        """
        if seconds < 0:
            raise ValueError(f"Cannot advance time by negative amount: {seconds}")
        self._now += seconds


def elapsed_ms(clock: Clock, started_at: float) -> int:
    """Whole milliseconds since an attempt started.

    Python ints do not overflow, so multi-day durations compare safely
    against any millisecond budget.
    """
    return int((clock.monotonic() - started_at) * 1000)


def budget_exceeded(clock: Clock, started_at: float, max_time_ms: int) -> bool:
    """True once an attempt has run past max_time_ms; a budget of 0 never expires."""
    if max_time_ms <= 0:
        return False
    return elapsed_ms(clock, started_at) > max_time_ms


DEFAULT_CLOCK: Clock = SystemClock()
