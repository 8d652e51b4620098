# src/bounded_http/engine/__init__.py
"""Request execution engine: redirect loop, bounded body reading, timing."""

from bounded_http.engine.body_reader import read_bounded_body
from bounded_http.engine.clock import DEFAULT_CLOCK, Clock, MockClock, SystemClock
from bounded_http.engine.redirects import RedirectHop, plan_redirect, resolve_location
from bounded_http.engine.sender import RequestSender, send, send_preserved

__all__ = [
    "DEFAULT_CLOCK",
    "Clock",
    "MockClock",
    "RedirectHop",
    "RequestSender",
    "SystemClock",
    "plan_redirect",
    "read_bounded_body",
    "resolve_location",
    "send",
    "send_preserved",
]
