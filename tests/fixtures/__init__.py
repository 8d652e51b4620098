# tests/fixtures/__init__.py
"""Shared test doubles for bounded-http tests.

Available doubles:
- FakeTransport: scripted Transport that records every WireRequest
- ScriptedResponse: canned status, headers, and body chunks
"""

from tests.fixtures.transport import FakeTransport, ScriptedResponse

__all__ = [
    "FakeTransport",
    "ScriptedResponse",
]
