# src/bounded_http/contracts/errors.py
"""Error hierarchy for the request sender.

Every failure is terminal for the attempt that raised it. Nothing here is
retried internally; retry policy belongs to the caller.
"""

from __future__ import annotations

from typing import ClassVar

from bounded_http.contracts.enums import AttemptState, ErrorKind


class HttpRequestError(Exception):
    """Base error for all request failures.

    Attributes:
        kind: Classification of the failure
        state: Engine state the attempt was in when it failed (None when
            raised outside the engine, e.g. by a RequestSpec constructor)
    """

    kind: ClassVar[ErrorKind] = ErrorKind.OTHER
    default_message: ClassVar[str] = "HTTP request failed."

    def __init__(self, message: str | None = None, *, state: AttemptState | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)
        self.state = state


class UrlParseError(HttpRequestError):
    """URL string does not parse."""

    kind = ErrorKind.URL_PARSE
    default_message = "Cannot parse the URL."


class TransportError(HttpRequestError):
    """Connect, TLS, or protocol failure reported by the transport."""

    kind = ErrorKind.TRANSPORT
    default_message = "The transport failed to complete the request."


class RequestIOError(HttpRequestError):
    """Local I/O failure unrelated to the HTTP protocol."""

    kind = ErrorKind.IO
    default_message = "A local I/O operation failed."


class RedirectError(HttpRequestError):
    """Missing or unparseable Location header, or unsupported 3xx status."""

    kind = ErrorKind.REDIRECT
    default_message = "Cannot follow the redirection."


class ResponseTooLargeError(HttpRequestError):
    """Response body exceeded max_response_body_size."""

    kind = ErrorKind.TOO_LARGE
    default_message = "Remote data is too large."


class ConnectionTimeoutError(HttpRequestError):
    """Attempt exceeded max_connection_time."""

    kind = ErrorKind.TIMEOUT
    default_message = "The connection has timed out."


class LocalNotAllowedError(HttpRequestError):
    """Target host is local while allow_local is disabled."""

    kind = ErrorKind.LOCAL_NOT_ALLOWED
    default_message = "Local addresses are not allowed."


class RequestPreconditionError(HttpRequestError):
    """Catch-all for precondition violations (e.g. a URL without a host)."""

    kind = ErrorKind.OTHER
    default_message = "The request does not satisfy its preconditions."
