# src/bounded_http/__init__.py
"""
bounded-http: HTTP/HTTPS requests with redirect, size, time, and
local-address policy.

Wraps a streaming transport (httpx by default) with a bounded
redirect-following loop, response size and connection-time limits, and a
filter for private/loopback/link-local targets.

    from bounded_http import RequestSender, RequestSpec

    with RequestSender() as sender:
        response = sender.send(RequestSpec.get("https://example.com"))
"""

__version__ = "0.1.0"

from bounded_http.contracts import (  # noqa: E402
    BinaryBody,
    ConnectionTimeoutError,
    ErrorKind,
    FormBody,
    HttpMethod,
    HttpRequestError,
    HttpResponse,
    LocalNotAllowedError,
    RedirectError,
    RequestIOError,
    RequestOptions,
    RequestPreconditionError,
    RequestSpec,
    ResponseTooLargeError,
    StreamBody,
    TextBody,
    TransportError,
    UrlParseError,
)
from bounded_http.engine import RequestSender, send, send_preserved  # noqa: E402

__all__ = [
    "BinaryBody",
    "ConnectionTimeoutError",
    "ErrorKind",
    "FormBody",
    "HttpMethod",
    "HttpRequestError",
    "HttpResponse",
    "LocalNotAllowedError",
    "RedirectError",
    "RequestIOError",
    "RequestOptions",
    "RequestPreconditionError",
    "RequestSender",
    "RequestSpec",
    "ResponseTooLargeError",
    "StreamBody",
    "TextBody",
    "TransportError",
    "UrlParseError",
    "__version__",
    "send",
    "send_preserved",
]
