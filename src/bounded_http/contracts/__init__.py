# src/bounded_http/contracts/__init__.py
"""Shared contracts for request specs, responses, options, and errors.

This package is a LEAF MODULE with no outbound dependencies to core/engine.

Import patterns:
    from bounded_http.contracts import RequestSpec, HttpResponse, RequestOptions
"""

from bounded_http.contracts.enums import AttemptState, ErrorKind, HttpMethod
from bounded_http.contracts.errors import (
    ConnectionTimeoutError,
    HttpRequestError,
    LocalNotAllowedError,
    RedirectError,
    RequestIOError,
    RequestPreconditionError,
    ResponseTooLargeError,
    TransportError,
    UrlParseError,
)
from bounded_http.contracts.options import RequestOptions
from bounded_http.contracts.request import (
    FORM_CONTENT_TYPE,
    BinaryBody,
    FormBody,
    RequestBody,
    RequestSpec,
    StreamBody,
    TextBody,
    parse_url,
)
from bounded_http.contracts.response import HttpResponse

__all__ = [
    "FORM_CONTENT_TYPE",
    "AttemptState",
    "BinaryBody",
    "ConnectionTimeoutError",
    "ErrorKind",
    "FormBody",
    "HttpMethod",
    "HttpRequestError",
    "HttpResponse",
    "LocalNotAllowedError",
    "RedirectError",
    "RequestBody",
    "RequestIOError",
    "RequestOptions",
    "RequestPreconditionError",
    "RequestSpec",
    "ResponseTooLargeError",
    "StreamBody",
    "TextBody",
    "TransportError",
    "UrlParseError",
    "parse_url",
]
