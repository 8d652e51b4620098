# src/bounded_http/clients/__init__.py
"""Wire request building and the transport collaborator."""

from bounded_http.clients.wire import (
    DEFAULT_USER_AGENT,
    WireRequest,
    append_query,
    build_wire_request,
    encode_form,
)
from bounded_http.clients.transport import (  # noqa: I001 - wire must load before transport
    HttpxTransport,
    HttpxTransportResponse,
    Transport,
    TransportResponse,
    translate_httpx_error,
)

__all__ = [
    "DEFAULT_USER_AGENT",
    "HttpxTransport",
    "HttpxTransportResponse",
    "Transport",
    "TransportResponse",
    "WireRequest",
    "append_query",
    "build_wire_request",
    "encode_form",
    "translate_httpx_error",
]
