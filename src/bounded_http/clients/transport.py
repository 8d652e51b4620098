# src/bounded_http/clients/transport.py
"""Transport collaborator: single-shot send with a streamed response.

The execution engine never touches sockets. It hands a WireRequest to a
Transport and receives status, headers, and a chunk iterator, so the bounded
body reader can enforce size/time caps without buffering the whole response.

HttpxTransport is the production implementation. It wraps one httpx.Client
(connection pool) with redirects disabled: the engine owns redirect policy.
Responses are read as raw wire bytes and the client asks for
`Accept-Encoding: identity` unless the request sets its own value, so the
size limit counts exactly what the server sent.
The client is constructed once, shared across calls, and released by close().

    with HttpxTransport() as transport:
        response = transport.send(wire, timeout=30.0)
        try:
            for chunk in response.iter_bytes():
                ...
        finally:
            response.close()
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, Protocol

import httpx

from bounded_http.clients.wire import WireRequest
from bounded_http.contracts.enums import AttemptState
from bounded_http.contracts.errors import (
    ConnectionTimeoutError,
    HttpRequestError,
    RequestIOError,
    TransportError,
    UrlParseError,
)
from bounded_http.core.logging import get_logger

logger = get_logger(__name__)

# httpx advertises gzip/br/zstd by default; ask servers for unencoded bodies
IDENTITY_ENCODING_HEADERS = {"Accept-Encoding": "identity"}


class TransportResponse(Protocol):
    """Response head plus a lazily-read body."""

    @property
    def status_code(self) -> int: ...

    @property
    def headers(self) -> Iterable[tuple[str, str]]:
        """Header pairs in received order (names in any case)."""
        ...

    def iter_bytes(self) -> Iterator[bytes]:
        """Yield body chunks as received on the wire (no content decoding).

        Raises HttpRequestError subclasses on failure.
        """
        ...

    def close(self) -> None:
        """Release the underlying connection."""
        ...


class Transport(Protocol):
    """Performs the actual network I/O for one attempt."""

    def send(self, wire: WireRequest, *, timeout: float | None) -> TransportResponse:
        """Send a request and return once status and headers are received.

        Args:
            wire: Request to send
            timeout: Read/write/connect timeout hint in seconds (None = unlimited).
                The transport is responsible for aborting the socket operation.

        Raises:
            HttpRequestError: Subclass classifying the failure
        """
        ...

    def close(self) -> None: ...


def translate_httpx_error(error: Exception, state: AttemptState) -> HttpRequestError:
    """Map an httpx/OS exception onto the request error taxonomy.

    Order matters: UnsupportedProtocol is an httpx.TransportError subclass
    but describes a URL problem, and timeouts are reported as TimeOut rather
    than as generic transport failures.
    """
    if isinstance(error, httpx.TimeoutException):
        return ConnectionTimeoutError(state=state)
    if isinstance(error, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return UrlParseError(str(error), state=state)
    if isinstance(error, (httpx.HTTPError, httpx.StreamError)):
        return TransportError(f"{type(error).__name__}: {error}", state=state)
    if isinstance(error, OSError):
        return RequestIOError(str(error), state=state)
    return TransportError(f"{type(error).__name__}: {error}", state=state)


class HttpxTransportResponse:
    """TransportResponse backed by a streamed httpx.Response."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def headers(self) -> list[tuple[str, str]]:
        return self._response.headers.multi_items()

    def iter_bytes(self) -> Iterator[bytes]:
        # Raw chunks: decoding first would inflate a compressed body before the size check
        try:
            yield from self._response.iter_raw()
        except (httpx.HTTPError, httpx.StreamError, OSError) as e:
            raise translate_httpx_error(e, AttemptState.READING_BODY) from e

    def close(self) -> None:
        self._response.close()


class HttpxTransport:
    """Transport backed by a shared httpx.Client.

    Args:
        transport: Optional httpx transport (e.g. httpx.MockTransport in tests,
            or httpx.HTTPTransport(retries=...) for custom pooling)
        verify: TLS verification setting passed to httpx.Client
        client_kwargs: Extra keyword arguments for httpx.Client
            (a "headers" entry is merged over the identity Accept-Encoding default)

    Thread Safety:
        httpx.Client is thread-safe; one HttpxTransport may serve concurrent
        callers. Redirect following is always disabled on the client.
    """

    def __init__(
        self,
        *,
        transport: httpx.BaseTransport | None = None,
        verify: Any = True,
        **client_kwargs: Any,
    ) -> None:
        headers = httpx.Headers(IDENTITY_ENCODING_HEADERS)
        headers.update(client_kwargs.pop("headers", None) or {})
        self._client = httpx.Client(
            transport=transport,
            verify=verify,
            headers=headers,
            follow_redirects=False,
            **client_kwargs,
        )

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: Any) -> None:
        self.close()

    def send(self, wire: WireRequest, *, timeout: float | None) -> HttpxTransportResponse:
        try:
            request = self._client.build_request(
                wire.method,
                wire.url,
                headers=wire.headers,
                content=wire.content,
                timeout=httpx.Timeout(timeout),
            )
            response = self._client.send(request, stream=True)
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, OSError) as e:
            logger.debug(
                "transport_send_failed",
                method=wire.method,
                host=wire.url.host,
                error_type=type(e).__name__,
            )
            raise translate_httpx_error(e, AttemptState.SENDING) from e

        return HttpxTransportResponse(response)

    def close(self) -> None:
        """Close the underlying httpx client and release pooled connections."""
        self._client.close()
