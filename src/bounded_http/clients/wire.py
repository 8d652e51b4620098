# src/bounded_http/clients/wire.py
"""Wire request builder.

Turns the parts of a RequestSpec into what the transport sends: method
string, final URL with query pairs appended, header list, and encoded body.
The builder only reads the caller's mappings; it never mutates them.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from urllib.parse import urlencode

import httpx

from bounded_http import __version__
from bounded_http.contracts.enums import HttpMethod
from bounded_http.contracts.request import (
    FORM_CONTENT_TYPE,
    BinaryBody,
    FormBody,
    RequestBody,
    StreamBody,
    TextBody,
)

DEFAULT_USER_AGENT = f"Mozilla/5.0 (Python) bounded-http/{__version__}"

USER_AGENT_HEADER = "User-Agent"


@dataclass(frozen=True, slots=True)
class WireRequest:
    """Transport-ready request.

    Attributes:
        method: Method string ("GET", "POST", ...)
        url: Final URL with query pairs merged
        headers: Header pairs in send order
        content: Encoded body bytes, a chunk iterable for streams, or None
    """

    method: str
    url: httpx.URL
    headers: list[tuple[str, str]]
    content: bytes | Iterable[bytes] | None = None

    def header(self, name: str) -> str | None:
        """Return the last value of a header (case-insensitive), or None."""
        lower = name.lower()
        value = None
        for key, v in self.headers:
            if key.lower() == lower:
                value = v
        return value


def encode_form(fields: Mapping[str, str]) -> bytes:
    """Encode form fields as application/x-www-form-urlencoded bytes.

    Spaces become "+", reserved characters are percent-encoded, and pairs
    are joined with "&" in the mapping's iteration order:

        encode_form({"a": "1", "b": "x y"}) == b"a=1&b=x+y"
    """
    return urlencode(list(fields.items())).encode("ascii")


def append_query(url: httpx.URL, query: Mapping[str, str] | None) -> httpx.URL:
    """Append query pairs to a URL, keeping any pairs it already has."""
    if not query:
        return url
    params = url.params
    for key, value in query.items():
        params = params.add(key, value)
    return url.copy_with(params=params)


def _encode_body(body: RequestBody) -> tuple[bytes | Iterable[bytes], list[tuple[str, str]]]:
    """Encode a body and derive its Content-Type/Content-Length headers."""
    if isinstance(body, BinaryBody):
        data = body.body
        return data, [("Content-Type", body.content_type), ("Content-Length", str(len(data)))]
    if isinstance(body, TextBody):
        data = body.body.encode("utf-8")
        return data, [("Content-Type", body.content_type), ("Content-Length", str(len(data)))]
    if isinstance(body, FormBody):
        data = encode_form(body.fields)
        return data, [("Content-Type", FORM_CONTENT_TYPE), ("Content-Length", str(len(data)))]
    if isinstance(body, StreamBody):
        headers = [("Content-Type", body.content_type)]
        if body.content_length is not None:
            headers.append(("Content-Length", str(body.content_length)))
        return body.chunks, headers
    raise TypeError(f"Unsupported request body type: {type(body).__name__}")


def build_wire_request(
    method: HttpMethod,
    url: httpx.URL,
    *,
    query: Mapping[str, str] | None = None,
    body: RequestBody | None = None,
    headers: Mapping[str, str] | None = None,
    user_agent: str = DEFAULT_USER_AGENT,
) -> WireRequest:
    """Build the wire request for one attempt.

    Args:
        method: Request method
        url: Target URL (query pairs are appended to its existing query)
        query: Extra query pairs
        body: Optional body; its Content-Type/Content-Length win over user headers
        headers: User headers, sent as given
        user_agent: Injected only if no user header is named User-Agent
            (case-insensitive)

    Returns:
        WireRequest ready for Transport.send()
    """
    final_url = append_query(url, query)

    content: bytes | Iterable[bytes] | None = None
    body_headers: list[tuple[str, str]] = []
    if body is not None:
        content, body_headers = _encode_body(body)

    # Headers derived from the body replace any user-supplied value
    derived = {name.lower() for name, _ in body_headers}

    wire_headers: list[tuple[str, str]] = []
    has_user_agent = False
    for name, value in (headers or {}).items():
        if name.lower() == USER_AGENT_HEADER.lower():
            has_user_agent = True
        if name.lower() in derived:
            continue
        wire_headers.append((name, value))

    if not has_user_agent:
        wire_headers.append((USER_AGENT_HEADER, user_agent))

    wire_headers.extend(body_headers)

    return WireRequest(
        method=str(method),
        url=final_url,
        headers=wire_headers,
        content=content,
    )
