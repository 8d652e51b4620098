# src/bounded_http/contracts/request.py
"""Request specification types.

A RequestSpec is pure data: the execution engine reads it and never mutates
it. Bodies are split into duplicable variants (bytes, text, form fields),
which can be re-serialized for every attempt, and the one-shot StreamBody,
which can only be sent once.

Usage:
    from bounded_http.contracts import FormBody, RequestSpec

    spec = RequestSpec.post(
        "https://api.example.com/submit",
        body=FormBody({"a": "1", "b": "x y"}),
        headers={"Accept": "application/json"},
    )
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

import httpx

from bounded_http.contracts.enums import HttpMethod
from bounded_http.contracts.errors import UrlParseError
from bounded_http.contracts.options import RequestOptions

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True, slots=True)
class BinaryBody:
    """Raw bytes sent verbatim with the given content type."""

    duplicable: ClassVar[bool] = True

    content_type: str
    body: bytes


@dataclass(frozen=True, slots=True)
class TextBody:
    """Text sent as its UTF-8 encoding with the given content type."""

    duplicable: ClassVar[bool] = True

    content_type: str
    body: str


@dataclass(frozen=True, slots=True)
class FormBody:
    """Form fields serialized as application/x-www-form-urlencoded."""

    duplicable: ClassVar[bool] = True

    fields: Mapping[str, str]


@dataclass(frozen=True, slots=True, eq=False)
class StreamBody:
    """One-shot streaming body.

    The chunk iterable is consumed by the first send. Specs carrying a
    StreamBody are rejected by send_preserved(), and a 307/308 redirect
    cannot resend it (the body is dropped and a warning is recorded).
    """

    duplicable: ClassVar[bool] = False

    content_type: str
    chunks: Iterable[bytes]
    content_length: int | None = None


RequestBody = BinaryBody | TextBody | FormBody | StreamBody


def parse_url(url: str | httpx.URL) -> httpx.URL:
    """Parse a URL string, mapping httpx parse failures to UrlParseError."""
    if isinstance(url, httpx.URL):
        return url
    try:
        return httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise UrlParseError(f"Cannot parse the URL {url!r}: {e}") from e


@dataclass(frozen=True, slots=True)
class RequestSpec:
    """Everything needed to send one logical request.

    Attributes:
        method: HTTP method for the first attempt
        url: Absolute target URL (must carry a host at send time)
        query: Pairs appended to the URL's existing query string
        body: Optional request body
        headers: User headers; a default User-Agent is added only if absent
        options: Limits and policy for this request
    """

    method: HttpMethod
    url: httpx.URL
    query: Mapping[str, str] | None = None
    body: RequestBody | None = None
    headers: Mapping[str, str] | None = None
    options: RequestOptions = field(default_factory=RequestOptions)

    @property
    def preservable(self) -> bool:
        """True when the spec can be sent repeatedly via send_preserved()."""
        return self.body is None or self.body.duplicable

    @classmethod
    def new(cls, method: HttpMethod | str, url: str | httpx.URL, **kwargs: Any) -> RequestSpec:
        """Create a spec, parsing a string URL.

        Raises:
            UrlParseError: If url is a string that does not parse
        """
        return cls(method=HttpMethod(str(method).upper()), url=parse_url(url), **kwargs)

    @classmethod
    def get(cls, url: str | httpx.URL, **kwargs: Any) -> RequestSpec:
        return cls.new(HttpMethod.GET, url, **kwargs)

    @classmethod
    def post(cls, url: str | httpx.URL, **kwargs: Any) -> RequestSpec:
        return cls.new(HttpMethod.POST, url, **kwargs)

    @classmethod
    def put(cls, url: str | httpx.URL, **kwargs: Any) -> RequestSpec:
        return cls.new(HttpMethod.PUT, url, **kwargs)

    @classmethod
    def delete(cls, url: str | httpx.URL, **kwargs: Any) -> RequestSpec:
        return cls.new(HttpMethod.DELETE, url, **kwargs)

    @classmethod
    def head(cls, url: str | httpx.URL, **kwargs: Any) -> RequestSpec:
        return cls.new(HttpMethod.HEAD, url, **kwargs)
