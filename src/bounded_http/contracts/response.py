# src/bounded_http/contracts/response.py
"""Response returned by the execution engine."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """A completed response.

    Created fresh for every send and owned by the caller. Header names are
    lower-cased; when a header repeats, the last occurrence wins.

    Attributes:
        status_code: HTTP status of the final attempt
        headers: Lower-cased header name -> value
        body: Response body, never longer than max_response_body_size
        url: URL of the final attempt (after redirects)
        redirect_count: Number of redirect hops followed
        warnings: Degradations that did not fail the request, e.g. a
            streaming body dropped on a 307/308 redirect
    """

    status_code: int
    headers: dict[str, str]
    body: bytes
    url: httpx.URL
    redirect_count: int = 0
    warnings: tuple[str, ...] = field(default=())

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status_code < 400

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")
