# src/bounded_http/engine/redirects.py
"""Redirect resolution for the execution engine.

Two concerns, both pure:

1. resolve_location(): turn a Location header into the next absolute URL
2. plan_redirect(): pick the method and body for the next hop from the status

Location resolution rules:
    - Absolute ("https://other.example/x"): used as-is. If it carries no host
      ("http:/x"), the current URL's userinfo, host, and port are copied in.
    - Network-path ("//cdn.example/x"): inherits only the current scheme.
    - Anything else is a path joined to the current scheme://[userinfo@]host[:port]
      with exactly one slash at the join point. The current path and query
      are NOT carried over: "next" from http://h/a/b becomes http://h/next.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from bounded_http.contracts.enums import AttemptState, HttpMethod
from bounded_http.contracts.errors import RedirectError
from bounded_http.contracts.request import RequestBody

# Statuses that keep the original method (and body, when it can be resent)
METHOD_PRESERVING_STATUSES = frozenset({301, 302, 307, 308})
SEE_OTHER = 303

MISSING_LOCATION = "Cannot get the `location` field in headers."
UNPARSEABLE_LOCATION = "Cannot parse the `location` field in headers."
UNSUPPORTED_STATUS = "Unsupported redirection status."


def is_redirect_status(status_code: int) -> bool:
    return 300 <= status_code <= 399


def concat_with_slash(left: str, right: str) -> str:
    """Join two URL parts with exactly one slash between them."""
    return f"{left.rstrip('/')}/{right.lstrip('/')}"


def _authority(url: httpx.URL) -> str:
    """Return scheme://[userinfo@]host[:port] for a URL."""
    prefix = f"{url.scheme}://"
    if url.userinfo:
        prefix += url.userinfo.decode("ascii") + "@"
    return prefix + url.netloc.decode("ascii")


def _parse_absolute(location: str) -> httpx.URL | None:
    """Parse location as an absolute URL, or return None if it is not one."""
    if location.startswith("//"):
        return None
    try:
        parsed = httpx.URL(location)
    except httpx.InvalidURL:
        return None
    if not parsed.scheme:
        return None
    return parsed


def resolve_location(current: httpx.URL, location: str) -> httpx.URL:
    """Resolve a Location header value against the URL that produced it.

    Args:
        current: URL of the attempt that returned the 3xx
        location: Raw Location header value

    Returns:
        Absolute URL for the next hop

    Raises:
        RedirectError: If the result does not parse or has no host
    """
    location = location.strip()
    absolute = _parse_absolute(location)

    try:
        if absolute is not None:
            if absolute.host:
                resolved = absolute
            else:
                resolved = absolute.copy_with(
                    userinfo=current.userinfo,
                    host=current.host,
                    port=current.port,
                )
        elif location.startswith("//"):
            resolved = httpx.URL(f"{current.scheme}:{location}")
        else:
            resolved = httpx.URL(concat_with_slash(_authority(current), location))
    except (httpx.InvalidURL, TypeError, UnicodeError) as e:
        raise RedirectError(UNPARSEABLE_LOCATION, state=AttemptState.EVALUATING_REDIRECT) from e

    if not resolved.host:
        raise RedirectError(UNPARSEABLE_LOCATION, state=AttemptState.EVALUATING_REDIRECT)

    return resolved


@dataclass(frozen=True, slots=True)
class RedirectHop:
    """Method and body for the next attempt in a redirect chain.

    Attributes:
        url: Resolved target of the hop
        method: Method for the next attempt
        body: Body to resend (None for 303 or when dropped)
        body_dropped: True if a body should have been resent but could not be
    """

    url: httpx.URL
    method: HttpMethod
    body: RequestBody | None
    body_dropped: bool = False


def plan_redirect(
    status_code: int,
    method: HttpMethod,
    body: RequestBody | None,
    url: httpx.URL,
) -> RedirectHop:
    """Apply the status-specific method/body rule.

    - 303: always GET with no body
    - 301, 302, 307, 308: original method; the body is resent when it is
      duplicable, otherwise dropped (one-shot streams were consumed by the
      previous attempt)
    - any other 3xx: RedirectError

    Raises:
        RedirectError: For unsupported 3xx statuses
    """
    if status_code == SEE_OTHER:
        return RedirectHop(url=url, method=HttpMethod.GET, body=None)

    if status_code in METHOD_PRESERVING_STATUSES:
        if body is None or body.duplicable:
            return RedirectHop(url=url, method=method, body=body)
        return RedirectHop(url=url, method=method, body=None, body_dropped=True)

    raise RedirectError(UNSUPPORTED_STATUS, state=AttemptState.EVALUATING_REDIRECT)
