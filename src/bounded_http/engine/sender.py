# src/bounded_http/engine/sender.py
"""Request execution engine.

Turns a RequestSpec into an HttpResponse or a classified HttpRequestError.
Each attempt walks the states

    VALIDATING -> SENDING -> AWAITING_RESPONSE -> EVALUATING_REDIRECT
               -> READING_BODY -> DONE

with a terminal error exit from every state. Redirects are followed by an
explicit loop over (url, method, body, remaining hops), so the chain is
bounded by max_redirect_count and never grows the call stack.

Usage:
    with RequestSender() as sender:
        response = sender.send(RequestSpec.get("https://example.com"))
        print(response.status_code, response.headers, response.body)

Or for a spec that is sent repeatedly:
    spec = RequestSpec.get("https://example.com/health")
    with RequestSender() as sender:
        first = sender.send_preserved(spec)
        second = sender.send_preserved(spec)
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import httpx

from bounded_http.clients.transport import HttpxTransport, Transport
from bounded_http.clients.wire import DEFAULT_USER_AGENT, build_wire_request
from bounded_http.contracts.enums import AttemptState, HttpMethod
from bounded_http.contracts.errors import (
    ConnectionTimeoutError,
    HttpRequestError,
    LocalNotAllowedError,
    RedirectError,
    RequestPreconditionError,
)
from bounded_http.contracts.options import RequestOptions
from bounded_http.contracts.request import RequestSpec
from bounded_http.contracts.response import HttpResponse
from bounded_http.core.config import SenderSettings
from bounded_http.core.logging import apply_logging_settings, get_logger
from bounded_http.core.security.web import is_local, validate_url_scheme
from bounded_http.engine.body_reader import read_bounded_body
from bounded_http.engine.clock import DEFAULT_CLOCK, Clock, budget_exceeded
from bounded_http.engine.redirects import (
    MISSING_LOCATION,
    is_redirect_status,
    plan_redirect,
    resolve_location,
)

logger = get_logger(__name__)

MISSING_HOST = "A valid HTTP URL needs to contain a host."
NOT_PRESERVABLE = "A request with a streaming body cannot be preserved for resending."


def collect_headers(pairs: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Lower-case header names; the last occurrence of a repeated header wins."""
    return {name.lower(): value for name, value in pairs}


def validate_target(url: httpx.URL, options: RequestOptions) -> None:
    """Validating state: host presence, scheme, and local-address policy.

    Performs no I/O, so a disallowed target fails before any DNS lookup or
    connection attempt.

    Raises:
        RequestPreconditionError: If the URL has no host or a non-HTTP scheme
        LocalNotAllowedError: If the host is local and allow_local is False
    """
    host = url.host
    if not host:
        raise RequestPreconditionError(MISSING_HOST, state=AttemptState.VALIDATING)

    try:
        validate_url_scheme(str(url))
    except RequestPreconditionError as e:
        e.state = AttemptState.VALIDATING
        raise

    if not options.allow_local and is_local(host):
        raise LocalNotAllowedError(state=AttemptState.VALIDATING)


class RequestSender:
    """Sends RequestSpecs through a Transport with redirect, size, and time policy.

    The sender is stateless across calls apart from the transport it holds,
    so one instance may be shared by concurrent callers.

    Args:
        transport: Transport to send through. When omitted, an HttpxTransport
            is created and owned by the sender (closed by close()). A supplied
            transport is borrowed and left open.
        user_agent: User-Agent injected when a spec does not supply one
        default_options: Options used by request() when none are given
        clock: Clock for connection-time checks (MockClock in tests)
    """

    def __init__(
        self,
        transport: Transport | None = None,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        default_options: RequestOptions | None = None,
        clock: Clock = DEFAULT_CLOCK,
    ) -> None:
        self._owns_transport = transport is None
        self._transport: Transport = transport if transport is not None else HttpxTransport()
        self._user_agent = user_agent
        self._default_options = default_options or RequestOptions()
        self._clock = clock

    @classmethod
    def from_settings(
        cls,
        settings: SenderSettings,
        *,
        transport: Transport | None = None,
        clock: Clock = DEFAULT_CLOCK,
        configure_logs: bool = True,
    ) -> RequestSender:
        """Create a sender from validated settings (see core.config.load_settings).

        Unless configure_logs is False, the settings' logging section is applied
        process-wide via apply_logging_settings(). Pass False when the host
        application owns logging configuration.
        """
        if configure_logs:
            apply_logging_settings(settings.logging)
        return cls(
            transport,
            user_agent=settings.user_agent,
            default_options=settings.options,
            clock=clock,
        )

    @property
    def default_options(self) -> RequestOptions:
        return self._default_options

    def __enter__(self) -> RequestSender:
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the transport if this sender created it."""
        if self._owns_transport:
            self._transport.close()

    def send(self, spec: RequestSpec) -> HttpResponse:
        """Send a request once.

        Accepts every body type, including one-shot StreamBody. A streaming
        body cannot be resent on a 301/302/307/308 redirect; it is dropped
        and the drop is reported in HttpResponse.warnings.

        Raises:
            HttpRequestError: Subclass classifying the failure
        """
        return self._execute(spec)

    def send_preserved(self, spec: RequestSpec) -> HttpResponse:
        """Send a request that the caller keeps for further sends.

        Same semantics as send(). The spec is never mutated, and each call
        re-encodes the body from the spec, so calls are independent.

        Raises:
            RequestPreconditionError: If the spec carries a StreamBody
            HttpRequestError: Subclass classifying any other failure
        """
        if not spec.preservable:
            raise RequestPreconditionError(NOT_PRESERVABLE, state=AttemptState.VALIDATING)
        return self._execute(spec)

    def request(self, method: HttpMethod | str, url: str | httpx.URL, **kwargs: Any) -> HttpResponse:
        """Build a spec with this sender's default options and send it."""
        kwargs.setdefault("options", self._default_options)
        return self.send(RequestSpec.new(method, url, **kwargs))

    def _execute(self, spec: RequestSpec) -> HttpResponse:
        options = spec.options
        url = spec.url
        method = spec.method
        body = spec.body
        remaining_hops = options.max_redirect_count
        redirect_count = 0
        warnings: list[str] = []

        try:
            while True:
                started_at = self._clock.monotonic()

                validate_target(url, options)

                wire = build_wire_request(
                    method,
                    url,
                    query=spec.query,
                    body=body,
                    headers=spec.headers,
                    user_agent=self._user_agent,
                )
                response = self._transport.send(wire, timeout=options.timeout_seconds)

                try:
                    # A response arriving too slowly is still a timeout
                    if budget_exceeded(self._clock, started_at, options.max_connection_time):
                        raise ConnectionTimeoutError(state=AttemptState.AWAITING_RESPONSE)

                    status_code = response.status_code
                    headers = collect_headers(response.headers)

                    if remaining_hops > 0 and is_redirect_status(status_code):
                        location = headers.get("location")
                        if location is None:
                            raise RedirectError(MISSING_LOCATION, state=AttemptState.EVALUATING_REDIRECT)

                        hop = plan_redirect(status_code, method, body, resolve_location(wire.url, location))
                        if hop.body_dropped:
                            warning = f"Request body dropped on {status_code} redirect to {hop.url}: streaming bodies cannot be resent."
                            warnings.append(warning)
                            logger.warning(
                                "redirect_body_dropped",
                                status_code=status_code,
                                method=str(method),
                                redirect_to=str(hop.url),
                            )

                        logger.debug(
                            "redirect_followed",
                            status_code=status_code,
                            redirect_from=str(wire.url),
                            redirect_to=str(hop.url),
                            method=str(hop.method),
                            hops_remaining=remaining_hops - 1,
                        )

                        url, method, body = hop.url, hop.method, hop.body
                        remaining_hops -= 1
                        redirect_count += 1
                        continue

                    payload = read_bounded_body(
                        response.iter_bytes(),
                        max_size=options.max_response_body_size,
                        max_time_ms=options.max_connection_time,
                        started_at=started_at,
                        clock=self._clock,
                    )
                finally:
                    response.close()

                logger.debug(
                    "request_completed",
                    method=str(spec.method),
                    url=str(wire.url),
                    status_code=status_code,
                    body_size=len(payload),
                    redirect_count=redirect_count,
                )

                return HttpResponse(
                    status_code=status_code,
                    headers=headers,
                    body=payload,
                    url=wire.url,
                    redirect_count=redirect_count,
                    warnings=tuple(warnings),
                )
        except HttpRequestError as e:
            logger.debug(
                "request_failed",
                method=str(spec.method),
                error_kind=str(e.kind),
                state=str(e.state) if e.state is not None else None,
                redirect_count=redirect_count,
                error=str(e),
            )
            raise


def send(spec: RequestSpec, *, transport: Transport | None = None) -> HttpResponse:
    """Send a spec once with a short-lived sender.

    A supplied transport is borrowed; otherwise an HttpxTransport is created
    and closed after the call.
    """
    with RequestSender(transport) as sender:
        return sender.send(spec)


def send_preserved(spec: RequestSpec, *, transport: Transport | None = None) -> HttpResponse:
    """send_preserved() counterpart of send()."""
    with RequestSender(transport) as sender:
        return sender.send_preserved(spec)
