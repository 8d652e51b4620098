# src/bounded_http/contracts/enums.py
"""Methods, states, and error kinds used across subsystem boundaries."""

from enum import StrEnum


class HttpMethod(StrEnum):
    """HTTP request method supported by the sender."""

    GET = "GET"  # Get resources.
    POST = "POST"  # Change resources.
    PUT = "PUT"  # Change resources.
    DELETE = "DELETE"  # Delete resources.
    HEAD = "HEAD"  # Only get the headers of resources.


class AttemptState(StrEnum):
    """Phase of a single attempt in the execution engine.

    Carried on errors so callers can tell where an attempt failed.

    Values:
        VALIDATING: Host and local-address policy checks (no I/O yet)
        SENDING: Wire request built and handed to the transport
        AWAITING_RESPONSE: Status and headers received, elapsed time checked
        EVALUATING_REDIRECT: 3xx status being resolved to the next hop
        READING_BODY: Bounded body drain in progress
        DONE: Response assembled
    """

    VALIDATING = "validating"
    SENDING = "sending"
    AWAITING_RESPONSE = "awaiting_response"
    EVALUATING_REDIRECT = "evaluating_redirect"
    READING_BODY = "reading_body"
    DONE = "done"


class ErrorKind(StrEnum):
    """Classification of a failed request."""

    URL_PARSE = "url_parse"
    TRANSPORT = "transport"
    IO = "io"
    REDIRECT = "redirect"
    TOO_LARGE = "too_large"
    TIMEOUT = "timeout"
    LOCAL_NOT_ALLOWED = "local_not_allowed"
    OTHER = "other"
