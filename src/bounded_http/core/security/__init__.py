# src/bounded_http/core/security/__init__.py
"""Security utilities for outbound requests.

Exports:
- is_local: Classify a URL host as private/loopback/link-local/localhost
- validate_url_scheme: Reject non-HTTP(S) schemes
"""

from bounded_http.core.security.web import (
    is_local,
    is_local_ipv4,
    is_local_ipv6,
    validate_url_scheme,
)

__all__ = [
    "is_local",
    "is_local_ipv4",
    "is_local_ipv6",
    "validate_url_scheme",
]
