# src/bounded_http/core/security/web.py
"""Local-address policy for outbound requests.

Classifies the host of a target URL as "local" (private, loopback,
link-local, broadcast, documentation, unspecified) without any I/O:

1. **IP literals**: matched against fixed IPv4/IPv6 range tables
2. **IPv6 multicast**: local unless the scope nibble says global
3. **localhost**: the literal name is always local, regardless of resolution

Other domain names are NOT resolved here. The engine evaluates the policy
once per attempt before any network call, so a disallowed target fails with
LocalNotAllowedError before DNS lookup or connect.

    is_local("127.0.0.1")      # True
    is_local("fe80::1")        # True
    is_local("8.8.8.8")        # False
    is_local("example.com")    # False (names are not resolved)
"""

from __future__ import annotations

import ipaddress
import urllib.parse

from bounded_http.contracts.errors import RequestPreconditionError

ALLOWED_SCHEMES = frozenset({"http", "https"})

LOCALHOST_NAMES = frozenset({"localhost", "localhost."})

# Each range is one category of the policy - keep in sync with tests/core/security
LOCAL_IPV4_RANGES = (
    ipaddress.ip_network("10.0.0.0/8"),  # Private Class A (RFC 1918)
    ipaddress.ip_network("172.16.0.0/12"),  # Private Class B (RFC 1918)
    ipaddress.ip_network("192.168.0.0/16"),  # Private Class C (RFC 1918)
    ipaddress.ip_network("127.0.0.0/8"),  # Loopback
    ipaddress.ip_network("169.254.0.0/16"),  # Link-local (cloud metadata endpoints)
    ipaddress.ip_network("255.255.255.255/32"),  # Limited broadcast
    ipaddress.ip_network("192.0.2.0/24"),  # TEST-NET-1 documentation (RFC 5737)
    ipaddress.ip_network("198.51.100.0/24"),  # TEST-NET-2 documentation
    ipaddress.ip_network("203.0.113.0/24"),  # TEST-NET-3 documentation
    ipaddress.ip_network("0.0.0.0/32"),  # Unspecified
)

LOCAL_IPV6_RANGES = (
    ipaddress.ip_network("::1/128"),  # Loopback
    ipaddress.ip_network("::/128"),  # Unspecified
    ipaddress.ip_network("fe80::/10"),  # Unicast link-local (RFC 4291)
    ipaddress.ip_network("fc00::/7"),  # Unique local (RFC 4193)
    ipaddress.ip_network("2001:db8::/32"),  # Documentation (RFC 3849)
)

# Scope field value of a multicast address with global reach (RFC 4291 2.7)
IPV6_MULTICAST_SCOPE_GLOBAL = 0x0E


def is_local_ipv4(addr: ipaddress.IPv4Address) -> bool:
    """Return True if an IPv4 address falls in any local range."""
    return any(addr in network for network in LOCAL_IPV4_RANGES)


def ipv6_multicast_scope(addr: ipaddress.IPv6Address) -> int | None:
    """Return the 4-bit scope of a multicast address, or None for non-multicast."""
    if not addr.is_multicast:
        return None
    return addr.packed[1] & 0x0F


def is_local_ipv6(addr: ipaddress.IPv6Address) -> bool:
    """Return True if an IPv6 address is local.

    Multicast addresses are local unless their scope is global. IPv4-mapped
    addresses (::ffff:a.b.c.d) are classified by the embedded IPv4 address,
    otherwise ::ffff:127.0.0.1 would slip past an IPv4-only check.
    """
    scope = ipv6_multicast_scope(addr)
    if scope is not None:
        return scope != IPV6_MULTICAST_SCOPE_GLOBAL

    if addr.ipv4_mapped is not None:
        return is_local_ipv4(addr.ipv4_mapped)

    return any(addr in network for network in LOCAL_IPV6_RANGES)


def is_local(host: str) -> bool:
    """Classify a URL host as local.

    Pure and total: never raises, never touches the network.

    Args:
        host: Host as found in a URL. IPv6 literals may be bare ("::1") or
            bracketed ("[::1]"); zone suffixes ("fe80::1%eth0") are ignored.

    Returns:
        True for local IP literals and for "localhost"; False otherwise
    """
    candidate = host.strip()
    if candidate.startswith("[") and candidate.endswith("]"):
        candidate = candidate[1:-1]

    if candidate.lower() in LOCALHOST_NAMES:
        return True

    # Zone-scoped IPv6 ("fe80::1%eth0") - classify by the address part
    address_part = candidate.split("%", 1)[0]
    try:
        ip = ipaddress.ip_address(address_part)
    except ValueError:
        return False

    if isinstance(ip, ipaddress.IPv4Address):
        return is_local_ipv4(ip)
    return is_local_ipv6(ip)


def validate_url_scheme(url: str) -> None:
    """Validate URL scheme is in allowlist (http/https only).

    Args:
        url: URL to validate

    Raises:
        RequestPreconditionError: If scheme is not in allowlist
    """
    parsed = urllib.parse.urlparse(url)
    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise RequestPreconditionError(f"Forbidden scheme: {parsed.scheme}")
