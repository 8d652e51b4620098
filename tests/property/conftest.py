# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Strategy Categories:
- IP literals drawn from inside/outside the local range tables
- Form field mappings (arbitrary unicode keys and values)

Usage:
    from tests.property.conftest import public_ipv4_hosts

    @given(host=public_ipv4_hosts())
    def test_public_hosts_allowed(host: str) -> None:
        ...
"""

# =============================================================================
# Hypothesis Settings
# =============================================================================
#
# For standardized @settings decorators, import from tests.property.settings:
#   from tests.property.settings import STANDARD_SETTINGS, POLICY_SETTINGS
#
# Tiers: POLICY (500), STANDARD (100), QUICK (20)
# =============================================================================

from __future__ import annotations

import ipaddress

from hypothesis import strategies as st

from bounded_http.core.security.web import LOCAL_IPV4_RANGES, LOCAL_IPV6_RANGES


@st.composite
def local_ipv4_hosts(draw: st.DrawFn) -> str:
    """An IPv4 literal inside one of the local ranges."""
    network = draw(st.sampled_from(LOCAL_IPV4_RANGES))
    offset = draw(st.integers(min_value=0, max_value=network.num_addresses - 1))
    return str(network.network_address + offset)


@st.composite
def local_ipv6_hosts(draw: st.DrawFn) -> str:
    """An IPv6 literal inside one of the local unicast ranges."""
    network = draw(st.sampled_from(LOCAL_IPV6_RANGES))
    offset = draw(st.integers(min_value=0, max_value=network.num_addresses - 1))
    return str(network.network_address + offset)


@st.composite
def public_ipv4_hosts(draw: st.DrawFn) -> str:
    """An IPv4 literal outside every local range (excludes multicast/reserved)."""
    addr = draw(
        st.integers(min_value=0, max_value=2**32 - 1)
        .map(ipaddress.IPv4Address)
        .filter(lambda a: a.is_global and not any(a in n for n in LOCAL_IPV4_RANGES))
    )
    return str(addr)


form_text = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",)),
    max_size=30,
)

form_fields = st.dictionaries(keys=form_text.filter(bool), values=form_text, max_size=8)
