"""Configuration resolver.

Computes the node address and wireless configuration for a flash request.
The resolver is pure: the wireless override is passed in explicitly rather
than read from the process environment.
"""

from __future__ import annotations

import logging

from nodeflash.types import (
    ACCESS_POINT_ADDRESS,
    AccessPoint,
    AddressPolicy,
    FlashRequest,
    ResolvedEnvironment,
    Station,
    WirelessConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_SSID = "demo"
DEFAULT_PASSWORD = "demo"


def address_policy(node_address: str) -> AddressPolicy:
    """Classify a node address.

    Only the exact string "0" selects access-point mode. The comparison is
    on the string, so "00" or " 0" are ordinary stations.

    Args:
        node_address: Node address as given on the command line.

    Returns:
        AccessPoint for "0", otherwise Station carrying the address verbatim.
    """
    if node_address == ACCESS_POINT_ADDRESS:
        return AccessPoint()
    return Station(node_address)


def derive_wireless_config(policy: AddressPolicy) -> WirelessConfig:
    """Build the default wireless configuration for an address policy."""
    return WirelessConfig(
        ap_enabled=isinstance(policy, AccessPoint),
        ssid=DEFAULT_SSID,
        password=DEFAULT_PASSWORD,
    )


def resolve_environment(
    request: FlashRequest,
    wifi_override: str | None = None,
) -> ResolvedEnvironment:
    """Resolve the environment exported to the flashing tool.

    A non-empty override is used as-is and the access-point derivation is
    skipped; the two are never merged.

    Args:
        request: Flash request from the command line.
        wifi_override: Pre-built wireless configuration triple, if any.

    Returns:
        ResolvedEnvironment for this invocation.
    """
    if wifi_override:
        logger.info("Using wireless configuration override")
        return ResolvedEnvironment(
            node_address=request.node_address,
            wifi_config=wifi_override,
            overridden=True,
        )

    policy = address_policy(request.node_address)
    logger.debug("Node address %r resolved to %r", request.node_address, policy)
    wifi_config = derive_wireless_config(policy).serialize()

    return ResolvedEnvironment(
        node_address=request.node_address,
        wifi_config=wifi_config,
    )


__all__ = [
    "DEFAULT_PASSWORD",
    "DEFAULT_SSID",
    "address_policy",
    "derive_wireless_config",
    "resolve_environment",
]
