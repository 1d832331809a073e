"""Shared type definitions for nodeflash.

This module contains the dataclasses describing a flash request and the
configuration derived from it, kept separate from the resolver and runner
to avoid circular imports.
"""

from dataclasses import dataclass

# Node address that turns a node into the access point other gates join.
ACCESS_POINT_ADDRESS = "0"

NODE_ADDRESS_VAR = "NODE_ADDRESS"
WIFI_CONFIG_VAR = "WIFI_CONFIG"


@dataclass(frozen=True)
class FlashRequest:
    """Inputs to a flash operation, taken verbatim from the command line.

    Attributes:
        platform: Feature set selector passed to the firmware build.
        serial_port: Serial device the node is attached to.
        node_address: Node address; only the literal "0" has special meaning.
    """

    platform: str = ""
    serial_port: str = ""
    node_address: str = ""


@dataclass(frozen=True)
class AccessPoint:
    """Policy for the node that hosts its own wireless network."""

    @property
    def address(self) -> str:
        return ACCESS_POINT_ADDRESS

    @property
    def ap_enabled(self) -> bool:
        return True


@dataclass(frozen=True)
class Station:
    """Policy for a node that joins an existing wireless network."""

    address: str

    @property
    def ap_enabled(self) -> bool:
        return False


AddressPolicy = AccessPoint | Station


@dataclass(frozen=True)
class WirelessConfig:
    """Wireless network descriptor consumed by the firmware at boot."""

    ap_enabled: bool
    ssid: str
    password: str

    def serialize(self) -> str:
        """Render as the colon-delimited ``ap_enabled:ssid:password`` triple."""
        flag = "true" if self.ap_enabled else "false"
        return f"{flag}:{self.ssid}:{self.password}"

    @classmethod
    def parse(cls, text: str) -> "WirelessConfig":
        """Parse a serialized triple.

        The password is everything after the second colon, so it may itself
        contain colons.

        Raises:
            ValueError: If the text has fewer than three fields.
        """
        parts = text.split(":", 2)
        if len(parts) != 3:
            raise ValueError(f"Expected 'ap_enabled:ssid:password', got {text!r}")
        flag, ssid, password = parts
        return cls(ap_enabled=flag.lower() == "true", ssid=ssid, password=password)


@dataclass(frozen=True)
class ResolvedEnvironment:
    """Values exported to the flashing tool for one invocation.

    Attributes:
        node_address: Node address, identical to the requested one.
        wifi_config: Serialized wireless configuration triple.
        overridden: Whether wifi_config came from an external override.
    """

    node_address: str
    wifi_config: str
    overridden: bool = False

    def as_env(self) -> dict[str, str]:
        """Return the environment variables the firmware build reads."""
        return {
            NODE_ADDRESS_VAR: self.node_address,
            WIFI_CONFIG_VAR: self.wifi_config,
        }


__all__ = [
    "ACCESS_POINT_ADDRESS",
    "AccessPoint",
    "AddressPolicy",
    "FlashRequest",
    "NODE_ADDRESS_VAR",
    "ResolvedEnvironment",
    "Station",
    "WIFI_CONFIG_VAR",
    "WirelessConfig",
]
