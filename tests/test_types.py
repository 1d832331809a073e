"""Tests for shared types module."""

import pytest

from nodeflash.types import (
    AccessPoint,
    FlashRequest,
    ResolvedEnvironment,
    Station,
    WirelessConfig,
)


class TestAddressPolicies:
    """Test AccessPoint and Station policies."""

    def test_access_point(self) -> None:
        """AccessPoint should enable AP mode at address 0."""
        policy = AccessPoint()
        assert policy.ap_enabled is True
        assert policy.address == "0"

    def test_station(self) -> None:
        """Station should keep its address verbatim."""
        policy = Station("07")
        assert policy.ap_enabled is False
        assert policy.address == "07"

    def test_policies_compare_by_value(self) -> None:
        """Policies should be value objects."""
        assert AccessPoint() == AccessPoint()
        assert Station("3") == Station("3")
        assert Station("3") != Station("4")


class TestWirelessConfig:
    """Test WirelessConfig serialization and parsing."""

    def test_serialize_access_point(self) -> None:
        """AP config should serialize with a lower-case true."""
        config = WirelessConfig(ap_enabled=True, ssid="demo", password="demo")
        assert config.serialize() == "true:demo:demo"

    def test_serialize_station(self) -> None:
        """Station config should serialize with a lower-case false."""
        config = WirelessConfig(ap_enabled=False, ssid="gate", password="s3cret")
        assert config.serialize() == "false:gate:s3cret"

    def test_parse(self) -> None:
        """parse should split the three fields."""
        config = WirelessConfig.parse("true:track:pw")
        assert config == WirelessConfig(ap_enabled=True, ssid="track", password="pw")

    def test_parse_password_with_colons(self) -> None:
        """Everything after the second colon belongs to the password."""
        config = WirelessConfig.parse("false:track:a:b:c")
        assert config.ssid == "track"
        assert config.password == "a:b:c"

    def test_parse_rejects_short_input(self) -> None:
        """parse should reject text with fewer than three fields."""
        with pytest.raises(ValueError):
            WirelessConfig.parse("true:track")


class TestDataclasses:
    """Test request and environment dataclasses."""

    def test_flash_request_defaults_to_empty(self) -> None:
        """Missing request fields should be empty strings."""
        request = FlashRequest()
        assert request.platform == ""
        assert request.serial_port == ""
        assert request.node_address == ""

    def test_resolved_environment_as_env(self) -> None:
        """as_env should use the names the firmware build reads."""
        resolved = ResolvedEnvironment(node_address="5", wifi_config="false:a:b")
        assert resolved.as_env() == {
            "NODE_ADDRESS": "5",
            "WIFI_CONFIG": "false:a:b",
        }
        assert resolved.overridden is False
