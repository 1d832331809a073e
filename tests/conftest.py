"""Shared pytest fixtures."""

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Isolate tests from the caller's environment and any local .env file."""
    for name in (
        "WIFI_CONFIG",
        "NODE_ADDRESS",
        "NODEFLASH_FLASH_TOOL",
        "NODEFLASH_FLASH_SPEED",
        "NODEFLASH_PARTITION_TABLE",
        "NODEFLASH_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
