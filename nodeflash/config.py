"""Configuration settings for nodeflash.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI arguments > env vars > defaults.
"""

import shlex
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PARTITION_TABLE = Path("partitions") / "partitions_singleapp_4MB.csv"


class Settings(BaseSettings):
    """Application settings.

    Tool settings are loaded from environment variables with the NODEFLASH_
    prefix. The wireless override is read from WIFI_CONFIG, the same name
    the firmware build consumes.
    """

    model_config = SettingsConfigDict(
        env_prefix="NODEFLASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Wireless override
    wifi_config: str | None = Field(
        default=None,
        validation_alias="WIFI_CONFIG",
        description="Pre-built 'ap_enabled:ssid:password' triple; skips derivation",
    )

    # Flashing tool
    flash_tool: str = Field(
        default="cargo espflash",
        min_length=1,
        description="Command used to build, flash and monitor the firmware",
    )
    flash_speed: int = Field(
        default=1500000,
        ge=1,
        description="Serial transfer speed in baud",
    )
    partition_table: Path = Field(
        default=DEFAULT_PARTITION_TABLE,
        description="Partition table file passed to the flashing tool",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )

    @field_validator("wifi_config")
    @classmethod
    def _empty_override_is_unset(cls, value: str | None) -> str | None:
        return value or None

    @field_validator("flash_tool")
    @classmethod
    def _flash_tool_is_a_command(cls, value: str) -> str:
        # shlex.split raises ValueError on unbalanced quotes
        if not shlex.split(value):
            raise ValueError("flash_tool must name a command")
        return value


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = ["DEFAULT_PARTITION_TABLE", "Settings", "get_settings", "print_settings_json"]
