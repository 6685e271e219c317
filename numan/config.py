"""Configuration module using Pydantic Settings."""

import os
import sys
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "numan"


def user_config_dir() -> Path:
    """Return the per-user configuration root of the current platform."""
    if os.name == "nt":
        base = os.getenv("APPDATA")
        if base:
            return Path(base)
        return Path.home() / "AppData" / "Roaming"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


class Settings(BaseSettings):
    """Settings loaded from ``NUMAN_*`` environment variables and a ``.env`` file.

    Attributes:
        config_dir: Directory holding ``config.json`` and the log folder.
        registry_url: Package endpoint uploads are sent to.
        client_version: Value of the ``X-NuGet-Client-Version`` header.
        archive_extension: File extension of package archives.
        upload_timeout: Request timeout in seconds, ``None`` waits forever.
        log_level: Level name for the application logger.
        log_to_file: Write JSONL logs below ``config_dir/logs``.
    """

    model_config = SettingsConfigDict(
        env_prefix="NUMAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    config_dir: Path = Field(
        default_factory=lambda: user_config_dir() / APP_DIR_NAME,
        description="Directory of the configuration file",
    )
    registry_url: str = Field(
        default="https://www.nuget.org/api/v2/package/",
        description="Registry package endpoint",
    )
    client_version: str = Field(default="4.1.0", description="NuGet client version header")
    archive_extension: str = Field(default=".nupkg", description="Package archive extension")
    upload_timeout: Optional[float] = Field(
        default=None,
        description="Upload timeout in seconds (None disables the deadline)",
    )
    log_level: str = Field(default="WARNING", description="Logger level name")
    log_to_file: bool = Field(default=True, description="Write log files into the config dir")

    @property
    def logs_dir(self) -> Path:
        return self.config_dir / "logs"

    @field_validator("archive_extension", mode="before")
    @classmethod
    def dotted_extension(cls, v: str) -> str:
        if isinstance(v, str) and v and not v.startswith("."):
            return "." + v
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns:
        Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
