"""
Configuration management using pydantic-settings.

Loads configuration from INFILES_-prefixed environment variables and .env
files. Validates fields and provides typed access to settings.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Optional:
        INFILES_CACHE_DIR: Cache base directory (absolute or project-relative)
        INFILES_ROOT_MARKER: File name that marks the project root
        INFILES_LOG_LEVEL: Logging level
        INFILES_LOG_FILE: JSON-lines log file
    """

    model_config = SettingsConfigDict(
        env_prefix="INFILES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    CACHE_DIR: Path = Field(
        default=Path(".cache/infiles"),
        description="Cache base directory, absolute or relative to the project root",
    )
    ROOT_MARKER: str = Field(
        default="package.json",
        description="File whose directory is taken as the project root",
    )

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    LOG_FILE: Path | None = Field(default=None, description="JSON-lines log file")

    @property
    def cache_dir(self) -> Path:
        """Get cache directory (lowercase alias)."""
        return self.CACHE_DIR

    @property
    def root_marker(self) -> str:
        """Get root marker (lowercase alias)."""
        return self.ROOT_MARKER

    @field_validator("ROOT_MARKER")
    @classmethod
    def validate_root_marker(cls, v: str) -> str:
        """Validate that ROOT_MARKER is a bare file name."""
        v = v.strip()
        if not v or "/" in v or "\\" in v:
            raise ValueError("ROOT_MARKER must be a bare file name, e.g. package.json")
        return v

    def display(self) -> dict[str, str | None]:
        """Return settings as strings for display."""
        return {
            "CACHE_DIR": str(self.CACHE_DIR),
            "ROOT_MARKER": self.ROOT_MARKER,
            "LOG_LEVEL": self.LOG_LEVEL,
            "LOG_FILE": str(self.LOG_FILE) if self.LOG_FILE else None,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton.

    Returns:
        Settings instance loaded from environment.

    Raises:
        ValidationError: If settings are invalid.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
