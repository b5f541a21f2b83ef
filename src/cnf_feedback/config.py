"""Configuration management for cnf-feedback."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging_utils import LogProfile, configure_logging

DEFAULT_UTILITY_PATHS = (
    Path("/usr/lib/command-not-found"),
    Path("/usr/share/command-not-found/command-not-found"),
)


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="CNF_FEEDBACK_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Helper utility
    utility_paths: list[Path] = Field(
        default_factory=lambda: list(DEFAULT_UTILITY_PATHS),
        description="Well-known helper locations, probed in order",
    )
    no_failure_msg: bool = Field(default=True, description="Pass --no-failure-msg to the helper")

    # Target filtering
    script_suffixes: list[str] = Field(
        default_factory=lambda: [".ps1", ".sh"],
        description="Failed targets ending in these suffixes are treated as scripts",
    )

    # Logging Configuration
    log_level: str = Field(default="WARNING", description="Log level")
    log_profile: LogProfile = Field(default="default", description="Log output profile")

    @field_validator("script_suffixes")
    @classmethod
    def _normalize_suffixes(cls, value: list[str]) -> list[str]:
        return [suffix.casefold() for suffix in value if suffix]

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.strip().upper() or "WARNING"


def get_settings(**overrides: object) -> Settings:
    """Get application settings and configure logging from them."""

    settings = Settings(**overrides)  # type: ignore[arg-type]
    configure_logging(level=settings.log_level, profile=settings.log_profile)
    return settings
