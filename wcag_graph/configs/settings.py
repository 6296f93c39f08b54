"""Centralized settings management for the WCAG documentation graph build."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wcag_graph.schemas.taxonomy import WcagVersion


class Settings(BaseSettings):
    """
    Build settings powered by pydantic-settings.

    Loads configuration from environment variables and a .env file located
    in the current working directory.
    """

    # -------------------------------------------------------------------------
    # BUILD TARGET
    # -------------------------------------------------------------------------
    WCAG_VERSION: WcagVersion = WcagVersion.WCAG22

    # -------------------------------------------------------------------------
    # PATHS
    # -------------------------------------------------------------------------
    # Root of the WCAG source tree (holds guidelines/, understanding/, techniques/)
    SOURCE_ROOT: Path = Path(".")

    # -------------------------------------------------------------------------
    # RESOURCES
    # -------------------------------------------------------------------------
    READ_PARALLELISM: int = Field(default=8, ge=1)

    # -------------------------------------------------------------------------
    # LOGGING
    # -------------------------------------------------------------------------
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Allow extra fields in .env but ignore them in the model
        extra="ignore",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid LOG_LEVEL: {value}")
        return level

    @property
    def version_decimal(self) -> str:
        """Dotted form of the target version, e.g. "2.2"."""
        return self.WCAG_VERSION.decimal


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()

