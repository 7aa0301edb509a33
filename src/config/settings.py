# src/config/settings.py - v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for deployment-specific settings: which record
store backs the app, where durable local preferences live, profile
validation thresholds and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Record store ===
    record_store_backend: Literal["memory", "arangodb"] = "memory"
    # Identity of the signed-in user as seen by the record store.
    record_store_user: str = "local-user"

    arangodb_url: str = "http://localhost:8529"
    arangodb_database: str = "jurados"
    arangodb_user: str = "root"
    arangodb_password: str = ""
    arangodb_collection: str = "records"

    # === Durable local preferences ===
    preferences_backend: Literal["json", "sqlite", "redis"] = "json"
    preferences_root: Path = Path("~/.jurados/preferences")
    preferences_redis_url: str = ""

    # === Profile ===
    profile_bio_min_length: int = 90
    profile_bio_max_length: int = 150
    avatar_jpeg_quality: int = 80

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = Path("~/.jurados/logs/app.log")
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("avatar_jpeg_quality")
    @classmethod
    def validate_jpeg_quality(cls, v: int) -> int:  # noqa: N805
        if not 1 <= v <= 95:
            raise ValueError("avatar_jpeg_quality must be between 1 and 95")
        return v

    @field_validator("profile_bio_min_length", "profile_bio_max_length")
    @classmethod
    def validate_bio_lengths(cls, v: int) -> int:  # noqa: N805
        if v < 0:
            raise ValueError("profile bio lengths must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.profile_bio_min_length > self.profile_bio_max_length:
            errors.append(
                "PROFILE_BIO_MIN_LENGTH must be <= PROFILE_BIO_MAX_LENGTH"
            )

        if self.record_store_backend == "arangodb" and not self.arangodb_url:
            errors.append("RECORD_STORE_BACKEND=arangodb requires ARANGODB_URL")

        if not self.record_store_user.strip():
            errors.append("RECORD_STORE_USER must not be empty")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or CLI flags).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
