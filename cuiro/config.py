"""Library configuration via pydantic-settings.

Values are loaded from environment variables (or a .env file).
Settings are organized into logical groups and composed into a single Settings object.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ANAF_URL = "https://webservicesp.anaf.ro/PlatitorTvaRest/api/v9/ws/tva"


class AnafSettings(BaseSettings):
    """ANAF VAT registry (PlatitorTvaRest) client settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    anaf_enabled: bool = Field(default=True, description="Build the ANAF client at all")
    anaf_base_url: str = Field(
        default=DEFAULT_ANAF_URL,
        description="ANAF VAT registry endpoint (batched POST)",
    )
    anaf_timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")
    anaf_max_retries: int = Field(default=2, ge=0, description="Retries after the first attempt")
    anaf_max_batch_size: int = Field(default=500, ge=1, description="Max CUIs per request")


class Settings(BaseSettings):
    """Root settings composing all sub-settings.

    Usage:
        settings = Settings()
        settings.log_level
        settings.anaf.anaf_base_url
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = Field(default="INFO")

    anaf: AnafSettings = Field(default_factory=AnafSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper


# Module-level singleton: import this wherever settings are needed.
settings = Settings()
