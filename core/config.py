"""Runtime configuration for ncu.

Values are read from environment variables prefixed with ``NCU_`` or from a
``.env`` file in the working directory:

- NCU_REGISTRY_URL: npm registry base URL (default: https://registry.npmjs.org)
- NCU_MANIFEST_NAME: manifest file name (default: package.json)
- NCU_TIMEOUT: registry request timeout in seconds (default: none)
- NCU_MAX_CONCURRENCY: cap on in-flight registry requests (default: none)
- NCU_LOG_LEVEL: logging level (default: WARNING)
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .parse_node import MANIFEST_NAME
from .resolve_node import NPM_REGISTRY_URL


class Settings(BaseSettings):
    """ncu settings."""

    registry_url: str = NPM_REGISTRY_URL
    manifest_name: str = MANIFEST_NAME
    timeout: float | None = Field(default=None, gt=0)
    max_concurrency: int | None = Field(default=None, ge=1)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="NCU_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


@lru_cache()
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
