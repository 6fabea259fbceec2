"""Application configuration using pydantic-settings.

All fields are overridable via environment variables with the same names
(case-insensitive). There is no configuration file.

Notes:
- HTTP_TIMEOUT_SECONDS is unset by default, which leaves httpx's own default
  timeout in place. The server never retries a failed lookup.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Top-level application settings.

    Env var precedence follows pydantic-settings rules, e.g.
    `MAVEN_CENTRAL_BASE_URL=https://central.example/solrsearch/select`.
    """

    # Maven Central Solr search endpoint
    MAVEN_CENTRAL_BASE_URL: str = "https://search.maven.org/solrsearch/select"

    # HTTP behavior; None keeps the transport default
    HTTP_TIMEOUT_SECONDS: Optional[float] = Field(default=None, gt=0)

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v


__all__ = ["Settings"]
