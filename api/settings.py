"""
Settings for the reception pass API.

Nexudus credentials, pass-engine limits and CORS origins come from the
environment (or a local .env file) and are read once per process.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Environment-backed settings; variable names are the upper-cased field names.

    Only the Nexudus credentials lack a usable default.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # === Nexudus ===
    nexudus_base_url: str = Field(
        default="https://spaces.nexudus.com/api/spaces",
        description="Base URL of the Nexudus spaces API",
    )
    nexudus_api_username: str = Field(
        default="",
        description="Nexudus API username (Basic auth)",
    )
    nexudus_api_password: str = Field(
        default="",
        validate_default=True,
        description="Nexudus API password (Basic auth)",
    )
    nexudus_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Per-request timeout for upstream calls",
    )

    # === Pass resolution ===
    pass_active_margin_minutes: int = Field(
        default=15,
        ge=0,
        description="Grace margin around a booking for it to count as active",
    )
    pass_page_cap: int = Field(
        default=10,
        ge=1,
        description="Hard limit on pages walked for any paginated list",
    )
    pass_bookings_page_size: int = Field(default=500, ge=1)
    pass_booking_visitors_page_size: int = Field(default=200, ge=1)
    pass_search_page_size: int = Field(default=50, ge=1)
    pass_broad_search_page_size: int = Field(default=200, ge=1)
    pass_max_booking_detail_fetches: int = Field(
        default=20,
        ge=1,
        description="Cap on per-booking fetches when linking a visitor",
    )
    pass_max_name_candidates: int = Field(
        default=5,
        ge=1,
        description="How many ranked name matches are checked for bookings",
    )

    # === CORS Configuration ===
    allowed_origins_str: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        alias="ALLOWED_ORIGINS",
        description="Allowed CORS origins (comma-separated)",
    )

    @property
    def allowed_origins(self) -> list[str]:
        """ALLOWED_ORIGINS split on commas, blanks dropped."""
        return [origin.strip() for origin in self.allowed_origins_str.split(",") if origin.strip()]

    @field_validator("nexudus_api_password", mode="after")
    @classmethod
    def warn_missing_password(cls, v: str) -> str:
        """Warn when credentials are missing; every upstream call will then fail with 401."""
        if not v:
            logger.warning("NEXUDUS_API_PASSWORD is not set; upstream requests will be rejected")
        return v

    @field_validator("nexudus_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Settings for this process, read from the environment on first use."""
    return Settings()
