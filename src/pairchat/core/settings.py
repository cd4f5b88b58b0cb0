"""Application settings and configuration.

This module defines all configuration options for the Pairchat service.
Settings are loaded from environment variables with sensible defaults.
"""

import json
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or a ``.env`` file.
    Rate limiter window and cap, like the seed user set, are read once at
    startup and stay fixed for the life of the process.
    """

    # Application metadata
    app_name: str = Field(default="Pairchat", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Server process
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=5000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Fixed-window rate limiting (per client address)
    rate_limit_window_ms: int = Field(default=60_000, gt=0, alias="RATE_LIMIT_WINDOW_MS")
    rate_limit_max_requests: int = Field(default=100, gt=0, alias="RATE_LIMIT_MAX_REQUESTS")
    rate_limit_trust_forwarded_for: bool = Field(
        default=False,
        alias="RATE_LIMIT_TRUST_FORWARDED_FOR",
    )

    # Known users; membership is the only thing checked about a user.
    # Accepts a JSON list or a comma-separated string, e.g. SEED_USERS=alice,bob
    seed_users: Annotated[list[str], NoDecode] = Field(
        default=["user1", "user2", "user3", "user4"],
        alias="SEED_USERS",
    )

    # Exposes POST /system/reset when enabled
    admin_reset_enabled: bool = Field(default=False, alias="ADMIN_RESET_ENABLED")

    # CORS configuration for web frontend access
    cors_origins: Annotated[list[str], NoDecode] = Field(default=["*"], alias="CORS_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=".env",
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("seed_users", "cors_origins", mode="before")
    @classmethod
    def _split_list(cls, value: Any) -> Any:
        """Parse list settings given as JSON arrays or comma-separated strings."""
        if not isinstance(value, str):
            return value
        text = value.strip()
        if text.startswith("["):
            return json.loads(text)
        return [item.strip() for item in text.split(",") if item.strip()]

    @property
    def rate_limit_window_seconds(self) -> float:
        """Return the rate limit window length in seconds."""
        return self.rate_limit_window_ms / 1000


settings = Settings()
