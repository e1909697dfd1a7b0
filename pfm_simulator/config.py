"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./pfm_simulator.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    jwt_secret: str = Field(
        default="dev-secret-key",
        description="Secret key for signing the simulator's own JWT tokens",
        min_length=1,
    )
    access_token_expire_minutes: int = Field(
        default=24 * 60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone (or UTC+HH:MM offset) used for stored datetimes",
    )
    alert_cooldown_minutes: int = Field(
        default=6 * 60,
        description="Minimum minutes between two notifications fired by the same alert",
        ge=0,
    )
    alert_dedup_window_minutes: int = Field(
        default=30,
        description="Lifetime of notification fingerprints; 0 disables fingerprint dedup",
        ge=0,
    )
    vendor_api_scheme: str = Field(
        default="https",
        description="URL scheme used to reach the vendor API during migrations",
    )
    vendor_api_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout applied to every vendor API request",
        gt=0,
    )
    migration_token_lifetime_minutes: int = Field(
        default=15,
        description="Lifetime of the signed assertion minted for vendor API calls",
        gt=0,
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used to email alert notifications",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of alert emails",
        min_length=3,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API from a browser",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
