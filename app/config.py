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
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 30,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str | None = Field(
        default=None,
        description="IANA timezone name or UTC offset used for timestamps",
    )
    frontend_url: str = Field(
        default="http://localhost:3000",
        description="Comma separated origins allowed by CORS",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )

    azure_storage_connection_string: str | None = Field(
        default=None,
        description="Connection string for Azure Blob Storage; local disk is used when unset",
    )
    azure_storage_container_name: str | None = Field(
        default=None, description="Blob container that receives uploaded files"
    )
    upload_dir: str = Field(
        default="uploads", description="Directory used for uploads stored on local disk"
    )
    max_upload_size: int = Field(
        default=10 * 1024 * 1024,
        description="Largest accepted upload in bytes",
        gt=0,
    )

    razorpay_key_id: str | None = Field(default=None, description="Razorpay key id")
    razorpay_key_secret: str | None = Field(
        default=None, description="Razorpay key secret used for API calls and checkout signatures"
    )
    razorpay_webhook_secret: str | None = Field(
        default=None, description="Shared secret used to sign Razorpay webhooks"
    )

    seed_admin_email: str = Field(default="admin@college.edu")
    seed_admin_password: str = Field(default="admin123")

    @model_validator(mode="after")
    def _validate_pairs(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        if bool(self.razorpay_key_id) ^ bool(self.razorpay_key_secret):
            raise ValueError(
                "RAZORPAY_KEY_ID and RAZORPAY_KEY_SECRET must both be provided to enable payments"
            )
        return self

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.frontend_url.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
