"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
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
        description="Secret key for verifying JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone (or UTC+HH:MM offset) used for naive workbook timestamps",
    )
    import_session_ttl_minutes: int = Field(
        default=30,
        description="Minutes an unconfirmed import preview is kept before eviction",
        gt=0,
    )
    azure_storage_connection_string: str | None = Field(
        default=None,
        description="Connection string of the storage account used to archive uploads",
    )
    azure_storage_container_name: str | None = Field(
        default=None,
        description="Blob container that receives archived uploads",
    )

    @property
    def archive_enabled(self) -> bool:
        return bool(
            self.azure_storage_connection_string and self.azure_storage_container_name
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
