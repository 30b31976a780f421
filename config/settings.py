"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Toolkit settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on first access.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # SUPABASE
    # ===================
    supabase_url: str = Field(
        ...,
        description="Supabase project URL"
    )
    supabase_key: str = Field(
        ...,
        description="Supabase anon/public key"
    )
    supabase_service_key: Optional[str] = Field(
        None,
        description="Supabase service role key (used for storage uploads)"
    )

    # ===================
    # MEDIA
    # ===================
    media_bucket: str = Field(
        default="media",
        min_length=1,
        description="Storage bucket that receives media bytes"
    )
    media_storage_folder: str = Field(
        default="product_media_folder",
        min_length=1,
        description="Storage folder passed to the media storage subsystem"
    )
    media_folder_name: Optional[str] = Field(
        None,
        description="Media folder record new media is attached to (unset = storage default)"
    )
    media_images_limit: int = Field(
        default=4,
        ge=1,
        le=100,
        description="Maximum images ingested per assign_media call"
    )
    media_download_timeout: float = Field(
        default=30,
        gt=0,
        le=300,
        description="Seconds to wait for a remote image download"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
