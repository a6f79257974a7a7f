"""
Importer settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
Values are resolved once at startup and passed down explicitly;
nothing below main.py reads os.environ.
"""

from pathlib import Path
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Importer settings.

    All values loaded from .env file or environment variables.
    CLI flags in main.py override them by re-validating the merged
    values (see main.resolve_settings).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # ===================
    # SOURCE FILES
    # ===================
    csv_dir: Path = Field(
        default=Path("csv-imports"),
        description="Directory holding one CSV export per content type"
    )

    # ===================
    # STRAPI BACKEND
    # ===================
    strapi_url: str = Field(
        default="http://localhost:1337",
        description="Base URL of the Strapi instance (without /api)"
    )
    strapi_token: Optional[str] = Field(
        None,
        description="API token sent as a Bearer credential"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Selects console or JSON log rendering"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Call get_settings.cache_clear() to reload.

    Raises:
        ValidationError: If env vars are present but invalid
    """
    return Settings()
