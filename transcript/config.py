"""
Engine configuration using pydantic-settings.
Loads from environment variables (prefix TRANSCRIPT_) with .env file support.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TRANSCRIPT_",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR
    project_name: str = "Transcript Ledger"
    version: str = "0.1.0"

    # Grade ledger
    max_score: int = Field(255, ge=0, le=255)  # scores are unsigned bytes

    # Role registry
    min_admins: int = Field(1, ge=1)  # the admin set never empties


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
