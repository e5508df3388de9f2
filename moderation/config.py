"""
Application configuration using environment variables.
"""
import os
import secrets
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Moderation API"
    debug: bool = False
    environment: str = "development"

    # Security
    secret_key: str = os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60  # 1 hour

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./moderation.db")

    # Logging
    log_level: str = "INFO"

    # Listing
    page_size: int = 50
    login_rate_limit: str = "5/minute"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "MODERATION_"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
