"""
Application configuration loaded from environment variables.
"""
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 5000

    # CORS (permissive unless narrowed per deployment)
    cors_allow_origins: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
