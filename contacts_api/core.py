"""Application configuration and settings management.

This module defines the application settings loaded from environment
variables and provides helpers for accessing cached settings and
configuring logging.
"""

import logging
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Attributes:
        DATABASE_URL: Database connection string.
        ALLOWED_ORIGINS: Allowed origins for CORS.
        REDIS_URL: Redis connection URL for rate limiting.
        RATE_LIMIT_ENABLED: Whether to initialise the Redis rate limiter.
        LOGIN_RATE_LIMIT_TIMES: Login attempts allowed per window.
        LOGIN_RATE_LIMIT_SECONDS: Length of the login rate limit window.
        CURRENT_RATE_LIMIT_TIMES: Current-user reads allowed per window.
        CURRENT_RATE_LIMIT_SECONDS: Length of the current-user rate limit window.
        LOG_LEVEL: Root log level name.
    """

    DATABASE_URL: str = "sqlite:///./contacts.db"
    ALLOWED_ORIGINS: List[str] = ["*"]
    REDIS_URL: str = "redis://localhost:6379"
    RATE_LIMIT_ENABLED: bool = True
    LOGIN_RATE_LIMIT_TIMES: int = 5
    LOGIN_RATE_LIMIT_SECONDS: int = 60
    CURRENT_RATE_LIMIT_TIMES: int = 30
    CURRENT_RATE_LIMIT_SECONDS: int = 60
    LOG_LEVEL: str = "INFO"

    class Config:
        """Pydantic configuration for loading environment variables."""

        env_file = ".env"
        extra = "allow"


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    The settings object is cached to prevent reloading environment
    variables multiple times during application lifetime.
    """

    return Settings()


def configure_logging() -> None:
    """Configure root logging from ``LOG_LEVEL``."""

    logging.basicConfig(
        level=get_settings().LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
