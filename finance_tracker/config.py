"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode secrets or connection strings in code.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Finance Tracker"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Database
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "postgresql://localhost:5432/finance_tracker"
    )

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_JSON: bool = os.getenv("LOG_JSON", "true").lower() == "true"

    # API keys handed out to third-party integrations start with this
    API_KEY_PREFIX: str = os.getenv("API_KEY_PREFIX", "ft_")

    # Stock quote webhook
    QUOTE_API_URL: str = os.getenv(
        "QUOTE_API_URL",
        "http://localhost:8080/quotes"
    )
    QUOTE_API_TIMEOUT: float = float(os.getenv("QUOTE_API_TIMEOUT", "5.0"))

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Created once and reused, so environment variables are
    read a single time per process.
    """
    return Settings()
