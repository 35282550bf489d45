"""
Application configuration module.

Provides centralized, environment-safe configuration management
for the DevTogether policy service.
"""

import logging
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden via environment variables
    prefixed with DEVTOGETHER_ (for example DEVTOGETHER_LOG_LEVEL).

    Attributes:
        app_name: Application name.
        app_version: Application version.
        environment: Deployment environment (development, testing, production).
        debug: Debug mode flag. Enables the interactive API docs.
        log_level: Logging level.
        log_format: "console" for development, "json" for log shipping.
        api_prefix: Prefix for the versioned API routers.
        cors_origins: Comma separated list of allowed CORS origins.
    """

    # Application metadata
    app_name: str = Field(default="DevTogether Policy Service")
    app_version: str = Field(default="1.0.0")
    environment: str = Field(default="development")
    debug: bool = Field(default=False)

    # Logging configuration
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")

    # HTTP configuration
    api_prefix: str = Field(default="/api/v1")
    cors_origins: str = Field(default="http://localhost:3000")

    model_config = {
        "env_prefix": "DEVTOGETHER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def cors_origins_list(self) -> List[str]:
        """Split the comma separated CORS origins."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        logger.info(
            f"Settings loaded: app_name={_settings.app_name}, "
            f"environment={_settings.environment}"
        )
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
