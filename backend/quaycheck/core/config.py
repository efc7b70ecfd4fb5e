"""
Configuration management

Centralized settings using Pydantic BaseSettings for type-safe configuration
with environment variable support.
"""

import logging
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .paths import get_package_root, get_static_dir

logger = logging.getLogger(__name__)

DEFAULT_DOCKER_HOST = "unix:///var/run/docker.sock"


class Settings(BaseSettings):
    """
    Application settings with environment variable support

    Settings can be overridden via environment variables:
    - DOCKER_HOST=tcp://socket-proxy:2375
    - DOCKER_API_VERSION=1.43
    - PORT=8080 (or API_PORT)
    - LOG_LEVEL=DEBUG
    """

    # Docker Engine API
    docker_host: str = DEFAULT_DOCKER_HOST
    docker_api_version: str | None = None
    # No client-side deadline unless explicitly configured
    docker_timeout: float | None = None

    # API
    api_host: str = "0.0.0.0"
    api_port: int = Field(8080, validation_alias=AliasChoices("api_port", "port"))
    cors_origins: list[str] = ["*"]

    # Browser UI assets
    static_dir: Path = get_static_dir()

    # Environment
    environment: str = "production"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(get_package_root() / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Singleton pattern for settings
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings (singleton)

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        logger.debug(f"Loaded settings: docker_host={_settings.docker_host}")
    return _settings


def is_dev_mode() -> bool:
    """Check if running in development mode"""
    return get_settings().environment.lower() in ("dev", "development")
