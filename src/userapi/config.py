"""Configuration management for the User Management API."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def _get_env_file_path() -> str:
    """Get the path to the .env file.

    Checks for ENV_FILE environment variable first, then defaults to
    .env in the project root directory.

    Returns:
        Path to the .env file
    """
    env_file = os.getenv("ENV_FILE")
    if env_file:
        return env_file

    # This file is in src/userapi/config.py, the project root is 3 levels up
    current_file = Path(__file__)
    project_dir = current_file.parent.parent.parent
    default_env_file = project_dir / ".env"
    return str(default_env_file)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "user-management-api"
    app_version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "info"

    # API
    api_host: str = "localhost"
    api_port: int = 8000

    # Security
    auth_token: str = "valid-token"
    https_redirect: bool = True

    model_config = SettingsConfigDict(
        env_file=_get_env_file_path(),
        case_sensitive=False,
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
