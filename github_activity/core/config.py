"""
Configuration Management.

Loads settings from config/settings/*.yaml (shipped inside the package) and
environment overrides prefixed with GITHUB_ACTIVITY_.

Settings (YAML):
    application.yaml   - App identity, upstream API, output options
    logging.yaml       - Logging configuration

Environment (GITHUB_ACTIVITY_*):
    CONFIG_DIR    - Alternate directory holding the YAML files
    API_BASE_URL  - Override api.base_url (e.g. a GitHub Enterprise host)
    LOG_LEVEL     - Override the logging.yaml level
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from github_activity.core.config_schema import ApplicationSchema, LoggingSchema
from github_activity.core.exceptions import ConfigurationError

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent.parent / "config" / "settings"


class Settings(BaseSettings):
    """Environment overrides. Nothing here is required."""

    config_dir: Path | None = None
    api_base_url: str | None = None
    log_level: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_ACTIVITY_",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached environment settings."""
    return Settings()


def find_config_dir() -> Path:
    """Return the directory holding the YAML settings files."""
    override = get_settings().config_dir
    if override is not None:
        return override.expanduser()
    return DEFAULT_CONFIG_DIR


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from the settings directory."""
    config_path = find_config_dir() / filename

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {filename}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Invalid configuration in {filename}: expected a mapping")
    return data


def load_validated_config(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = load_validated_config(ApplicationSchema, "application.yaml")
        self._logging = load_validated_config(LoggingSchema, "logging.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_api_base_url() -> tuple[str, float]:
    """
    Get the GitHub API base URL and request timeout.

    The GITHUB_ACTIVITY_API_BASE_URL environment variable wins over
    application.yaml.

    Returns:
        Tuple of (base_url, timeout_seconds).
    """
    api = get_app_config().application.api
    base_url = get_settings().api_base_url or api.base_url
    return base_url.rstrip("/"), float(api.timeout)
