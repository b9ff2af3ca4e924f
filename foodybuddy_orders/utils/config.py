"""
Configuration management for the FoodyBuddy orders service.

This module handles:
- Database location (environment-specific default or explicit URL)
- Gateway notification settings
- State machine enforcement for single-order updates
- Log level for the command-line entry point

All settings come from environment variables so the service can be wired the
same way from the CLI, a test suite, or a hosting process.
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from .constants import (
    DATABASE_FILENAME,
    DEFAULT_GATEWAY_TIMEOUT,
    DEFAULT_GATEWAY_URL,
    GATEWAY_STATUS_PATH,
)

ENV_ENVIRONMENT = "ORDERS_ENV"
ENV_DATABASE_URL = "ORDERS_DATABASE_URL"
ENV_GATEWAY_URL = "ORDERS_GATEWAY_URL"
ENV_GATEWAY_TIMEOUT = "ORDERS_GATEWAY_TIMEOUT"
ENV_ENFORCE_TRANSITIONS = "ORDERS_ENFORCE_TRANSITIONS"
ENV_LOG_LEVEL = "ORDERS_LOG_LEVEL"

_FALSE_VALUES = {"0", "false", "no", "off"}


class Config:
    """
    Application configuration manager.

    Handles all configuration settings including database location,
    gateway settings and runtime switches.
    """

    def __init__(self, environment: str = "production", env: Optional[Mapping[str, str]] = None):
        """
        Initialize configuration.

        Args:
            environment: Environment mode - 'production' or 'development'
            env: Mapping to read settings from (defaults to os.environ)
        """
        if env is None:
            env = os.environ

        self.environment = environment

        # Determine base directory
        if environment == "development":
            self._base_dir = self._get_project_data_dir()
        else:
            self._base_dir = self._get_user_data_dir()

        self._database_path = self._base_dir / DATABASE_FILENAME
        self._database_url = env.get(ENV_DATABASE_URL) or None

        self._gateway_url = (env.get(ENV_GATEWAY_URL) or DEFAULT_GATEWAY_URL).rstrip("/")
        self._gateway_timeout = float(env.get(ENV_GATEWAY_TIMEOUT) or DEFAULT_GATEWAY_TIMEOUT)
        self._enforce_transitions = (
            env.get(ENV_ENFORCE_TRANSITIONS, "1").strip().lower() not in _FALSE_VALUES
        )
        self._log_level = (env.get(ENV_LOG_LEVEL) or "INFO").upper()

    def _get_project_data_dir(self) -> Path:
        """
        Get the project's data directory for development.

        Returns:
            Path to project data/ directory
        """
        project_root = Path(__file__).parent.parent.parent
        return project_root / "data"

    def _get_user_data_dir(self) -> Path:
        """
        Get the per-user data directory for production.

        Returns:
            Path to ~/.foodybuddy_orders
        """
        return Path.home() / ".foodybuddy_orders"

    def ensure_directories(self) -> None:
        """Create the database directory if the default SQLite file is in use."""
        if self._database_url is None:
            self._base_dir.mkdir(parents=True, exist_ok=True)

    @property
    def database_path(self) -> Path:
        """Full path to the default database file."""
        return self._database_path

    @property
    def database_url(self) -> str:
        """
        SQLAlchemy database URL.

        Returns:
            ORDERS_DATABASE_URL if set, otherwise a SQLite URL for database_path
        """
        if self._database_url:
            return self._database_url
        # Use forward slashes for SQLite URL
        db_path_str = str(self._database_path).replace("\\", "/")
        return f"sqlite:///{db_path_str}"

    @property
    def gateway_url(self) -> str:
        """Gateway base URL without a trailing slash."""
        return self._gateway_url

    @property
    def gateway_status_url(self) -> str:
        """Endpoint that receives order status notifications."""
        return self._gateway_url + GATEWAY_STATUS_PATH

    @property
    def gateway_timeout(self) -> float:
        """Seconds before a gateway notification is abandoned."""
        return self._gateway_timeout

    @property
    def enforce_transitions(self) -> bool:
        """Whether single-order updates must follow the state machine."""
        return self._enforce_transitions

    @property
    def log_level(self) -> int:
        """Numeric log level for the CLI (unknown names fall back to INFO)."""
        level = logging.getLevelName(self._log_level)
        return level if isinstance(level, int) else logging.INFO

    def database_exists(self) -> bool:
        """
        Check if the default database file exists.

        Always True when an explicit database URL is configured, since the
        store then lives outside this service's control.
        """
        if self._database_url:
            return True
        return self._database_path.exists()

    def __repr__(self) -> str:
        """String representation of config."""
        return (
            f"Config(environment='{self.environment}', "
            f"database_url='{self.database_url}', gateway_url='{self._gateway_url}')"
        )


# Global configuration instance
_config_instance: Optional[Config] = None


def get_config(environment: Optional[str] = None) -> Config:
    """
    Get the global configuration instance.

    Once created, the singleton's environment cannot be changed by passing
    a different environment argument - this prevents accidental database
    switching mid-process.

    Args:
        environment: Optional environment for initial creation. If None, uses
                    ORDERS_ENV or defaults to production. Ignored if
                    singleton already exists.

    Returns:
        Config instance
    """
    global _config_instance

    if _config_instance is None:
        if environment is None:
            environment = os.environ.get(ENV_ENVIRONMENT, "production")
        _config_instance = Config(environment)
    elif environment is not None and environment != _config_instance.environment:
        logger = logging.getLogger(__name__)
        logger.warning(
            f"get_config() called with environment='{environment}' but singleton "
            f"already exists with environment='{_config_instance.environment}'. "
            f"Returning existing singleton to prevent database switching."
        )

    return _config_instance


def reset_config():
    """
    Reset the global configuration instance.

    Useful for testing.
    """
    global _config_instance
    _config_instance = None
