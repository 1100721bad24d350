"""
Configuration Management Service

Centralized config loading and read-only lookups.
Used by every command that talks to the platform API.
"""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import dotenv_values

from hoist.constants import (
    CONFIG_PATH_ENV,
    DEFAULT_API_TIMEOUT,
    DEFAULT_API_URL,
    DEFAULT_CONFIG_PATH,
    DEFAULT_LOG_DIR,
    DOTENV_FILENAME,
    ENV_PREFIX,
    INT_CONFIG_KEYS,
)
from hoist.exceptions import ConfigurationError

DEFAULTS: Dict[str, Any] = {
    "api_url": DEFAULT_API_URL,
    "timeout": DEFAULT_API_TIMEOUT,
    "log_dir": DEFAULT_LOG_DIR,
}

KNOWN_KEYS = (
    "username",
    "api_url",
    "api_token",
    "loglength",
    "timeout",
    "log_dir",
)

# Hints shown when a required key is missing
REQUIRED_HINTS = {
    "username": "Set HOIST_USERNAME or add 'username' to ~/.hoist/config.yml",
    "api_url": "Set HOIST_API_URL or add 'api_url' to ~/.hoist/config.yml",
    "api_token": "Set HOIST_API_TOKEN or add 'api_token' to ~/.hoist/config.yml",
}


class ConfigService:
    """
    Read-only configuration store.

    Sources, lowest precedence first:
    - Built-in defaults
    - YAML config file (~/.hoist/config.yml or $HOIST_CONFIG)
    - .env file in the working directory
    - HOIST_* environment variables
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        dotenv_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.environ = os.environ if environ is None else environ
        self.config_path = config_path or Path(
            self.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)
        ).expanduser()
        self.dotenv_path = dotenv_path or Path.cwd() / DOTENV_FILENAME
        self._values: Optional[Dict[str, Any]] = None

    def load(self, force_reload: bool = False) -> Dict[str, Any]:
        """
        Load configuration from all sources with caching.

        Args:
            force_reload: Re-read files and environment

        Returns:
            Merged configuration dict

        Raises:
            ConfigurationError: If the config file or a value is invalid
        """
        if self._values is None or force_reload:
            values = dict(DEFAULTS)
            values.update(self._load_file())
            values.update(self._load_prefixed(self._load_dotenv()))
            values.update(self._load_prefixed(self.environ))
            self._values = self._coerce(values)

        return self._values

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        value = self.load().get(key)
        return default if value is None else value

    def require(self, key: str) -> Any:
        """
        Get a configuration value that must be set.

        Raises:
            ConfigurationError: If the value is missing
        """
        value = self.get(key)
        if value in (None, ""):
            raise ConfigurationError(
                f"Missing configuration value '{key}'",
                context=REQUIRED_HINTS.get(key),
            )
        return value

    def _load_file(self) -> Dict[str, Any]:
        """Read the YAML config file (missing file is not an error)."""
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Cannot read config file {self.config_path}", context=str(e)
            )

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Invalid config file {self.config_path}",
                context="Top level must be a mapping of key: value",
            )

        return {k: v for k, v in data.items() if k in KNOWN_KEYS}

    def _load_dotenv(self) -> Dict[str, Optional[str]]:
        if not self.dotenv_path.exists():
            return {}
        return dotenv_values(self.dotenv_path)

    def _load_prefixed(self, source: Mapping[str, Optional[str]]) -> Dict[str, Any]:
        """Pick HOIST_* variables and map them to config keys."""
        values = {}
        for name, value in source.items():
            if not name.startswith(ENV_PREFIX) or value in (None, ""):
                continue
            key = name[len(ENV_PREFIX) :].lower()
            if key in KNOWN_KEYS:
                values[key] = value
        return values

    def _coerce(self, values: Dict[str, Any]) -> Dict[str, Any]:
        for key in INT_CONFIG_KEYS:
            value = values.get(key)
            if value is None or value == "":
                values[key] = None
                continue
            try:
                values[key] = int(value)
            except (TypeError, ValueError):
                raise ConfigurationError(
                    f"Invalid value for '{key}': {value!r}",
                    context="Expected an integer",
                ) from None

        if values.get("api_url"):
            values["api_url"] = str(values["api_url"]).rstrip("/")

        return values
