"""
Configuration loading and validation for the database backup tool.
"""

import os
import re
from typing import Any

import yaml


class ConfigLoader:
    """Loads and validates configuration from YAML file."""

    ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')

    REQUIRED_CONNECTION_KEYS = ('host', 'user')
    CONNECTION_DEFAULTS = {
        'port': 3306,
        'password': '',
        'database': None,
    }

    def __init__(self, config_path: str):
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        with open(self.config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise ValueError(f"Configuration in '{self.config_path}' must be a mapping of sections")
        return self._resolve_env_vars(config)

    def _resolve_env_vars(self, obj: Any) -> Any:
        """Recursively replace ${NAME} with the environment value, or '' when unset."""
        if isinstance(obj, str):
            return self.ENV_VAR_PATTERN.sub(lambda m: os.environ.get(m.group(1), ''), obj)
        if isinstance(obj, dict):
            return {k: self._resolve_env_vars(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [self._resolve_env_vars(item) for item in obj]
        return obj

    def get_connection(self) -> dict[str, Any]:
        """
        Get database connection settings with defaults applied.

        ``host`` and ``user`` are required; ``port``, ``password`` and
        ``database`` fall back to CONNECTION_DEFAULTS.
        """
        connection = self.config.get('connection')
        if not connection:
            raise ValueError("Section 'connection' not found in configuration")

        missing = [key for key in self.REQUIRED_CONNECTION_KEYS if key not in connection]
        if missing:
            raise ValueError(f"Connection setting '{missing[0]}' not found in configuration")

        settings = {**self.CONNECTION_DEFAULTS, **connection}
        if settings['port'] in (None, ''):
            settings['port'] = self.CONNECTION_DEFAULTS['port']
        try:
            settings['port'] = int(settings['port'])
        except (TypeError, ValueError):
            raise ValueError(
                f"Connection setting 'port' must be a number, got {settings['port']!r}"
            ) from None
        return settings

    def get_backup_settings(self) -> dict[str, Any]:
        """Get table selection and export settings."""
        return self.config.get('backup') or {}

    def get_output_settings(self) -> dict[str, Any]:
        """Get output settings."""
        return self.config.get('output') or {}

    def get_logging_settings(self) -> dict[str, Any]:
        """Get logging settings."""
        return self.config.get('logging') or {}
