"""
Configuration loading and validation for the schema dumper.
"""

import os
import re
from typing import Any

import yaml


class ConfigLoader:
    """Loads and validates configuration from YAML file."""

    ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')
    REQUIRED_CONNECTION_KEYS = ('host', 'user', 'database')

    def __init__(self, config_path: str):
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        with open(self.config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        return self._resolve_env_vars(config)

    def _resolve_env_vars(self, obj: Any) -> Any:
        """Recursively resolve environment variables in config."""
        if isinstance(obj, str):
            matches = self.ENV_VAR_PATTERN.findall(obj)
            for match in matches:
                env_value = os.environ.get(match, '')
                obj = obj.replace(f'${{{match}}}', env_value)
            return obj
        elif isinstance(obj, dict):
            return {k: self._resolve_env_vars(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._resolve_env_vars(item) for item in obj]
        return obj

    def get_connection_settings(self) -> dict[str, Any]:
        """Get connection settings, checking the required keys are present."""
        settings = dict(self.config.get('connection') or {})
        missing = [key for key in self.REQUIRED_CONNECTION_KEYS if not settings.get(key)]
        if missing:
            raise ValueError(f"Missing connection setting(s): {', '.join(missing)}")
        settings.setdefault('password', '')
        return settings

    def get_output_settings(self) -> dict[str, Any]:
        """Get output settings."""
        return dict(self.config.get('output') or {})

    def get_logging_settings(self) -> dict[str, Any]:
        """Get logging settings."""
        return dict(self.config.get('logging') or {})
