"""Configuration management for logstats.

Supports:
- Built-in defaults
- User overrides from logstats.yaml
- Environment variable overrides (LOGSTATS_*)
- Nested key access with dot notation
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_LOG_FILE",
    "Config",
    "ConfigError",
    "get_config",
    "reset_config",
]

# Log source used when the analyzer is created without arguments
DEFAULT_LOG_FILE = "demo.log"
DEFAULT_CONFIG_FILE = "logstats.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "source": {"path": DEFAULT_LOG_FILE},
    "logging": {"level": "WARNING", "path": None},
    "generator": {"count": 100, "seed": None},
}

ENV_MAPPINGS = {
    "LOGSTATS_SOURCE_PATH": "source.path",
    "LOGSTATS_LOG_LEVEL": "logging.level",
    "LOGSTATS_LOG_DIR": "logging.path",
}

# Global config instance
_config_instance: Config | None = None


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


class Config:
    """Configuration with defaults, file overrides and env vars.

    Configuration priority (highest to lowest):
    1. Environment variables (LOGSTATS_*)
    2. User config (logstats.yaml)
    3. Built-in defaults

    Example:
        >>> config = Config.load()
        >>> config.get("source.path")
        'demo.log'
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data = data or {}

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> Config:
        """Load configuration from file and environment.

        Parameters
        ----------
        config_path
            Path to user config file (default: logstats.yaml). An explicitly
            given path must exist.

        Returns
        -------
        Config
            Loaded configuration instance

        Raises
        ------
        ConfigError
            If an explicit config file is missing or any file is malformed
        """
        if config_path is None:
            path = Path(DEFAULT_CONFIG_FILE)
            user_config = cls._load_yaml_file(path) if path.exists() else {}
        else:
            path = Path(config_path)
            if not path.exists():
                raise ConfigError(f"Config file not found: {path}")
            user_config = cls._load_yaml_file(path)

        merged = cls._deep_merge(copy.deepcopy(DEFAULT_CONFIG), user_config)
        merged = cls._apply_env_overrides(merged)

        return cls(merged)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Supports dot notation for nested keys, e.g. "logging.level".
        """
        value: Any = self._data

        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value by key (dot notation)."""
        parts = key.split(".")
        data = self._data

        for part in parts[:-1]:
            if part not in data:
                data[part] = {}
            data = data[part]

        data[parts[-1]] = value

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

    @staticmethod
    def _load_yaml_file(path: Path) -> dict[str, Any]:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Malformed config file {path}: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return data

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = Config._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    @staticmethod
    def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
        """Apply LOGSTATS_* environment variable overrides.

        Example: LOGSTATS_LOG_LEVEL overrides config["logging"]["level"]
        """
        result = Config(config)

        for env_var, config_key in ENV_MAPPINGS.items():
            value = os.environ.get(env_var)
            if value is not None:
                result.set(config_key, value)

        return result._data


def get_config() -> Config:
    """Get global configuration instance (singleton)."""
    global _config_instance

    if _config_instance is None:
        _config_instance = Config.load()

    return _config_instance


def reset_config() -> None:
    """Drop the cached global configuration."""
    global _config_instance
    _config_instance = None
