"""
Configuration management system for the Restaurant Finder.
"""

import json
import os
from typing import Any, Dict, Optional

import yaml

from ..models.config import DEFAULT_BASE_URL, Configuration
from ..utils.error_handling import ErrorCategory, ErrorSeverity, with_error_handling
from ..utils.logging import get_logger

logger = get_logger("config.manager")

CONFIG_SEARCH_PATHS = [
    "config/config.yaml",
    "config/config.yml",
    "config/config.json",
    "config.yaml",
    "config.yml",
    "config.json",
]


class ConfigurationManager:
    """Manages loading, validation, and reloading of system configuration."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file. If None, the standard
                locations are searched and defaults are used when none exists.
        """
        self.config_path = config_path or self._find_config_file()
        self._config: Optional[Configuration] = None
        self._last_modified: Optional[float] = None

    def _find_config_file(self) -> Optional[str]:
        """Find the configuration file in standard locations."""
        for path in CONFIG_SEARCH_PATHS:
            if os.path.exists(path):
                return path
        return None

    @with_error_handling(
        component="config.manager",
        category=ErrorCategory.CONFIGURATION,
        severity=ErrorSeverity.HIGH,
    )
    def load_config(self) -> Configuration:
        """
        Load configuration from file.

        Returns:
            Configuration object with validated settings. Defaults are
            returned when no configuration file was found.

        Raises:
            ValueError: If configuration is invalid or file cannot be read.
            FileNotFoundError: If the given configuration file doesn't exist.
        """
        if self.config_path is None:
            logger.info("No configuration file found, using defaults")
            config = Configuration()
            config.validate()
            self._config = config
            return config

        if not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        raw_config = self._read_file(self.config_path)
        raw_config = self._expand_env_vars(raw_config)

        config = self._parse_config(raw_config)

        try:
            config.validate()
        except ValueError as e:
            raise ValueError(f"Invalid configuration: {e}") from e

        self._config = config
        self._last_modified = os.path.getmtime(self.config_path)

        logger.info(
            "Configuration loaded",
            extra={"config_path": self.config_path, "base_url": config.base_url},
        )
        return config

    def _read_file(self, config_path: str) -> Dict[str, Any]:
        """Read a YAML or JSON configuration file into a dictionary."""
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if config_path.endswith(".json"):
                    raw_config = json.load(f)
                else:
                    raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}") from e
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {e}") from e

        if raw_config is None:
            return {}

        if not isinstance(raw_config, dict):
            raise ValueError("Configuration file must contain a mapping")

        return raw_config

    def _expand_env_vars(self, obj: Any) -> Any:
        """Recursively expand environment variables in configuration."""
        if isinstance(obj, dict):
            return {key: self._expand_env_vars(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [self._expand_env_vars(item) for item in obj]
        elif isinstance(obj, str):
            # Expand ${VAR_NAME} patterns
            if obj.startswith("${") and obj.endswith("}"):
                var_name = obj[2:-1]
                env_value = os.getenv(var_name)
                if env_value is None:
                    raise ValueError(f"Environment variable '{var_name}' not found")
                return env_value
            return obj
        else:
            return obj

    def _parse_config(self, raw_config: Dict[str, Any]) -> Configuration:
        """Parse raw configuration dictionary into Configuration object."""
        directory_data = raw_config.get("directory") or {}
        display_data = raw_config.get("display") or {}
        logging_data = raw_config.get("logging") or {}

        defaults = Configuration()

        return Configuration(
            base_url=directory_data.get("base_url", defaults.base_url),
            request_timeout=directory_data.get("timeout", defaults.request_timeout),
            max_display_count=display_data.get(
                "max_display_count", defaults.max_display_count
            ),
            default_max_delivery_minutes=display_data.get(
                "default_max_delivery_minutes", defaults.default_max_delivery_minutes
            ),
            log_level=logging_data.get("level", defaults.log_level),
            log_dir=logging_data.get("dir", defaults.log_dir),
        )

    def get_config(self) -> Configuration:
        """
        Get current configuration, loading if necessary.

        Returns:
            Current configuration object.
        """
        if self._config is None:
            return self.load_config()
        return self._config

    def reload_if_changed(self) -> bool:
        """
        Reload configuration if file has been modified.

        Returns:
            True if configuration was reloaded, False otherwise.
        """
        if self.config_path is None or not os.path.exists(self.config_path):
            return False

        current_modified = os.path.getmtime(self.config_path)

        if self._last_modified is None or current_modified > self._last_modified:
            try:
                self.load_config()
                return True
            except (ValueError, OSError) as e:
                # If reload fails, keep current config
                logger.warning(
                    "Configuration reload failed, keeping current settings",
                    extra={"error": str(e)},
                )
                return False

        return False

    def validate_config_file(self, config_path: str) -> bool:
        """
        Validate a configuration file without loading it.

        Args:
            config_path: Path to configuration file to validate.

        Returns:
            True if configuration is valid.

        Raises:
            ValueError: If configuration is invalid with detailed error message.
        """
        if not os.path.exists(config_path):
            raise ValueError(f"Configuration file not found: {config_path}")

        try:
            raw_config = self._read_file(config_path)

            # Missing environment variables are not a validation failure
            try:
                raw_config = self._expand_env_vars(raw_config)
            except ValueError:
                pass

            config = self._parse_config(raw_config)
            if config.base_url.startswith("${"):
                config.base_url = DEFAULT_BASE_URL
            config.validate()

            return True

        except ValueError as e:
            raise ValueError(f"Configuration validation failed: {e}") from e

    def get_config_template(self) -> Dict[str, Any]:
        """
        Get a template configuration dictionary.

        Returns:
            Dictionary with example configuration structure.
        """
        return {
            "directory": {
                "base_url": DEFAULT_BASE_URL,
                "timeout": 10,
            },
            "display": {
                "max_display_count": 20,
                "default_max_delivery_minutes": 45,
            },
            "logging": {
                "level": "INFO",
                "dir": "logs",
            },
        }
