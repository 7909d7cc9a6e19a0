"""Configuration utilities for usergroup-manager."""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .logging_config import LogFormat, LoggingConfig, LogLevel

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".usergroup-manager"
CONFIG_FILE_YAML = CONFIG_DIR / "config.yaml"
CONFIG_PATH_ENV = "USERGROUP_MANAGER_CONFIG"

DEFAULT_FUNCTION_CONFIG = {
    "default_region": "us-east-1",
    "credentials_name": "aws",
    "context_key": "discoveredUserIDs",
    "condition_type": "UserDiscoverySuccess",
    "response_ttl_seconds": 60,
}

DEFAULT_LOGGING_CONFIG = {
    "level": "INFO",
    "format": "detailed",
    "console_colors": True,
    "log_aws_requests": False,
}


class Config:
    """Manages usergroup-manager configuration from an optional YAML file."""

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize the configuration manager.

        Args:
            config_file: YAML file to read; defaults to $USERGROUP_MANAGER_CONFIG
                or ~/.usergroup-manager/config.yaml
        """
        if config_file is None:
            env_path = os.environ.get(CONFIG_PATH_ENV)
            config_file = Path(env_path) if env_path else CONFIG_FILE_YAML
        self.config_file = Path(config_file).expanduser()
        self.config_data: Dict[str, Any] = {}
        self._config_loaded = False

    def _ensure_config_loaded(self):
        """Ensure configuration is loaded from file."""
        if not self._config_loaded:
            self._load_config()
            self._config_loaded = True

    def _load_config(self):
        """Load the configuration file; a missing file means all defaults."""
        if not self.config_file.exists():
            self.config_data = {}
            return

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Configuration file {self.config_file} is not valid YAML: {e}")
            data = {}
        except OSError as e:
            logger.warning(f"Error reading configuration file {self.config_file}: {e}")
            data = {}

        if not isinstance(data, dict):
            logger.warning(f"Configuration file {self.config_file} must contain a mapping")
            data = {}
        self.config_data = data

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value with dot notation support.

        Args:
            key: Configuration key (supports dot notation like "function.default_region")
            default: Default value if key doesn't exist

        Returns:
            Configuration value
        """
        self._ensure_config_loaded()

        value: Any = self.config_data
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def get_function_config(self) -> Dict[str, Any]:
        """
        Get function configuration with defaults and environment variable overrides.

        Returns:
            Function configuration dictionary
        """
        self._ensure_config_loaded()
        function_config = copy.deepcopy(DEFAULT_FUNCTION_CONFIG)

        file_function_config = self.get("function", {})
        if isinstance(file_function_config, dict):
            function_config.update(file_function_config)

        default_region = os.environ.get("USERGROUP_MANAGER_DEFAULT_REGION")
        if default_region:
            function_config["default_region"] = default_region
        function_config["response_ttl_seconds"] = self._get_env_int(
            "USERGROUP_MANAGER_RESPONSE_TTL", function_config["response_ttl_seconds"]
        )

        return function_config

    def get_logging_config(self) -> LoggingConfig:
        """
        Get logging configuration with defaults and environment variable overrides.

        Returns:
            LoggingConfig instance
        """
        self._ensure_config_loaded()
        logging_config = copy.deepcopy(DEFAULT_LOGGING_CONFIG)

        file_logging_config = self.get("logging", {})
        if isinstance(file_logging_config, dict):
            logging_config.update(file_logging_config)

        level = os.environ.get("USERGROUP_MANAGER_LOG_LEVEL", logging_config["level"])
        try:
            log_level = LogLevel(str(level).upper())
        except ValueError:
            logger.warning(f"Invalid log level {level!r}, using INFO")
            log_level = LogLevel.INFO

        try:
            log_format = LogFormat(str(logging_config["format"]).lower())
        except ValueError:
            logger.warning(f"Invalid log format {logging_config['format']!r}, using detailed")
            log_format = LogFormat.DETAILED

        return LoggingConfig(
            level=log_level,
            format_type=log_format,
            console_colors=bool(logging_config["console_colors"]),
            log_aws_requests=bool(logging_config["log_aws_requests"]),
        )

    def _get_env_int(self, env_var: str, default: int) -> int:
        """
        Get integer value from environment variable.

        Args:
            env_var: Environment variable name
            default: Default value if env var is not set

        Returns:
            Integer value
        """
        value = os.environ.get(env_var)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning(
                f"Invalid integer value for {env_var}: {value}. Using default: {default}"
            )
            return default
