"""Tests for the configuration manager."""

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from src.usergroup_manager.utils.config import DEFAULT_FUNCTION_CONFIG, Config
from src.usergroup_manager.utils.logging_config import LogFormat, LogLevel


@pytest.fixture
def config_dir():
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


def write_config(config_dir: Path, content: str) -> Path:
    config_file = config_dir / "config.yaml"
    config_file.write_text(content, encoding="utf-8")
    return config_file


class TestConfigLoading:
    """Test reading the YAML configuration file."""

    def test_missing_file_uses_defaults(self, config_dir):
        config = Config(config_dir / "missing.yaml")

        assert config.get_function_config() == DEFAULT_FUNCTION_CONFIG
        assert config.get("function.default_region") is None

    def test_dot_notation(self, config_dir):
        config = Config(write_config(config_dir, "function:\n  default_region: eu-west-1\n"))

        assert config.get("function.default_region") == "eu-west-1"
        assert config.get("function.unknown", "fallback") == "fallback"
        assert config.get("function") == {"default_region": "eu-west-1"}

    def test_file_overrides_defaults(self, config_dir):
        config = Config(
            write_config(
                config_dir,
                "function:\n  default_region: eu-west-1\n  response_ttl_seconds: 300\n",
            )
        )

        function_config = config.get_function_config()
        assert function_config["default_region"] == "eu-west-1"
        assert function_config["response_ttl_seconds"] == 300
        assert function_config["context_key"] == "discoveredUserIDs"

    def test_invalid_yaml_uses_defaults(self, config_dir):
        config = Config(write_config(config_dir, "function: [unterminated\n"))

        assert config.get_function_config() == DEFAULT_FUNCTION_CONFIG

    def test_non_mapping_uses_defaults(self, config_dir):
        config = Config(write_config(config_dir, "- just\n- a list\n"))

        assert config.get_function_config() == DEFAULT_FUNCTION_CONFIG

    def test_env_selects_config_file(self, config_dir):
        config_file = write_config(config_dir, "function:\n  credentials_name: aws-prod\n")

        with patch.dict("os.environ", {"USERGROUP_MANAGER_CONFIG": str(config_file)}):
            config = Config()

        assert config.config_file == config_file
        assert config.get_function_config()["credentials_name"] == "aws-prod"

    def test_reload_config(self, config_dir):
        config_file = write_config(config_dir, "function:\n  default_region: eu-west-1\n")
        config = Config(config_file)
        assert config.get("function.default_region") == "eu-west-1"

        config_file.write_text("function:\n  default_region: us-west-2\n", encoding="utf-8")
        config.reload_config()

        assert config.get("function.default_region") == "us-west-2"


class TestEnvironmentOverrides:
    """Test environment variables override file values."""

    def test_default_region_env(self, config_dir):
        config = Config(write_config(config_dir, "function:\n  default_region: eu-west-1\n"))

        with patch.dict("os.environ", {"USERGROUP_MANAGER_DEFAULT_REGION": "ca-central-1"}):
            assert config.get_function_config()["default_region"] == "ca-central-1"

    def test_ttl_env(self, config_dir):
        config = Config(config_dir / "missing.yaml")

        with patch.dict("os.environ", {"USERGROUP_MANAGER_RESPONSE_TTL": "15"}):
            assert config.get_function_config()["response_ttl_seconds"] == 15

    def test_invalid_ttl_env(self, config_dir):
        config = Config(config_dir / "missing.yaml")

        with patch.dict("os.environ", {"USERGROUP_MANAGER_RESPONSE_TTL": "soon"}):
            assert config.get_function_config()["response_ttl_seconds"] == 60


class TestLoggingConfig:
    """Test building LoggingConfig from configuration."""

    def test_defaults(self, config_dir):
        with patch.dict("os.environ", {}, clear=True):
            logging_config = Config(config_dir / "missing.yaml").get_logging_config()

        assert logging_config.level == LogLevel.INFO
        assert logging_config.format_type == LogFormat.DETAILED
        assert logging_config.console_colors is True

    def test_from_file(self, config_dir):
        config = Config(
            write_config(
                config_dir, "logging:\n  level: debug\n  format: JSON\n  console_colors: false\n"
            )
        )

        with patch.dict("os.environ", {}, clear=True):
            logging_config = config.get_logging_config()

        assert logging_config.level == LogLevel.DEBUG
        assert logging_config.format_type == LogFormat.JSON
        assert logging_config.console_colors is False

    def test_env_level(self, config_dir):
        config = Config(config_dir / "missing.yaml")

        with patch.dict("os.environ", {"USERGROUP_MANAGER_LOG_LEVEL": "warning"}):
            assert config.get_logging_config().level == LogLevel.WARNING

    def test_invalid_values_fall_back(self, config_dir):
        config = Config(write_config(config_dir, "logging:\n  level: loud\n  format: xml\n"))

        with patch.dict("os.environ", {}, clear=True):
            logging_config = config.get_logging_config()

        assert logging_config.level == LogLevel.INFO
        assert logging_config.format_type == LogFormat.DETAILED
