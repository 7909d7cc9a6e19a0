"""Logging configuration for the usergroup-manager function."""

import json
import logging
import os
import re
import sys
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional


class LogLevel(str, Enum):
    """Log levels for configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


@dataclass
class LoggingConfig:
    """Configuration for logging system."""

    level: LogLevel = LogLevel.INFO
    format_type: LogFormat = LogFormat.DETAILED
    console_colors: bool = True
    log_aws_requests: bool = False
    sensitive_data_patterns: List[str] = field(
        default_factory=lambda: [
            r"(?<![A-Z0-9])(?:AKIA|ASIA)[A-Z0-9]{16}(?![A-Z0-9])",
            r"(?<=aws_secret_access_key=)\S+",
            r"(?<=aws_session_token=)\S+",
        ]
    )


# Attributes every LogRecord has; anything else was passed through ``extra``
_STANDARD_ATTRS = set(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def _extra_fields(record: logging.LogRecord) -> Dict[str, object]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class SensitiveDataFilter(logging.Filter):
    """Filter to redact credential material from log messages."""

    def __init__(self, patterns: List[str]) -> None:
        super().__init__()
        self.patterns = patterns
        self.compiled_patterns = [re.compile(pattern) for pattern in patterns]

    def filter(self, record: logging.LogRecord) -> bool:
        # Records are rewritten in place, never dropped
        if isinstance(record.msg, str):
            record.msg = self._redact_sensitive_data(record.msg)

        if record.args and isinstance(record.args, tuple):
            record.args = tuple(
                self._redact_sensitive_data(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )

        for key, value in _extra_fields(record).items():
            if isinstance(value, str):
                setattr(record, key, self._redact_sensitive_data(value))

        return True

    def _redact_sensitive_data(self, text: str) -> str:
        for pattern in self.compiled_patterns:
            text = pattern.sub("[REDACTED]", text)
        return text


class StructuredFormatter(logging.Formatter):
    """Formatter emitting one JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra_data = {}
        for key, value in _extra_fields(record).items():
            try:
                json.dumps(value)
                extra_data[key] = value
            except (TypeError, ValueError):
                extra_data[key] = str(value)
        if extra_data:
            log_data["extra"] = extra_data

        return json.dumps(log_data, default=str)


class ColoredConsoleFormatter(logging.Formatter):
    """Console formatter with color support and trailing key=value context."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
        "RESET": "\033[0m",
    }

    def __init__(self, use_colors: bool = True, detailed: bool = True) -> None:
        # detailed appends the record extras as key=value pairs
        super().__init__()
        self.use_colors = use_colors and self._supports_color()
        self.detailed = detailed

    def _supports_color(self) -> bool:
        return (
            hasattr(sys.stderr, "isatty")
            and sys.stderr.isatty()
            and os.environ.get("TERM") != "dumb"
        )

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        level = f"{record.levelname:<8}"
        if self.use_colors:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.COLORS['RESET']}"

        formatted = f"[{timestamp}] {level} - {record.name} - {record.getMessage()}"

        if self.detailed:
            context = " ".join(f"{key}={value}" for key, value in _extra_fields(record).items())
            if context:
                formatted += f" {context}"

        if record.exc_info:
            formatted += f"\n{self.formatException(record.exc_info)}"

        return formatted


class FunctionLoggingManager:
    """Sets up handlers for the ``usergroup_manager`` logger namespace."""

    def __init__(self, config: Optional[LoggingConfig] = None):
        self.config = config or LoggingConfig()
        self._handlers_configured = False

    def setup_logging(self) -> None:
        """Install the stderr handler once and quieten the AWS SDK loggers."""
        if self._handlers_configured:
            return

        root_logger = logging.getLogger("usergroup_manager")
        root_logger.setLevel(getattr(logging, self.config.level.value))
        root_logger.handlers.clear()
        root_logger.addHandler(self._create_console_handler())

        self._configure_aws_logging()

        self._handlers_configured = True

    def _create_console_handler(self) -> logging.Handler:
        """Create a stderr handler; stdout is reserved for function output."""
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(getattr(logging, self.config.level.value))

        formatter: logging.Formatter
        if self.config.format_type == LogFormat.JSON:
            formatter = StructuredFormatter()
        else:
            formatter = ColoredConsoleFormatter(
                use_colors=self.config.console_colors,
                detailed=self.config.format_type == LogFormat.DETAILED,
            )
        handler.setFormatter(formatter)

        if self.config.sensitive_data_patterns:
            handler.addFilter(SensitiveDataFilter(self.config.sensitive_data_patterns))

        return handler

    def _configure_aws_logging(self) -> None:
        level = logging.DEBUG if self.config.log_aws_requests else logging.WARNING
        for name in ("boto3", "botocore", "urllib3.connectionpool"):
            logging.getLogger(name).setLevel(level)


_global_logging_manager: Optional[FunctionLoggingManager] = None


def setup_logging(config: Optional[LoggingConfig] = None) -> FunctionLoggingManager:
    """Configure the usergroup_manager loggers and return the manager that did it."""
    global _global_logging_manager
    _global_logging_manager = FunctionLoggingManager(config)
    _global_logging_manager.setup_logging()
    return _global_logging_manager
