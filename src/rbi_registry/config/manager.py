"""Configuration manager for loading and managing configuration.

This module provides the main configuration loading and management functionality,
including support for JSON configuration files, environment variable overrides,
and configuration validation.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from rbi_registry.config.defaults import DEFAULT_CONFIG, DEFAULT_CONFIG_PATH
from rbi_registry.config.schema import (
    ClassificationConfig,
    Config,
    CSVConfig,
    LoggingConfig,
    OperationLoggingConfig,
)
from rbi_registry.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Environment variable prefix for all configuration overrides
ENV_PREFIX = "RBI_"

# Environment variable suffix -> (section, field, converter)
ENV_OVERRIDES: list[tuple[str, str, str, Any]] = [
    ("REFERENCE_DATE", "classification", "reference_date", str),
    ("CSV_ENCODING", "csv", "encoding", str),
    ("CSV_MAX_REASONABLE_AGE", "csv", "max_reasonable_age", int),
    ("LOG_LEVEL", "logging", "level", str),
    ("LOG_FILE", "logging", "log_file", str),
    ("REDACT_PII", "logging", "redact_pii", "bool"),
    ("OP_LOG_CSV_LEVEL", "operation_logging", "csv_log_level", str),
    ("OP_LOG_CLASSIFICATION_LEVEL", "operation_logging", "classification_log_level", str),
    ("OP_LOG_STATISTICS_LEVEL", "operation_logging", "statistics_log_level", str),
    ("JSON_INDENT", "output", "json_indent", int),
]


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file and environment variables.

    Configuration is loaded with the following precedence (highest to lowest):
    1. CLI arguments (handled by caller)
    2. Environment variables (RBI_* prefix, .env file honoured)
    3. Configuration file (JSON)
    4. Default values

    Args:
        config_path: Path to configuration file. If None, uses ./config/config.json

    Returns:
        Validated Config instance

    Raises:
        ConfigurationError: If configuration is invalid or malformed

    Example:
        >>> config = load_config(Path("custom/config.json"))
        >>> config.classification.reference_date
        datetime.date(2024, 6, 30)
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_PATH)

    config_dict = _load_config_file(config_path)
    config_dict = _apply_env_overrides(config_dict)

    try:
        return Config(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed:\n{e}\n\n"
            f"Fix: Check your configuration file at {config_path} and the RBI_* "
            f"environment variables, and ensure all values match the expected format."
        ) from e


def _load_config_file(config_path: Path) -> dict[str, Any]:
    """Load configuration file or return defaults.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: If JSON is malformed or the file is unreadable
    """
    if not config_path.exists():
        logger.info(f"Config file not found: {config_path}. Using default configuration.")
        # Deep copy so callers never mutate the defaults
        return json.loads(json.dumps(DEFAULT_CONFIG))

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_dict = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in config file: {config_path}\n"
            f"Error: {e}\n"
            f"Fix: Check JSON syntax at line {e.lineno}, column {e.colno}"
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read config file: {config_path}\n"
            f"Error: {e}\n"
            f"Fix: Check file permissions and path"
        ) from e

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a JSON object at the top level"
        )

    logger.info(f"Loaded configuration from {config_path}")
    return config_dict


def _apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides with RBI_ prefix.

    Environment variables follow the pattern: RBI_<SECTION>_<FIELD>
    For example: RBI_REFERENCE_DATE, RBI_LOG_LEVEL, RBI_OP_LOG_CSV_LEVEL

    Args:
        config_dict: Configuration dictionary to update

    Returns:
        Updated configuration dictionary with environment overrides applied

    Raises:
        ConfigurationError: If a numeric override is not a number
    """
    for suffix, section, field, converter in ENV_OVERRIDES:
        raw = os.getenv(f"{ENV_PREFIX}{suffix}")
        if not raw:
            continue

        if converter == "bool":
            value: Any = _parse_bool(raw)
        else:
            try:
                value = converter(raw)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid value for {ENV_PREFIX}{suffix}: {raw!r}. "
                    f"Fix: Provide a valid {converter.__name__}."
                ) from e

        config_dict.setdefault(section, {})[field] = value
        logger.debug(f"Override: {field} from environment")

    return config_dict


def _parse_bool(value: str) -> bool:
    """Parse boolean value from string (case-insensitive)."""
    return value.lower() in ("true", "1", "yes", "on")


def get_classification_config(config: Config) -> ClassificationConfig:
    """Get classification engine configuration."""
    return config.classification


def get_csv_config(config: Config) -> CSVConfig:
    """Get roster CSV configuration."""
    return config.csv


def get_logging_config(config: Config) -> LoggingConfig:
    """Get logging configuration.

    Example:
        >>> config = load_config()
        >>> get_logging_config(config).level
        'INFO'
    """
    return config.logging


def get_operation_logging_config(config: Config) -> OperationLoggingConfig:
    """Get per-operation logging configuration."""
    return config.operation_logging
