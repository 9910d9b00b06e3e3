"""Config module.

This module provides configuration management functionality.
"""

from rbi_registry.config.manager import (
    get_classification_config,
    get_csv_config,
    get_logging_config,
    get_operation_logging_config,
    load_config,
)
from rbi_registry.config.schema import (
    ClassificationConfig,
    Config,
    CSVConfig,
    LoggingConfig,
    OperationLoggingConfig,
    OutputConfig,
)

__all__ = [
    # Main configuration loading
    "load_config",
    # Helper functions
    "get_classification_config",
    "get_csv_config",
    "get_logging_config",
    "get_operation_logging_config",
    # Configuration models
    "Config",
    "ClassificationConfig",
    "CSVConfig",
    "LoggingConfig",
    "OperationLoggingConfig",
    "OutputConfig",
]
