"""Default configuration values.

This module defines the default configuration values used when no configuration
file is provided or when configuration values are not specified.
"""

from typing import Any

# Fallback when no configuration file is present
DEFAULT_CONFIG: dict[str, Any] = {
    "classification": {
        # None: classify against the current date at run time
        "reference_date": None,
    },
    "csv": {
        "encoding": "utf-8",
        "max_reasonable_age": 120,
    },
    "logging": {
        "level": "INFO",
        "log_file": "logs/rbi-registry.log",
        # Rosters contain names and birthdates; redaction is opt-in
        "redact_pii": False,
    },
    "operation_logging": {
        "csv_log_level": "INFO",
        # Per-resident classification logs only at DEBUG
        "classification_log_level": "WARNING",
        "statistics_log_level": "INFO",
    },
    "output": {
        "json_indent": 2,
    },
}

# Default configuration file path
DEFAULT_CONFIG_PATH = "config/config.json"
