"""Configuration schema models using pydantic.

This module defines the configuration structure and validation rules using pydantic.
All configuration values are validated according to the schema defined here.
"""

from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _validate_level(v: str) -> str:
    v_upper = v.upper()
    if v_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {v}. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )
    return v_upper


class ClassificationConfig(BaseModel):
    """Configuration for the classification engine.

    Attributes:
        reference_date: Date treated as "today" for ages and migration recency.
                        None means the current UTC date at run time.

    Example:
        >>> ClassificationConfig(reference_date="2024-06-30").reference_date
        datetime.date(2024, 6, 30)
    """

    reference_date: Optional[date] = Field(
        default=None,
        description="Reference date for age and recency calculations (YYYY-MM-DD)",
    )


class CSVConfig(BaseModel):
    """Configuration for resident roster CSV ingestion.

    Attributes:
        encoding: File encoding of roster CSVs
        max_reasonable_age: Ages above this produce a validation warning
    """

    encoding: str = Field(default="utf-8", description="Roster CSV encoding")
    max_reasonable_age: int = Field(
        default=120,
        ge=1,
        description="Ages above this value are flagged as suspicious",
    )


class LoggingConfig(BaseModel):
    """Configuration for logging.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file
        redact_pii: Whether to redact PII from logs
    """

    level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )
    log_file: Path = Field(
        default=Path("logs/rbi-registry.log"),
        description="Log file path"
    )
    redact_pii: bool = Field(
        default=False,
        description="Redact PII from logs"
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level.

        Raises:
            ValueError: If log level is not valid
        """
        return _validate_level(v)


class OperationLoggingConfig(BaseModel):
    """Per-operation logging configuration.

    Allows different log levels for different operation types so one stage
    can be debugged without flooding the log with per-resident detail.

    Attributes:
        csv_log_level: Log level for roster parsing and validation
        classification_log_level: Log level for per-resident classification
        statistics_log_level: Log level for statistics and demographics
    """

    csv_log_level: str = Field(default="INFO", description="Log level for CSV operations")
    classification_log_level: str = Field(
        default="WARNING",
        description="Log level for per-resident classification"
    )
    statistics_log_level: str = Field(default="INFO", description="Log level for statistics")

    @field_validator("csv_log_level", "classification_log_level", "statistics_log_level")
    @classmethod
    def validate_operation_log_level(cls, v: str) -> str:
        return _validate_level(v)


class OutputConfig(BaseModel):
    """Configuration for command output.

    Attributes:
        json_indent: Indentation used for --json output
    """

    json_indent: int = Field(default=2, ge=0, le=8, description="JSON indentation")


class Config(BaseModel):
    """Root configuration model.

    Attributes:
        classification: Classification engine configuration
        csv: Roster CSV ingestion configuration
        logging: Logging configuration
        operation_logging: Per-operation logging configuration
        output: Command output configuration

    Example:
        >>> config = Config(classification=ClassificationConfig(reference_date="2024-01-01"))
        >>> config.logging.level
        'INFO'
    """

    classification: ClassificationConfig = ClassificationConfig()
    csv: CSVConfig = CSVConfig()
    logging: LoggingConfig = LoggingConfig()
    operation_logging: OperationLoggingConfig = OperationLoggingConfig()
    output: OutputConfig = OutputConfig()
