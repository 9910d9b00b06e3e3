"""CSV parser for resident rosters.

This module loads a barangay resident roster from CSV and turns its rows into
ClassificationContext instances for the classification engine.
"""

from dataclasses import fields
from datetime import date
from pathlib import Path
from typing import Optional

import pandas as pd

from rbi_registry.csv_parser.validator import (
    DEFAULT_MAX_REASONABLE_AGE,
    ValidationResult,
    validate_residents,
)
from rbi_registry.logging_audit import get_operation_logger
from rbi_registry.models.context import FIELD_ALIASES, ClassificationContext
from rbi_registry.utils.exceptions import ValidationError

logger = get_operation_logger("csv")

# Required CSV columns
REQUIRED_COLUMNS = ["birthdate"]

# Optional CSV columns
OPTIONAL_COLUMNS = [
    "resident_id",
    "first_name",
    "last_name",
    *(f.name for f in fields(ClassificationContext) if f.name != "birthdate"),
    *FIELD_ALIASES,
]


def parse_residents_csv(
    file_path: Path,
    validate: bool = True,
    encoding: str = "utf-8",
    today: Optional[date] = None,
    max_reasonable_age: int = DEFAULT_MAX_REASONABLE_AGE,
) -> tuple[pd.DataFrame, Optional[ValidationResult]]:
    """Parse a resident roster from a CSV file.

    Every column is read as text so PSGC codes keep their leading zeros.
    Field-level problems never fail parsing; they are reported as warnings
    in the ValidationResult because the classification engine tolerates them.

    Args:
        file_path: Path to CSV file containing the roster
        validate: If True, runs data-quality validation after parsing.
                  Warnings are logged; callers decide what to do with
                  errors via ValidationResult.has_errors.
        encoding: File encoding
        today: Reference date for validation checks
        max_reasonable_age: Ages above this value produce a warning

    Returns:
        Tuple of (DataFrame, ValidationResult):
        - DataFrame with one row per resident, all values as strings or NaN
        - ValidationResult with validation details, or None if validate=False

    Raises:
        ValidationError: If the file is not readable CSV or the birthdate
                         column is missing
        FileNotFoundError: If CSV file does not exist
    """
    logger.info(f"Loading roster CSV from {file_path}")

    if not file_path.exists():
        raise FileNotFoundError(f"CSV file not found: {file_path}")

    try:
        df = pd.read_csv(file_path, encoding=encoding, dtype=str)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise ValidationError(
            f"Failed to read CSV file {file_path}. Ensure file is valid CSV with "
            f"{encoding} encoding. Error: {e}"
        ) from e

    df.columns = [str(col).strip() for col in df.columns]

    missing_columns = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing_columns:
        raise ValidationError(
            f"CSV validation failed:\n  - Missing required columns: "
            f"{', '.join(missing_columns)}. Required columns are: {', '.join(REQUIRED_COLUMNS)}"
        )

    # Unknown columns are ignored, not rejected
    all_valid_columns = set(REQUIRED_COLUMNS + OPTIONAL_COLUMNS)
    unknown_columns = [col for col in df.columns if col not in all_valid_columns]
    if unknown_columns:
        logger.warning(
            f"CSV contains unknown columns that will be ignored: {', '.join(unknown_columns)}"
        )

    logger.info(f"Successfully parsed {len(df)} resident record(s)")

    validation_result = None
    if validate:
        validation_result = validate_residents(
            df, today=today, max_reasonable_age=max_reasonable_age
        )

        logger.info(
            f"Validation complete: {len(validation_result.all_errors)} errors, "
            f"{len(validation_result.all_warnings)} warnings"
        )

    return df, validation_result


def dataframe_to_contexts(df: pd.DataFrame) -> list[ClassificationContext]:
    """Convert roster rows to classification contexts, in row order."""
    return [ClassificationContext.from_mapping(record) for record in df.to_dict("records")]


def load_resident_contexts(
    file_path: Path, encoding: str = "utf-8"
) -> list[ClassificationContext]:
    """Parse a roster without validation and return its contexts."""
    df, _ = parse_residents_csv(file_path, validate=False, encoding=encoding)
    return dataframe_to_contexts(df)
