"""Resident roster CSV parsing and validation."""

from rbi_registry.csv_parser.parser import (
    dataframe_to_contexts,
    load_resident_contexts,
    parse_residents_csv,
)
from rbi_registry.csv_parser.validator import (
    IssueSeverity,
    ValidationIssue,
    ValidationResult,
    export_invalid_rows,
    validate_residents,
)

__all__ = [
    "IssueSeverity",
    "ValidationIssue",
    "ValidationResult",
    "dataframe_to_contexts",
    "export_invalid_rows",
    "load_resident_contexts",
    "parse_residents_csv",
    "validate_residents",
]
