"""Data-quality validation for resident roster CSV data.

This module reports problems that would make classification misleading
(unparseable birthdates silently become age 0, unknown statuses silently
behave as the negative case). All issues are collected before reporting so
a roster can be fixed in one pass.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import pandas as pd

from rbi_registry.classification.age import calculate_age, parse_date, today_utc
from rbi_registry.logging_audit import get_operation_logger
from rbi_registry.models.classification import EducationAttainment, EmploymentStatus

logger = get_operation_logger("csv")

VALID_SEXES = ("male", "female")
DEFAULT_MAX_REASONABLE_AGE = 120


class IssueSeverity(Enum):
    """Severity level for validation issues."""

    ERROR = "error"
    WARNING = "warning"


@dataclass
class ValidationIssue:
    """Individual validation issue with context and suggested fix.

    Attributes:
        row_number: 1-indexed row number (including header) for user readability
        column_name: Name of the column with the issue
        severity: ERROR or WARNING level
        message: Description of what's wrong
        suggestion: Actionable guidance on how to fix the issue
    """

    row_number: int
    column_name: str
    severity: IssueSeverity
    message: str
    suggestion: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "row_number": self.row_number,
            "column_name": self.column_name,
            "severity": self.severity.value,
            "message": self.message,
            "suggestion": self.suggestion,
        }


@dataclass
class ValidationResult:
    """Roster validation results with statistics and issues.

    Attributes:
        total_rows: Total number of data rows processed
        valid_rows: Number of rows with no errors (warnings OK)
        error_rows: Number of rows with at least one error
        warning_rows: Number of rows with at least one warning
        duplicate_resident_ids: Resident IDs that appear more than once
        missing_birthdate_count: Rows classified with the age 0 default
        all_errors: List of all error-level issues
        all_warnings: List of all warning-level issues
    """

    total_rows: int
    valid_rows: int
    error_rows: int
    warning_rows: int
    duplicate_resident_ids: list[str] = field(default_factory=list)
    missing_birthdate_count: int = 0
    all_errors: list[ValidationIssue] = field(default_factory=list)
    all_warnings: list[ValidationIssue] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return len(self.all_errors) > 0

    @property
    def has_warnings(self) -> bool:
        return len(self.all_warnings) > 0

    def format_report(self) -> str:
        """Format validation results as human-readable report.

        Returns:
            Multi-line string with validation summary and detailed issues
        """
        lines = []
        lines.append("=" * 60)
        lines.append("RESIDENT ROSTER VALIDATION REPORT")
        lines.append("=" * 60)
        lines.append("")

        lines.append("SUMMARY:")
        lines.append(f"  Total rows: {self.total_rows}")
        lines.append(f"  Valid rows: {self.valid_rows}")
        lines.append(f"  Rows with errors: {self.error_rows}")
        lines.append(f"  Rows with warnings: {self.warning_rows}")
        lines.append("")

        if self.duplicate_resident_ids or self.missing_birthdate_count > 0:
            lines.append("BATCH STATISTICS:")
            if self.duplicate_resident_ids:
                lines.append(
                    f"  Duplicate resident IDs: {len(self.duplicate_resident_ids)} "
                    f"({', '.join(self.duplicate_resident_ids[:5])}"
                    f"{'...' if len(self.duplicate_resident_ids) > 5 else ''})"
                )
            if self.missing_birthdate_count > 0:
                lines.append(
                    f"  Missing birthdates: {self.missing_birthdate_count} "
                    f"(classified as age 0)"
                )
            lines.append("")

        for title, issues in (("ERRORS", self.all_errors), ("WARNINGS", self.all_warnings)):
            if not issues:
                continue
            lines.append(f"{title} ({len(issues)}):")
            for issue in issues[:20]:
                lines.append(
                    f"  Row {issue.row_number} [{issue.column_name}]: {issue.message}"
                )
                lines.append(f"    → {issue.suggestion}")
            if len(issues) > 20:
                lines.append(f"  ... and {len(issues) - 20} more {title.lower()}")
            lines.append("")

        lines.append("=" * 60)
        if not self.has_errors and not self.has_warnings:
            lines.append("RESULT: ✓ All validations passed")
        elif not self.has_errors:
            lines.append("RESULT: ✓ Validation passed with warnings")
        else:
            lines.append("RESULT: ✗ Validation failed - please fix errors above")
        lines.append("=" * 60)

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Export validation results as structured dictionary for JSON serialization."""
        return {
            "total_rows": self.total_rows,
            "valid_rows": self.valid_rows,
            "error_rows": self.error_rows,
            "warning_rows": self.warning_rows,
            "duplicate_resident_ids": self.duplicate_resident_ids,
            "missing_birthdate_count": self.missing_birthdate_count,
            "errors": [e.to_dict() for e in self.all_errors],
            "warnings": [w.to_dict() for w in self.all_warnings],
        }


def _cell(row: pd.Series, column: str) -> Optional[str]:
    value = row.get(column)
    if value is None or pd.isna(value) or str(value).strip() == "":
        return None
    return str(value).strip()


def _warning(row_num: int, column: str, message: str, suggestion: str) -> ValidationIssue:
    return ValidationIssue(
        row_number=row_num,
        column_name=column,
        severity=IssueSeverity.WARNING,
        message=message,
        suggestion=suggestion,
    )


def _validate_row(
    row: pd.Series, row_num: int, today: date, max_reasonable_age: int
) -> list[ValidationIssue]:
    warnings: list[ValidationIssue] = []

    birthdate = _cell(row, "birthdate")
    if birthdate is not None:
        born = parse_date(birthdate)
        if born is None:
            warnings.append(_warning(
                row_num, "birthdate",
                f"Unparseable birthdate: {birthdate} (resident will be classified as age 0)",
                "Use format YYYY-MM-DD (e.g., 1980-01-15)",
            ))
        elif born > today:
            warnings.append(_warning(
                row_num, "birthdate",
                f"Future birthdate: {birthdate}",
                "Verify the date is correct (YYYY-MM-DD format)",
            ))
        else:
            age = calculate_age(born, today)
            if age > max_reasonable_age:
                warnings.append(_warning(
                    row_num, "birthdate",
                    f"Age appears unreasonable ({age} years old)",
                    "Verify the birth year",
                ))

    employment = _cell(row, "employment_status")
    if employment is not None and EmploymentStatus.parse(employment) is EmploymentStatus.UNRECOGNIZED:
        warnings.append(_warning(
            row_num, "employment_status",
            f"Unrecognized employment status: {employment} (treated as neither employed nor unemployed)",
            "Use one of: " + ", ".join(
                s.value for s in EmploymentStatus if s is not EmploymentStatus.UNRECOGNIZED
            ),
        ))

    education = _cell(row, "education_attainment")
    if education is not None and EducationAttainment.parse(education) is EducationAttainment.UNRECOGNIZED:
        warnings.append(_warning(
            row_num, "education_attainment",
            f"Unrecognized education attainment: {education}",
            "Use one of: " + ", ".join(
                e.value for e in EducationAttainment if e is not EducationAttainment.UNRECOGNIZED
            ),
        ))

    sex = _cell(row, "sex")
    if sex is not None and sex.lower() not in VALID_SEXES:
        warnings.append(_warning(
            row_num, "sex",
            f"Unexpected sex value: {sex} (gender-based tags will not apply)",
            "Use male or female",
        ))

    transfer = _cell(row, "date_of_transfer")
    if transfer is not None and parse_date(transfer) is None:
        warnings.append(_warning(
            row_num, "date_of_transfer",
            f"Unparseable date of transfer: {transfer} (resident will not count as recent migrant)",
            "Use format YYYY-MM-DD",
        ))

    duration = _cell(row, "duration_of_stay_current_months")
    if duration is not None:
        try:
            months = float(duration)
        except ValueError:
            months = math.nan
        if not math.isfinite(months):
            warnings.append(_warning(
                row_num, "duration_of_stay_current_months",
                f"Duration of stay is not a number: {duration} (ignored)",
                "Provide the number of months as a non-negative integer",
            ))
        elif months < 0:
            warnings.append(_warning(
                row_num, "duration_of_stay_current_months",
                f"Negative duration of stay: {duration}",
                "Provide the number of months as a non-negative integer",
            ))

    return warnings


def validate_residents(
    df: pd.DataFrame,
    today: Optional[date] = None,
    max_reasonable_age: int = DEFAULT_MAX_REASONABLE_AGE,
) -> ValidationResult:
    """Perform data-quality validation on a resident roster DataFrame.

    Field problems are warnings because the classification engine tolerates
    them; duplicate resident IDs are errors.

    Args:
        df: Roster DataFrame from parse_residents_csv
        today: Reference date for future-date and age checks
        max_reasonable_age: Ages above this value produce a warning

    Returns:
        ValidationResult containing all errors, warnings, and statistics
    """
    logger.info("Validation started")
    reference = today or today_utc()

    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []
    missing_birthdate_count = 0

    for idx, row in df.iterrows():
        row_num = idx + 2  # +2 for 1-indexed + header row
        if _cell(row, "birthdate") is None:
            missing_birthdate_count += 1
            warnings.append(_warning(
                row_num, "birthdate",
                "Missing birthdate (resident will be classified as age 0)",
                "Provide the birthdate so age-based flags are accurate",
            ))
        warnings.extend(_validate_row(row, row_num, reference, max_reasonable_age))

    duplicate_ids: list[str] = []
    if "resident_id" in df.columns:
        ids = df["resident_id"].dropna()
        ids = ids[ids.astype(str).str.strip() != ""]
        duplicate_ids = ids[ids.duplicated(keep=False)].unique().tolist()
        for dup_id in duplicate_ids:
            for row_idx in df[df["resident_id"] == dup_id].index.tolist():
                errors.append(ValidationIssue(
                    row_number=row_idx + 2,
                    column_name="resident_id",
                    severity=IssueSeverity.ERROR,
                    message=f"Duplicate resident_id found: {dup_id}",
                    suggestion="Ensure every resident appears once in the roster",
                ))

    error_rows = len({e.row_number for e in errors})
    warning_rows = len({w.row_number for w in warnings})

    result = ValidationResult(
        total_rows=len(df),
        valid_rows=len(df) - error_rows,
        error_rows=error_rows,
        warning_rows=warning_rows,
        duplicate_resident_ids=[str(i) for i in duplicate_ids],
        missing_birthdate_count=missing_birthdate_count,
        all_errors=errors,
        all_warnings=warnings,
    )

    for issue in warnings:
        logger.warning(f"Row {issue.row_number} [{issue.column_name}]: {issue.message}")

    logger.info(f"Validation errors found: {len(errors)}")
    if warnings:
        logger.info(f"Validation warnings: {len(warnings)}")

    return result


def export_invalid_rows(df: pd.DataFrame, result: ValidationResult, output_path: Path) -> None:
    """Export rows with validation errors to a separate CSV file.

    Args:
        df: Original roster DataFrame
        result: ValidationResult containing error information
        output_path: Path where error CSV should be written

    Raises:
        ValueError: If no errors exist in ValidationResult
        FileNotFoundError: If output_path parent directory doesn't exist
    """
    logger.info(f"Exporting invalid rows to {output_path}")

    if not result.has_errors:
        raise ValueError("No validation errors to export")

    if not output_path.parent.exists():
        raise FileNotFoundError(f"Output directory does not exist: {output_path.parent}")

    error_row_numbers = sorted({e.row_number for e in result.all_errors})
    error_indices = [r - 2 for r in error_row_numbers]

    error_df = df.iloc[error_indices].copy()
    error_df["error_description"] = [
        "; ".join(
            f"{e.column_name}: {e.message}"
            for e in result.all_errors
            if e.row_number == row_num
        )
        for row_num in error_row_numbers
    ]

    error_df.to_csv(output_path, index=False, encoding="utf-8")
    logger.info(f"Exported {len(error_df)} invalid rows to {output_path}")
