"""Unit tests for roster data-quality validation."""

import json
from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from rbi_registry.csv_parser.validator import (
    IssueSeverity,
    ValidationIssue,
    ValidationResult,
    export_invalid_rows,
    validate_residents,
)

TODAY = date(2024, 6, 15)


def _frame(rows: list[dict]) -> pd.DataFrame:
    return pd.DataFrame(rows)


def _columns(result: ValidationResult) -> list[str]:
    return [w.column_name for w in result.all_warnings]


class TestValidateResidents:
    """Test row-level warnings and batch errors."""

    def test_clean_rows(self) -> None:
        # Arrange
        df = _frame([
            {"resident_id": "R-1", "birthdate": "1990-01-01", "sex": "male",
             "employment_status": "employed", "education_attainment": "college"},
        ])

        # Act
        result = validate_residents(df, TODAY)

        # Assert
        assert result.total_rows == 1
        assert result.valid_rows == 1
        assert not result.has_errors
        assert not result.has_warnings

    def test_missing_birthdate_is_warning(self) -> None:
        df = _frame([{"birthdate": None, "sex": "female"}])

        result = validate_residents(df, TODAY)

        assert result.missing_birthdate_count == 1
        assert result.all_warnings[0].severity is IssueSeverity.WARNING
        assert "age 0" in result.all_warnings[0].message

    @pytest.mark.parametrize(
        "birthdate,fragment",
        [
            ("01/15/1980", "Unparseable birthdate"),
            ("2030-01-01", "Future birthdate"),
            ("1890-01-01", "unreasonable"),
        ],
    )
    def test_birthdate_warnings(self, birthdate: str, fragment: str) -> None:
        result = validate_residents(_frame([{"birthdate": birthdate}]), TODAY)

        assert result.warning_rows == 1
        assert fragment in result.all_warnings[0].message
        assert result.all_warnings[0].row_number == 2

    def test_max_reasonable_age_is_configurable(self) -> None:
        df = _frame([{"birthdate": "1920-01-01"}])

        assert not validate_residents(df, TODAY).has_warnings
        assert validate_residents(df, TODAY, max_reasonable_age=100).has_warnings

    def test_field_warnings(self) -> None:
        # Arrange
        df = _frame([
            {
                "birthdate": "1990-01-01",
                "employment_status": "freelancer",
                "education_attainment": "kindergarten",
                "sex": "x",
                "date_of_transfer": "last year",
                "duration_of_stay_current_months": "-3",
            },
        ])

        # Act
        result = validate_residents(df, TODAY)

        # Assert
        assert _columns(result) == [
            "employment_status",
            "education_attainment",
            "sex",
            "date_of_transfer",
            "duration_of_stay_current_months",
        ]
        assert result.warning_rows == 1
        assert not result.has_errors

    def test_non_numeric_duration(self) -> None:
        df = _frame([{"birthdate": "1990-01-01", "duration_of_stay_current_months": "many"}])

        result = validate_residents(df, TODAY)

        assert "not a number" in result.all_warnings[0].message

    @pytest.mark.parametrize("raw", ["inf", "-inf", "nan", "1e400"])
    def test_non_finite_duration(self, raw: str) -> None:
        df = _frame([{"birthdate": "1990-01-01", "duration_of_stay_current_months": raw}])

        result = validate_residents(df, TODAY)

        assert _columns(result) == ["duration_of_stay_current_months"]
        assert "not a number" in result.all_warnings[0].message
        assert result.valid_rows == 1

    def test_duplicate_resident_ids_are_errors(self) -> None:
        # Arrange
        df = _frame([
            {"resident_id": "R-1", "birthdate": "1990-01-01"},
            {"resident_id": "R-2", "birthdate": "1991-01-01"},
            {"resident_id": "R-1", "birthdate": "1992-01-01"},
        ])

        # Act
        result = validate_residents(df, TODAY)

        # Assert
        assert result.duplicate_resident_ids == ["R-1"]
        assert [e.row_number for e in result.all_errors] == [2, 4]
        assert result.error_rows == 2
        assert result.valid_rows == 1

    def test_blank_resident_ids_are_not_duplicates(self) -> None:
        df = _frame([
            {"resident_id": None, "birthdate": "1990-01-01"},
            {"resident_id": None, "birthdate": "1991-01-01"},
        ])

        assert not validate_residents(df, TODAY).has_errors


class TestValidationResult:
    """Test report rendering."""

    def _result(self) -> ValidationResult:
        issue = ValidationIssue(
            row_number=3,
            column_name="resident_id",
            severity=IssueSeverity.ERROR,
            message="Duplicate resident_id found: R-1",
            suggestion="Ensure every resident appears once in the roster",
        )
        return ValidationResult(
            total_rows=2,
            valid_rows=1,
            error_rows=1,
            warning_rows=0,
            duplicate_resident_ids=["R-1"],
            all_errors=[issue],
        )

    def test_format_report(self) -> None:
        report = self._result().format_report()

        assert "RESIDENT ROSTER VALIDATION REPORT" in report
        assert "Total rows: 2" in report
        assert "Duplicate resident IDs: 1 (R-1)" in report
        assert "Row 3 [resident_id]" in report
        assert "Validation failed" in report

    def test_format_report_all_passed(self) -> None:
        report = ValidationResult(total_rows=1, valid_rows=1, error_rows=0, warning_rows=0).format_report()

        assert "All validations passed" in report

    def test_to_dict_is_json_serializable(self) -> None:
        data = self._result().to_dict()

        assert json.loads(json.dumps(data))["errors"][0]["severity"] == "error"
        assert data["warnings"] == []


class TestExportInvalidRows:
    def test_export(self, tmp_path: Path) -> None:
        # Arrange
        df = _frame([
            {"resident_id": "R-1", "birthdate": "1990-01-01"},
            {"resident_id": "R-1", "birthdate": "1991-01-01"},
            {"resident_id": "R-2", "birthdate": "1992-01-01"},
        ])
        result = validate_residents(df, TODAY)
        output = tmp_path / "invalid.csv"

        # Act
        export_invalid_rows(df, result, output)

        # Assert
        exported = pd.read_csv(output, dtype=str)
        assert list(exported["resident_id"]) == ["R-1", "R-1"]
        assert "Duplicate resident_id" in exported.loc[0, "error_description"]

    def test_export_without_errors(self, tmp_path: Path) -> None:
        df = _frame([{"birthdate": "1990-01-01"}])
        result = validate_residents(df, TODAY)

        with pytest.raises(ValueError, match="No validation errors"):
            export_invalid_rows(df, result, tmp_path / "invalid.csv")
