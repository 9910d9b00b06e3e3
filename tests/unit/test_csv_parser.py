"""Unit tests for roster CSV parsing.

Tests cover column checks, error handling and conversion of rows to
classification contexts.
"""

from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from rbi_registry.csv_parser.parser import (
    dataframe_to_contexts,
    load_resident_contexts,
    parse_residents_csv,
)
from rbi_registry.utils.exceptions import ValidationError


class TestParseResidentsCsv:
    """Test roster loading and structural validation."""

    def test_parse_sample_roster(self, sample_roster_csv: Path, reference_date) -> None:
        # Arrange & Act
        df, result = parse_residents_csv(sample_roster_csv, today=reference_date)

        # Assert
        assert isinstance(df, pd.DataFrame)
        assert len(df) == 5
        assert result is not None
        assert result.total_rows == 5
        assert not result.has_errors
        assert not result.has_warnings

    def test_codes_keep_leading_zeros(self, tmp_path: Path) -> None:
        # Arrange
        csv_file = tmp_path / "codes.csv"
        csv_file.write_text(
            "birthdate,previous_region_code,current_region_code\n"
            "1990-01-01,01,03\n"
        )

        # Act
        df, _ = parse_residents_csv(csv_file, validate=False)

        # Assert
        assert df.loc[0, "previous_region_code"] == "01"

    def test_validate_false_returns_no_result(self, sample_roster_csv: Path) -> None:
        _, result = parse_residents_csv(sample_roster_csv, validate=False)

        assert result is None

    def test_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="CSV file not found"):
            parse_residents_csv(tmp_path / "missing.csv")

    def test_missing_birthdate_column(self, tmp_path: Path) -> None:
        # Arrange
        csv_file = tmp_path / "no_birthdate.csv"
        csv_file.write_text("resident_id,sex\nR-1,male\n")

        # Act & Assert
        with pytest.raises(ValidationError) as exc_info:
            parse_residents_csv(csv_file)

        assert "Missing required columns: birthdate" in str(exc_info.value)

    def test_empty_file(self, tmp_path: Path) -> None:
        csv_file = tmp_path / "empty.csv"
        csv_file.write_text("")

        with pytest.raises(ValidationError, match="Failed to read CSV file"):
            parse_residents_csv(csv_file)

    def test_unknown_columns_warn(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        # Arrange
        csv_file = tmp_path / "extra.csv"
        csv_file.write_text("birthdate,shoe_size\n1990-01-01,42\n")

        # Act
        with caplog.at_level("WARNING", logger="rbi_registry.csv"):
            df, _ = parse_residents_csv(csv_file, validate=False)

        # Assert
        assert len(df) == 1
        assert "unknown columns that will be ignored: shoe_size" in caplog.text

    def test_row_warnings_logged_once(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        # Arrange
        csv_file = tmp_path / "future.csv"
        csv_file.write_text("birthdate\n2099-01-01\n")

        # Act
        with caplog.at_level("WARNING", logger="rbi_registry.csv"):
            parse_residents_csv(csv_file, today=date(2024, 6, 15))

        # Assert
        assert caplog.text.count("Future birthdate: 2099-01-01") == 1

    def test_non_finite_duration_becomes_absent(self, tmp_path: Path) -> None:
        csv_file = tmp_path / "inf.csv"
        csv_file.write_text("birthdate,duration_of_stay_current_months\n1990-01-01,inf\n")

        contexts = load_resident_contexts(csv_file)

        assert contexts[0].duration_of_stay_current_months is None

    def test_duplicate_ids_reported_not_raised(self, tmp_path: Path) -> None:
        csv_file = tmp_path / "dupes.csv"
        csv_file.write_text("resident_id,birthdate\nR-1,1990-01-01\nR-1,1991-01-01\n")

        _, result = parse_residents_csv(csv_file)

        assert result.has_errors
        assert result.duplicate_resident_ids == ["R-1"]


class TestDataframeToContexts:
    """Test conversion of parsed rows into contexts."""

    def test_row_order_and_values(self, sample_roster_csv: Path) -> None:
        # Arrange
        df, _ = parse_residents_csv(sample_roster_csv, validate=False)

        # Act
        contexts = dataframe_to_contexts(df)

        # Assert
        assert len(contexts) == 5
        assert contexts[0].employment_status == "retired"
        assert contexts[1].employment_status is None
        assert contexts[2].previous_city_code == "137404"
        assert contexts[2].current_city_code == "137501"
        assert contexts[2].duration_of_stay_current_months == 22
        assert contexts[2].is_intending_to_return is False
        assert contexts[3].previous_country == "USA"

    def test_load_resident_contexts(self, sample_roster_csv: Path) -> None:
        contexts = load_resident_contexts(sample_roster_csv)

        assert [c.sex for c in contexts] == ["female", "male", "female", "male", "female"]
