"""Unit tests for age and date helpers."""

from datetime import date, datetime

import pytest

from rbi_registry.classification.age import calculate_age, parse_date, years_before


class TestParseDate:
    """Test date parsing from the forms and CSV inputs residents come from."""

    def test_iso_date_string(self) -> None:
        assert parse_date("1990-05-01") == date(1990, 5, 1)

    def test_iso_datetime_with_z_suffix(self) -> None:
        assert parse_date("1990-05-01T08:30:00Z") == date(1990, 5, 1)

    def test_date_and_datetime_pass_through(self) -> None:
        assert parse_date(date(2000, 1, 2)) == date(2000, 1, 2)
        assert parse_date(datetime(2000, 1, 2, 13, 0)) == date(2000, 1, 2)

    @pytest.mark.parametrize("value", [None, "", "   ", "not-a-date", "2024-13-40"])
    def test_absent_or_malformed_returns_none(self, value) -> None:
        assert parse_date(value) is None


class TestCalculateAge:
    """Test whole-year age calculation."""

    def test_birthday_not_yet_reached(self) -> None:
        # Arrange
        today = date(2024, 6, 14)

        # Act
        age = calculate_age("2000-06-15", today)

        # Assert
        assert age == 23

    def test_birthday_today(self) -> None:
        assert calculate_age("2000-06-15", date(2024, 6, 15)) == 24

    def test_missing_birthdate_is_zero(self) -> None:
        assert calculate_age(None, date(2024, 6, 15)) == 0

    def test_malformed_birthdate_is_zero(self) -> None:
        assert calculate_age("15/06/2000", date(2024, 6, 15)) == 0

    def test_leap_day_birthday(self) -> None:
        # Born Feb 29: the birthday counts as passed from Mar 1 in common years
        assert calculate_age("2000-02-29", date(2023, 2, 28)) == 22
        assert calculate_age("2000-02-29", date(2023, 3, 1)) == 23

    def test_defaults_to_current_date(self) -> None:
        assert calculate_age("1900-01-01") >= 124


class TestYearsBefore:
    def test_same_calendar_day(self) -> None:
        assert years_before(date(2024, 6, 15), 5) == date(2019, 6, 15)

    def test_leap_day_rolls_forward(self) -> None:
        assert years_before(date(2024, 2, 29), 5) == date(2019, 3, 1)
