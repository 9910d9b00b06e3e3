"""Unit tests for vulnerability assessment and unified classification.

Covers the reference scenarios (retired 61-year-old, 16-year-old without
records, empty context) and the individual tag rules.
"""

from datetime import date

import pytest

from rbi_registry.classification.vulnerability import classify_resident
from rbi_registry.models.classification import VulnerabilityTag
from rbi_registry.models.context import ClassificationContext

TODAY = date(2024, 6, 15)


def _tags(**fields) -> frozenset:
    return classify_resident(ClassificationContext(**fields), TODAY).vulnerabilities


class TestReferenceScenarios:
    """Test the documented end-to-end scenarios."""

    def test_retired_sixty_one_year_old(self) -> None:
        # Arrange
        context = ClassificationContext(
            birthdate="1963-01-01",
            employment_status="retired",
            education_attainment="high_school",
        )

        # Act
        result = classify_resident(context, TODAY)

        # Assert
        assert result.age == 61
        assert result.sectoral.is_senior_citizen is True
        assert result.sectoral.is_labor_force_employed is False
        assert result.sectoral.is_unemployed is False
        assert result.vulnerabilities == frozenset({"senior_citizen"})

    def test_retired_sixty_one_year_old_without_education_record(self) -> None:
        tags = _tags(birthdate="1963-01-01", employment_status="retired")

        assert tags == frozenset({"senior_citizen", "no_education"})

    def test_sixteen_year_old_without_records(self) -> None:
        # Arrange
        context = ClassificationContext(birthdate="2008-01-01")

        # Act
        result = classify_resident(context, TODAY)

        # Assert
        assert result.sectoral.is_out_of_school_children is True
        assert result.sectoral.is_out_of_school_youth is True
        assert {
            "minor",
            "out_of_school_children",
            "out_of_school_youth",
            "no_education",
        } <= result.vulnerabilities

    def test_empty_context(self) -> None:
        # Arrange & Act
        result = classify_resident(ClassificationContext(), TODAY)

        # Assert
        assert result.age == 0
        assert not any(result.sectoral.to_dict().values())
        assert result.migration.is_migrant is False
        assert result.vulnerabilities == frozenset({"under_five", "minor", "no_education"})


class TestTagRules:
    """Test individual vulnerability rules."""

    def test_age_boundaries(self) -> None:
        assert "under_five" in _tags(birthdate="2019-06-16")  # age 4
        assert "under_five" not in _tags(birthdate="2019-06-15")  # age 5
        assert "minor" in _tags(birthdate="2006-06-16")  # age 17
        assert "minor" not in _tags(birthdate="2006-06-15")  # age 18
        assert "senior_citizen" not in _tags(birthdate="1964-06-16")  # age 59
        assert "senior_citizen" in _tags(birthdate="1964-06-15")  # age 60

    def test_young_single_female(self) -> None:
        assert "young_female" in _tags(birthdate="2000-01-01", sex="Female", civil_status="single")
        assert "young_female" not in _tags(birthdate="1990-01-01", sex="female", civil_status="single")
        assert "young_female" not in _tags(birthdate="2000-01-01", sex="male", civil_status="single")

    @pytest.mark.parametrize("civil_status", ["widowed", "separated"])
    def test_single_parent(self, civil_status: str) -> None:
        assert "single_parent" in _tags(sex="female", civil_status=civil_status)

    def test_single_parent_requires_female(self) -> None:
        assert "single_parent" not in _tags(sex="male", civil_status="widowed")

    def test_no_education(self) -> None:
        assert "no_education" in _tags(education_attainment="no_education")
        assert "no_education" not in _tags(education_attainment="elementary")
        assert "no_education" not in _tags(education_attainment="kindergarten")

    def test_unemployed(self) -> None:
        assert "unemployed" in _tags(birthdate="1980-01-01", employment_status="looking_for_work")

    def test_migration_tags_require_migrant(self) -> None:
        # Recent transfer without a previous location is not a migrant
        assert "recent_migrant" not in _tags(date_of_transfer="2023-01-01")
        assert "child_migrant" not in _tags(birthdate="2015-01-01")

    def test_migrant_tags(self) -> None:
        tags = _tags(
            birthdate="2012-01-01",
            previous_country="USA",
            date_of_transfer="2023-01-01",
            reason_for_leaving="fled the armed conflict",
        )

        assert {"recent_migrant", "forced_migrant", "child_migrant"} <= tags

    def test_indigenous(self) -> None:
        assert "indigenous" in _tags(ethnicity="Tausug")

    def test_tags_are_plain_strings(self) -> None:
        tags = _tags()

        assert all(isinstance(tag, str) for tag in tags)
        assert tags <= {tag.value for tag in VulnerabilityTag}


class TestClassifyResident:
    def test_deterministic(self) -> None:
        # Arrange
        context = ClassificationContext(
            birthdate="1998-11-02",
            sex="female",
            civil_status="single",
            employment_status="looking_for_work",
            previous_city_code="137404",
            current_city_code="137501",
            date_of_transfer="2022-08-01",
            reason_for_leaving="new job near the school",
        )

        # Act
        first = classify_resident(context, TODAY)
        second = classify_resident(context, TODAY)

        # Assert
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_to_dict_sorts_tags(self) -> None:
        data = classify_resident(ClassificationContext(), TODAY).to_dict()

        assert data["vulnerabilities"] == ["minor", "no_education", "under_five"]
        assert data["age"] == 0

    def test_sectoral_record_includes_migrant_flag(self) -> None:
        record = classify_resident(ClassificationContext(previous_country="USA"), TODAY).to_sectoral_record()

        assert record["is_migrant"] is True
        assert set(record) == {
            "is_labor_force_employed",
            "is_unemployed",
            "is_out_of_school_children",
            "is_out_of_school_youth",
            "is_senior_citizen",
            "is_indigenous_people",
            "is_migrant",
        }
