"""
Shared pytest configuration and fixtures.

This module provides fixtures and configuration used across the unit and
integration test suites.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Generator

import pytest

from rbi_registry.models.context import ClassificationContext

SAMPLE_ROSTER = (
    "resident_id,first_name,last_name,birthdate,sex,civil_status,employment_status,"
    "education_attainment,ethnicity,previous_country,previous_city_municipality_code,"
    "current_city_municipality_code,date_of_transfer,reason_for_leaving,"
    "duration_of_stay_current_months,is_intending_to_return\n"
    "R-001,Maria,Santos,1963-03-10,female,widowed,retired,elementary,,,,,,,,\n"
    "R-002,Jose,Reyes,2008-01-20,male,single,,,maranao,,,,,,,\n"
    "R-003,Ana,Cruz,1998-11-02,female,single,looking_for_work,high_school,,,"
    "137404,137501,2022-08-01,new job near the school,22,no\n"
    "R-004,Pedro,Garcia,1985-07-15,male,married,employed,college,,USA,,,2015-05-05,"
    "family reunion,,\n"
    "R-005,Liza,Mendoza,2021-12-25,female,single,,,,,,,,,,\n"
)


@pytest.fixture
def project_root() -> Path:
    """
    Return the project root directory.

    Returns:
        Path: Absolute path to the project root directory.
    """
    return Path(__file__).parent.parent


@pytest.fixture
def reference_date() -> date:
    """Fixed reference date so age and recency results never drift."""
    return date(2024, 6, 15)


@pytest.fixture
def sample_roster_csv(tmp_path: Path) -> Path:
    """
    Create a five-resident roster CSV.

    Args:
        tmp_path: Pytest's temporary directory fixture.

    Returns:
        Path: Path to the roster file.
    """
    csv_file = tmp_path / "residents.csv"
    csv_file.write_text(SAMPLE_ROSTER, encoding="utf-8")
    return csv_file


@pytest.fixture
def empty_context() -> ClassificationContext:
    return ClassificationContext()


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """
    Keep tests away from the working directory and RBI_* variables.

    Logs go to the temporary directory and handlers installed by the CLI are
    removed afterwards.
    """
    for name in (
        "RBI_REFERENCE_DATE",
        "RBI_CSV_ENCODING",
        "RBI_CSV_MAX_REASONABLE_AGE",
        "RBI_LOG_LEVEL",
        "RBI_REDACT_PII",
        "RBI_OP_LOG_CSV_LEVEL",
        "RBI_OP_LOG_CLASSIFICATION_LEVEL",
        "RBI_OP_LOG_STATISTICS_LEVEL",
        "RBI_JSON_INDENT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("RBI_LOG_FILE", str(tmp_path / "logs" / "test.log"))
    monkeypatch.chdir(tmp_path)

    root_logger = logging.getLogger()
    original_handlers = list(root_logger.handlers)
    original_level = root_logger.level

    yield

    for handler in list(root_logger.handlers):
        if handler not in original_handlers:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(original_level)
