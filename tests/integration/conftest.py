"""Integration test fixtures and configuration.

This module provides fixtures for integration tests, including:
- A generated multi-hundred-resident roster CSV
- Configuration file fixtures
"""

import csv
import json
import random
from datetime import date, timedelta
from pathlib import Path

import pytest

ROSTER_COLUMNS = [
    "resident_id",
    "birthdate",
    "sex",
    "civil_status",
    "employment_status",
    "education_attainment",
    "ethnicity",
    "previous_country",
    "previous_city_municipality_code",
    "current_city_municipality_code",
    "date_of_transfer",
    "reason_for_leaving",
    "duration_of_stay_current_months",
    "is_intending_to_return",
]

EMPLOYMENT_VALUES = ["employed", "self_employed", "unemployed", "looking_for_work", "student", "retired", ""]
EDUCATION_VALUES = ["no_education", "elementary", "high_school", "college", "post_graduate", ""]
CIVIL_STATUS_VALUES = ["single", "married", "widowed", "separated", "live-in"]
ETHNICITY_VALUES = ["", "", "", "maranao", "aeta", "cebuano"]
REASON_VALUES = ["", "new job", "to study", "typhoon", "family", "cheaper rent", "personal"]


def _resident_row(rng: random.Random, index: int, reference: date) -> dict[str, str]:
    birthdate = reference - timedelta(days=rng.randint(0, 95 * 365))
    migrant = rng.random() < 0.3
    row = {
        "resident_id": f"R-{index:04d}",
        "birthdate": birthdate.isoformat() if rng.random() > 0.05 else "",
        "sex": rng.choice(["male", "female"]),
        "civil_status": rng.choice(CIVIL_STATUS_VALUES),
        "employment_status": rng.choice(EMPLOYMENT_VALUES),
        "education_attainment": rng.choice(EDUCATION_VALUES),
        "ethnicity": rng.choice(ETHNICITY_VALUES),
        "previous_country": "",
        "previous_city_municipality_code": "",
        "current_city_municipality_code": "137501",
        "date_of_transfer": "",
        "reason_for_leaving": "",
        "duration_of_stay_current_months": "",
        "is_intending_to_return": "",
    }
    if migrant:
        if rng.random() < 0.2:
            row["previous_country"] = "USA"
        else:
            row["previous_city_municipality_code"] = rng.choice(["137404", "137501", "031401"])
        row["date_of_transfer"] = (reference - timedelta(days=rng.randint(0, 15 * 365))).isoformat()
        row["reason_for_leaving"] = rng.choice(REASON_VALUES)
        row["duration_of_stay_current_months"] = str(rng.randint(0, 120))
        row["is_intending_to_return"] = rng.choice(["yes", "no", ""])
    return row


@pytest.fixture
def roster_reference_date() -> date:
    return date(2024, 6, 15)


@pytest.fixture
def large_roster_csv(tmp_path: Path, roster_reference_date: date) -> Path:
    """
    Generate a deterministic 300-resident roster.

    Returns:
        Path: Path to the roster CSV file.
    """
    rng = random.Random(2024)
    csv_file = tmp_path / "barangay_roster.csv"
    with open(csv_file, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=ROSTER_COLUMNS)
        writer.writeheader()
        for index in range(1, 301):
            writer.writerow(_resident_row(rng, index, roster_reference_date))
    return csv_file


@pytest.fixture
def config_file(tmp_path: Path, roster_reference_date: date) -> Path:
    """Configuration pinning the reference date and a compact JSON layout."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "classification": {"reference_date": roster_reference_date.isoformat()},
        "logging": {"level": "INFO", "log_file": str(tmp_path / "logs" / "workflow.log")},
        "output": {"json_indent": 0},
    }))
    return path
