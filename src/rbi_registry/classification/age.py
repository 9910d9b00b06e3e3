"""Age and date helpers for resident classification.

A missing or unparseable birthdate yields age 0. Callers must read 0 as
"unknown"; such residents fall into the infant/minor categories. This is a
documented default of the registry, not something to correct here.
"""

from datetime import date, datetime, timezone
from typing import Optional, Union

DateInput = Union[str, date, None]


def today_utc() -> date:
    """Current date in UTC, the default reference date for classification."""
    return datetime.now(timezone.utc).date()


def parse_date(value: DateInput) -> Optional[date]:
    """Parse a date given as ISO string, date or datetime.

    Accepts "YYYY-MM-DD" and ISO datetimes ("YYYY-MM-DDTHH:MM:SS", optionally
    with offset or trailing Z); only the calendar date is kept.

    Args:
        value: Value to parse

    Returns:
        Parsed date, or None when absent or malformed
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def calculate_age(birthdate: DateInput, today: Optional[date] = None) -> int:
    """Calculate age in whole years.

    Year difference, minus one when today's month/day precedes the birth
    month/day.

    Args:
        birthdate: Birth date (ISO string or date)
        today: Reference date, defaults to the current UTC date

    Returns:
        Age in years; 0 when birthdate is absent or malformed

    Example:
        >>> calculate_age("2000-06-15", today=date(2024, 6, 14))
        23
        >>> calculate_age("not-a-date")
        0
    """
    born = parse_date(birthdate)
    if born is None:
        return 0

    reference = today or today_utc()
    age = reference.year - born.year
    if (reference.month, reference.day) < (born.month, born.day):
        age -= 1
    return age


def years_before(reference: date, years: int) -> date:
    """Same calendar day a number of years earlier; Feb 29 rolls to Mar 1."""
    try:
        return reference.replace(year=reference.year - years)
    except ValueError:
        return date(reference.year - years, 3, 1)
