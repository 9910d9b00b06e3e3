"""Sectoral classification of residents.

Derives the six welfare/demographic flags used for social-program targeting
from a resident's age, employment status, education attainment and
ethnicity. Each flag is evaluated independently; missing inputs evaluate to
False.
"""

from datetime import date
from typing import Optional

from rbi_registry.classification.age import calculate_age
from rbi_registry.logging_audit import get_operation_logger
from rbi_registry.models.classification import (
    EducationAttainment,
    EmploymentStatus,
    SectoralInformation,
)
from rbi_registry.models.context import ClassificationContext

logger = get_operation_logger("classification")

EMPLOYED_STATUSES = frozenset({EmploymentStatus.EMPLOYED, EmploymentStatus.SELF_EMPLOYED})
UNEMPLOYED_STATUSES = frozenset({EmploymentStatus.UNEMPLOYED, EmploymentStatus.LOOKING_FOR_WORK})

NOT_IN_SCHOOL_ATTAINMENTS = frozenset({EducationAttainment.NO_EDUCATION, EducationAttainment.PRESCHOOL})
HIGHER_EDUCATION_ATTAINMENTS = frozenset({EducationAttainment.COLLEGE, EducationAttainment.POST_GRADUATE})

# Recognized indigenous / ethnic group labels (lower case, exact match)
INDIGENOUS_ETHNICITIES = frozenset({
    "indigenous_group",
    "maranao",
    "maguindanao",
    "tausug",
    "sama",
    "badjao",
    "yakan",
    "ibanag",
    "ivatan",
    "ilocano",
    "tagalog",
    "aeta",
    "agta",
    "ati",
    "batak",
    "mamanwa",
})

SENIOR_CITIZEN_AGE = 60
SCHOOL_AGE_RANGE = (5, 17)
YOUTH_AGE_RANGE = (15, 30)


def is_employed(employment_status: Optional[str]) -> bool:
    return EmploymentStatus.parse(employment_status) in EMPLOYED_STATUSES


def is_unemployed(employment_status: Optional[str]) -> bool:
    return EmploymentStatus.parse(employment_status) in UNEMPLOYED_STATUSES


def is_senior_citizen(age: int) -> bool:
    return age >= SENIOR_CITIZEN_AGE


def is_indigenous_people(ethnicity: Optional[str]) -> bool:
    if not ethnicity:
        return False
    return ethnicity.strip().lower() in INDIGENOUS_ETHNICITIES


def is_out_of_school_children(age: int, education_attainment: Optional[str] = None) -> bool:
    """School-age child (5-17 inclusive) with no recorded schooling.

    Args:
        age: Age in years
        education_attainment: Raw education attainment

    Returns:
        True when the child has no attainment, no_education or preschool
    """
    low, high = SCHOOL_AGE_RANGE
    if not low <= age <= high:
        return False
    attainment = EducationAttainment.parse(education_attainment)
    return attainment is None or attainment in NOT_IN_SCHOOL_ATTAINMENTS


def is_out_of_school_youth(
    age: int,
    education_attainment: Optional[str] = None,
    employment_status: Optional[str] = None,
) -> bool:
    """Youth (15-30 inclusive) without higher education and without work.

    Absent employment status counts as not employed. Any recognised status
    other than unemployed/looking_for_work, and any unrecognized status,
    excludes the resident.

    Args:
        age: Age in years
        education_attainment: Raw education attainment
        employment_status: Raw employment status

    Returns:
        True when all three conditions hold
    """
    low, high = YOUTH_AGE_RANGE
    if not low <= age <= high:
        return False
    if EducationAttainment.parse(education_attainment) in HIGHER_EDUCATION_ATTAINMENTS:
        return False
    status = EmploymentStatus.parse(employment_status)
    return status is None or status in UNEMPLOYED_STATUSES


def classify_sectoral(context: ClassificationContext, age: int) -> SectoralInformation:
    """Derive sectoral flags for a resident whose age is already known.

    Args:
        context: Resident attributes
        age: Age in years (0 when unknown)

    Returns:
        SectoralInformation with the six independent flags
    """
    return SectoralInformation(
        is_labor_force_employed=is_employed(context.employment_status),
        is_unemployed=is_unemployed(context.employment_status),
        is_out_of_school_children=is_out_of_school_children(age, context.education_attainment),
        is_out_of_school_youth=is_out_of_school_youth(
            age, context.education_attainment, context.employment_status
        ),
        is_senior_citizen=is_senior_citizen(age),
        is_indigenous_people=is_indigenous_people(context.ethnicity),
    )


def calculate_sectoral_flags(
    context: ClassificationContext, today: Optional[date] = None
) -> SectoralInformation:
    """Compute sectoral flags straight from a context.

    Used by form handlers to auto-populate the read-only sectoral fields
    while a resident is being edited.

    Args:
        context: Resident attributes
        today: Reference date, defaults to the current UTC date

    Returns:
        SectoralInformation for the resident
    """
    age = calculate_age(context.birthdate, today)
    result = classify_sectoral(context, age)
    logger.debug("Sectoral flags for age %d: %s", age, result)
    return result
