"""Vulnerability assessment and unified resident classification.

Combines the sectoral and migration classifications with sex, civil status
and age into a set of vulnerability tags used to prioritize residents in
welfare reporting.
"""

from datetime import date
from typing import Optional

from rbi_registry.classification.age import calculate_age
from rbi_registry.classification.migration import classify_migration
from rbi_registry.classification.sectoral import classify_sectoral
from rbi_registry.logging_audit import get_operation_logger
from rbi_registry.models.classification import (
    EducationAttainment,
    MigrationClassification,
    ResidentClassification,
    SectoralInformation,
    VulnerabilityTag,
)
from rbi_registry.models.context import ClassificationContext

logger = get_operation_logger("classification")

UNDER_FIVE_AGE = 5
ADULT_AGE = 18
SENIOR_AGE = 60
YOUNG_FEMALE_AGE = 30

SINGLE_PARENT_CIVIL_STATUSES = frozenset({"widowed", "separated"})


def _normalized(value: Optional[str]) -> str:
    return value.strip().lower() if value else ""


def _age_tags(age: int) -> set[VulnerabilityTag]:
    tags = set()
    if age < UNDER_FIVE_AGE:
        tags.add(VulnerabilityTag.UNDER_FIVE)
    if age < ADULT_AGE:
        tags.add(VulnerabilityTag.MINOR)
    if age >= SENIOR_AGE:
        tags.add(VulnerabilityTag.SENIOR_CITIZEN)
    return tags


def _gender_tags(context: ClassificationContext, age: int) -> set[VulnerabilityTag]:
    tags: set[VulnerabilityTag] = set()
    if _normalized(context.sex) != "female":
        return tags

    civil_status = _normalized(context.civil_status)
    if civil_status == "single" and age < YOUNG_FEMALE_AGE:
        tags.add(VulnerabilityTag.YOUNG_FEMALE)
    if civil_status in SINGLE_PARENT_CIVIL_STATUSES:
        tags.add(VulnerabilityTag.SINGLE_PARENT)
    return tags


def _migration_tags(migration: MigrationClassification, age: int) -> set[VulnerabilityTag]:
    tags: set[VulnerabilityTag] = set()
    if not migration.is_migrant:
        return tags

    if migration.is_recent_migrant:
        tags.add(VulnerabilityTag.RECENT_MIGRANT)
    if migration.is_forced_migrant:
        tags.add(VulnerabilityTag.FORCED_MIGRANT)
    if age < ADULT_AGE:
        tags.add(VulnerabilityTag.CHILD_MIGRANT)
    return tags


def assess_vulnerabilities(
    context: ClassificationContext,
    age: int,
    sectoral: SectoralInformation,
    migration: MigrationClassification,
) -> frozenset[str]:
    """Derive the vulnerability tag set of a resident.

    Every rule is evaluated independently; the result is a set, so a tag
    appears at most once however many rules produce it.

    Args:
        context: Resident attributes
        age: Age in years (0 when unknown)
        sectoral: Sectoral flags of the resident
        migration: Migration classification of the resident

    Returns:
        Frozen set of tag strings (VulnerabilityTag values)
    """
    tags = _age_tags(age) | _gender_tags(context, age) | _migration_tags(migration, age)

    attainment = EducationAttainment.parse(context.education_attainment)
    if attainment is None or attainment is EducationAttainment.NO_EDUCATION:
        tags.add(VulnerabilityTag.NO_EDUCATION)

    if sectoral.is_unemployed:
        tags.add(VulnerabilityTag.UNEMPLOYED)
    if sectoral.is_out_of_school_children:
        tags.add(VulnerabilityTag.OUT_OF_SCHOOL_CHILDREN)
    if sectoral.is_out_of_school_youth:
        tags.add(VulnerabilityTag.OUT_OF_SCHOOL_YOUTH)
    if sectoral.is_indigenous_people:
        tags.add(VulnerabilityTag.INDIGENOUS)

    return frozenset(tag.value for tag in tags)


def classify_resident(
    context: ClassificationContext, today: Optional[date] = None
) -> ResidentClassification:
    """Classify one resident.

    Age is computed once; the sectoral and migration classifiers run
    independently on it and their outputs feed the vulnerability rules.

    Args:
        context: Resident attributes
        today: Reference date, defaults to the current UTC date

    Returns:
        Fresh ResidentClassification

    Example:
        >>> result = classify_resident(ClassificationContext())
        >>> sorted(result.vulnerabilities)
        ['minor', 'no_education', 'under_five']
    """
    age = calculate_age(context.birthdate, today)
    sectoral = classify_sectoral(context, age)
    migration = classify_migration(context, today)
    vulnerabilities = assess_vulnerabilities(context, age, sectoral, migration)

    logger.debug(
        "Classified resident: age=%d migrant=%s tags=%s",
        age,
        migration.is_migrant,
        sorted(vulnerabilities),
    )

    return ResidentClassification(
        sectoral=sectoral,
        migration=migration,
        vulnerabilities=vulnerabilities,
        age=age,
    )
