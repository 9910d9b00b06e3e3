"""Group statistics over resident classifications.

Each resident is classified independently with one shared reference date;
the counts accumulate in a function-local tally and are returned as a frozen
ResidentStatistics snapshot.
"""

from collections import Counter
from datetime import date
from typing import Iterable, Optional

from rbi_registry.classification.age import today_utc
from rbi_registry.classification.vulnerability import classify_resident
from rbi_registry.logging_audit import get_operation_logger
from rbi_registry.models.classification import ResidentClassification
from rbi_registry.models.context import ClassificationContext
from rbi_registry.models.statistics import (
    MigrationCounts,
    ResidentStatistics,
    SectoralCounts,
)

logger = get_operation_logger("statistics")

# statistics field -> classification flag
SECTORAL_COUNT_FLAGS = {
    "employed": "is_labor_force_employed",
    "unemployed": "is_unemployed",
    "senior_citizens": "is_senior_citizen",
    "out_of_school_children": "is_out_of_school_children",
    "out_of_school_youth": "is_out_of_school_youth",
    "indigenous": "is_indigenous_people",
}

MIGRATION_COUNT_FLAGS = {
    "total_migrants": "is_migrant",
    "recent_migrants": "is_recent_migrant",
    "economic_migrants": "is_economic_migrant",
    "education_migrants": "is_education_migrant",
    "family_migrants": "is_family_migrant",
    "forced_migrants": "is_forced_migrant",
    "return_migrants": "is_return_migrant",
    "seasonal_migrants": "is_seasonal_migrant",
}


def classify_residents(
    residents: Iterable[ClassificationContext], today: Optional[date] = None
) -> list[ResidentClassification]:
    """Classify many residents against one reference date.

    Args:
        residents: Resident contexts
        today: Reference date, defaults to the current UTC date

    Returns:
        Classifications in input order
    """
    reference = today or today_utc()
    return [classify_resident(context, reference) for context in residents]


def summarize_classifications(
    classifications: Iterable[ResidentClassification],
) -> ResidentStatistics:
    """Fold already computed classifications into a statistics snapshot.

    Args:
        classifications: Per-resident classifications

    Returns:
        Frozen ResidentStatistics
    """
    total = 0
    sectoral: Counter[str] = Counter()
    migration: Counter[str] = Counter()
    vulnerabilities: Counter[str] = Counter()

    for classification in classifications:
        total += 1
        for name, flag in SECTORAL_COUNT_FLAGS.items():
            if getattr(classification.sectoral, flag):
                sectoral[name] += 1
        for name, flag in MIGRATION_COUNT_FLAGS.items():
            if getattr(classification.migration, flag):
                migration[name] += 1
        # Tags are a set, so each contributes at most once per resident
        vulnerabilities.update(classification.vulnerabilities)

    return ResidentStatistics(
        total=total,
        sectoral=SectoralCounts(**{name: sectoral[name] for name in SECTORAL_COUNT_FLAGS}),
        migration=MigrationCounts(**{name: migration[name] for name in MIGRATION_COUNT_FLAGS}),
        vulnerabilities=dict(vulnerabilities),
    )


def calculate_resident_statistics(
    residents: Iterable[ClassificationContext], today: Optional[date] = None
) -> ResidentStatistics:
    """Calculate group statistics for a collection of residents.

    The result does not depend on the order of residents. Statistics for
    disjoint groups can be combined with ResidentStatistics.merge.

    Args:
        residents: Resident contexts
        today: Reference date, defaults to the current UTC date

    Returns:
        Frozen ResidentStatistics

    Example:
        >>> stats = calculate_resident_statistics(contexts, today=date(2024, 1, 1))
        >>> stats.total
        3
    """
    reference = today or today_utc()
    stats = summarize_classifications(
        classify_resident(context, reference) for context in residents
    )
    logger.info(
        "Computed statistics for %d resident(s) as of %s", stats.total, reference.isoformat()
    )
    return stats
