"""Migration classification of residents.

Detects whether a resident moved in from another jurisdiction, how recently,
which boundary they crossed, and why. The reason is bucketed from free text
with a keyword table; this is a best-effort heuristic over user-entered
text, and its declared order decides ties.
"""

from datetime import date
from typing import Optional

from rbi_registry.classification.age import parse_date, today_utc, years_before
from rbi_registry.logging_audit import get_operation_logger
from rbi_registry.models.classification import (
    MigrationClassification,
    MigrationReason,
    MigrationType,
)
from rbi_registry.models.context import ClassificationContext

logger = get_operation_logger("classification")

RECENT_MIGRATION_YEARS = 5
SEASONAL_STAY_MONTHS = 12

# Scanned in this order; the first category with a matching keyword wins
REASON_KEYWORDS: tuple[tuple[MigrationReason, tuple[str, ...]], ...] = (
    (MigrationReason.EMPLOYMENT, ("work", "job", "employment", "business")),
    (MigrationReason.EDUCATION, ("school", "education", "study", "college")),
    (MigrationReason.FAMILY, ("family", "parent", "child", "relative")),
    (MigrationReason.MARRIAGE, ("marriage", "married", "spouse")),
    (MigrationReason.HOUSING, ("house", "housing", "rent", "evict")),
    (MigrationReason.HEALTH, ("health", "medical", "hospital", "treatment")),
    (MigrationReason.DISASTER, ("disaster", "typhoon", "flood", "earthquake")),
    (MigrationReason.CONFLICT, ("conflict", "war", "violence", "unsafe")),
    (MigrationReason.RETIREMENT, ("retire", "retirement")),
)

FAMILY_REASONS = frozenset({MigrationReason.FAMILY, MigrationReason.MARRIAGE})
FORCED_REASONS = frozenset({MigrationReason.DISASTER, MigrationReason.CONFLICT})

DOMESTIC_COUNTRY_NAMES = frozenset({"philippines", "ph", "phl"})

# Widest level first
PSGC_LEVELS: tuple[tuple[str, MigrationType], ...] = (
    ("region", MigrationType.INTER_REGION),
    ("province", MigrationType.INTER_PROVINCE),
    ("city", MigrationType.INTER_CITY),
    ("barangay", MigrationType.INTER_BARANGAY),
)


def _present(value: Optional[str]) -> bool:
    return value is not None and str(value).strip() != ""


def is_migrant(context: ClassificationContext) -> bool:
    """A resident with any previous location on record is a migrant."""
    return any(
        _present(value)
        for value in (
            context.previous_barangay_code,
            context.previous_city_code,
            context.previous_province_code,
            context.previous_region_code,
            context.previous_country,
        )
    )


def is_recent_migrant(date_of_transfer, today: Optional[date] = None) -> bool:
    """Transfer date strictly after the same day five years ago.

    Args:
        date_of_transfer: Transfer date (ISO string or date)
        today: Reference date, defaults to the current UTC date

    Returns:
        False when the date is absent or malformed
    """
    transferred = parse_date(date_of_transfer)
    if transferred is None:
        return False
    cutoff = years_before(today or today_utc(), RECENT_MIGRATION_YEARS)
    return transferred > cutoff


def categorize_reason(reason: str) -> MigrationReason:
    """Bucket a free-text migration reason.

    Args:
        reason: User-entered reason text

    Returns:
        First category in REASON_KEYWORDS with a keyword contained in the
        lower-cased text, else MigrationReason.OTHER

    Example:
        >>> categorize_reason("new job near the school")
        <MigrationReason.EMPLOYMENT: 'employment'>
    """
    text = reason.lower()
    for category, keywords in REASON_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category
    return MigrationReason.OTHER


def determine_migration_type(context: ClassificationContext) -> Optional[MigrationType]:
    """Widest boundary crossed, comparing previous and current PSGC codes.

    A foreign previous country makes the move international. Otherwise the
    first level (region, province, city, barangay) where both codes are
    known and differ decides. None when nothing can be compared.
    """
    if _present(context.previous_country):
        if context.previous_country.strip().lower() not in DOMESTIC_COUNTRY_NAMES:
            return MigrationType.INTERNATIONAL

    for level, migration_type in PSGC_LEVELS:
        previous = getattr(context, f"previous_{level}_code")
        current = getattr(context, f"current_{level}_code")
        if _present(previous) and _present(current) and previous.strip() != current.strip():
            return migration_type
    return None


def classify_migration(
    context: ClassificationContext, today: Optional[date] = None
) -> MigrationClassification:
    """Build the migration classification for a resident.

    Args:
        context: Resident attributes
        today: Reference date, defaults to the current UTC date

    Returns:
        MigrationClassification; reason-derived flags stay False for
        non-migrants and migrants without a reason text
    """
    migrant = is_migrant(context)
    stay = context.duration_of_stay_current_months
    intends_to_return = bool(context.is_intending_to_return)

    reason: Optional[MigrationReason] = None
    reason_text = next(
        (
            text
            for text in (context.reason_for_leaving, context.reason_for_transferring)
            if _present(text)
        ),
        None,
    )
    if migrant and reason_text is not None:
        reason = categorize_reason(reason_text)
        logger.debug("Categorized migration reason %r as %s", reason_text, reason.value)

    return MigrationClassification(
        is_migrant=migrant,
        is_recent_migrant=is_recent_migrant(context.date_of_transfer, today),
        migration_reason=reason,
        migration_type=determine_migration_type(context) if migrant else None,
        is_economic_migrant=reason is MigrationReason.EMPLOYMENT,
        is_education_migrant=reason is MigrationReason.EDUCATION,
        is_family_migrant=reason in FAMILY_REASONS,
        is_forced_migrant=reason in FORCED_REASONS,
        is_return_migrant=intends_to_return,
        is_seasonal_migrant=intends_to_return or (stay is not None and stay < SEASONAL_STAY_MONTHS),
    )
