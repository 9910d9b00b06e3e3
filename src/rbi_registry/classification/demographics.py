"""Population demographics for dashboard reporting.

Population pyramid, dependency ratios and sex / civil status / employment
distributions over a resident roster.
"""

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Iterable, Optional, Sequence

from rbi_registry.classification.age import calculate_age, parse_date, today_utc
from rbi_registry.logging_audit import get_operation_logger
from rbi_registry.models.classification import EmploymentStatus
from rbi_registry.models.context import ClassificationContext

logger = get_operation_logger("statistics")

STANDARD_AGE_GROUPS = (
    "0-4", "5-9", "10-14", "15-19", "20-24", "25-29", "30-34", "35-39",
    "40-44", "45-49", "50-54", "55-59", "60-64", "65-69", "70-74", "75-79",
    "80-84", "85-89", "90-94", "95-99", "100+",
)

YOUNG_DEPENDENT_GROUPS = frozenset({"0-4", "5-9", "10-14"})
OLD_DEPENDENT_GROUPS = frozenset({
    "65-69", "70-74", "75-79", "80-84", "85-89", "90-94", "95-99", "100+",
})

CIVIL_STATUS_ALIASES = {
    "single": "single",
    "married": "married",
    "widowed": "widowed",
    "divorced": "divorced",
    "separated": "separated",
    "annulled": "annulled",
    "registered partnership": "registered_partnership",
    "registered_partnership": "registered_partnership",
    "live-in": "live_in",
    "live_in": "live_in",
    "livein": "live_in",
}


@dataclass(frozen=True)
class AgeGroupCount:
    """One bar of the population pyramid."""

    age_range: str
    male: int
    female: int
    male_percentage: float
    female_percentage: float


@dataclass(frozen=True)
class DependencyRatios:
    """Dependency ratios per 100 working-age residents.

    Attributes:
        young_dependents: Residents aged 0-14
        working_age: Residents aged 15-64
        old_dependents: Residents aged 65 and over
        dependency_ratio: (young + old) / working * 100
        young_dependency_ratio: young / working * 100
        old_dependency_ratio: old / working * 100
    """

    young_dependents: int
    working_age: int
    old_dependents: int
    dependency_ratio: float
    young_dependency_ratio: float
    old_dependency_ratio: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def get_age_group(age: int) -> str:
    """Five-year age band label, with everyone 100 and over in "100+"."""
    if age >= 100:
        return "100+"
    lower = max(age, 0) // 5 * 5
    return f"{lower}-{lower + 4}"


def _percentage(part: int, whole: int) -> float:
    return (part / whole) * 100 if whole > 0 else 0.0


def build_population_pyramid(
    residents: Sequence[ClassificationContext], today: Optional[date] = None
) -> list[AgeGroupCount]:
    """Count residents per age group and sex.

    Residents without a parseable birthdate or a sex are skipped but still
    count toward the total used for percentages. Any sex other than "male"
    is counted as female.

    Args:
        residents: Resident contexts
        today: Reference date, defaults to the current UTC date

    Returns:
        One AgeGroupCount per STANDARD_AGE_GROUPS entry, in order
    """
    reference = today or today_utc()
    counts = {group: {"male": 0, "female": 0} for group in STANDARD_AGE_GROUPS}
    skipped = 0

    for resident in residents:
        if parse_date(resident.birthdate) is None or not resident.sex:
            skipped += 1
            continue
        group = get_age_group(calculate_age(resident.birthdate, reference))
        sex = "male" if resident.sex.strip().lower() == "male" else "female"
        counts[group][sex] += 1

    if skipped:
        logger.debug("Population pyramid skipped %d resident(s) without birthdate or sex", skipped)

    total = len(residents)
    return [
        AgeGroupCount(
            age_range=group,
            male=counts[group]["male"],
            female=counts[group]["female"],
            male_percentage=_percentage(counts[group]["male"], total),
            female_percentage=_percentage(counts[group]["female"], total),
        )
        for group in STANDARD_AGE_GROUPS
    ]


def calculate_dependency_ratios(pyramid: Iterable[AgeGroupCount]) -> DependencyRatios:
    """Compute dependency ratios from a population pyramid.

    Args:
        pyramid: Output of build_population_pyramid

    Returns:
        DependencyRatios; ratios are 0 when there is no working-age population
    """
    young = working = old = 0
    for group in pyramid:
        total = group.male + group.female
        if group.age_range in YOUNG_DEPENDENT_GROUPS:
            young += total
        elif group.age_range in OLD_DEPENDENT_GROUPS:
            old += total
        else:
            working += total

    return DependencyRatios(
        young_dependents=young,
        working_age=working,
        old_dependents=old,
        dependency_ratio=_percentage(young + old, working),
        young_dependency_ratio=_percentage(young, working),
        old_dependency_ratio=_percentage(old, working),
    )


def calculate_sex_distribution(residents: Iterable[ClassificationContext]) -> dict[str, Any]:
    """Count male and female residents; other or missing values are ignored."""
    male = female = 0
    for resident in residents:
        sex = (resident.sex or "").strip().lower()
        if sex == "male":
            male += 1
        elif sex == "female":
            female += 1

    total = male + female
    return {
        "male": male,
        "female": female,
        "total": total,
        "male_percentage": _percentage(male, total),
        "female_percentage": _percentage(female, total),
    }


def calculate_civil_status_distribution(
    residents: Iterable[ClassificationContext],
) -> dict[str, int]:
    """Count residents per civil status; unknown values are not counted."""
    counts = {status: 0 for status in dict.fromkeys(CIVIL_STATUS_ALIASES.values())}
    for resident in residents:
        status = CIVIL_STATUS_ALIASES.get((resident.civil_status or "").strip().lower())
        if status:
            counts[status] += 1
    return counts


def calculate_employment_status_distribution(
    residents: Iterable[ClassificationContext],
) -> dict[str, int]:
    """Count residents per employment status.

    Absent and unrecognized statuses are counted under "other".
    """
    counts = {
        status.value: 0 for status in EmploymentStatus if status is not EmploymentStatus.UNRECOGNIZED
    }
    counts["other"] = 0
    for resident in residents:
        status = EmploymentStatus.parse(resident.employment_status)
        if status is None or status is EmploymentStatus.UNRECOGNIZED:
            counts["other"] += 1
        else:
            counts[status.value] += 1
    return counts
