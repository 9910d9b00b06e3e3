"""Classification module.

Resident classification engine: age utility, sectoral and migration
classifiers, vulnerability assessment, group statistics and demographics.
All functions are pure; the only implicit input is the reference date, which
defaults to the current UTC date.
"""

from rbi_registry.classification.age import calculate_age, parse_date
from rbi_registry.classification.demographics import (
    build_population_pyramid,
    calculate_civil_status_distribution,
    calculate_dependency_ratios,
    calculate_employment_status_distribution,
    calculate_sex_distribution,
    get_age_group,
)
from rbi_registry.classification.migration import (
    categorize_reason,
    classify_migration,
    determine_migration_type,
    is_migrant,
    is_recent_migrant,
)
from rbi_registry.classification.sectoral import (
    calculate_sectoral_flags,
    classify_sectoral,
)
from rbi_registry.classification.statistics import (
    calculate_resident_statistics,
    classify_residents,
    summarize_classifications,
)
from rbi_registry.classification.vulnerability import (
    assess_vulnerabilities,
    classify_resident,
)

__all__ = [
    # Age
    "calculate_age",
    "parse_date",
    # Sectoral
    "calculate_sectoral_flags",
    "classify_sectoral",
    # Migration
    "categorize_reason",
    "classify_migration",
    "determine_migration_type",
    "is_migrant",
    "is_recent_migrant",
    # Unified classification and statistics
    "assess_vulnerabilities",
    "classify_resident",
    "classify_residents",
    "calculate_resident_statistics",
    "summarize_classifications",
    # Demographics
    "build_population_pyramid",
    "calculate_civil_status_distribution",
    "calculate_dependency_ratios",
    "calculate_employment_status_distribution",
    "calculate_sex_distribution",
    "get_age_group",
]
