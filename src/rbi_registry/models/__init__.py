"""Models module.

This module provides data models and dataclasses for the application.
"""

from rbi_registry.models.classification import (
    EducationAttainment,
    EmploymentStatus,
    MigrationClassification,
    MigrationReason,
    MigrationType,
    ResidentClassification,
    SectoralInformation,
    VulnerabilityTag,
)
from rbi_registry.models.context import ClassificationContext
from rbi_registry.models.statistics import (
    MigrationCounts,
    ResidentStatistics,
    SectoralCounts,
)

__all__ = [
    "ClassificationContext",
    "EducationAttainment",
    "EmploymentStatus",
    "MigrationClassification",
    "MigrationCounts",
    "MigrationReason",
    "MigrationType",
    "ResidentClassification",
    "ResidentStatistics",
    "SectoralCounts",
    "SectoralInformation",
    "VulnerabilityTag",
]
