"""Classification result data models.

This module defines the closed status enums used by the classifiers and the
immutable result types produced for each resident: SectoralInformation,
MigrationClassification and ResidentClassification.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional


class EmploymentStatus(Enum):
    """Known employment status values.

    UNRECOGNIZED is the fallback for any non-empty value not listed here and
    always behaves as the negative case in classification rules.
    """

    EMPLOYED = "employed"
    SELF_EMPLOYED = "self_employed"
    UNEMPLOYED = "unemployed"
    LOOKING_FOR_WORK = "looking_for_work"
    UNDEREMPLOYED = "underemployed"
    STUDENT = "student"
    RETIRED = "retired"
    HOMEMAKER = "homemaker"
    DISABLED = "disabled"
    NOT_IN_LABOR_FORCE = "not_in_labor_force"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["EmploymentStatus"]:
        """Parse a free-form status string.

        Args:
            value: Raw status (case-insensitive, surrounding whitespace ignored)

        Returns:
            Matching member, UNRECOGNIZED for unknown values, None when absent
        """
        if value is None or not str(value).strip():
            return None
        normalized = str(value).strip().lower()
        for member in cls:
            if member is not cls.UNRECOGNIZED and member.value == normalized:
                return member
        return cls.UNRECOGNIZED


class EducationAttainment(Enum):
    """Known education attainment values.

    Values that are not exact members but mention college or post-graduate
    study (e.g. "college_graduate") parse to COLLEGE / POST_GRADUATE.
    """

    NO_EDUCATION = "no_education"
    PRESCHOOL = "preschool"
    ELEMENTARY = "elementary"
    HIGH_SCHOOL = "high_school"
    VOCATIONAL = "vocational"
    COLLEGE = "college"
    POST_GRADUATE = "post_graduate"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["EducationAttainment"]:
        """Parse a free-form education attainment string.

        Args:
            value: Raw attainment (case-insensitive, surrounding whitespace ignored)

        Returns:
            Matching member, UNRECOGNIZED for unknown values, None when absent
        """
        if value is None or not str(value).strip():
            return None
        normalized = str(value).strip().lower()
        for member in cls:
            if member is not cls.UNRECOGNIZED and member.value == normalized:
                return member
        if "post_graduate" in normalized:
            return cls.POST_GRADUATE
        if "college" in normalized:
            return cls.COLLEGE
        return cls.UNRECOGNIZED


class MigrationReason(Enum):
    """Categorized reason for migration."""

    EMPLOYMENT = "employment"
    EDUCATION = "education"
    FAMILY = "family"
    MARRIAGE = "marriage"
    HOUSING = "housing"
    HEALTH = "health"
    DISASTER = "disaster"
    CONFLICT = "conflict"
    RETIREMENT = "retirement"
    OTHER = "other"


class MigrationType(Enum):
    """Widest jurisdiction boundary crossed by a migrant."""

    INTERNATIONAL = "international"
    INTER_REGION = "inter_region"
    INTER_PROVINCE = "inter_province"
    INTER_CITY = "inter_city"
    INTER_BARANGAY = "inter_barangay"


class VulnerabilityTag(Enum):
    """Vulnerability tags assigned to residents.

    Results carry the plain string values, not the members.
    """

    UNDER_FIVE = "under_five"
    MINOR = "minor"
    SENIOR_CITIZEN = "senior_citizen"
    YOUNG_FEMALE = "young_female"
    SINGLE_PARENT = "single_parent"
    NO_EDUCATION = "no_education"
    UNEMPLOYED = "unemployed"
    RECENT_MIGRANT = "recent_migrant"
    FORCED_MIGRANT = "forced_migrant"
    CHILD_MIGRANT = "child_migrant"
    OUT_OF_SCHOOL_CHILDREN = "out_of_school_children"
    OUT_OF_SCHOOL_YOUTH = "out_of_school_youth"
    INDIGENOUS = "indigenous"


@dataclass(frozen=True)
class SectoralInformation:
    """Sectoral (welfare/demographic) flags of a resident.

    The flags are independent; a resident may carry several at once.
    """

    is_labor_force_employed: bool = False
    is_unemployed: bool = False
    is_out_of_school_children: bool = False
    is_out_of_school_youth: bool = False
    is_senior_citizen: bool = False
    is_indigenous_people: bool = False

    def to_dict(self) -> dict[str, bool]:
        return asdict(self)


@dataclass(frozen=True)
class MigrationClassification:
    """Migration status of a resident.

    Attributes:
        is_migrant: Any previous location recorded
        is_recent_migrant: Transferred within the last five years
        migration_reason: Categorized reason (only for migrants with a reason text)
        migration_type: Widest boundary crossed (only for migrants)
        is_economic_migrant: Reason is employment
        is_education_migrant: Reason is education
        is_family_migrant: Reason is family or marriage
        is_forced_migrant: Reason is disaster or conflict
        is_return_migrant: Resident intends to return
        is_seasonal_migrant: Intends to return or stayed less than 12 months
    """

    is_migrant: bool = False
    is_recent_migrant: bool = False
    migration_reason: Optional[MigrationReason] = None
    migration_type: Optional[MigrationType] = None
    is_economic_migrant: bool = False
    is_education_migrant: bool = False
    is_family_migrant: bool = False
    is_forced_migrant: bool = False
    is_return_migrant: bool = False
    is_seasonal_migrant: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_migrant": self.is_migrant,
            "is_recent_migrant": self.is_recent_migrant,
            "migration_reason": self.migration_reason.value if self.migration_reason else None,
            "migration_type": self.migration_type.value if self.migration_type else None,
            "is_economic_migrant": self.is_economic_migrant,
            "is_education_migrant": self.is_education_migrant,
            "is_family_migrant": self.is_family_migrant,
            "is_forced_migrant": self.is_forced_migrant,
            "is_return_migrant": self.is_return_migrant,
            "is_seasonal_migrant": self.is_seasonal_migrant,
        }


@dataclass(frozen=True)
class ResidentClassification:
    """Complete classification of one resident.

    A pure value derived from a ClassificationContext and a reference date;
    never mutated after construction.

    Attributes:
        sectoral: Sectoral flags
        migration: Migration classification
        vulnerabilities: Set of vulnerability tag strings
        age: Age in whole years used for the classification (0 when unknown)
    """

    sectoral: SectoralInformation
    migration: MigrationClassification
    vulnerabilities: frozenset[str] = field(default_factory=frozenset)
    age: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Returns:
            Dictionary with vulnerability tags in sorted order
        """
        return {
            "age": self.age,
            "sectoral": self.sectoral.to_dict(),
            "migration": self.migration.to_dict(),
            "vulnerabilities": sorted(self.vulnerabilities),
        }

    def to_sectoral_record(self) -> dict[str, bool]:
        """Flags persisted alongside the resident record.

        Returns:
            The six sectoral flags plus is_migrant
        """
        record = self.sectoral.to_dict()
        record["is_migrant"] = self.migration.is_migrant
        return record
