"""Group statistics data models.

This module defines the immutable snapshot produced by folding many resident
classifications together, plus the merge used to combine partial folds.
"""

from dataclasses import asdict, dataclass, field, fields
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class SectoralCounts:
    """Number of residents carrying each sectoral flag."""

    employed: int = 0
    unemployed: int = 0
    senior_citizens: int = 0
    out_of_school_children: int = 0
    out_of_school_youth: int = 0
    indigenous: int = 0

    def __add__(self, other: "SectoralCounts") -> "SectoralCounts":
        return SectoralCounts(
            **{f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)}
        )


@dataclass(frozen=True)
class MigrationCounts:
    """Number of residents carrying each migration flag."""

    total_migrants: int = 0
    recent_migrants: int = 0
    economic_migrants: int = 0
    education_migrants: int = 0
    family_migrants: int = 0
    forced_migrants: int = 0
    return_migrants: int = 0
    seasonal_migrants: int = 0

    def __add__(self, other: "MigrationCounts") -> "MigrationCounts":
        return MigrationCounts(
            **{f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)}
        )


def _frozen_counts(counts: Mapping[str, int]) -> Mapping[str, int]:
    return MappingProxyType(dict(sorted(counts.items())))


@dataclass(frozen=True)
class ResidentStatistics:
    """Aggregate classification statistics for a group of residents.

    Immutable once returned. Two snapshots computed over disjoint groups
    combine with merge(), which makes the fold safe to split across workers.

    Attributes:
        total: Number of residents folded
        sectoral: Per-sectoral-flag counts
        migration: Per-migration-flag counts
        vulnerabilities: Read-only mapping of vulnerability tag to count

    Example:
        >>> stats = calculate_resident_statistics(contexts)
        >>> stats.sectoral.senior_citizens
        12
        >>> stats.vulnerabilities.get("minor", 0)
        30
    """

    total: int = 0
    sectoral: SectoralCounts = field(default_factory=SectoralCounts)
    migration: MigrationCounts = field(default_factory=MigrationCounts)
    vulnerabilities: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        # Always copy; a caller-supplied proxy may wrap a dict it still mutates
        object.__setattr__(self, "vulnerabilities", _frozen_counts(self.vulnerabilities))

    def __hash__(self) -> int:
        return hash(
            (self.total, self.sectoral, self.migration, frozenset(self.vulnerabilities.items()))
        )

    @classmethod
    def empty(cls) -> "ResidentStatistics":
        return cls()

    def merge(self, other: "ResidentStatistics") -> "ResidentStatistics":
        """Combine two snapshots by summing every count.

        Args:
            other: Statistics computed over a disjoint group of residents

        Returns:
            New ResidentStatistics; neither operand is modified
        """
        tags: dict[str, int] = dict(self.vulnerabilities)
        for tag, count in other.vulnerabilities.items():
            tags[tag] = tags.get(tag, 0) + count
        return ResidentStatistics(
            total=self.total + other.total,
            sectoral=self.sectoral + other.sectoral,
            migration=self.migration + other.migration,
            vulnerabilities=tags,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total": self.total,
            "sectoral": asdict(self.sectoral),
            "migration": asdict(self.migration),
            "vulnerabilities": dict(self.vulnerabilities),
        }
