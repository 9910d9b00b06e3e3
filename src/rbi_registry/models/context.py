"""Resident classification context data model.

This module defines the ClassificationContext dataclass: the classification
relevant attributes of one resident, as supplied by form handlers, the
persistence layer or a roster CSV.
"""

import math
from dataclasses import dataclass, fields
from datetime import date
from typing import Any, Mapping, Optional

# Keys used by exported rosters for the city/municipality PSGC level
FIELD_ALIASES = {
    "previous_city_municipality_code": "previous_city_code",
    "current_city_municipality_code": "current_city_code",
}

TRUE_VALUES = ("true", "1", "yes", "y", "on")
FALSE_VALUES = ("false", "0", "no", "n", "off")


@dataclass(frozen=True)
class ClassificationContext:
    """Classification-relevant attributes of a single resident.

    Every field is optional. Instances are immutable and hashable, so a
    classification result can be cached keyed by the context.

    Attributes:
        birthdate: Birth date as ISO string (YYYY-MM-DD) or date
        employment_status: Free-form employment status (e.g. "employed")
        education_attainment: Free-form education attainment (e.g. "college")
        ethnicity: Free-form ethnicity label
        sex: "male" or "female"
        civil_status: Civil status (e.g. "single", "widowed")
        previous_barangay_code: PSGC code of previous barangay
        previous_city_code: PSGC code of previous city/municipality
        previous_province_code: PSGC code of previous province
        previous_region_code: PSGC code of previous region
        previous_country: Previous country of residence
        current_barangay_code: PSGC code of current barangay
        current_city_code: PSGC code of current city/municipality
        current_province_code: PSGC code of current province
        current_region_code: PSGC code of current region
        date_of_transfer: Date the resident moved in (ISO string or date)
        reason_for_leaving: Free text reason for leaving previous residence
        reason_for_transferring: Free text reason for moving to current residence
        length_of_stay_previous_months: Months spent at previous residence
        duration_of_stay_current_months: Months spent at current residence
        is_intending_to_return: Whether the resident intends to go back
    """

    birthdate: str | date | None = None
    employment_status: str | None = None
    education_attainment: str | None = None
    ethnicity: str | None = None
    sex: str | None = None
    civil_status: str | None = None
    previous_barangay_code: str | None = None
    previous_city_code: str | None = None
    previous_province_code: str | None = None
    previous_region_code: str | None = None
    previous_country: str | None = None
    current_barangay_code: str | None = None
    current_city_code: str | None = None
    current_province_code: str | None = None
    current_region_code: str | None = None
    date_of_transfer: str | date | None = None
    reason_for_leaving: str | None = None
    reason_for_transferring: str | None = None
    length_of_stay_previous_months: int | None = None
    duration_of_stay_current_months: int | None = None
    is_intending_to_return: bool | None = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "ClassificationContext":
        """Build a context from a loosely typed record.

        Accepts dictionaries coming from forms, database rows or CSV rows.
        Unknown keys are ignored, blank strings / None / NaN are treated as
        absent, and the *_city_municipality_code aliases are accepted.

        Args:
            mapping: Record with resident attributes

        Returns:
            ClassificationContext with normalized values

        Example:
            >>> ctx = ClassificationContext.from_mapping({
            ...     "birthdate": "1990-05-01",
            ...     "previous_city_municipality_code": "137404",
            ...     "is_intending_to_return": "no",
            ... })
            >>> ctx.previous_city_code
            '137404'
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}

        for key, raw in mapping.items():
            name = FIELD_ALIASES.get(key, key)
            if name not in known:
                continue
            # Canonical key wins over its alias
            if name in values and key != name:
                continue
            values[name] = raw

        kwargs: dict[str, Any] = {}
        for name, raw in values.items():
            if name in ("length_of_stay_previous_months", "duration_of_stay_current_months"):
                kwargs[name] = _to_int(raw)
            elif name == "is_intending_to_return":
                kwargs[name] = _to_bool(raw)
            elif name in ("birthdate", "date_of_transfer") and isinstance(raw, date):
                kwargs[name] = raw
            else:
                kwargs[name] = _to_text(raw)

        return cls(**kwargs)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    return False


def _to_text(value: Any) -> Optional[str]:
    if _is_missing(value):
        return None
    return str(value).strip()


def _to_int(value: Any) -> Optional[int]:
    if _is_missing(value) or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number)


def _to_bool(value: Any) -> Optional[bool]:
    if _is_missing(value):
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    return None
