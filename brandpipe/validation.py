"""
Explicit constraint checks for stored brand documents.

`validate_brand` returns every violated constraint as "<field>: <message>";
an empty list means the document is a valid canonical brand.
"""
from typing import Any, Dict, List, Optional

from brandpipe.normalizers.types import MIN_LOCATIONS, MIN_YEAR, current_year


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _required_str(doc: Dict[str, Any], field: str, message: str) -> List[str]:
    value = doc.get(field)
    if not isinstance(value, str) or not value.strip():
        return [f"{field}: {message}"]
    return []


def validate_brand(doc: Dict[str, Any], max_year: Optional[int] = None) -> List[str]:
    top = max_year or current_year()
    errors: List[str] = []

    errors += _required_str(doc, "brandName", "Brand name is required")

    year = doc.get("yearFounded")
    if not _is_int(year):
        errors.append("yearFounded: Year founded is required")
    elif year < MIN_YEAR:
        errors.append("yearFounded: Year founded seems too old")
    elif year > top:
        errors.append("yearFounded: Year founded cannot be in the future")

    errors += _required_str(doc, "headquarters", "Headquarters location is required")

    n = doc.get("numberOfLocations")
    if not _is_int(n):
        errors.append("numberOfLocations: Number of locations is required")
    elif n < MIN_LOCATIONS:
        errors.append("numberOfLocations: There should be at least one location")

    return errors
