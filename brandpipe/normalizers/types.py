# brandpipe/normalizers/types.py
from datetime import date
from typing import Any, Dict, TypedDict

Record = Dict[str, Any]

class CanonicalBrand(TypedDict):
    brandName: str
    yearFounded: int
    headquarters: str
    numberOfLocations: int

CANONICAL_FIELDS = ("brandName", "yearFounded", "headquarters", "numberOfLocations")

# Keys a stored brand may legitimately carry; anything else gets unset after a rewrite
ALLOWED_FIELDS = frozenset({
    "_id", "brandName", "yearFounded", "headquarters", "numberOfLocations",
    "createdAt", "updatedAt", "__v",
})

MIN_YEAR = 1600
MIN_LOCATIONS = 1

FALLBACK_BRAND_NAME = "Unknown Brand"
FALLBACK_HEADQUARTERS = "Unknown Location"


def current_year() -> int:
    """Upper bound for yearFounded, evaluated at call time."""
    return date.today().year
