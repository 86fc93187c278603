import math
import re
from copy import deepcopy
from typing import Any, Callable, List, Optional, Set, Tuple

from .base import FallbackReporter, LoggingReporter
from .types import (
    ALLOWED_FIELDS,
    FALLBACK_BRAND_NAME,
    FALLBACK_HEADQUARTERS,
    MIN_LOCATIONS,
    MIN_YEAR,
    CanonicalBrand,
    Record,
    current_year,
)

Converter = Callable[[Any], Any]

# whitespace set of JavaScript parseInt (ECMAScript WhiteSpace + LineTerminator)
_WS = "\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
_LEADING_INT = re.compile(f"[{_WS}]*([+-]?)0*([0-9]+)")
# longer digit runs are out of range for every canonical field
MAX_DIGITS = 18


# --- Individual value helpers ---

def parse_int(s: str) -> Optional[int]:
    """
    Leading-integer parse: optional whitespace and sign, then the longest run
    of decimal digits. "1987abc" -> 1987, " -3x" -> -3, "abc" -> None.
    """
    m = _LEADING_INT.match(s)
    if not m or len(m.group(2)) > MAX_DIGITS:
        return None
    n = int(m.group(2))
    return -n if m.group(1) == "-" else n

def to_int(value: Any) -> Optional[int]:
    """Integers pass through, integral floats are narrowed, strings are parsed."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return None
    if isinstance(value, str):
        return parse_int(value)
    return None

def clean_str(value: Any) -> Optional[str]:
    """Trimmed string, or None for non-strings and blanks."""
    if not isinstance(value, str):
        return None
    return value.strip() or None

def lookup(rec: Record, path: str) -> Any:
    """Dotted-path read; missing keys or non-mapping parents give None."""
    cur: Any = rec
    for part in path.split("."):
        if not isinstance(cur, dict):
            return None
        cur = cur.get(part)
    return cur


# Source fields per canonical field, in priority order
BRAND_NAME_SOURCES: List[Tuple[str, Converter]] = [
    ("brandName", clean_str),
    ("brand.name", clean_str),
]
YEAR_FOUNDED_SOURCES: List[Tuple[str, Converter]] = [
    ("yearFounded", to_int),
    ("yearCreated", to_int),
    ("yearsFounded", to_int),
]
HEADQUARTERS_SOURCES: List[Tuple[str, Converter]] = [
    ("headquarters", clean_str),
    ("hqAddress", clean_str),
]
NUMBER_OF_LOCATIONS_SOURCES: List[Tuple[str, Converter]] = [
    ("numberOfLocations", to_int),
]


def first_valid(
    rec: Record,
    sources: List[Tuple[str, Converter]],
    accept: Callable[[Any], bool] = lambda v: True,
) -> Any:
    """Value of the first source whose converted value is accepted, else None."""
    for path, convert in sources:
        raw = lookup(rec, path)
        if raw is None or raw == "":
            continue
        value = convert(raw)
        if value is not None and accept(value):
            return value
    return None


class BrandNormalizer:
    """
    Rule-based normalizer for brand documents:
    maps a loosely-shaped raw record onto the four canonical fields,
    substituting a fixed fallback (and reporting it) whenever no source
    field holds a usable value. Never raises for bad input.
    """
    def __init__(self, reporter: FallbackReporter | None = None, current_year: int | None = None):
        self.reporter = reporter if reporter is not None else LoggingReporter()
        self._current_year = current_year

    @property
    def current_year(self) -> int:
        return self._current_year or current_year()

    def _fallback(self, rec: Record, field: str, value: Any, reporter: FallbackReporter | None):
        (reporter if reporter is not None else self.reporter).report_fallback(rec.get("_id"), field, value)
        return value

    def extract_brand_name(self, rec: Record, reporter: FallbackReporter | None = None) -> str:
        name = first_valid(rec, BRAND_NAME_SOURCES)
        if name is None:
            return self._fallback(rec, "brandName", FALLBACK_BRAND_NAME, reporter)
        return name

    def extract_year_founded(self, rec: Record, reporter: FallbackReporter | None = None) -> int:
        top = self.current_year
        year = first_valid(rec, YEAR_FOUNDED_SOURCES, lambda y: MIN_YEAR <= y <= top)
        if year is None:
            return self._fallback(rec, "yearFounded", MIN_YEAR, reporter)
        return year

    def extract_headquarters(self, rec: Record, reporter: FallbackReporter | None = None) -> str:
        hq = first_valid(rec, HEADQUARTERS_SOURCES)
        if hq is None:
            return self._fallback(rec, "headquarters", FALLBACK_HEADQUARTERS, reporter)
        return hq

    def extract_number_of_locations(self, rec: Record, reporter: FallbackReporter | None = None) -> int:
        n = first_valid(rec, NUMBER_OF_LOCATIONS_SOURCES, lambda v: v >= MIN_LOCATIONS)
        if n is None:
            return self._fallback(rec, "numberOfLocations", MIN_LOCATIONS, reporter)
        return n

    def normalize_record(self, rec: Record, reporter: FallbackReporter | None = None) -> CanonicalBrand:
        r = deepcopy(rec)  # work on a copy so we don’t mutate the input
        return {
            "brandName": self.extract_brand_name(r, reporter),
            "yearFounded": self.extract_year_founded(r, reporter),
            "headquarters": self.extract_headquarters(r, reporter),
            "numberOfLocations": self.extract_number_of_locations(r, reporter),
        }

    transform = normalize_record

    def fields_to_discard(self, rec: Record) -> Set[str]:
        return {k for k in rec if k not in ALLOWED_FIELDS}
