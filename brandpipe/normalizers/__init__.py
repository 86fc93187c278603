from .base import Normalizer, FallbackReporter, LoggingReporter, RecordingReporter
from .rules import BrandNormalizer, parse_int, to_int, clean_str
from .types import (
    ALLOWED_FIELDS,
    CANONICAL_FIELDS,
    MIN_LOCATIONS,
    MIN_YEAR,
    CanonicalBrand,
    Record,
    current_year,
)

def get_default_normalizer(reporter: FallbackReporter | None = None) -> BrandNormalizer:
    """Factory for the normalizer used by the API and the CLI."""
    return BrandNormalizer(reporter=reporter)

__all__ = [
    "get_default_normalizer",
    "BrandNormalizer",
    "Normalizer",
    "FallbackReporter",
    "LoggingReporter",
    "RecordingReporter",
    "parse_int",
    "to_int",
    "clean_str",
    "ALLOWED_FIELDS",
    "CANONICAL_FIELDS",
    "MIN_LOCATIONS",
    "MIN_YEAR",
    "CanonicalBrand",
    "Record",
    "current_year",
]
