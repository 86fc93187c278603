# brandpipe/normalizers/base.py
import logging
from typing import Any, List, Protocol, Set, Tuple
from .types import CanonicalBrand, Record

log = logging.getLogger("brandpipe.normalizers")

class Normalizer(Protocol):
    def normalize_record(self, rec: Record, reporter: "FallbackReporter | None" = None) -> CanonicalBrand:
        """Return a NEW canonical record. Do not mutate `rec`."""
        ...

    def fields_to_discard(self, rec: Record) -> Set[str]:
        ...


class FallbackReporter(Protocol):
    def report_fallback(self, record_id: Any, field: str, fallback: Any) -> None:
        """Called once per field that had no usable source value."""
        ...


class LoggingReporter:
    """Default reporter: one WARNING per defaulted field."""
    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or log

    def report_fallback(self, record_id: Any, field: str, fallback: Any) -> None:
        self.logger.warning("document %s: no valid %s found, using %r", record_id, field, fallback)


class RecordingReporter:
    """Keeps (record_id, field, fallback) tuples in memory, optionally forwarding them."""
    def __init__(self, forward: FallbackReporter | None = None):
        self.events: List[Tuple[Any, str, Any]] = []
        self.forward = forward

    def report_fallback(self, record_id: Any, field: str, fallback: Any) -> None:
        self.events.append((record_id, field, fallback))
        if self.forward is not None:
            self.forward.report_fallback(record_id, field, fallback)
