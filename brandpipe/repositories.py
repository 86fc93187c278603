import logging
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from brandpipe import store
from brandpipe.normalizers import RecordingReporter, get_default_normalizer
from brandpipe.normalizers.rules import BrandNormalizer
from brandpipe.settings import BRANDS_COLLECTION
from brandpipe.validation import validate_brand

log = logging.getLogger(__name__)

# fields echoed at DEBUG before a document is rewritten
_SOURCE_FIELDS = (
    "brandName", "yearFounded", "yearCreated", "yearsFounded",
    "headquarters", "hqAddress", "numberOfLocations", "brand",
)


@dataclass
class TransformSummary:
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    fallbacks: int = 0
    errors: List[Dict[str, Any]] = field(default_factory=list)

    def as_dict(self, max_errors: Optional[int] = None) -> Dict[str, Any]:
        d = asdict(self)
        if max_errors is not None:
            d["errors"] = d["errors"][:max_errors]
        return d


@dataclass
class VerifySummary:
    total: int = 0
    valid: int = 0
    invalid: int = 0
    errors: List[Dict[str, Any]] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def transform_brands(
    db: Session,
    collection: str = BRANDS_COLLECTION,
    raw_docs: Optional[List[Dict[str, Any]]] = None,
    normalizer: Optional[BrandNormalizer] = None,
) -> TransformSummary:
    """
    Rewrite every document of `collection` into the canonical brand shape, in place.

    If `raw_docs` is given they are inserted first. Each document is handled in its
    own savepoint so one bad record doesn't poison the batch; a document that fails
    re-validation after the write is counted as failed but the write is kept.
    The session is not committed here.
    """
    normalizer = normalizer or get_default_normalizer()
    fallbacks = RecordingReporter(forward=normalizer.reporter)
    summary = TransformSummary()

    if raw_docs:
        store.insert_many(db, collection, raw_docs)

    documents = store.find_all(db, collection)
    summary.total = len(documents)
    log.info("found %s documents to transform in %s", summary.total, collection)

    for doc in documents:
        doc_id = doc["_id"]
        log.debug("document %s original data: %s", doc_id, {k: doc.get(k) for k in _SOURCE_FIELDS})
        try:
            with db.begin_nested():  # savepoint
                canonical = normalizer.normalize_record(doc, reporter=fallbacks)
                discard = normalizer.fields_to_discard(doc)
                if discard:
                    log.debug("document %s removing fields: %s", doc_id, sorted(discard))
                store.update_one(db, collection, doc_id, set_fields=canonical, unset_fields=discard)

                updated = store.get_document(db, collection, doc_id)
                if updated is None:
                    raise store.DocumentNotFound(collection, doc_id)
                violations = validate_brand(updated, max_year=normalizer.current_year)

        except (SQLAlchemyError, LookupError, TypeError, ValueError) as e:
            log.exception("brand transform failed: id=%s", doc_id)
            summary.failed += 1
            summary.errors.append({"id": doc_id, "error": str(e)})
            continue

        if violations:
            log.error("document %s failed validation after update: %s", doc_id, "; ".join(violations))
            summary.failed += 1
            summary.errors.append({"id": doc_id, "error": "; ".join(violations)})
        else:
            log.debug("document %s transformed to %s", doc_id, canonical)
            summary.succeeded += 1

    summary.fallbacks = len(fallbacks.events)
    log.info(
        "transform summary: total=%s succeeded=%s failed=%s fallbacks=%s",
        summary.total, summary.succeeded, summary.failed, summary.fallbacks,
    )
    return summary


def verify_brands(db: Session, collection: str = BRANDS_COLLECTION) -> VerifySummary:
    """Re-check every stored document against the canonical constraints."""
    summary = VerifySummary()
    for doc in store.find_all(db, collection):
        summary.total += 1
        violations = validate_brand(doc)
        if violations:
            log.error("document %s is INVALID: %s", doc["_id"], "; ".join(violations))
            summary.invalid += 1
            summary.errors.append({"id": doc["_id"], "errors": violations})
        else:
            log.debug("document %s (%s) is valid", doc["_id"], doc.get("brandName"))
            summary.valid += 1

    log.info("verify summary: total=%s valid=%s invalid=%s", summary.total, summary.valid, summary.invalid)
    return summary


def seed_brands(db: Session, cases: list, collection: str = BRANDS_COLLECTION) -> tuple[int, list[dict]]:
    """
    Insert one canonical document per seed case.
    Cases that violate the constraints are rejected and reported, never written.
    """
    ok = 0
    errors: list[dict] = []

    for case in cases:
        doc = case.canonical()
        violations = validate_brand(doc)
        if violations:
            log.warning("seed case %s rejected: %s", case.case_number, "; ".join(violations))
            errors.append({"case": case.case_number, "error": "; ".join(violations)})
            continue

        try:
            with db.begin_nested():
                store.insert_many(db, collection, [doc])
            ok += 1
        except SQLAlchemyError as e:
            log.exception("seeding case %s failed", case.case_number)
            errors.append({"case": case.case_number, "error": str(e)})

    log.info("seed summary: seeded=%s errors=%s", ok, len(errors))
    return ok, errors
