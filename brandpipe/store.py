"""
Collection-level access to the document store.

Documents live in the `documents` table as JSON bodies grouped by collection
name. Callers see plain dicts shaped like `Document.to_dict()`; the session
is never committed here, the orchestration layer decides when to commit.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from brandpipe.models import Document

log = logging.getLogger(__name__)

IDENTITY_FIELD = "_id"
# Keys maintained by the store itself, never kept inside a document body
STORE_FIELDS = {IDENTITY_FIELD, "createdAt", "updatedAt", "__v"}


class DocumentNotFound(LookupError):
    def __init__(self, collection: str, doc_id: str):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"document {doc_id} not found in {collection!r}")


def new_id() -> str:
    return uuid.uuid4().hex[:24]


def coerce_id(value: Any) -> Optional[str]:
    """Accept "abc..." or the extended-JSON form {"$oid": "abc..."}."""
    if isinstance(value, dict):
        value = value.get("$oid")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def find_all(db: Session, collection: str) -> List[Dict[str, Any]]:
    rows = db.execute(
        select(Document).where(Document.collection == collection).order_by(Document.pk)
    ).scalars().all()
    return [row.to_dict() for row in rows]


def _row(db: Session, collection: str, doc_id: str) -> Optional[Document]:
    return db.execute(
        select(Document).where(Document.collection == collection, Document.id == doc_id)
    ).scalar_one_or_none()


def get_document(db: Session, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
    row = _row(db, collection, doc_id)
    return row.to_dict() if row is not None else None


def count_documents(db: Session, collection: str) -> int:
    return db.execute(
        select(func.count()).select_from(Document).where(Document.collection == collection)
    ).scalar_one()


def insert_many(db: Session, collection: str, records: Iterable[Dict[str, Any]]) -> List[str]:
    """Bulk insert raw documents as-is. Returns the identities in input order."""
    ids: List[str] = []
    rows: List[Document] = []
    for rec in records:
        doc_id = coerce_id(rec.get(IDENTITY_FIELD)) or new_id()
        body = {k: v for k, v in rec.items() if k not in STORE_FIELDS}
        rows.append(Document(id=doc_id, collection=collection, body=body))
        ids.append(doc_id)
    db.add_all(rows)
    db.flush()
    log.info("inserted %s documents into %s", len(ids), collection)
    return ids


def update_one(
    db: Session,
    collection: str,
    doc_id: str,
    set_fields: Dict[str, Any],
    unset_fields: Iterable[str] = (),
) -> Dict[str, Any]:
    """
    In-place update keeping the identity.
    `unset_fields` removes keys that are not also being set.
    """
    row = _row(db, collection, doc_id)
    if row is None:
        raise DocumentNotFound(collection, doc_id)

    body = dict(row.body or {})
    body.update({k: v for k, v in set_fields.items() if k not in STORE_FIELDS})
    for key in unset_fields:
        if key not in set_fields:
            body.pop(key, None)

    row.body = body
    row.version = (row.version or 0) + 1
    row.updated_at = datetime.now(timezone.utc)
    db.flush()
    return row.to_dict()
