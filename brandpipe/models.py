from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, DateTime, JSON, Index
from sqlalchemy.ext.mutable import MutableDict
from .db import Base


def _utcnow():
    return datetime.now(timezone.utc)


def _isoformat(value: datetime | None) -> str | None:
    # SQLite hands DateTime(timezone=True) back naive; stored values are UTC
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


# -----------------------------
# ORM model for the document store
# -----------------------------
class Document(Base):
    __tablename__ = "documents"
    # One JSON document inside a named collection (e.g. "brands")
    pk         = Column(Integer, primary_key=True, autoincrement=True)  # insertion order
    id         = Column(String(24), unique=True, nullable=False)  # identity, exposed as "_id"
    collection = Column(String, nullable=False, index=True)
    body       = Column(MutableDict.as_mutable(JSON), nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
    version    = Column(Integer, nullable=False, default=0)    # exposed as "__v"

    __table_args__ = (Index("ix_documents_collection_id", "collection", "id"),)

    def to_dict(self) -> dict:
        """Document as the store hands it out: identity first, metadata last."""
        return {
            "_id": self.id,
            **(self.body or {}),
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
            "__v": self.version,
        }

    def __repr__(self):
        return f"<Document(id={self.id}, collection={self.collection})>"
