from typing import Any, Dict, List
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from brandpipe.db import get_db
from brandpipe.normalizers import get_default_normalizer
from brandpipe.repositories import transform_brands, verify_brands
from brandpipe.settings import BRANDS_COLLECTION

# --------------------------------------------------------------------
# Router setup
# --------------------------------------------------------------------
router = APIRouter(prefix="", tags=["ingest"])


class TransformResponse(BaseModel):
    ok: bool = True
    collection: str
    total: int
    succeeded: int
    failed: int
    fallbacks: int
    errors: List[Dict[str, Any]] = []


class VerifyResponse(BaseModel):
    ok: bool = True
    collection: str
    total: int
    valid: int
    invalid: int
    errors: List[Dict[str, Any]] = []


def _run_transform(db: Session, payload: List[Dict] | None) -> TransformResponse:
    try:
        summary = transform_brands(
            db, BRANDS_COLLECTION, raw_docs=payload, normalizer=get_default_normalizer()
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise HTTPException(500, f"Transform failed: {e}")
    return TransformResponse(collection=BRANDS_COLLECTION, **summary.as_dict(max_errors=10))


@router.post("/ingest", response_model=TransformResponse)
def ingest(payload: List[Dict], db: Session = Depends(get_db)):
    """
    Store a batch of raw brand records, then normalize the whole collection.

    Accepts:
        A non-empty JSON array of objects in any of the legacy shapes
        (brandName / brand.name, yearFounded / yearCreated / yearsFounded,
        headquarters / hqAddress, numberOfLocations).

    Returns the transform summary; `errors` holds at most 10 samples.
    """
    # Validate top-level structure
    if not isinstance(payload, list) or not payload:
        raise HTTPException(400, "Payload must be a non-empty JSON array")
    return _run_transform(db, payload)


@router.post("/transform", response_model=TransformResponse)
def transform(db: Session = Depends(get_db)):
    """Normalize the documents already stored in the collection."""
    return _run_transform(db, None)


@router.get("/verify", response_model=VerifyResponse)
def verify(db: Session = Depends(get_db)):
    """Re-validate every stored brand against the canonical constraints."""
    summary = verify_brands(db, BRANDS_COLLECTION)
    return VerifyResponse(collection=BRANDS_COLLECTION, **summary.as_dict())
