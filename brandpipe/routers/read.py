from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from brandpipe import store
from brandpipe.db import get_db
from brandpipe.export import collection_statistics
from brandpipe.settings import BRANDS_COLLECTION

router = APIRouter(prefix="", tags=["read"])


def _in_year_range(doc: Dict[str, Any], min_year: Optional[int], max_year: Optional[int]) -> bool:
    y = doc.get("yearFounded")
    if not isinstance(y, int):
        return min_year is None and max_year is None
    if min_year is not None and y < min_year:
        return False
    if max_year is not None and y > max_year:
        return False
    return True


# -------------------------------------------------------------------
# List / lookup endpoints
# -------------------------------------------------------------------
@router.get("/brands")
def list_brands(
    min_year: Optional[int] = Query(None, description="yearFounded lower bound (inclusive)"),
    max_year: Optional[int] = Query(None, description="yearFounded upper bound (inclusive)"),
    limit: int = Query(100, ge=1, le=2000),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> List[Dict[str, Any]]:
    """List stored brands in insertion order, optionally filtered by founding year."""
    docs = [d for d in store.find_all(db, BRANDS_COLLECTION) if _in_year_range(d, min_year, max_year)]
    return docs[offset:offset + limit]


@router.get("/brands/{brand_id}")
def get_brand(brand_id: str, db: Session = Depends(get_db)) -> Dict[str, Any]:
    doc = store.get_document(db, BRANDS_COLLECTION, brand_id)
    if doc is None:
        raise HTTPException(404, "Brand not found")
    return doc


@router.get("/stats")
def stats(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Total count plus oldest/newest and smallest/largest brands."""
    return collection_statistics(db, BRANDS_COLLECTION)
