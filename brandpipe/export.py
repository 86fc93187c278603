# brandpipe/export.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from brandpipe import store
from brandpipe.settings import BRANDS_COLLECTION

log = logging.getLogger(__name__)


def load_raw_records(path: Path) -> List[Dict[str, Any]]:
    """Read a JSON array of raw brand records."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of records")
    return data


def export_to_json(db: Session, path: Path, collection: str = BRANDS_COLLECTION) -> int:
    docs = store.find_all(db, collection)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(docs, f, indent=2, ensure_ascii=False)
    log.info("exported %s documents from %s to %s", len(docs), collection, path)
    return len(docs)


def _pick(docs: List[Dict[str, Any]], key: str, largest: bool) -> Optional[Dict[str, Any]]:
    candidates = [d for d in docs if isinstance(d.get(key), (int, float)) and not isinstance(d.get(key), bool)]
    if not candidates:
        return None
    d = (max if largest else min)(candidates, key=lambda x: x[key])
    return {"brandName": d.get("brandName"), "value": d[key]}


def collection_statistics(db: Session, collection: str = BRANDS_COLLECTION) -> Dict[str, Any]:
    """
    Summary of the stored brands:
      - total document count
      - oldest/newest by yearFounded
      - smallest/largest by numberOfLocations
    Each extreme is {"brandName", "value"}, or None for an empty collection.
    """
    docs = store.find_all(db, collection)
    stats = {
        "total": len(docs),
        "oldest": _pick(docs, "yearFounded", largest=False),
        "newest": _pick(docs, "yearFounded", largest=True),
        "smallest": _pick(docs, "numberOfLocations", largest=False),
        "largest": _pick(docs, "numberOfLocations", largest=True),
    }
    log.info("collection statistics for %s: %s", collection, stats)
    return stats
