#!/usr/bin/env python3
"""
Command-line entry point for the brand pipeline.

Sub-commands:
    transform  normalize the stored collection (optionally loading raw records first)
    seed       insert the ten boundary seed cases and document them in a workbook
    export     print collection statistics and export the collection to JSON
    run        transform, seed and export, in that order

Usage:
    brandpipe run --input data/brands.json
    brandpipe export --output data/brands-transformed.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from sqlalchemy.orm import Session, sessionmaker

from brandpipe import settings
from brandpipe.db import DatabaseConnectionError, close_database, connect_database
from brandpipe.export import collection_statistics, export_to_json, load_raw_records
from brandpipe.repositories import seed_brands, transform_brands, verify_brands
from brandpipe.seeder import generate_seed_cases, write_seed_cases_xlsx
from brandpipe.setup_logging import setup_logging

log = logging.getLogger(__name__)


def run_transform(db: Session, collection: str, input_path: Optional[Path]) -> bool:
    raw_docs = load_raw_records(input_path) if input_path else None
    summary = transform_brands(db, collection, raw_docs=raw_docs)
    db.commit()
    verified = verify_brands(db, collection)
    return summary.failed == 0 and verified.invalid == 0


def run_seed(db: Session, collection: str, xlsx_path: Path) -> bool:
    cases = generate_seed_cases()
    ok, errors = seed_brands(db, cases, collection)
    db.commit()
    write_seed_cases_xlsx(cases, xlsx_path)
    return not errors


def run_export(db: Session, collection: str, output_path: Path) -> bool:
    collection_statistics(db, collection)
    export_to_json(db, output_path, collection)
    return True


def main(argv: Optional[list] = None) -> int:
    """CLI entrypoint. Returns the process exit status."""
    parser = argparse.ArgumentParser(
        description="Normalize, seed and export brand documents"
    )
    parser.add_argument(
        "command",
        choices=["transform", "seed", "export", "run"],
        help="Pipeline step to run",
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="JSON array of raw records to load before transforming (run: defaults to BRANDS_INPUT_PATH if it exists)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=settings.BRANDS_EXPORT_PATH,
        help="JSON export destination",
    )
    parser.add_argument(
        "--xlsx",
        type=Path,
        default=settings.SEED_XLSX_PATH,
        help="Seed case workbook destination",
    )
    parser.add_argument(
        "--collection",
        default=settings.BRANDS_COLLECTION,
        help="Collection name (default: %(default)s)",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy URL (default: DATABASE_URL)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Log level (default: LOG_LEVEL)",
    )

    args = parser.parse_args(argv)

    # Setup logging
    setup_logging(level=args.log_level)

    input_path = args.input
    if args.command == "run" and input_path is None and settings.BRANDS_INPUT_PATH.exists():
        input_path = settings.BRANDS_INPUT_PATH

    try:
        eng = connect_database(args.database_url or settings.DATABASE_URL)
    except DatabaseConnectionError:
        log.exception("fatal: document store unavailable")
        return 1

    db = sessionmaker(bind=eng, autoflush=False, autocommit=False, future=True)()
    try:
        ok = True
        if args.command in ("transform", "run"):
            ok = run_transform(db, args.collection, input_path) and ok
        if args.command in ("seed", "run"):
            ok = run_seed(db, args.collection, args.xlsx) and ok
        if args.command in ("export", "run"):
            ok = run_export(db, args.collection, args.output) and ok
    except Exception:
        db.rollback()
        log.exception("pipeline failed")
        return 1
    finally:
        db.close()
        close_database(eng)

    # per-record failures are reported, not fatal
    log.info("%s completed%s", args.command, "" if ok else " with errors")
    return 0


if __name__ == "__main__":
    sys.exit(main())
