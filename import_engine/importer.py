"""
import_engine.importer - Top-level orchestrator.

Runs csv_parser → families → writer strictly in sequence: the file is
fully read before aggregation, and aggregation finishes before the
first catalog call.  Errors from any stage propagate unchanged.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy.orm import Session

from db.engine import get_session
from import_engine.csv_parser import read_csv_file, resolve_csv_path
from import_engine.families import FamilyAggregator
from import_engine.report import ImportResult
from import_engine.writer import CatalogWriter

logger = logging.getLogger(__name__)


def run_import(
    csv_path: str | Path | None = None,
    *,
    session: Session | None = None,
    atomic: bool = False,
    dry_run: bool = False,
) -> ImportResult:
    """
    Import a CSV file into the catalog.

    Parameters
    ----------
    csv_path : file name or path; relative names resolve against
               config.DATA_DIR, None selects config.DEFAULT_CSV_NAME
    session  : catalog session; a new one is opened (and closed) if omitted
    atomic   : commit once per family instead of once per create call
    dry_run  : stop after aggregation, touch nothing in the catalog

    Returns
    -------
    ImportResult on success.  Raises IngestError, TransformError or
    PersistError otherwise; products created before a PersistError
    remain in the catalog.
    """
    path = resolve_csv_path(csv_path)
    logger.info("Reading %s", path)
    rows = read_csv_file(path)
    return import_rows(rows, session=session, atomic=atomic, dry_run=dry_run)


def import_rows(
    rows: list[dict],
    *,
    session: Session | None = None,
    atomic: bool = False,
    dry_run: bool = False,
) -> ImportResult:
    """Aggregate already-parsed rows and write them to the catalog."""
    agg = FamilyAggregator()
    for row in rows:
        agg.add(row)
    families = agg.families()
    logger.info("Grouped %d rows into %d product families", agg.rows_seen, len(families))

    if dry_run:
        logger.info("Dry run - no catalog writes")
        return ImportResult(success=True, total_rows=agg.rows_seen,
                            families=families, dry_run=True)

    own_session = session is None
    if own_session:
        session = get_session()

    try:
        logger.info("Creating %d products in catalog...", len(families))
        created = CatalogWriter(session, atomic=atomic).write(families)
    finally:
        if own_session:
            session.close()

    return ImportResult(success=True, total_rows=agg.rows_seen, created_products=created)
