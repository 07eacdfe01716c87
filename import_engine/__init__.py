"""
import_engine - CSV → product catalog import pipeline.

Public API:
    run_import(csv_path, atomic=False, dry_run=False) → ImportResult
    import_rows(rows, ...)                             → ImportResult
"""

from import_engine.importer import run_import, import_rows       # noqa: F401
from import_engine.report import ImportResult                    # noqa: F401
from import_engine.errors import (                               # noqa: F401
    PipelineError, IngestError, TransformError, PersistError,
)
