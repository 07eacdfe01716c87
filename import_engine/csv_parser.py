"""
import_engine.csv_parser - Low-level CSV reading and cleaning.

Responsibilities:
  • Path resolution against the configured data directory
  • BOM removal (UTF-8 / UTF-8-SIG)
  • Header whitespace stripping
  • Returns the full list of rows, or raises IngestError
"""

from __future__ import annotations

import csv
import io
import logging
import sys
from pathlib import Path

import config
from import_engine.errors import IngestError

logger = logging.getLogger(__name__)

# No per-cell size cap (stdlib default is 128 KiB)
try:
    csv.field_size_limit(sys.maxsize)
except OverflowError:
    csv.field_size_limit(2**31 - 1)


def resolve_csv_path(name: str | Path | None = None) -> Path:
    """
    Absolute paths and paths that exist relative to the working
    directory are used as given; anything else is looked up in
    config.DATA_DIR.
    """
    path = Path(name or config.DEFAULT_CSV_NAME)
    if path.is_absolute() or path.exists():
        return path
    return Path(config.DATA_DIR) / path


def read_csv_file(path: str | Path) -> list[dict[str, str]]:
    """Read and parse a CSV file.  Raises IngestError on any failure."""
    path = Path(path)
    if not path.exists():
        raise IngestError(f"CSV file not found: {path}")
    if not path.is_file():
        raise IngestError(f"Not a regular file: {path}")

    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise IngestError(f"Cannot read {path}: {exc}") from exc

    rows = parse_csv(raw)
    logger.info("Parsed %d rows from %s", len(rows), path.name)
    return rows


def parse_csv(raw: str | bytes) -> list[dict[str, str]]:
    """
    Accept raw file content (bytes or str) and return one dict per data
    row, keyed by the header.  The whole content is decoded before any
    row is returned, so a malformed row never yields a partial list.
    """
    text = _decode(raw)
    if not text or not text.strip():
        raise IngestError("CSV has no header row or is empty")
    if "\x00" in text:
        line = text.count("\n", 0, text.index("\x00")) + 1
        raise IngestError(f"Malformed CSV at line {line}: NUL byte in data")

    reader = csv.DictReader(io.StringIO(text, newline=""), strict=True)
    try:
        if reader.fieldnames is None:
            raise IngestError("CSV has no header row or is empty")

        # Strip whitespace from every header
        reader.fieldnames = [h.strip() for h in reader.fieldnames]

        rows = []
        for row in reader:
            # Cells past the header land under the None key; short rows
            # fill with None.  Neither is part of the row mapping.
            rows.append({k: v for k, v in row.items()
                         if k is not None and v is not None})
    except csv.Error as exc:
        raise IngestError(f"Malformed CSV at line {reader.line_num}: {exc}") from exc

    return rows


def _decode(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        # Strip UTF-8 BOM
        if raw.startswith(b"\xef\xbb\xbf"):
            raw = raw[3:]
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise IngestError(f"CSV is not valid UTF-8: {exc}") from exc
    if raw.startswith("\ufeff"):
        return raw[1:]
    return raw
