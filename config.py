"""
HWCAT - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR         = Path(__file__).resolve().parent
DATA_DIR         = Path(os.environ.get("HWCAT_DATA_DIR", BASE_DIR / "data"))
DEFAULT_CSV_NAME = os.environ.get("HWCAT_CSV", "products_13h_to_import.csv")

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("HWCAT_DB", f"sqlite:///{BASE_DIR / 'hwcatalog.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("HWCAT_HOST", "0.0.0.0")
PORT   = int(os.environ.get("HWCAT_PORT", "5000"))
DEBUG  = os.environ.get("HWCAT_DEBUG", "0") == "1"
SECRET = os.environ.get("HWCAT_SECRET", "hwcat-dev-key-change-in-prod")

# ── Logging ────────────────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("HWCAT_LOG_LEVEL", "INFO").upper()

# ── Import behaviour ───────────────────────────────────────────────────
# 1 → commit once per family and roll back a failing family's partial rows
ATOMIC_FAMILIES = os.environ.get("HWCAT_ATOMIC_FAMILIES", "0") == "1"

# ── Catalog defaults ───────────────────────────────────────────────────
SUBTITLE_SUFFIX   = "Industrial Hardware"
PRODUCT_STATUS    = "published"
ALLOY_OPTION      = "Alloy"
SIZE_OPTION       = "Size"

# ── Pagination ─────────────────────────────────────────────────────────
API_MAX_LIMIT     = 1000
API_DEFAULT_LIMIT = 100
