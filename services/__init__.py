"""
services - Business-logic layer sitting between API/import engine and DB.
"""

from services.catalog_service import (                    # noqa: F401
    CatalogService, CatalogError, ProductSpec, OptionSpec, VariantSpec,
)
