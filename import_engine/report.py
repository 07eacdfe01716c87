"""
import_engine.report - Structured result of a catalog import run.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from db.models import Product
from import_engine.families import ProductFamily


@dataclass
class ImportResult:
    success: bool = False
    total_rows: int = 0
    created_products: list[Product] = field(default_factory=list)
    families: list[ProductFamily] = field(default_factory=list)   # dry-run preview
    dry_run: bool = False

    @property
    def total_products_created(self) -> int:
        return len(self.created_products)

    def to_dict(self) -> dict:
        d = {
            "success": self.success,
            "totalProductsCreated": self.total_products_created,
            "createdProducts": [p.to_dict() for p in self.created_products],
        }
        if self.dry_run:
            d["dryRun"] = True
            d["totalRows"] = self.total_rows
            d["productFamilies"] = [f.to_dict() for f in self.families]
        return d
