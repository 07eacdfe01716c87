"""
import_engine.families - Group CSV rows into product families.

Rows sharing a parent SKU (or, without one, their own SKU) become one
family.  The first row seen for a key fixes the family's name and
description; every row contributes one VariantRecord.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Iterable

from import_engine.errors import TransformError
from import_engine.field_map import (
    COL_ALLOY, COL_DESCRIPTION, COL_IN_STOCK, COL_NAME, COL_PARENT_SKU,
    COL_PRICE, COL_SHORT_DESCRIPTION, COL_SIZE, COL_SKU, COL_STOCK,
    COL_WEIGHT, DEFAULT_ALLOY, DEFAULT_SIZE, IN_STOCK_SENTINEL,
)

# Leading numeric prefix: "12.5kg" → 12.5, " -3" → -3, "abc" → no match
_FLOAT_RE = re.compile(r"\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_INT_RE = re.compile(r"\s*[-+]?\d+")


@dataclass
class VariantRecord:
    sku: str
    name: str
    price: float = 0.0
    weight: float = 0.0
    stock: int = 0
    alloy: str = DEFAULT_ALLOY
    size: str = DEFAULT_SIZE
    in_stock: bool = False


@dataclass
class ProductFamily:
    parent_sku: str
    name: str
    description: str = ""
    variants: list[VariantRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "parent_sku": self.parent_sku,
            "name": self.name,
            "description": self.description,
            "variants": [asdict(v) for v in self.variants],
        }


def parse_float(raw: str | None) -> float:
    """Parse the leading number of *raw*; 0.0 when there is none."""
    if not raw:
        return 0.0
    m = _FLOAT_RE.match(raw)
    return float(m.group()) if m else 0.0


def parse_int(raw: str | None) -> int:
    """Parse the leading integer of *raw*; 0 when there is none."""
    if not raw:
        return 0
    m = _INT_RE.match(raw)
    return int(m.group()) if m else 0


def family_key(row: dict) -> str:
    """parent_sku when present and non-empty, else the row's own sku."""
    key = row.get(COL_PARENT_SKU) or row.get(COL_SKU)
    if not key:
        raise TransformError("Row has neither parent_sku nor sku")
    return key


def build_variant(row: dict) -> VariantRecord:
    name = row.get(COL_NAME)
    if name is None:
        raise TransformError(f"Row {row.get(COL_SKU)!r} has no name")

    return VariantRecord(
        sku=row.get(COL_SKU) or "",
        name=name,
        price=parse_float(row.get(COL_PRICE)),
        weight=parse_float(row.get(COL_WEIGHT)),
        stock=parse_int(row.get(COL_STOCK)),
        alloy=row.get(COL_ALLOY) or DEFAULT_ALLOY,
        size=row.get(COL_SIZE) or DEFAULT_SIZE,
        in_stock=row.get(COL_IN_STOCK) == IN_STOCK_SENTINEL,
    )


class FamilyAggregator:
    """
    Ordered accumulation of families: an explicit key list records
    first-seen order, the dict gives lookup by key.
    """

    def __init__(self):
        self._order: list[str] = []
        self._families: dict[str, ProductFamily] = {}
        self.rows_seen = 0

    def add(self, row: dict) -> ProductFamily:
        """Fold one row in and return the family it landed in."""
        key = family_key(row)
        variant = build_variant(row)

        family = self._families.get(key)
        if family is None:
            family = ProductFamily(
                parent_sku=key,
                name=variant.name.split(",")[0].strip(),
                description=(row.get(COL_DESCRIPTION)
                             or row.get(COL_SHORT_DESCRIPTION) or ""),
            )
            self._families[key] = family
            self._order.append(key)

        family.variants.append(variant)
        self.rows_seen += 1
        return family

    def families(self) -> list[ProductFamily]:
        return [self._families[k] for k in self._order]


def aggregate_families(rows: Iterable[dict]) -> list[ProductFamily]:
    agg = FamilyAggregator()
    for row in rows:
        agg.add(row)
    return agg.families()
