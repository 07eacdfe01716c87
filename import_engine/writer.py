"""
import_engine.writer - Persist product families through the catalog service.

For each family: create the product, derive and create its Alloy and
Size options, then create one variant per record.  Any rejected create
call aborts the whole run with PersistError.

Transaction boundary
--------------------
By default every create call is committed on its own, so whatever was
created before a failure stays in the catalog.  With ``atomic=True``
each family is committed once, after its last variant; a failing
family leaves no partial product behind, earlier families stay.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import config
from db.models import Product, ProductOption
from import_engine.errors import PersistError
from import_engine.families import ProductFamily, VariantRecord
from services.catalog_service import (
    CatalogError, CatalogService, OptionSpec, ProductSpec, VariantSpec,
)

logger = logging.getLogger(__name__)

_HANDLE_UNSAFE = re.compile(r"[^a-z0-9]")


@dataclass(frozen=True)
class OptionSelection:
    option_name: str
    value: str


def make_handle(parent_sku: str) -> str:
    """Lower-case, then every character outside [a-z0-9] becomes '-'."""
    return _HANDLE_UNSAFE.sub("-", parent_sku.lower())


def default_description(title: str) -> str:
    return f"High-quality {title.lower()} for industrial applications"


def distinct(values: Iterable[str]) -> list[str]:
    """Unique values in order of first appearance."""
    return list(dict.fromkeys(values))


def product_spec_for(family: ProductFamily) -> ProductSpec:
    return ProductSpec(
        title=family.name,
        subtitle=f"{family.parent_sku} - {config.SUBTITLE_SUFFIX}",
        description=family.description or default_description(family.name),
        handle=make_handle(family.parent_sku),
        is_giftcard=False,
        discountable=True,
        status=config.PRODUCT_STATUS,
    )


def option_selections(variant: VariantRecord) -> list[OptionSelection]:
    return [
        OptionSelection(config.ALLOY_OPTION, variant.alloy),
        OptionSelection(config.SIZE_OPTION, variant.size),
    ]


def resolve_selections(
    options: dict[str, ProductOption],
    selections: list[OptionSelection],
) -> dict[str, str]:
    """Map each selection to {option id: value} via the option title."""
    resolved: dict[str, str] = {}
    for sel in selections:
        option = options.get(sel.option_name)
        if option is None:
            raise PersistError(f"No option named {sel.option_name!r} on product")
        resolved[option.id] = sel.value
    return resolved


class CatalogWriter:

    def __init__(self, session: Session, *, atomic: bool = False,
                 service: type[CatalogService] | CatalogService = CatalogService):
        self.session = session
        self.atomic = atomic
        self.service = service

    def write(self, families: Iterable[ProductFamily]) -> list[Product]:
        """Create every family in order and return the created products."""
        created: list[Product] = []
        for family in families:
            created.append(self.write_family(family))
        logger.info("Successfully created %d products", len(created))
        return created

    def write_family(self, family: ProductFamily) -> Product:
        try:
            product = self._call(self.service.create_product, product_spec_for(family))
            logger.info("Created product: %s (ID: %s)", product.title, product.id)

            options = {}
            for title, attr in ((config.ALLOY_OPTION, "alloy"),
                                (config.SIZE_OPTION, "size")):
                values = distinct(getattr(v, attr) for v in family.variants)
                options[title] = self._call(
                    self.service.create_product_option,
                    OptionSpec(title=title, product_id=product.id, values=values),
                )
            logger.info("Created options for product %s", product.id)

            for record in family.variants:
                variant = self._call(
                    self.service.create_product_variant,
                    VariantSpec(
                        title=record.name,
                        sku=record.sku,
                        product_id=product.id,
                        manage_inventory=True,
                        allow_backorder=False,
                        weight=record.weight,
                        options=resolve_selections(options, option_selections(record)),
                    ),
                )
                logger.info("Created variant: %s", variant.sku)

            if self.atomic:
                try:
                    self.session.commit()
                except SQLAlchemyError as exc:
                    raise PersistError(f"Commit failed for {family.parent_sku}: {exc}") from exc
        except Exception:
            self.session.rollback()
            raise
        return product

    # ── Private helpers ────────────────────────────────────────────────

    def _call(self, create, spec):
        """Issue one create call, committing it unless running atomically."""
        try:
            obj = create(self.session, spec)
            if not self.atomic:
                self.session.commit()
        except CatalogError as exc:
            raise PersistError(str(exc)) from exc
        except SQLAlchemyError as exc:
            raise PersistError(f"Catalog call failed: {exc}") from exc
        return obj
