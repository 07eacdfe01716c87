"""
services.catalog_service - Create and read catalog products, options and variants.

All session management is the caller's responsibility (open before,
close/commit after).  Every create call flushes so the returned object
carries its assigned id, but nothing is committed here; the caller
decides the transaction boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models import Product, ProductOption, ProductOptionValue, ProductVariant

PRODUCT_STATUSES = frozenset({"draft", "proposed", "published", "rejected"})


class CatalogError(Exception):
    """Raised when the catalog rejects a create call."""
    pass


# ── Create payloads ────────────────────────────────────────────────────

@dataclass
class ProductSpec:
    title: str
    handle: str
    subtitle: str = ""
    description: str = ""
    is_giftcard: bool = False
    discountable: bool = True
    status: str = "draft"


@dataclass
class OptionSpec:
    title: str
    product_id: str
    values: list[str] = field(default_factory=list)


@dataclass
class VariantSpec:
    title: str
    sku: str
    product_id: str
    manage_inventory: bool = True
    allow_backorder: bool = False
    weight: float | None = None
    options: dict[str, str] = field(default_factory=dict)   # option id → value


class CatalogService:

    # ── Create ─────────────────────────────────────────────────────────

    @staticmethod
    def create_product(session: Session, spec: ProductSpec) -> Product:
        """Create a product.  Handles are unique across the catalog."""
        if not spec.title.strip():
            raise CatalogError("Product title is required")
        if not spec.handle:
            raise CatalogError("Product handle is required")
        if spec.status not in PRODUCT_STATUSES:
            raise CatalogError(f"Unknown product status {spec.status!r}")

        existing = CatalogService.get_product_by_handle(session, spec.handle)
        if existing is not None:
            raise CatalogError(f"Product with handle {spec.handle!r} already exists")

        product = Product(
            title=spec.title,
            subtitle=spec.subtitle,
            description=spec.description,
            handle=spec.handle,
            is_giftcard=spec.is_giftcard,
            discountable=spec.discountable,
            status=spec.status,
        )
        session.add(product)
        session.flush()
        return product

    @staticmethod
    def create_product_option(session: Session, spec: OptionSpec) -> ProductOption:
        """Create one option axis with its enumerated values."""
        product = CatalogService.get_product(session, spec.product_id)
        if product is None:
            raise CatalogError(f"Unknown product {spec.product_id!r}")
        if any(o.title == spec.title for o in product.options):
            raise CatalogError(
                f"Option {spec.title!r} already exists on product {product.id}")
        if len(set(spec.values)) != len(spec.values):
            raise CatalogError(f"Duplicate values for option {spec.title!r}")

        option = ProductOption(title=spec.title, position=len(product.options))
        for pos, value in enumerate(spec.values):
            option.values.append(ProductOptionValue(value=value, position=pos))
        product.options.append(option)
        session.flush()
        return option

    @staticmethod
    def create_product_variant(session: Session, spec: VariantSpec) -> ProductVariant:
        """
        Create a variant selecting exactly one value on every option axis
        of its product.
        """
        product = CatalogService.get_product(session, spec.product_id)
        if product is None:
            raise CatalogError(f"Unknown product {spec.product_id!r}")

        dup = session.execute(
            select(ProductVariant.id).where(ProductVariant.sku == spec.sku)
        ).first()
        if dup is not None:
            raise CatalogError(f"Variant with SKU {spec.sku!r} already exists")

        options = {o.id: o for o in product.options}
        unknown = set(spec.options) - set(options)
        if unknown:
            raise CatalogError(
                f"Options {sorted(unknown)} do not belong to product {product.id}")
        missing = [o.title for oid, o in options.items() if oid not in spec.options]
        if missing:
            raise CatalogError(f"Variant {spec.sku!r} has no value for {missing}")

        selected: list[ProductOptionValue] = []
        for option_id, value in spec.options.items():
            option = options[option_id]
            match = next((v for v in option.values if v.value == value), None)
            if match is None:
                raise CatalogError(
                    f"Value {value!r} is not defined for option {option.title!r}")
            selected.append(match)

        variant = ProductVariant(
            title=spec.title,
            sku=spec.sku,
            manage_inventory=spec.manage_inventory,
            allow_backorder=spec.allow_backorder,
            weight=spec.weight,
            position=len(product.variants),
        )
        variant.option_values.extend(selected)
        product.variants.append(variant)
        session.flush()
        return variant

    # ── Read ───────────────────────────────────────────────────────────

    @staticmethod
    def get_product(session: Session, product_id: str) -> Product | None:
        return session.get(Product, product_id)

    @staticmethod
    def get_product_by_handle(session: Session, handle: str) -> Product | None:
        return session.execute(
            select(Product).where(Product.handle == handle)
        ).scalar_one_or_none()

    @staticmethod
    def list_products(session: Session, limit: int = 100, offset: int = 0) -> tuple[list[Product], int]:
        """Return (page, total) ordered by creation time."""
        total = session.query(Product).count()
        rows = (
            session.query(Product)
            .order_by(Product.created_at, Product.handle)
            .offset(offset).limit(limit)
            .all()
        )
        return rows, total
