"""
db.models - SQLAlchemy ORM declarations for the product catalog.

Tables
------
products               - one row per product family; ``handle`` is the
                         URL-safe slug and must be unique.
product_options        - named option axes (Alloy, Size …) of a product.
product_option_values  - the values enumerated for each option.
product_variants       - one sellable unit per SKU.
variant_option_values  - association: which option value a variant selects
                         on each axis.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Table, Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def new_id(prefix: str) -> str:
    """Platform-style identifier, e.g. ``prod_4f1c…``."""
    return f"{prefix}_{uuid.uuid4().hex}"


def _utcnow():
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


variant_option_values = Table(
    "variant_option_values",
    Base.metadata,
    Column("variant_id", String(40),
           ForeignKey("product_variants.id", ondelete="CASCADE"),
           primary_key=True),
    Column("option_value_id", String(40),
           ForeignKey("product_option_values.id", ondelete="CASCADE"),
           primary_key=True),
)


class Product(Base):
    __tablename__ = "products"

    id          = Column(String(40), primary_key=True, default=lambda: new_id("prod"))
    title       = Column(String(300), nullable=False)
    subtitle    = Column(String(300), default="")
    description = Column(Text, default="")
    handle      = Column(String(300), nullable=False, unique=True, index=True)
    is_giftcard = Column(Boolean, nullable=False, default=False)
    discountable = Column(Boolean, nullable=False, default=True)
    status      = Column(String(20), nullable=False, default="draft")

    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    options = relationship(
        "ProductOption", back_populates="product",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="ProductOption.position",
    )
    variants = relationship(
        "ProductVariant", back_populates="product",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="ProductVariant.position",
    )

    # ── Serialisation ──────────────────────────────────────────────────
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "subtitle": self.subtitle or "",
            "description": self.description or "",
            "handle": self.handle,
            "is_giftcard": bool(self.is_giftcard),
            "discountable": bool(self.discountable),
            "status": self.status,
            "options": [o.to_dict() for o in self.options],
            "variants": [v.id for v in self.variants],
            "created_at": self.created_at.isoformat() if self.created_at else "",
        }


class ProductOption(Base):
    __tablename__ = "product_options"

    id         = Column(String(40), primary_key=True, default=lambda: new_id("opt"))
    product_id = Column(String(40),
                        ForeignKey("products.id", ondelete="CASCADE"),
                        nullable=False, index=True)
    title      = Column(String(200), nullable=False)
    position   = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=_utcnow)

    product = relationship("Product", back_populates="options")
    values = relationship(
        "ProductOptionValue", back_populates="option",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="ProductOptionValue.position",
    )

    __table_args__ = (
        UniqueConstraint("product_id", "title", name="uq_option_title"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "values": [v.value for v in self.values],
        }


class ProductOptionValue(Base):
    __tablename__ = "product_option_values"

    id        = Column(String(40), primary_key=True, default=lambda: new_id("optval"))
    option_id = Column(String(40),
                       ForeignKey("product_options.id", ondelete="CASCADE"),
                       nullable=False, index=True)
    value     = Column(String(200), nullable=False, default="")
    position  = Column(Integer, nullable=False, default=0)

    option = relationship("ProductOption", back_populates="values")

    __table_args__ = (
        UniqueConstraint("option_id", "value", name="uq_option_value"),
    )


class ProductVariant(Base):
    __tablename__ = "product_variants"

    id         = Column(String(40), primary_key=True, default=lambda: new_id("variant"))
    product_id = Column(String(40),
                        ForeignKey("products.id", ondelete="CASCADE"),
                        nullable=False, index=True)
    title      = Column(String(300), nullable=False)
    sku        = Column(String(200), nullable=False, unique=True)
    manage_inventory = Column(Boolean, nullable=False, default=True)
    allow_backorder  = Column(Boolean, nullable=False, default=False)
    weight     = Column(Float, nullable=True)
    position   = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=_utcnow)

    product = relationship("Product", back_populates="variants")
    option_values = relationship(
        "ProductOptionValue", secondary=variant_option_values, lazy="selectin",
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "product_id": self.product_id,
            "title": self.title,
            "sku": self.sku,
            "manage_inventory": bool(self.manage_inventory),
            "allow_backorder": bool(self.allow_backorder),
            "weight": self.weight,
            "options": {ov.option.title: ov.value for ov in self.option_values},
        }
