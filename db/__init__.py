"""
db - Catalog database layer.

Public API:
    init_db()       → create engine + tables
    get_session()   → new Session
    Product, ProductOption, ProductOptionValue, ProductVariant → ORM models
"""

from db.engine import init_db, get_session          # noqa: F401
from db.models import (                             # noqa: F401
    Base, Product, ProductOption, ProductOptionValue, ProductVariant,
)
