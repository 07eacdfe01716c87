"""
api.routes_products - read-only /api/v1/products endpoints.
"""

from flask import request, jsonify

from api import api_bp
from db import get_session
from services.catalog_service import CatalogService
import config


@api_bp.route("/products")
def list_products():
    """GET /api/v1/products?limit=100&offset=0"""
    limit  = min(int(request.args.get("limit", config.API_DEFAULT_LIMIT)),
                 config.API_MAX_LIMIT)
    offset = int(request.args.get("offset", 0))

    session = get_session()
    try:
        products, total = CatalogService.list_products(
            session, limit=limit, offset=offset)
        return jsonify({
            "total": total,
            "offset": offset,
            "limit": limit,
            "products": [p.to_dict() for p in products],
        })
    finally:
        session.close()


@api_bp.route("/products/<handle>")
def get_product(handle: str):
    """GET /api/v1/products/{handle} - product with its variants expanded."""
    session = get_session()
    try:
        product = CatalogService.get_product_by_handle(session, handle)
        if not product:
            return jsonify({"error": "not found"}), 404
        d = product.to_dict()
        d["variants"] = [v.to_dict() for v in product.variants]
        return jsonify(d)
    finally:
        session.close()
