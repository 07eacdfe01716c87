"""
api.errors - JSON error handlers for the API blueprint.
"""

import logging

from flask import jsonify

from api import api_bp
from import_engine.errors import IngestError, TransformError, PersistError

logger = logging.getLogger(__name__)


@api_bp.errorhandler(IngestError)
@api_bp.errorhandler(TransformError)
def api_bad_csv(e):
    logger.warning("Rejected CSV: %s", e)
    return jsonify({"success": False, "error": str(e)}), 400


@api_bp.errorhandler(PersistError)
def api_persist_failed(e):
    logger.error("Catalog import aborted: %s", e)
    return jsonify({"success": False, "error": str(e)}), 409


@api_bp.errorhandler(404)
def api_not_found(_e):
    return jsonify({"error": "not found"}), 404


@api_bp.errorhandler(400)
def api_bad_request(_e):
    return jsonify({"error": "bad request"}), 400


@api_bp.errorhandler(500)
def api_server_error(_e):
    return jsonify({"error": "internal server error"}), 500
