"""
api.routes_import - /api/v1/import endpoint.

Accepts CSV via multipart file upload or raw request body.
"""

from flask import request, jsonify

import config
from api import api_bp
from db import get_session
from import_engine import import_rows
from import_engine.csv_parser import parse_csv


@api_bp.route("/import", methods=["POST"])
def api_import_csv():
    """
    POST /api/v1/import?atomic=0|1&dry_run=0|1

    Multipart: field name 'csv_file'
    Or: raw CSV as request body (Content-Type: text/csv).
    """
    atomic = request.args.get("atomic", "1" if config.ATOMIC_FAMILIES else "0") == "1"
    dry_run = request.args.get("dry_run", "0") == "1"

    if request.content_type and "multipart" in request.content_type:
        f = request.files.get("csv_file")
        if not f:
            return jsonify({"error": "no csv_file in upload"}), 400
        content = f.read()
    else:
        content = request.get_data()

    if not content:
        return jsonify({"error": "empty body"}), 400

    rows = parse_csv(content)
    session = get_session()
    try:
        result = import_rows(rows, session=session, atomic=atomic, dry_run=dry_run)
        return jsonify(result.to_dict())
    finally:
        session.close()
