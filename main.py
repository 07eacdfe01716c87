#!/usr/bin/env python3
"""
HWCAT - Hardware catalog importer
=================================

    python main.py import [CSV] [--atomic] [--dry-run] [--db URL]
    python main.py serve [--db URL]

See config.py for all environment-variable tunables.
"""

import argparse
import json
import logging
import sys

from flask import Flask

import config
from db import init_db
from api import api_bp
from import_engine import run_import, PipelineError

logger = logging.getLogger("hwcat")


def create_app(db_url: str | None = None) -> Flask:
    """Flask application factory."""

    app = Flask(__name__)
    app.secret_key = config.SECRET

    # ── Initialise database ─────────────────────────────────────────
    init_db(db_url or config.DB_URL)
    logger.info("Database: %s", db_url or config.DB_URL)

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)

    return app


def _cmd_import(args) -> int:
    init_db(args.db)
    logger.info("Starting product import...")
    try:
        result = run_import(args.csv, atomic=args.atomic, dry_run=args.dry_run)
    except PipelineError as exc:
        logger.error("Import failed: %s", exc)
        return 1
    except Exception:
        logger.exception("Import failed with an unexpected error")
        return 1

    logger.info("Import completed successfully!")
    print(json.dumps(result.to_dict(), indent=2))
    return 0


def _cmd_serve(args) -> int:
    app = create_app(args.db)
    logger.info("http://%s:%s", config.HOST, config.PORT)
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import hardware products from CSV into the catalog")
    parser.add_argument("--db", default=config.DB_URL,
                        help="Catalog database URL (default: config.DB_URL)")

    # --db is accepted after the sub-command too; SUPPRESS keeps a
    # sub-command without it from overwriting the top-level value.
    db_opt = argparse.ArgumentParser(add_help=False)
    db_opt.add_argument("--db", default=argparse.SUPPRESS,
                        help="Catalog database URL (default: config.DB_URL)")

    sub = parser.add_subparsers(dest="command", required=True)

    imp = sub.add_parser("import", parents=[db_opt], help="Import a CSV file")
    imp.add_argument("csv", nargs="?", default=config.DEFAULT_CSV_NAME,
                     help=f"CSV path or name under the data dir (default: {config.DEFAULT_CSV_NAME})")
    imp.add_argument("--atomic", action="store_true", default=config.ATOMIC_FAMILIES,
                     help="Commit once per family; roll back a failing family")
    imp.add_argument("--dry-run", action="store_true",
                     help="Parse and group rows without writing to the catalog")
    imp.set_defaults(func=_cmd_import)

    srv = sub.add_parser("serve", parents=[db_opt], help="Run the REST API")
    srv.set_defaults(func=_cmd_serve)
    return parser


def main(argv=None) -> int:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
