"""
db.engine - Engine bootstrap and session factory for the catalog.

The connection string comes from config.DB_URL or the --db option.  An
in-memory SQLite URL ("sqlite://", ":memory:") is pinned to a single
shared connection so every session, from any thread, sees the same
catalog; file and server URLs get the default pool.
"""

from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from db.models import Base

_engine: Engine | None = None
_SessionLocal: sessionmaker | None = None


def _is_memory_sqlite(db_url: str) -> bool:
    return db_url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in db_url


def init_db(db_url: str) -> Engine:
    """
    (Re)bind the catalog to *db_url* and create missing tables.
    A previously bound engine is disposed first.
    """
    global _engine, _SessionLocal

    if _engine is not None:
        _engine.dispose()

    kwargs = {}
    if _is_memory_sqlite(db_url):
        kwargs = {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    _engine = create_engine(db_url, echo=False, **kwargs)

    if db_url.startswith("sqlite"):
        # ON DELETE CASCADE on options/variants needs enforced FKs
        @event.listens_for(_engine, "connect")
        def _enable_foreign_keys(dbapi_conn, _rec):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON")
            cur.close()

    Base.metadata.create_all(_engine)
    _SessionLocal = sessionmaker(bind=_engine, expire_on_commit=False)
    return _engine


def get_session() -> Session:
    """Return a new catalog session.  Caller is responsible for .close()."""
    if _SessionLocal is None:
        raise RuntimeError("Catalog database not initialised - call init_db() first")
    return _SessionLocal()
