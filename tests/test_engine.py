import threading

from sqlalchemy.pool import StaticPool

from db import init_db, get_session, Product
from db.engine import _is_memory_sqlite


def test_memory_url_detection():
    assert _is_memory_sqlite("sqlite://")
    assert _is_memory_sqlite("sqlite:///:memory:")
    assert not _is_memory_sqlite("sqlite:///catalog.sqlite")
    assert not _is_memory_sqlite("postgresql://localhost/catalog")


def test_file_database_uses_default_pool(tmp_path):
    engine = init_db(f"sqlite:///{tmp_path / 'catalog.sqlite'}")
    assert not isinstance(engine.pool, StaticPool)
    assert (tmp_path / "catalog.sqlite").exists()


def test_in_memory_catalog_is_shared_across_threads():
    engine = init_db("sqlite://")
    assert isinstance(engine.pool, StaticPool)

    s = get_session()
    s.add(Product(title="Hex Bolt", handle="hb", status="published"))
    s.commit()
    s.close()

    counts = []

    def _count():
        other = get_session()
        try:
            counts.append(other.query(Product).count())
        finally:
            other.close()

    t = threading.Thread(target=_count)
    t.start()
    t.join()
    assert counts == [1]


def test_reinit_gives_empty_catalog():
    init_db("sqlite://")
    s = get_session()
    s.add(Product(title="Hex Bolt", handle="hb", status="published"))
    s.commit()
    s.close()

    init_db("sqlite://")
    s = get_session()
    try:
        assert s.query(Product).count() == 0
    finally:
        s.close()
