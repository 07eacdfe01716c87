import pytest

import config
from db import Product, ProductVariant
from import_engine import run_import, IngestError, PersistError, TransformError

from factories import RowFactory


def test_run_import_returns_result_payload(session, write_csv):
    path = write_csv([
        RowFactory(sku="A1", parent_sku="P1", name="Bolt, Hex", attribute_1_values="T304"),
        RowFactory(sku="A2", parent_sku="P1", name="Bolt, Hex", attribute_1_values="T316"),
        RowFactory(sku="X9", parent_sku="", name="Rivet, Blind"),
    ])
    result = run_import(path, session=session)

    payload = result.to_dict()
    assert payload["success"] is True
    assert payload["totalProductsCreated"] == 2
    assert [p["handle"] for p in payload["createdProducts"]] == ["p1", "x9"]
    assert len(payload["createdProducts"][0]["variants"]) == 2
    assert result.total_rows == 3


def test_run_import_opens_its_own_session(session, write_csv):
    path = write_csv(RowFactory.build_batch(2))
    result = run_import(path)
    assert result.total_products_created == 1
    assert result.to_dict()["createdProducts"][0]["title"] == "Hex Bolt"
    assert session.query(ProductVariant).count() == 2


def test_default_file_resolves_under_data_dir(session, write_csv, monkeypatch):
    path = write_csv([RowFactory()], name="products_default.csv")
    monkeypatch.setattr(config, "DATA_DIR", path.parent)
    monkeypatch.setattr(config, "DEFAULT_CSV_NAME", "products_default.csv")
    result = run_import(session=session)
    assert result.total_products_created == 1


def test_dry_run_writes_nothing(session, write_csv):
    path = write_csv(RowFactory.build_batch(3))
    result = run_import(path, session=session, dry_run=True)

    payload = result.to_dict()
    assert payload["dryRun"] is True
    assert payload["totalProductsCreated"] == 0
    assert payload["totalRows"] == 3
    assert payload["productFamilies"][0]["name"] == "Hex Bolt"
    assert session.query(Product).count() == 0


def test_missing_file_is_ingest_error(session, tmp_path):
    with pytest.raises(IngestError):
        run_import(tmp_path / "missing.csv", session=session)


def test_transform_error_stops_before_catalog(session, write_csv):
    path = write_csv([{"sku": "A1", "parent_sku": "P1"}])
    with pytest.raises(TransformError):
        run_import(path, session=session)
    assert session.query(Product).count() == 0


def test_rejected_second_family_aborts_run(session, write_csv):
    path = write_csv([
        RowFactory(sku="A1", parent_sku="P.1"),
        RowFactory(sku="B1", parent_sku="P/1"),
        RowFactory(sku="C1", parent_sku="P3"),
    ])
    with pytest.raises(PersistError):
        run_import(path, session=session)

    assert [p.handle for p in session.query(Product).all()] == ["p-1"]


def test_sample_data_file_imports(session):
    result = run_import(config.BASE_DIR / "data" / "products_13h_to_import.csv",
                        session=session)
    by_handle = {p.handle: p for p in result.created_products}
    assert set(by_handle) == {"hb", "fw"}
    alloy = next(o for o in by_handle["fw"].options if o.title == "Alloy")
    assert [v.value for v in alloy.values] == ["T304"]


def test_row_count_logged_from_aggregation(session, write_csv, caplog):
    path = write_csv(RowFactory.build_batch(3, parent_sku="P1"))
    with caplog.at_level("INFO", logger="import_engine.importer"):
        result = run_import(path, session=session, dry_run=True)
    assert result.total_rows == 3
    assert "Grouped 3 rows into 1 product families" in caplog.text
