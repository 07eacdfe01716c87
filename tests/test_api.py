import io

from db import get_session, Product

CSV = (
    "sku,parent_sku,name,attribute_1_values,attribute_2_values,in_stock\n"
    'A1,P1,"Bolt, Hex",T304,M8,t\n'
    'A2,P1,"Bolt, Hex",T316,M8,f\n'
)


def test_import_raw_body(client):
    resp = client.post("/api/v1/import", data=CSV, content_type="text/csv")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["totalProductsCreated"] == 1
    product = body["createdProducts"][0]
    assert product["handle"] == "p1"
    assert {o["title"]: o["values"] for o in product["options"]} == {
        "Alloy": ["T304", "T316"], "Size": ["M8"],
    }


def test_import_multipart_upload(client):
    resp = client.post(
        "/api/v1/import",
        data={"csv_file": (io.BytesIO(CSV.encode()), "products.csv")},
        content_type="multipart/form-data",
    )
    assert resp.status_code == 200
    assert resp.get_json()["totalProductsCreated"] == 1


def test_import_multipart_without_file(client):
    resp = client.post("/api/v1/import", data={}, content_type="multipart/form-data")
    assert resp.status_code == 400


def test_import_empty_body(client):
    resp = client.post("/api/v1/import", data=b"", content_type="text/csv")
    assert resp.status_code == 400


def test_import_dry_run(client):
    resp = client.post("/api/v1/import?dry_run=1", data=CSV, content_type="text/csv")
    assert resp.status_code == 200
    assert resp.get_json()["productFamilies"][0]["parent_sku"] == "P1"

    session = get_session()
    try:
        assert session.query(Product).count() == 0
    finally:
        session.close()


def test_malformed_csv_is_400(client):
    resp = client.post("/api/v1/import", data='sku,name\nA1,"Bolt"x\n',
                       content_type="text/csv")
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_second_import_conflicts(client):
    assert client.post("/api/v1/import", data=CSV, content_type="text/csv").status_code == 200
    resp = client.post("/api/v1/import", data=CSV, content_type="text/csv")
    assert resp.status_code == 409
    assert "already exists" in resp.get_json()["error"]


def test_list_and_get_products(client):
    client.post("/api/v1/import", data=CSV, content_type="text/csv")

    listing = client.get("/api/v1/products").get_json()
    assert listing["total"] == 1
    assert listing["products"][0]["title"] == "Bolt"

    detail = client.get("/api/v1/products/p1").get_json()
    assert [v["sku"] for v in detail["variants"]] == ["A1", "A2"]
    assert detail["variants"][1]["options"] == {"Alloy": "T316", "Size": "M8"}


def test_unknown_product_404(client):
    assert client.get("/api/v1/products/nope").status_code == 404
