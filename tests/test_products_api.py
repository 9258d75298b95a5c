# tests/test_products_api.py
import math

from fastapi.testclient import TestClient

from product_api.database import ProductStore, get_store
from product_api.main import app
from conftest import new_product


def ids(body):
    return [p["id"] for p in body["products"]]


def test_list_defaults(client):
    r = client.get("/api/products")
    assert r.status_code == 200
    body = r.json()
    assert body["totalProducts"] == 5
    assert body["totalPages"] == 1
    assert body["currentPage"] == 1
    assert ids(body) == [1, 2, 3, 4, 5]
    assert "seed" not in body["products"][0]


def test_filter_category_electronics(client):
    body = client.get("/api/products", params={"category": "electronics"}).json()
    assert ids(body) == [1, 2, 3]
    assert body["totalProducts"] == 3


def test_filter_subcategory_and_price(client):
    body = client.get("/api/products", params={"subCategory": "PHONES"}).json()
    assert ids(body) == [2]
    body = client.get("/api/products", params={"minPrice": 100, "maxPrice": 900}).json()
    assert ids(body) == [2, 3, 4]


def test_search_name_description_brand(client):
    assert ids(client.get("/api/products", params={"search": "shoes"}).json()) == [4]
    assert ids(client.get("/api/products", params={"search": "SprintMaster"}).json()) == [4]


def test_sort_and_paginate(client):
    body = client.get("/api/products", params={"sort": "price", "order": "desc", "limit": 2, "page": 2}).json()
    assert body["totalProducts"] == 5
    assert body["totalPages"] == math.ceil(5 / 2)
    assert body["currentPage"] == 2
    assert ids(body) == [3, 4]


def test_out_of_range_page_is_empty(client):
    body = client.get("/api/products", params={"page": 9}).json()
    assert body["products"] == []
    assert body["totalProducts"] == 5
    assert body["currentPage"] == 9


def test_malformed_numeric_params_rejected(client):
    r = client.get("/api/products", params={"minPrice": "cheap"})
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid request"
    assert client.get("/api/products", params={"limit": 0}).status_code == 400
    for bad in ("nan", "inf"):
        r = client.get("/api/products", params={"minPrice": bad})
        assert r.status_code == 400
        assert client.get("/api/products", params={"maxPrice": bad}).status_code == 400


def test_get_product(client):
    r = client.get("/api/products/2")
    assert r.status_code == 200
    assert r.json()["name"] == "SmartPhone X"


def test_get_missing_product(client):
    r = client.get("/api/products/999")
    assert r.status_code == 404
    assert r.json() == {"message": "Product not found"}


def test_create_product(client):
    r = client.post("/api/products", json=new_product(specifications={"waterproof": True}))
    assert r.status_code == 201
    body = r.json()
    assert body["id"] == 6
    assert body["rating"] == 0
    assert body["reviews"] == 0
    assert body["imageUrl"] == ""
    assert body["specifications"] == {"waterproof": True}
    assert client.get("/api/products/6").status_code == 200


def test_create_missing_field(client):
    body = new_product()
    del body["brand"]
    r = client.post("/api/products", json=body)
    assert r.status_code == 400
    assert any(e["field"].endswith("brand") for e in r.json()["errors"])


def test_create_when_full(client, store):
    while not store.is_full:
        assert client.post("/api/products", json=new_product()).status_code == 201
    assert store.count == 50
    r = client.post("/api/products", json=new_product(name="One too many"))
    assert r.status_code == 400
    assert r.json() == {"message": "Maximum product limit reached"}
    assert store.count == 50


def test_update_product(client):
    client.post("/api/products", json=new_product())
    r = client.put("/api/products/6", json={"price": 79.0, "stock": 3, "id": 42})
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == 6
    assert body["price"] == 79.0
    assert body["stock"] == 3
    assert body["name"] == "Trail Blazer"


def test_update_default_product_forbidden(client):
    before = client.get("/api/products/3").json()
    r = client.put("/api/products/3", json={"name": "Hacked"})
    assert r.status_code == 403
    assert r.json() == {"message": "Cannot update default products"}
    assert client.get("/api/products/3").json() == before


def test_update_missing_product(client):
    r = client.put("/api/products/77", json={"name": "Ghost"})
    assert r.status_code == 404


def test_delete_product(client):
    client.post("/api/products", json=new_product())
    r = client.delete("/api/products/6")
    assert r.status_code == 204
    assert r.content == b""
    assert client.get("/api/products/6").status_code == 404


def test_delete_default_and_missing(client):
    r = client.delete("/api/products/1")
    assert r.status_code == 403
    assert r.json() == {"message": "Cannot delete default products"}
    assert client.delete("/api/products/404").status_code == 404


def test_deleted_id_not_reused(client):
    client.post("/api/products", json=new_product())
    client.delete("/api/products/6")
    r = client.post("/api/products", json=new_product(name="Second"))
    assert r.json()["id"] == 7


def test_categories(client):
    r = client.get("/api/categories")
    assert r.status_code == 200
    body = r.json()
    assert set(body) == {"Electronics", "Sports", "Home"}
    assert set(body["Electronics"]) == {"Computers", "Phones", "Audio"}
    assert body["Sports"] == ["Footwear"]
    assert body["Home"] == ["Kitchen Appliances"]


def test_reset(client, store):
    client.post("/api/products", json=new_product())
    r = client.post("/api/reset")
    assert r.json() == {"status": "reset", "totalProducts": 5}
    assert store.count == 5


def test_docs_are_served(client):
    assert client.get("/api-docs").status_code == 200
    schema = client.get("/openapi.json").json()
    assert "/api/products/{product_id}" in schema["paths"]


class BrokenStore(ProductStore):
    def all(self):
        raise RuntimeError("boom")


def test_unhandled_error_returns_500():
    app.dependency_overrides[get_store] = lambda: BrokenStore()
    try:
        c = TestClient(app, raise_server_exceptions=False)
        r = c.get("/api/products")
        assert r.status_code == 500
        assert r.json() == {"message": "Something went wrong!"}
    finally:
        app.dependency_overrides.clear()


def test_price_echoed_as_sent(client):
    r = client.post("/api/products", json=new_product(price=25))
    assert r.json()["price"] == 25
    assert isinstance(r.json()["price"], int)
    assert client.post("/api/products", json=new_product(price=25.5)).json()["price"] == 25.5
    assert client.post("/api/products", json=new_product(price=-1)).status_code == 400
    r = client.put("/api/products/6", json={"price": 30})
    assert isinstance(r.json()["price"], int)
