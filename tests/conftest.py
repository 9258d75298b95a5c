# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from product_api.database import ProductStore, get_store
from product_api.main import app


@pytest.fixture
def store():
    return ProductStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def new_product(**overrides):
    body = {
        "name": "Trail Blazer",
        "category": "Sports",
        "subCategory": "Footwear",
        "price": 99.5,
        "stock": 12,
        "brand": "PeakFoot",
        "description": "Grippy trail shoes",
    }
    body.update(overrides)
    return body
