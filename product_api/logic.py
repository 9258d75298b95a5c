from typing import Dict, List

# Import from other modules
from .core import ProductIn, ProductPage, ProductQuery, ProductUpdate, _make_product_dict
from .database import ProductStore
from .exceptions import ProductNotFoundError
from .models import Product
from .query import run_query

# This file contains the core logic for all API endpoints.


# Product endpoints
async def list_products_logic(store: ProductStore, query: ProductQuery) -> ProductPage:
    return run_query(store.all(), query)


async def get_product_logic(store: ProductStore, product_id: int) -> Product:
    p = store.get(product_id)
    if p is None:
        raise ProductNotFoundError(product_id)
    return p


async def create_product_logic(store: ProductStore, payload: ProductIn) -> Product:
    return store.insert(_make_product_dict(payload))


async def update_product_logic(store: ProductStore, product_id: int, payload: ProductUpdate) -> Product:
    changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    return store.replace(product_id, changes)


async def delete_product_logic(store: ProductStore, product_id: int) -> None:
    store.remove(product_id)


# Categories
async def list_categories_logic(store: ProductStore) -> Dict[str, List[str]]:
    return store.categories()


# Utility: reset (for tests/demo)
async def reset_store_logic(store: ProductStore):
    store.reset()
    return {"status": "reset", "totalProducts": store.count}
