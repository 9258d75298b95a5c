# product_api/main.py
#
#   uvicorn product_api.main:app --port 3000
#   python -m product_api.main
import logging
from contextlib import asynccontextmanager
from typing import Optional, Dict, List

from fastapi import Depends, FastAPI, Path, Query, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .core import MessageOut, ProductIn, ProductPage, ProductQuery, ProductUpdate
from .database import ProductStore, get_store
from .exceptions import (
    ProductAPIException,
    product_api_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from .logic import (
    create_product_logic,
    delete_product_logic,
    get_product_logic,
    list_categories_logic,
    list_products_logic,
    reset_store_logic,
    update_product_logic,
)
from .models import Product

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Server is running on port {settings.PORT}")
    logger.info(f"Swagger documentation is available at http://localhost:{settings.PORT}{settings.DOCS_URL}")
    yield
    logger.info("Shutting down product API")


app = FastAPI(
    title="Product API",
    version="1.0.0",
    description="A simple API for managing product data",
    docs_url=settings.DOCS_URL,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ProductAPIException, product_api_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

NOT_FOUND = {404: {"model": MessageOut, "description": "Product not found"}}
FORBIDDEN = {403: {"model": MessageOut, "description": "Default products are read-only"}}


def product_query(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, description="Number of items per page"),
    category: Optional[str] = Query(None, description="Filter by category"),
    subCategory: Optional[str] = Query(None, description="Filter by subcategory"),
    minPrice: Optional[float] = Query(None, allow_inf_nan=False, description="Minimum price"),
    maxPrice: Optional[float] = Query(None, allow_inf_nan=False, description="Maximum price"),
    search: Optional[str] = Query(None, description="Search in name, description and brand"),
    sort: str = Query("id", description="Field to sort by"),
    order: str = Query("asc", description="Sort order (asc or desc)"),
) -> ProductQuery:
    return ProductQuery(
        page=page, limit=limit, category=category, subCategory=subCategory,
        minPrice=minPrice, maxPrice=maxPrice, search=search, sort=sort, order=order,
    )


# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/api/products", response_model=ProductPage, summary="Get all products")
async def list_products(
    query: ProductQuery = Depends(product_query),
    store: ProductStore = Depends(get_store),
):
    return await list_products_logic(store, query)


@app.get("/api/products/{product_id}", response_model=Product, responses=NOT_FOUND, summary="Get a product by id")
async def get_product(product_id: int = Path(...), store: ProductStore = Depends(get_store)):
    return await get_product_logic(store, product_id)


@app.post(
    "/api/products",
    response_model=Product,
    status_code=201,
    responses={400: {"model": MessageOut, "description": "Maximum product limit reached"}},
    summary="Create a new product",
)
async def create_product(payload: ProductIn, store: ProductStore = Depends(get_store)):
    return await create_product_logic(store, payload)


@app.put(
    "/api/products/{product_id}",
    response_model=Product,
    responses={**FORBIDDEN, **NOT_FOUND},
    summary="Update a product",
)
async def update_product(payload: ProductUpdate, product_id: int = Path(...), store: ProductStore = Depends(get_store)):
    return await update_product_logic(store, product_id, payload)


@app.delete(
    "/api/products/{product_id}",
    status_code=204,
    response_class=Response,
    responses={**FORBIDDEN, **NOT_FOUND},
    summary="Delete a product",
)
async def delete_product(product_id: int = Path(...), store: ProductStore = Depends(get_store)):
    await delete_product_logic(store, product_id)
    return Response(status_code=204)


# ---------------------------
# Categories
# ---------------------------
@app.get("/api/categories", response_model=Dict[str, List[str]], summary="Get all categories and subcategories")
async def list_categories(store: ProductStore = Depends(get_store)):
    return await list_categories_logic(store)


# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@app.post("/api/reset", summary="Restore the default products")
async def reset_store(store: ProductStore = Depends(get_store)):
    return await reset_store_logic(store)


def run():
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
