# product_api/query.py
"""
Filtering, search, sorting and pagination over a snapshot of the store.

Every function here is pure: it takes a list of products and returns a new
list (or the page envelope) without touching the store.
"""
import math
from typing import List, Optional

from .core import ProductPage, ProductQuery
from .models import Product

# fields a client may sort on; specifications is a mapping and has no order
SORTABLE_FIELDS = frozenset(
    name for name in Product.model_fields if name not in ("specifications", "seed")
)


def filter_by_category(products: List[Product], category: Optional[str]) -> List[Product]:
    if not category:
        return products
    wanted = category.lower()
    return [p for p in products if p.category.lower() == wanted]


def filter_by_subcategory(products: List[Product], sub_category: Optional[str]) -> List[Product]:
    if not sub_category:
        return products
    wanted = sub_category.lower()
    return [p for p in products if p.subCategory.lower() == wanted]


def filter_by_price(
    products: List[Product],
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
) -> List[Product]:
    out = products
    if min_price is not None:
        out = [p for p in out if p.price >= min_price]
    if max_price is not None:
        out = [p for p in out if p.price <= max_price]
    return out


def search_products(products: List[Product], term: Optional[str]) -> List[Product]:
    """Case-insensitive substring match on name, description or brand."""
    if not term:
        return products
    term = term.lower()
    return [
        p for p in products
        if term in p.name.lower() or term in p.description.lower() or term in p.brand.lower()
    ]


def sort_products(products: List[Product], field: str = "id", order: str = "asc") -> List[Product]:
    """Stable sort on ``field``; equal keys keep their incoming order either way.

    An unknown field leaves the order as it is.
    """
    if field not in SORTABLE_FIELDS:
        return list(products)
    return sorted(products, key=lambda p: getattr(p, field), reverse=(order == "desc"))


def paginate(products: List[Product], page: int = 1, limit: int = 10) -> List[Product]:
    start = (page - 1) * limit
    end = page * limit
    return products[start:end]


def run_query(products: List[Product], query: ProductQuery) -> ProductPage:
    out = filter_by_category(products, query.category)
    out = filter_by_subcategory(out, query.subCategory)
    out = filter_by_price(out, query.minPrice, query.maxPrice)
    out = search_products(out, query.search)
    out = sort_products(out, query.sort, query.order)

    total = len(out)
    return ProductPage(
        totalProducts=total,
        totalPages=math.ceil(total / query.limit),
        currentPage=query.page,
        products=paginate(out, query.page, query.limit),
    )
