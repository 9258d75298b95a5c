from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List

from .models import Price, Product, SpecValue


class ProductIn(BaseModel):
    name: str
    category: str
    subCategory: str
    price: Price
    stock: int = Field(..., ge=0)
    brand: str
    description: str
    imageUrl: Optional[str] = ""
    specifications: Dict[str, SpecValue] = Field(default_factory=dict)


class ProductUpdate(BaseModel):
    """Partial update; only the fields present in the request body are merged."""
    name: Optional[str] = None
    category: Optional[str] = None
    subCategory: Optional[str] = None
    price: Optional[Price] = None
    stock: Optional[int] = Field(None, ge=0)
    brand: Optional[str] = None
    description: Optional[str] = None
    imageUrl: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    reviews: Optional[int] = Field(None, ge=0)
    specifications: Optional[Dict[str, SpecValue]] = None


class ProductQuery(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1)
    category: Optional[str] = None
    subCategory: Optional[str] = None
    minPrice: Optional[float] = Field(None, allow_inf_nan=False)
    maxPrice: Optional[float] = Field(None, allow_inf_nan=False)
    search: Optional[str] = None
    sort: str = "id"
    order: str = "asc"


class ProductPage(BaseModel):
    totalProducts: int
    totalPages: int
    currentPage: int
    products: List[Product]


class MessageOut(BaseModel):
    message: str


def _make_product_dict(p: ProductIn) -> Dict[str, Any]:
    """Stored fields for a new product; the store assigns the id."""
    data = p.model_dump()
    data["imageUrl"] = data.get("imageUrl") or ""
    data.update({"rating": 0, "reviews": 0})
    return data
