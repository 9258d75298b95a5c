# product_api/models.py
from pydantic import BaseModel, Field, NonNegativeFloat, NonNegativeInt
from typing import Dict, Union

SpecValue = Union[str, int, float, bool]
# whole-number prices stay ints on the way back out
Price = Union[NonNegativeInt, NonNegativeFloat]


class Product(BaseModel):
    id: int = Field(..., ge=1, description="The auto-generated id of the product")
    name: str
    category: str
    subCategory: str
    price: Price
    stock: int = Field(..., ge=0, description="The number of items in stock")
    brand: str
    description: str
    imageUrl: str = ""
    rating: float = Field(0, ge=0, le=5, description="The average rating of the product")
    reviews: int = Field(0, ge=0, description="The number of reviews for the product")
    specifications: Dict[str, SpecValue] = Field(default_factory=dict)
    # default products are read-only through the API; never serialized
    seed: bool = Field(default=False, exclude=True)
