import logging
from typing import Dict, Any, List, Optional

from .config import settings
from .exceptions import DefaultProductError, ProductLimitReachedError, ProductNotFoundError
from .models import Product

# This file holds the in-memory product store and the seed data it starts with.

logger = logging.getLogger(__name__)

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "name": "Ultra-Slim Laptop Pro",
        "category": "Electronics",
        "subCategory": "Computers",
        "price": 1299.99,
        "stock": 50,
        "brand": "TechMaster",
        "description": "Powerful and lightweight laptop with 16GB RAM, 512GB SSD, and a 4K display.",
        "imageUrl": "https://example.com/images/laptop-pro.jpg",
        "rating": 4.7,
        "reviews": 128,
        "specifications": {
            "processor": "Intel Core i7",
            "screenSize": "15.6 inches",
            "weight": "1.8 kg",
            "battery": "Up to 12 hours",
        },
    },
    {
        "id": 2,
        "name": "SmartPhone X",
        "category": "Electronics",
        "subCategory": "Phones",
        "price": 899.99,
        "stock": 100,
        "brand": "Galactica",
        "description": "5G-enabled smartphone with a triple-lens camera system and all-day battery life.",
        "imageUrl": "https://example.com/images/smartphone-x.jpg",
        "rating": 4.5,
        "reviews": 256,
        "specifications": {
            "screenSize": "6.5 inches",
            "storage": "256GB",
            "camera": "Triple 12MP Ultra Wide",
            "waterResistant": "IP68",
        },
    },
    {
        "id": 3,
        "name": "Noise-Cancelling Headphones",
        "category": "Electronics",
        "subCategory": "Audio",
        "price": 249.99,
        "stock": 200,
        "brand": "SoundWave",
        "description": "Over-ear headphones with active noise cancellation and 30-hour battery life.",
        "imageUrl": "https://example.com/images/headphones.jpg",
        "rating": 4.6,
        "reviews": 89,
        "specifications": {
            "type": "Over-ear",
            "wireless": True,
            "batteryLife": "30 hours",
            "weight": "250g",
        },
    },
    {
        "id": 4,
        "name": "Pro Runner 3000",
        "category": "Sports",
        "subCategory": "Footwear",
        "price": 129.99,
        "stock": 75,
        "brand": "SprintMaster",
        "description": "Lightweight running shoes with responsive cushioning and breathable mesh upper.",
        "imageUrl": "https://example.com/images/running-shoes.jpg",
        "rating": 4.4,
        "reviews": 62,
        "specifications": {
            "type": "Road running",
            "weight": "255g",
            "dropHeight": "8mm",
            "material": "Synthetic mesh",
        },
    },
    {
        "id": 5,
        "name": "Smart Coffee Maker",
        "category": "Home",
        "subCategory": "Kitchen Appliances",
        "price": 79.99,
        "stock": 30,
        "brand": "BrewGenius",
        "description": "Wi-Fi enabled coffee maker with scheduling and customizable brew strength.",
        "imageUrl": "https://example.com/images/coffee-maker.jpg",
        "rating": 4.2,
        "reviews": 45,
        "specifications": {
            "capacity": "12 cups",
            "programmable": True,
            "filterType": "Permanent",
            "warranty": "2 years",
        },
    },
]


class ProductStore:
    """Ordered in-memory list of products.

    Ids come from a counter that only moves forward, so an id freed by a
    delete is not handed out again until the store is reset. None of the
    methods await, which keeps each request's view of the list consistent
    on a single event loop.
    """

    def __init__(self, seed: Optional[List[Dict[str, Any]]] = None, capacity: Optional[int] = None):
        self.capacity = capacity if capacity is not None else settings.MAX_PRODUCTS
        self._seed = list(SEED_PRODUCTS if seed is None else seed)
        self._products: List[Product] = []
        self._next_id = 1
        self.reset()

    @property
    def count(self) -> int:
        return len(self._products)

    @property
    def is_full(self) -> bool:
        return self.count >= self.capacity

    def reset(self) -> None:
        self._products = [Product(**p, seed=True) for p in self._seed]
        self._next_id = max((p.id for p in self._products), default=0) + 1

    def all(self) -> List[Product]:
        return list(self._products)

    def get(self, product_id: int) -> Optional[Product]:
        for p in self._products:
            if p.id == product_id:
                return p
        return None

    def _index(self, product_id: int) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        raise ProductNotFoundError(product_id)

    def insert(self, data: Dict[str, Any]) -> Product:
        if self.is_full:
            raise ProductLimitReachedError(self.capacity)
        product = Product(**{**data, "id": self._next_id})
        self._products.append(product)
        self._next_id += 1
        logger.info(f"Created product {product.id} ({product.name})")
        return product

    def replace(self, product_id: int, changes: Dict[str, Any]) -> Product:
        current = self.get(product_id)
        if current is not None and current.seed:
            raise DefaultProductError(product_id, "update")
        idx = self._index(product_id)
        merged = Product(**{**current.model_dump(), **changes, "id": product_id})
        self._products[idx] = merged
        logger.info(f"Updated product {product_id}: {sorted(changes)}")
        return merged

    def remove(self, product_id: int) -> None:
        current = self.get(product_id)
        if current is not None and current.seed:
            raise DefaultProductError(product_id, "delete")
        idx = self._index(product_id)
        del self._products[idx]
        logger.info(f"Deleted product {product_id}")

    def categories(self) -> Dict[str, List[str]]:
        out: Dict[str, List[str]] = {}
        for p in self._products:
            subs = out.setdefault(p.category, [])
            if p.subCategory not in subs:
                subs.append(p.subCategory)
        return out


STORE = ProductStore()


def get_store() -> ProductStore:
    return STORE
