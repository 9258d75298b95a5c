# product_sdk/client.py
import requests
import httpx
from typing import Any, Dict, List, Optional

DEFAULT_BASE_URL = "http://127.0.0.1:3000"

# query parameters accepted by GET /api/products
LIST_PARAMS = ("page", "limit", "category", "subCategory", "minPrice", "maxPrice", "search", "sort", "order")


class ProductAPIError(Exception):
    """Non-2xx response from the product API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _check(r) -> Any:
    """Return the decoded body of a requests/httpx response or raise ProductAPIError."""
    if r.status_code >= 400:
        try:
            message = r.json().get("message", r.text)
        except ValueError:
            message = r.text
        raise ProductAPIError(r.status_code, message)
    if r.status_code == 204 or not r.content:
        return None
    return r.json()


def _list_params(filters: Dict[str, Any]) -> Dict[str, Any]:
    unknown = set(filters) - set(LIST_PARAMS)
    if unknown:
        raise TypeError(f"unknown filter(s): {', '.join(sorted(unknown))}")
    return {k: v for k, v in filters.items() if v is not None}


class ProductClient:
    """Thin client for the product API.

    ``session`` may be any object with the requests.Session call signature,
    which lets tests pass FastAPI's TestClient.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: int = 10, session=None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self._transport = transport

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api{path}"

    # Products
    def list_products(self, **filters) -> Dict[str, Any]:
        r = self.session.get(self._url("/products"), params=_list_params(filters), timeout=self.timeout)
        return _check(r)

    def get_product(self, product_id: int) -> Dict[str, Any]:
        r = self.session.get(self._url(f"/products/{product_id}"), timeout=self.timeout)
        return _check(r)

    def create_product(self, name: str, category: str, subCategory: str, price: float, stock: int,
                       brand: str, description: str, imageUrl: Optional[str] = None,
                       specifications: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        payload = {
            "name": name, "category": category, "subCategory": subCategory, "price": price,
            "stock": stock, "brand": brand, "description": description,
        }
        if imageUrl is not None:
            payload["imageUrl"] = imageUrl
        if specifications is not None:
            payload["specifications"] = specifications
        r = self.session.post(self._url("/products"), json=payload, timeout=self.timeout)
        return _check(r)

    def update_product(self, product_id: int, **changes) -> Dict[str, Any]:
        r = self.session.put(self._url(f"/products/{product_id}"), json=changes, timeout=self.timeout)
        return _check(r)

    def delete_product(self, product_id: int) -> None:
        r = self.session.delete(self._url(f"/products/{product_id}"), timeout=self.timeout)
        _check(r)

    # Categories
    def list_categories(self) -> Dict[str, List[str]]:
        r = self.session.get(self._url("/categories"), timeout=self.timeout)
        return _check(r)

    def reset(self) -> Dict[str, Any]:
        r = self.session.post(self._url("/reset"), timeout=self.timeout)
        return _check(r)

    # Async helpers
    def _async_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport)

    async def list_products_async(self, **filters) -> Dict[str, Any]:
        async with self._async_client() as client:
            r = await client.get("/api/products", params=_list_params(filters))
            return _check(r)

    async def get_product_async(self, product_id: int) -> Dict[str, Any]:
        async with self._async_client() as client:
            r = await client.get(f"/api/products/{product_id}")
            return _check(r)
